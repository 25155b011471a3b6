# ilp/objective.py
from ilp.model import RelaxationModel


def _add(model: RelaxationModel, j: int, coeff: float) -> None:
    var = model.bits[j]
    model.objective[var] = model.objective.get(var, 0.0) + coeff


def adjust_variable_pair_in_objective(model: RelaxationModel) -> int:
    """
    For a vertex whose (bit0, bit1) is not integral and unequal, reward moving the
    larger bit down and the smaller one up (obj += larger_down - smaller_up, minimized).
    """
    x, eps = model.x, model.eps
    terms = 0
    for i in model.cm.vertices():
        v0, v1 = x[2 * i], x[2 * i + 1]
        if model.is_integer(v0) and model.is_integer(v1):
            continue
        if v0 > v1 + eps:
            _add(model, 2 * i + 1, -1.0)
            _add(model, 2 * i, 1.0)
            terms += 1
        elif v0 < v1 - eps:
            _add(model, 2 * i, -1.0)
            _add(model, 2 * i + 1, 1.0)
            terms += 1
    return terms


def adjust_conflict_edge_vertices_in_objective(model: RelaxationModel) -> int:
    """For every conflict edge and bit plane with unequal endpoint values, reward pushing them apart."""
    x, eps = model.x, model.eps
    terms = 0
    for s, t, _w in model.cm.edges():
        for plane in (0, 1):
            js, jt = 2 * s + plane, 2 * t + plane
            if x[js] > x[jt] + eps:
                _add(model, jt, 1.0)
                _add(model, js, -1.0)
                terms += 1
            elif x[js] < x[jt] - eps:
                _add(model, js, 1.0)
                _add(model, jt, -1.0)
                terms += 1
    return terms


def tune_objective(model: RelaxationModel) -> int:
    """accumulate both kinds of terms into the model objective and hand it to the backend"""
    terms = adjust_variable_pair_in_objective(model)
    terms += adjust_conflict_edge_vertices_in_objective(model)
    model.push_objective()
    return terms
