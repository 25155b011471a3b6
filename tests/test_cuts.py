import networkx as nx

from graph.conflict import ConflictModel
from ilp.cuts import add_cycle_cut, add_odd_cycle_constraints
from ilp.model import build_relaxation


def test_triangle_cut_added_once(graph_triangle):
    model = build_relaxation(ConflictModel(graph_triangle))
    rows = model.num_constraints
    assert add_odd_cycle_constraints(model) == 1
    assert model.num_constraints == rows + 4
    # same vertex set from every root and on later rounds
    assert add_odd_cycle_constraints(model) == 0
    assert model.num_constraints == rows + 4


def test_cut_rows_bound_each_plane():
    model = build_relaxation(ConflictModel(nx.cycle_graph(5)))
    before = model.backend.solver.NumConstraints()
    assert add_cycle_cut(model, 0, [4, 3, 2, 1, 0])
    assert not add_cycle_cut(model, 2, [0, 1, 2, 3, 4])
    cts = model.backend.solver.constraints()[before:]
    assert [ct.name().startswith("ODD0_") for ct in cts] == [True] * 4
    assert cts[0].lb() == 1.0 and cts[2].lb() == 1.0
    assert cts[1].ub() == 4.0 and cts[3].ub() == 4.0
    for ct in cts[:2]:
        assert [ct.GetCoefficient(model.bits[2 * u]) for u in range(5)] == [1.0] * 5


def test_no_cuts_on_bipartite_graph():
    model = build_relaxation(ConflictModel(nx.cycle_graph(6)))
    rows = model.num_constraints
    assert add_odd_cycle_constraints(model) == 0
    assert model.num_constraints == rows


def test_cut_removes_fractional_point(graph_triangle):
    model = build_relaxation(ConflictModel(graph_triangle))
    # bit0 plane all zero: bit1 = 1/2 everywhere is feasible until the cut
    model.backend.set_bounds(model.bits[1], 0.0, 1.0)
    for i in (0, 1, 2):
        model.backend.set_bounds(model.bits[2 * i], 0.0, 0.0)
    assert model.try_solve() is not None
    add_odd_cycle_constraints(model)
    assert model.try_solve() is None
