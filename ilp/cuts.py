# ilp/cuts.py
from typing import Callable, List

from graph.odd_cycles import find_odd_cycles
from ilp.backend import Sense
from ilp.model import RelaxationModel


def add_cycle_cut(model: RelaxationModel, root: int, cycle: List[int]) -> bool:
    """
    Odd cycle C of length L, per bit plane p:
      sum_{u in C} bit_p(u) >= 1  and  <= L - 1
    i.e. the cycle cannot be all-0 or all-1 on either plane.
    Cycles with an already-cut vertex set are skipped.
    """
    key = frozenset(cycle)
    if key in model.cut_keys:
        return False
    model.cut_keys.add(key)
    length = len(cycle)
    for plane in (0, 1):
        terms = {2 * u + plane: 1.0 for u in cycle}
        model.add_constraint(terms, Sense.GE, 1.0, prefix=f"ODD{root}_")
        model.add_constraint(terms, Sense.LE, float(length - 1), prefix=f"ODD{root}_")
    return True


def add_odd_cycle_constraints(model: RelaxationModel, finder: Callable[..., List[List[int]]] = find_odd_cycles) -> int:
    """run `finder` (odd-cycle DFS) from every vertex and add the cuts; returns number of new cycles cut"""
    cm = model.cm
    added = 0
    for v in cm.vertices():
        for cycle in finder(cm.neighbors, cm.num_vertices, v):
            if add_cycle_cut(model, v, cycle):
                added += 1
    return added
