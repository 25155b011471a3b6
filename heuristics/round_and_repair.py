# heuristics/round_and_repair.py
from typing import List, Set, Tuple
import math

from graph.conflict import THREE, ConflictModel, bits_to_color


def round_bit(value: float) -> int:
    """nearest integer, ties up"""
    return int(math.floor(value + 0.5))


def apply_solution(cm: ConflictModel, x: List[float]) -> List[int]:
    """
    Write discrete colors from the LP bit values x[2i], x[2i+1].
    In 3-mask mode a pair rounding to (1,1) keeps only its larger bit (tie: bit0).
    """
    for i in cm.vertices():
        if cm.is_precolored(i):
            cm.colors[i] = cm.precolor_value(i)
            continue
        v0, v1 = x[2 * i], x[2 * i + 1]
        b0, b1 = round_bit(v0), round_bit(v1)
        b0, b1 = min(max(b0, 0), 1), min(max(b1, 0), 1)
        if cm.color_num == THREE and b0 == 1 and b1 == 1:
            if v0 >= v1:
                b1 = 0
            else:
                b0 = 0
        cm.colors[i] = bits_to_color(b0, b1)
    return cm.colors


def _forbidden(cm: ConflictModel, cv: int, ov: int) -> Set[int]:
    """colors of cv's neighbors other than ov"""
    return {cm.colors[u] for u in cm.neighbors(cv) if u != ov}


def refine_color(cm: ConflictModel, s: int, t: int) -> bool:
    """
    Repair a same-colored edge (s,t): first pair (c1, c2), c1 != c2, with c1 unused by the
    other neighbors of s and c2 unused by the other neighbors of t. True if the edge was fixed.
    """
    if cm.colors[s] != cm.colors[t]:
        return False
    forbidden_s = _forbidden(cm, s, t)
    forbidden_t = _forbidden(cm, t, s)
    for c1 in cm.valid_colors():
        if c1 in forbidden_s:
            continue
        for c2 in cm.valid_colors():
            if c2 == c1 or c2 in forbidden_t:
                continue
            cm.colors[s] = c1
            cm.colors[t] = c2
            return True
    return False


def post_refinement(cm: ConflictModel, verbose: bool = False) -> Tuple[int, int]:
    """
    Greedy, non-backtracking repair over the edges in graph order.
    Skipped when precolored vertices exist. Returns (fixed, still_conflicting).
    """
    if cm.has_precolored():
        return 0, len(cm.conflict_edges())
    fixed = 0
    for s, t, _w in cm.edges():
        if refine_color(cm, s, t):
            fixed += 1
    left = len(cm.conflict_edges())
    if verbose:
        print(f"  [Refine] fixed={fixed} | unresolved={left}")
    return fixed, left
