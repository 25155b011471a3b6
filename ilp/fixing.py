# ilp/fixing.py
"""
Rounding of (0.5, 0.5) bit pairs by binding-constraint analysis.

At the current optimum, a binding row (zero slack) that touches a half-integer
pair limits which integral codes the pair can move to: moving the pair from
(0.5, 0.5) to (b0, b1) changes the row's activity by

    delta = coeff0 * (b0 - 0.5) + coeff1 * (b1 - 0.5)

and a '>=' row forbids delta < 0, a '<=' row forbids delta > 0. A pair is
fixed to a surviving code only if every binding row pushes each of its
variables in the same direction; otherwise it is left fractional (declined)
and the final apply step rounds it naively.
"""
from dataclasses import dataclass
from itertools import product
from typing import Any, Dict, List, Optional, Sequence, Tuple
import math

from graph.conflict import THREE
from ilp.backend import Sense
from ilp.model import BoundsToken, RelaxationModel

CODES: Tuple[Tuple[int, int], ...] = tuple(product((0, 1), (0, 1)))


@dataclass(frozen=True)
class ConstraintSensitivity:
    coeff0: float
    coeff1: float
    sense: Sense

    def direction(self, k: int) -> int:
        """+1 / -1: side the row pushes variable k towards; 0: no direction"""
        coeff = self.coeff0 if k == 0 else self.coeff1
        if coeff == 0.0 or self.sense is Sense.EQ:
            return 0
        sign = 1 if coeff > 0 else -1
        return sign if self.sense is Sense.GE else -sign

    def violated_by(self, b0: int, b1: int, v0: float, v1: float, eps: float = 1e-9) -> bool:
        delta = self.coeff0 * (b0 - v0) + self.coeff1 * (b1 - v1)
        if self.sense is Sense.GE:
            return delta < -eps
        if self.sense is Sense.LE:
            return delta > eps
        return abs(delta) > eps


def admissible_rounding(
    values: Tuple[float, float],
    rows: Sequence[ConstraintSensitivity],
    color_num: int,
    eps: float = 1e-9,
) -> Optional[Tuple[int, int]]:
    """
    First admissible code in (0,0),(0,1),(1,0),(1,1) order, or None when the
    pair must stay fractional (direction conflict or no code left).
    """
    valid = {code: True for code in CODES}
    if color_num == THREE:
        valid[(1, 1)] = False

    first_dir: List[int] = [0, 0]
    for row in rows:
        for k in (0, 1):
            d = row.direction(k)
            if d == 0:
                continue
            if first_dir[k] == 0:
                first_dir[k] = d
            elif d != first_dir[k]:
                return None
        for code in CODES:
            if valid[code] and row.violated_by(code[0], code[1], values[0], values[1], eps):
                valid[code] = False
        if not any(valid.values()):
            return None

    for code in CODES:
        if valid[code]:
            return code
    return None


def binding_rows(model: RelaxationModel, i: int) -> List[ConstraintSensitivity]:
    """sensitivities of the zero-slack rows touching bit0 or bit1 of vertex i"""
    be = model.backend
    var0, var1 = model.bits[2 * i], model.bits[2 * i + 1]
    seen = set()
    rows: List[ConstraintSensitivity] = []
    for j in (2 * i, 2 * i + 1):
        for ct in model.constraints_of(j):
            if id(ct) in seen:
                continue
            seen.add(id(ct))
            if abs(be.slack_of(ct)) > model.eps:
                continue
            rows.append(ConstraintSensitivity(be.coefficient(ct, var0), be.coefficient(ct, var1), be.sense_of(ct)))
    return rows


def rounding_with_binding_analysis(model: RelaxationModel, verbose: bool = False) -> Dict[str, Any]:
    """
    Sweep over (0.5, 0.5) pairs, fix the admissible ones, re-solve; repeat while the
    vertex non-integer count strictly decreases. A vertex next to one fixed in the same
    sweep waits for the next sweep. A sweep whose re-solve is infeasible or increases the
    count is rolled back and ends the rounding.
    """
    cm = model.cm
    stats = dict(sweeps=0, rounded=0, declined=0, rolled_back=0, history=[])
    prev = math.inf
    cur = model.non_integer_info().vertex_non_integer_num
    stats["history"].append(cur)

    while 0 < cur < prev:
        stats["sweeps"] += 1
        snapshot = dict(x=model.x, e=model.e)
        tokens: List[BoundsToken] = []
        touched = set()
        declined = 0
        for i in cm.vertices():
            if cm.is_precolored(i):
                continue
            v0, v1 = model.x[2 * i], model.x[2 * i + 1]
            if not (model.is_half(v0) and model.is_half(v1)):
                continue
            if any(u in touched for u in cm.neighbors(i)):
                continue
            code = admissible_rounding((v0, v1), binding_rows(model, i), cm.color_num, eps=model.eps)
            if code is None:
                declined += 1
                continue
            tokens.append(model.fix_bits(i, *code))
            touched.add(i)

        stats["declined"] += declined
        if verbose:
            print(f"  [Binding] sweep {stats['sweeps']}: fixed={len(tokens)} declined={declined}")
        if not tokens:
            break

        info = model.try_solve()
        if info is None or info["info"].vertex_non_integer_num > cur:
            model.revert_all(tokens)
            model.restore(snapshot)
            stats["rolled_back"] += len(tokens)
            if verbose:
                print(f"  [Binding] rollback of {len(tokens)} fixings ({'infeasible' if info is None else 'worse'})")
            break

        stats["rounded"] += len(tokens)
        prev, cur = cur, info["info"].vertex_non_integer_num
        stats["history"].append(cur)

    return stats
