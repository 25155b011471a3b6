# ilp/model.py
from dataclasses import dataclass
from itertools import count, product
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple
import math

from graph.conflict import THREE, ConflictModel, color_to_bits
from ilp.backend import LPBackend, LPStatus, Sense
from ilp.errors import InfeasibleRelaxation, InvalidEdgeWeight, LPSolveError
from ilp.lp_solve import GlopBackend

BoundsToken = List[Tuple[Any, float, float]]


@dataclass
class NonIntegerInfo:
    """non-integer / half-integer counts; inf until the first solve"""
    vertex_non_integer_num: float = math.inf
    vertex_half_integer_num: float = math.inf
    edge_non_integer_num: float = math.inf
    edge_half_integer_num: float = math.inf


class RelaxationModel:
    """
    Continuous relaxation of the 2-bit mask assignment, owned by one coloring run:
      - bits[2i], bits[2i+1] in [0,1]: (bit0, bit1) of vertex i
      - edge_bits[k] in [0,1]: one per conflict edge, integrality bookkeeping only
      - constraints are named from a model-scoped counter (R<n>, ODD<v>_<n>)
      - objective is a cumulative {var: coeff} map, minimized
    """

    def __init__(self, cm: ConflictModel, backend: Optional[LPBackend] = None, eps: float = 1e-6):
        self.cm = cm
        self.backend = backend if backend is not None else GlopBackend()
        self.eps = eps
        self.bits: List[Any] = []
        self.edge_bits: List[Any] = []
        self.objective: Dict[Any, float] = {}
        self.cut_keys: Set[FrozenSet[int]] = set()
        self.anchor: Optional[int] = None
        self._ids = count()
        self.num_constraints = 0
        # var -> constraints referencing it (column view for binding analysis)
        self._column: Dict[int, List[Any]] = {}
        # last solution: x[j] for bits, e[k] for edge_bits
        self.x: List[float] = []
        self.e: List[float] = []

    # ---------- construction helpers ----------
    def next_name(self, prefix: str = "R") -> str:
        return f"{prefix}{next(self._ids)}"

    def add_constraint(self, terms: Dict[int, float], sense: Sense, rhs: float, prefix: str = "R") -> Any:
        """terms are keyed by bit index (2i or 2i+1)"""
        ct = self.backend.add_constraint(
            {self.bits[j]: c for j, c in terms.items()}, sense, rhs, name=self.next_name(prefix)
        )
        for j, c in terms.items():
            if c != 0.0:
                self._column.setdefault(j, []).append(ct)
        self.num_constraints += 1
        return ct

    def constraints_of(self, j: int) -> List[Any]:
        return self._column.get(j, [])

    # ---------- bounds ----------
    def fix_bits(self, i: int, b0: int, b1: int) -> BoundsToken:
        token: BoundsToken = []
        for j, b in ((2 * i, b0), (2 * i + 1, b1)):
            var = self.bits[j]
            lb, ub = self.backend.bounds_of(var)
            token.append((var, lb, ub))
            self.backend.set_bounds(var, float(b), float(b))
        return token

    def revert_all(self, tokens: List[BoundsToken]) -> None:
        for tok in reversed(tokens):
            for var, lb, ub in tok:
                self.backend.set_bounds(var, lb, ub)

    def is_fixed(self, j: int) -> bool:
        lb, ub = self.backend.bounds_of(self.bits[j])
        return lb == ub

    # ---------- solve ----------
    def push_objective(self) -> None:
        self.backend.set_objective(self.objective)

    def solve(self, stage: str = "solve") -> Dict[str, Any]:
        """optimize and cache bit/edge values; infeasible or failed solves are fatal"""
        status = self.backend.optimize()
        if status is LPStatus.INFEASIBLE:
            raise InfeasibleRelaxation(
                status, stage,
                f"|V|={self.cm.num_vertices} |E|={self.cm.num_edges} constraints={self.num_constraints}",
            )
        if status is not LPStatus.OPTIMAL:
            raise LPSolveError(status, stage)
        return self._extract()

    def try_solve(self) -> Optional[Dict[str, Any]]:
        """optimize; None (cache untouched) if the model is not optimal"""
        if self.backend.optimize() is not LPStatus.OPTIMAL:
            return None
        return self._extract()

    def _extract(self) -> Dict[str, Any]:
        self.x = [self.backend.value_of(v) for v in self.bits]
        self.e = [self.backend.value_of(v) for v in self.edge_bits]
        return dict(x=self.x, e=self.e, info=self.non_integer_info())

    def restore(self, snapshot: Dict[str, Any]) -> None:
        self.x = snapshot["x"]
        self.e = snapshot["e"]

    # ---------- integrality ----------
    def is_integer(self, value: float) -> bool:
        return abs(value - round(value)) <= self.eps

    def is_half(self, value: float) -> bool:
        return abs(value - 0.5) <= self.eps

    def _count(self, values: List[float]) -> Tuple[int, int]:
        non_int = half = 0
        for val in values:
            if not self.is_integer(val):
                non_int += 1
                if self.is_half(val):
                    half += 1
        return non_int, half

    def non_integer_info(self) -> NonIntegerInfo:
        vn, vh = self._count(self.x)
        en, eh = self._count(self.e)
        return NonIntegerInfo(vn, vh, en, eh)


def _disjunction_terms(s: int, t: int) -> Iterable[Tuple[Dict[int, float], float]]:
    """
    For each shared code (a, b) the four literals (bit complemented where the code bit is 1)
    must sum to >= 1; returned in standard form (terms, rhs).
    """
    for a, b in product((0, 1), (0, 1)):
        terms: Dict[int, float] = {}
        complemented = 0
        for j, bit in ((2 * s, a), (2 * s + 1, b), (2 * t, a), (2 * t + 1, b)):
            terms[j] = -1.0 if bit else 1.0
            complemented += bit
        yield terms, 1.0 - complemented


def set_anchor(model: RelaxationModel) -> Optional[int]:
    """fix the max-degree vertex to (0,0); no anchor when precolored vertices exist"""
    cm = model.cm
    if cm.has_precolored() or cm.num_vertices == 0:
        return None
    anchor = cm.max_degree_vertex()
    model.fix_bits(anchor, 0, 0)
    model.anchor = anchor
    return anchor


def set_isolated(model: RelaxationModel) -> int:
    """fix degree-0 vertices (no rows touch them) to (0,0); precolored and the anchor are left alone"""
    cm = model.cm
    fixed = 0
    for i in cm.vertices():
        if cm.degree(i) == 0 and not cm.is_precolored(i) and i != model.anchor:
            model.fix_bits(i, 0, 0)
            fixed += 1
    return fixed


def check_weight(u: Any, v: Any, w: Any) -> None:
    """conflict weights are positive integers (integral floats from edge-list files pass)"""
    try:
        ok = w > 0 and float(w).is_integer()
    except (TypeError, ValueError):
        ok = False
    if not ok:
        raise InvalidEdgeWeight(u, v, w)


def set_precolors(model: RelaxationModel) -> int:
    cm = model.cm
    fixed = 0
    for i in cm.vertices():
        if cm.is_precolored(i):
            model.fix_bits(i, *color_to_bits(cm.precolor_value(i)))
            fixed += 1
    return fixed


def build_relaxation(
    cm: ConflictModel,
    backend: Optional[LPBackend] = None,
    threads: int = 0,
    eps: float = 1e-6,
    verbose: bool = False,
) -> RelaxationModel:
    """
    Relaxation:
      min 0
      s.t. 4 disjunction rows per conflict edge (codes of s and t differ)
           bit0 + bit1 <= 1 per vertex                 (3 masks only)
           anchor (0,0) on the max-degree vertex       (no precolors)
           precolored bits fixed                       (precolors)
           isolated vertices fixed to (0,0)
    """
    model = RelaxationModel(cm, backend=backend, eps=eps)
    be = model.backend
    be.set_num_threads(threads)

    for j in range(2 * cm.num_vertices):
        model.bits.append(be.add_variable(0.0, 1.0, 0.0, f"v{j}"))
    for k in range(cm.num_edges):
        model.edge_bits.append(be.add_variable(0.0, 1.0, 0.0, f"e{k}"))
    model.push_objective()

    for s, t, w in cm.edges():
        check_weight(cm.nodes[s], cm.nodes[t], w)
        for terms, rhs in _disjunction_terms(s, t):
            model.add_constraint(terms, Sense.GE, rhs)

    if cm.color_num == THREE:
        for i in cm.vertices():
            model.add_constraint({2 * i: 1.0, 2 * i + 1: 1.0}, Sense.LE, 1.0)

    anchor = set_anchor(model)
    fixed = set_precolors(model)
    isolated = set_isolated(model)
    if verbose:
        print(f"[Build] |V|={cm.num_vertices} |E|={cm.num_edges} colors={cm.color_num} "
              f"rows={model.num_constraints} anchor={anchor} precolored={fixed} isolated={isolated}")
    return model
