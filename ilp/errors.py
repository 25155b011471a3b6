# ilp/errors.py
from typing import Any, Hashable, Optional


class InvalidEdgeWeight(ValueError):
    """A conflict edge with non-positive weight reached the relaxation builder."""

    def __init__(self, u: Hashable, v: Hashable, weight: Any):
        self.edge = (u, v)
        self.weight = weight
        super().__init__(f"positive conflict weight expected on edge ({u!r}, {v!r}), got {weight!r}")


class LPSolveError(RuntimeError):
    """LP backend returned a terminal status other than optimal."""

    def __init__(self, status: Any, stage: str = "", detail: Optional[str] = None):
        self.status = status
        self.stage = stage
        msg = f"LP solve failed at stage '{stage}' (status={status})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class InfeasibleRelaxation(LPSolveError):
    """
    The relaxation has no feasible point. By construction it always has one,
    so this points at a broken cut, anchor or precolor fixing.
    """
