# ilp/backend.py
"""
LP capability used by the coloring pipeline.

The pipeline only talks to an LPBackend: it never touches solver objects
directly, so any LP code (GLOP, CLP, HiGHS, ...) can be plugged in by
subclassing. Variables and constraints are opaque handles returned by the
backend.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Tuple


class Sense(Enum):
    GE = ">="
    LE = "<="
    EQ = "="


class LPStatus(Enum):
    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    ERROR = "error"


class LPBackend(ABC):
    """
    Minimal continuous LP interface (minimization):
      - add_variable / set_bounds / bounds_of
      - add_constraint(terms, sense, rhs): sum(coeff * var) <sense> rhs
      - set_objective(terms, constant)
      - optimize() -> LPStatus, then value_of / slack_of on the last optimum
      - coefficient / sense_of to read a constraint back for sensitivity analysis
    """

    @abstractmethod
    def add_variable(self, lower: float, upper: float, objective_coeff: float = 0.0, name: str = "") -> Any:
        ...

    @abstractmethod
    def set_bounds(self, var: Any, lower: float, upper: float) -> None:
        ...

    @abstractmethod
    def bounds_of(self, var: Any) -> Tuple[float, float]:
        ...

    @abstractmethod
    def add_constraint(self, terms: Dict[Any, float], sense: Sense, rhs: float, name: str = "") -> Any:
        ...

    @abstractmethod
    def set_objective(self, terms: Dict[Any, float], constant: float = 0.0) -> None:
        ...

    @abstractmethod
    def optimize(self) -> LPStatus:
        ...

    @abstractmethod
    def value_of(self, var: Any) -> float:
        ...

    @abstractmethod
    def slack_of(self, constr: Any) -> float:
        """Non-negative distance of the constraint's activity to its rhs at the last optimum."""

    @abstractmethod
    def coefficient(self, constr: Any, var: Any) -> float:
        ...

    @abstractmethod
    def sense_of(self, constr: Any) -> Sense:
        ...

    def set_num_threads(self, threads: int) -> bool:
        """Request worker threads; 0 keeps the backend default. Returns False if ignored."""
        return threads <= 0
