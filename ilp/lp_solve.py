# ilp/lp_solve.py
from typing import Any, Dict, List, Optional, Tuple
from ortools.linear_solver import pywraplp

from ilp.backend import LPBackend, LPStatus, Sense


class GlopBackend(LPBackend):
    """
    LPBackend on top of OR-tools pywraplp (GLOP simplex by default).
    Constraint activities are recomputed once per optimize() and used for slacks.
    """

    def __init__(self, solver_id: str = "GLOP", threads: int = 0):
        self.solver = pywraplp.Solver.CreateSolver(solver_id)
        if self.solver is None:
            raise RuntimeError(f"OR-tools solver '{solver_id}' is not available")
        self.solver.SuppressOutput()
        self._senses: Dict[int, Sense] = {}
        self._activities: Optional[List[float]] = None
        self.set_num_threads(threads)

    def set_num_threads(self, threads: int) -> bool:
        if threads <= 0:
            return True
        # GLOP is single-threaded and reports False here; other pywraplp backends honor it
        return bool(self.solver.SetNumThreads(threads))

    # ---------- variables ----------
    def add_variable(self, lower: float, upper: float, objective_coeff: float = 0.0, name: str = "") -> pywraplp.Variable:
        var = self.solver.NumVar(lower, upper, name)
        if objective_coeff:
            self.solver.Objective().SetCoefficient(var, objective_coeff)
        return var

    def set_bounds(self, var: pywraplp.Variable, lower: float, upper: float) -> None:
        var.SetBounds(lower, upper)

    def bounds_of(self, var: pywraplp.Variable) -> Tuple[float, float]:
        return var.lb(), var.ub()

    # ---------- constraints ----------
    def add_constraint(self, terms: Dict[Any, float], sense: Sense, rhs: float, name: str = "") -> pywraplp.Constraint:
        inf = self.solver.infinity()
        if sense is Sense.GE:
            ct = self.solver.Constraint(rhs, inf, name)
        elif sense is Sense.LE:
            ct = self.solver.Constraint(-inf, rhs, name)
        else:
            ct = self.solver.Constraint(rhs, rhs, name)
        for var, coeff in terms.items():
            ct.SetCoefficient(var, coeff)
        self._senses[ct.index()] = sense
        return ct

    def coefficient(self, constr: pywraplp.Constraint, var: pywraplp.Variable) -> float:
        return constr.GetCoefficient(var)

    def sense_of(self, constr: pywraplp.Constraint) -> Sense:
        return self._senses[constr.index()]

    # ---------- objective / solve ----------
    def set_objective(self, terms: Dict[Any, float], constant: float = 0.0) -> None:
        objective = self.solver.Objective()
        objective.Clear()
        for var, coeff in terms.items():
            objective.SetCoefficient(var, coeff)
        objective.SetOffset(constant)
        objective.SetMinimization()

    def optimize(self) -> LPStatus:
        self._activities = None
        status = self.solver.Solve()
        if status in (pywraplp.Solver.OPTIMAL, pywraplp.Solver.FEASIBLE):
            self._activities = list(self.solver.ComputeConstraintActivities())
            return LPStatus.OPTIMAL
        if status == pywraplp.Solver.INFEASIBLE:
            return LPStatus.INFEASIBLE
        if status == pywraplp.Solver.UNBOUNDED:
            return LPStatus.UNBOUNDED
        return LPStatus.ERROR

    def value_of(self, var: pywraplp.Variable) -> float:
        return var.solution_value()

    def slack_of(self, constr: pywraplp.Constraint) -> float:
        if self._activities is None:
            raise RuntimeError("slack requested before a successful optimize()")
        activity = self._activities[constr.index()]
        sense = self._senses[constr.index()]
        if sense is Sense.GE:
            return activity - constr.lb()
        if sense is Sense.LE:
            return constr.ub() - activity
        return abs(activity - constr.lb())

    def objective_value(self) -> float:
        return self.solver.Objective().Value()
