# driver/iterate_lp.py
from typing import Any, Dict, Hashable, List, Optional
import math
import time

import networkx as nx

from graph.conflict import FOUR, ConflictModel
from graph.verify import verify_coloring
from heuristics.round_and_repair import apply_solution, post_refinement
from ilp.backend import LPBackend
from ilp.cuts import add_odd_cycle_constraints
from ilp.fixing import rounding_with_binding_analysis
from ilp.model import RelaxationModel, build_relaxation
from ilp.objective import tune_objective


def converge(
    model: RelaxationModel,
    max_rounds: int = 200,
    time_limit_sec: Optional[float] = 60.0,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    solve -> while 0 < non-integer(vertex) < previous:
        tune objective, add odd-cycle cuts, re-solve
    Stops on an integral solution or when the count stops strictly decreasing (plateau);
    fractional leftovers at a plateau are accepted.
    """
    t0 = time.time()
    info = model.solve(stage="initial")["info"]
    prev_count = math.inf
    logs: List[Dict[str, Any]] = [dict(round=0, vertex_non_integer=info.vertex_non_integer_num,
                                       vertex_half_integer=info.vertex_half_integer_num,
                                       edge_non_integer=info.edge_non_integer_num, cuts_added=0)]
    if verbose:
        print(f"[Round 0] non-int(v)={info.vertex_non_integer_num} half(v)={info.vertex_half_integer_num} "
              f"non-int(e)={info.edge_non_integer_num}")

    round_id = 0
    stop_reason = ""
    cuts_total = 0
    while 0 < info.vertex_non_integer_num < prev_count:
        if round_id >= max_rounds:
            stop_reason = "max_rounds"
            break
        if time_limit_sec is not None and time.time() - t0 > time_limit_sec:
            stop_reason = "time_limit"
            break
        round_id += 1

        terms = tune_objective(model)
        cuts = add_odd_cycle_constraints(model)
        cuts_total += cuts

        prev_count = info.vertex_non_integer_num
        info = model.solve(stage=f"round {round_id}")["info"]
        logs.append(dict(round=round_id, vertex_non_integer=info.vertex_non_integer_num,
                         vertex_half_integer=info.vertex_half_integer_num,
                         edge_non_integer=info.edge_non_integer_num, cuts_added=cuts))
        if verbose:
            elapsed = time.time() - t0
            print(f"[Round {round_id}] objective_terms={terms} | new_cycles={cuts} | "
                  f"non-int(v)={info.vertex_non_integer_num} half(v)={info.vertex_half_integer_num} | t={elapsed:.2f}s")

    if not stop_reason:
        stop_reason = "integral" if info.vertex_non_integer_num == 0 else "plateau"
    if verbose:
        print(f"  [Stop] {stop_reason} after {round_id} rounds, cycles cut={cuts_total}")
    return dict(iters=round_id, log=logs, stop_reason=stop_reason, cuts=cuts_total, info=info)


def run_lp_coloring(
    G: nx.Graph,
    color_num: int = FOUR,
    precolored: Optional[Dict[Hashable, int]] = None,
    weight: str = "weight",
    backend: Optional[LPBackend] = None,
    threads: int = 0,
    eps: float = 1e-6,
    max_rounds: int = 200,
    time_limit_sec: Optional[float] = 60.0,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    LP-relaxation mask assignment:
      build relaxation -> converge (objective tuning + odd-cycle cuts) -> binding-analysis rounding
      -> apply discrete colors -> greedy post refinement -> cost
    Raises InvalidEdgeWeight / InfeasibleRelaxation / LPSolveError on fatal conditions.
    """
    t0 = time.time()
    cm = ConflictModel(G, color_num=color_num, precolored=precolored, weight=weight)
    allowed = cm.valid_colors()

    if cm.num_vertices == 0:
        rep = verify_coloring(G, {}, allowed_colors=allowed, weight=weight)
        return dict(coloring={}, cost=0, unresolved=[], num_unresolved=0, feasible=True,
                    iters=0, log=[], stop_reason="empty", cuts=0, rounded=0, declined=0,
                    refined=0, anchor=None, final_check=rep, runtime_sec=0.0)

    if verbose:
        print(f"[Init] graph: |V|={cm.num_vertices} |E|={cm.num_edges} | masks={color_num} "
              f"| precolored={len(precolored or {})}")

    # 1) relaxation
    model = build_relaxation(cm, backend=backend, threads=threads, eps=eps, verbose=verbose)

    # 2) relax-cut-tune loop
    conv = converge(model, max_rounds=max_rounds, time_limit_sec=time_limit_sec, verbose=verbose)

    # 3) binding-analysis rounding of (0.5, 0.5) pairs
    rnd = rounding_with_binding_analysis(model, verbose=verbose)
    if verbose:
        print(f"[Binding] rounded={rnd['rounded']} | declined={rnd['declined']} | "
              f"rolled_back={rnd['rolled_back']} | non-int(v) history={rnd['history']}")

    # 4) discrete colors
    apply_solution(cm, model.x)
    if verbose:
        print(f"[Apply] conflicts after rounding={len(cm.conflict_edges())} | cost={cm.calc_cost()}")

    # 5) greedy repair
    refined, _left = post_refinement(cm, verbose=verbose)

    coloring = cm.coloring()
    unresolved = [(cm.nodes[s], cm.nodes[t], w) for s, t, w in cm.conflict_edges()]
    cost = cm.calc_cost()
    final_report = verify_coloring(G, coloring, allowed_colors=allowed, weight=weight)
    runtime = time.time() - t0
    if verbose:
        print(f"[Final] cost={cost} | unresolved={len(unresolved)} | feasible={final_report['feasible']} "
              f"| t={runtime:.2f}s")

    return dict(
        coloring=coloring, cost=cost, unresolved=unresolved, num_unresolved=len(unresolved),
        feasible=final_report["feasible"], iters=conv["iters"], log=conv["log"],
        stop_reason=conv["stop_reason"], cuts=conv["cuts"], rounded=rnd["rounded"],
        declined=rnd["declined"], refined=refined,
        anchor=None if model.anchor is None else cm.nodes[model.anchor],
        final_check=final_report, runtime_sec=runtime,
    )
