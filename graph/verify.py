from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple
import networkx as nx

Conflict = Tuple[Hashable, Hashable, Any]


def _weighted_conflicts(G: nx.Graph, masks: Dict[Hashable, int], weight: str) -> Tuple[List[Conflict], float]:
    """edges whose endpoints share a mask or lack one, with their total weight"""
    hits: List[Conflict] = []
    total = 0
    for u, v, w in G.edges(data=weight, default=1):
        mu, mv = masks.get(u), masks.get(v)
        if mu is None or mv is None or mu == mv:
            hits.append((u, v, w))
            total += w
    return hits, total


def verify_coloring(
    G: nx.Graph,
    coloring: Dict[Hashable, int],
    allowed_colors: Optional[Iterable[int]] = None,
    weight: str = "weight",
    sample_conflicts: int = 10,
) -> Dict[str, Any]:
    """
    Independent check of a mask assignment, recomputed from G only:
      - every vertex has an integer mask, inside `allowed_colors` if given
      - conflict edges (same mask, or an unassigned endpoint) and their weighted cost
    feasible <=> nothing missing, nothing malformed, nothing out of range, no conflict.
    """
    palette = None if allowed_colors is None else set(allowed_colors)
    missing = [v for v in G.nodes() if v not in coloring]
    malformed = [v for v, m in coloring.items() if not isinstance(m, int)]
    masks_used = sorted({m for m in coloring.values() if isinstance(m, int)})
    outside = [] if palette is None else [v for v, m in coloring.items() if G.has_node(v) and m not in palette]
    conflicts, cost = _weighted_conflicts(G, coloring, weight)

    return {
        "missing_nodes": missing,
        "bad_nodes": malformed,
        "used_colors": masks_used,
        "num_used_colors": len(masks_used),
        "out_of_range_nodes": outside,
        "num_conflicts": len(conflicts),
        "conflicts": conflicts,
        "conflicts_sample": conflicts[:sample_conflicts],
        "cost": cost,
        "feasible": not (missing or malformed or outside or conflicts),
    }


def print_check_summary(report: Dict[str, Any], prefix: str = "[Check] ") -> None:
    print(f"{prefix}feasible={report.get('feasible', False)} | masks_used={report.get('num_used_colors', -1)} "
          f"| conflicts={report.get('num_conflicts', -1)} | cost={report.get('cost', -1)}")
    if report.get("feasible", False):
        return
    for key in ("missing_nodes", "out_of_range_nodes", "bad_nodes"):
        items = report.get(key, [])
        if items:
            print(f"{prefix}{key}(sample)={items[:10]}")
    if report.get("num_conflicts", 0) > 0:
        print(f"{prefix}conflicts_sample={report.get('conflicts_sample', [])}")
