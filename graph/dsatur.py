import networkx as nx
from typing import Dict, Hashable


def dsatur_masks(G, k: int, weight: str = "weight") -> Dict[Hashable, int]:
    """
    Baseline mask assignment with a fixed palette 0..k-1:
    NetworkX DSATUR gives the vertex order, each vertex takes the mask with the
    smallest conflict weight towards already assigned neighbors (lowest id on ties).
    """
    order = list(nx.coloring.greedy_color(G, strategy="DSATUR").keys())
    masks: Dict[Hashable, int] = {}
    for v in order:
        cost = [0] * k
        for u, data in G[v].items():
            if u in masks:
                cost[masks[u]] += data.get(weight, 1)
        masks[v] = min(range(k), key=lambda c: (cost[c], c))
    return masks
