# graph/conflict.py
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple
import networkx as nx

THREE = 3
FOUR = 4


def color_to_bits(color: int) -> Tuple[int, int]:
    """color id -> (bit0, bit1), color = 2*bit0 + bit1"""
    return (color >> 1) & 1, color & 1


def bits_to_color(b0: int, b1: int) -> int:
    return (b0 << 1) + b1


class ConflictModel:
    """
    Conflict graph plus the coloring state of one run:
      - vertices are re-indexed 0..n-1 in G.nodes() order (bit variables are laid out by index)
      - edges carry a conflict weight (attribute `weight`, default 1)
      - color_num is 3 or 4 masks; in 3-mask mode color 3 (bits (1,1)) is forbidden
      - precolored: optional {node: color}, those vertices keep their color
    """

    def __init__(
        self,
        G: nx.Graph,
        color_num: int = FOUR,
        precolored: Optional[Dict[Hashable, int]] = None,
        weight: str = "weight",
    ):
        if color_num not in (THREE, FOUR):
            raise ValueError(f"color_num must be 3 or 4 (got {color_num})")
        self.G = G
        self.color_num = color_num
        self.nodes: List[Hashable] = list(G.nodes())
        self.index: Dict[Hashable, int] = {v: i for i, v in enumerate(self.nodes)}

        self._adj: List[List[int]] = [[] for _ in self.nodes]
        self._edges: List[Tuple[int, int, Any]] = []
        for u, v, w in G.edges(data=weight, default=1):
            if u == v:
                raise ValueError(f"self-loop on vertex {u!r} cannot be colored")
            s, t = self.index[u], self.index[v]
            self._edges.append((s, t, w))
            self._adj[s].append(t)
            self._adj[t].append(s)

        self._precolor: Dict[int, int] = {}
        for v, c in (precolored or {}).items():
            if v not in self.index:
                raise ValueError(f"precolored vertex {v!r} is not in the graph")
            if c not in self.valid_colors():
                raise ValueError(f"precolor {c} of vertex {v!r} out of range for {color_num} colors")
            self._precolor[self.index[v]] = int(c)

        # -1 = not colored yet
        self.colors: List[int] = [self._precolor.get(i, -1) for i in range(len(self.nodes))]

    # ---------- graph queries ----------
    @property
    def num_vertices(self) -> int:
        return len(self.nodes)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def vertices(self) -> range:
        return range(len(self.nodes))

    def edges(self) -> Iterator[Tuple[int, int, Any]]:
        """(s, t, weight) in index space, in G.edges() order."""
        return iter(self._edges)

    def degree(self, i: int) -> int:
        return len(self._adj[i])

    def neighbors(self, i: int) -> List[int]:
        return self._adj[i]

    def max_degree_vertex(self) -> int:
        # strict '>' keeps the first vertex on ties
        best, best_deg = 0, -1
        for i in self.vertices():
            d = self.degree(i)
            if d > best_deg:
                best, best_deg = i, d
        return best

    # ---------- color policy ----------
    def valid_colors(self) -> List[int]:
        return list(range(self.color_num))

    def is_precolored(self, i: int) -> bool:
        return i in self._precolor

    def precolor_value(self, i: int) -> int:
        return self._precolor[i]

    def has_precolored(self) -> bool:
        return bool(self._precolor)

    # ---------- results ----------
    def conflict_edges(self) -> List[Tuple[int, int, Any]]:
        return [(s, t, w) for s, t, w in self._edges if self.colors[s] == self.colors[t]]

    def calc_cost(self) -> float:
        """sum of weights of edges whose endpoints share a color"""
        return sum(w for _, _, w in self.conflict_edges())

    def coloring(self) -> Dict[Hashable, int]:
        return {v: self.colors[i] for i, v in enumerate(self.nodes)}
