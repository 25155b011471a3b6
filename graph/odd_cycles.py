# graph/odd_cycles.py
from typing import Callable, Iterable, List


def find_odd_cycles(neighbors: Callable[[int], Iterable[int]], num_vertices: int, root: int) -> List[List[int]]:
    """
    DFS from `root` collecting odd cycles through the root.
      - parity label: root 0, a newly reached vertex gets 1 - label(parent); a labeled vertex is never pushed again
      - on_path[v] holds only between push and pop of v
      - each vertex is explored at most once per root (no revisit through another path)
      - when a frame is exhausted, every neighbor u of the top vertex cv with on_path[u] and
        parity[u] == parity[cv] closes an odd cycle: walk the path from the top down to u
    Only cycles containing the root are returned. No minimality guarantee.
    """
    parity = [-1] * num_vertices
    on_path = [False] * num_vertices
    cycles: List[List[int]] = []

    parity[root] = 0
    on_path[root] = True
    path = [root]
    frames = [iter(neighbors(root))]

    while frames:
        cv = path[-1]
        pushed = False
        for u in frames[-1]:
            if parity[u] == -1:
                parity[u] = 1 - parity[cv]
                on_path[u] = True
                path.append(u)
                frames.append(iter(neighbors(u)))
                pushed = True
                break
        if pushed:
            continue

        # frame exhausted: detect cycles closing at cv, then backtrack
        for u in neighbors(cv):
            if on_path[u] and parity[u] == parity[cv]:
                cycle = []
                for k in range(len(path) - 1, -1, -1):
                    cycle.append(path[k])
                    if path[k] == u:
                        break
                if root in cycle:
                    cycles.append(cycle)

        path.pop()
        frames.pop()
        on_path[cv] = False

    return cycles
