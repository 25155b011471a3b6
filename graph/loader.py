import math
import networkx as nx


def load_demo_graph(n: int = 60, radius: float = 0.18, seed: int = 0) -> nx.Graph:
    # random geometric conflict graph: shapes closer than `radius` conflict,
    # closer pairs get a heavier integer weight (1..3)
    G = nx.random_geometric_graph(n, radius, seed=seed)
    pos = nx.get_node_attributes(G, "pos")
    for u, v in G.edges():
        d = math.dist(pos[u], pos[v])
        G[u][v]["weight"] = 1 + int(2 * (1.0 - d / radius))
    return G


def load_edge_list(path: str, nodetype=int) -> nx.Graph:
    """whitespace separated `u v weight` lines"""
    return nx.read_weighted_edgelist(path, nodetype=nodetype)
