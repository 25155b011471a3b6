"""Shared test fixtures for the LP mask assignment."""

import pytest
import networkx as nx

from graph.loader import load_demo_graph


def weighted(G: nx.Graph, w: int = 1) -> nx.Graph:
    nx.set_edge_attributes(G, w, "weight")
    return G


@pytest.fixture
def graph_triangle():
    return weighted(nx.cycle_graph(3))


@pytest.fixture
def graph_edge():
    G = nx.Graph()
    G.add_edge(0, 1, weight=1)
    return G


@pytest.fixture
def graph_c5():
    return weighted(nx.cycle_graph(5))


@pytest.fixture
def graph_k5():
    return weighted(nx.complete_graph(5))


@pytest.fixture
def graph_empty():
    G = nx.Graph()
    G.add_nodes_from(range(5))
    return G


@pytest.fixture(params=[0, 1, 2])
def demo_graph(request):
    """Random geometric conflict graphs (layout-like)."""
    return load_demo_graph(n=30, radius=0.25, seed=request.param)
