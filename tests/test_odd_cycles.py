import networkx as nx
import pytest

from graph.conflict import ConflictModel
from graph.odd_cycles import find_odd_cycles


def cycles_from(G, root):
    cm = ConflictModel(G)
    return cm, find_odd_cycles(cm.neighbors, cm.num_vertices, root)


def test_triangle_from_root():
    _, cycles = cycles_from(nx.cycle_graph(3), 0)
    assert cycles == [[2, 1, 0]]


def test_c5_found_from_every_root():
    for root in range(5):
        _, cycles = cycles_from(nx.cycle_graph(5), root)
        assert len(cycles) == 1, f"root {root}: {cycles}"
        assert sorted(cycles[0]) == [0, 1, 2, 3, 4]


@pytest.mark.parametrize("G", [
    nx.cycle_graph(4),
    nx.cycle_graph(8),
    nx.path_graph(6),
    nx.complete_bipartite_graph(3, 4),
    nx.convert_node_labels_to_integers(nx.grid_2d_graph(4, 4)),
])
def test_bipartite_graphs_have_no_odd_cycles(G):
    cm = ConflictModel(G)
    for root in cm.vertices():
        assert find_odd_cycles(cm.neighbors, cm.num_vertices, root) == []


@pytest.mark.parametrize("G", [
    nx.complete_graph(5),
    nx.petersen_graph(),
    nx.wheel_graph(6),
    nx.erdos_renyi_graph(25, 0.2, seed=3),
])
def test_reported_cycles_are_odd_cycles_through_root(G):
    cm = ConflictModel(G)
    for root in cm.vertices():
        for cyc in find_odd_cycles(cm.neighbors, cm.num_vertices, root):
            assert len(cyc) >= 3 and len(cyc) % 2 == 1, f"bad length {cyc}"
            assert root in cyc
            assert len(set(cyc)) == len(cyc), f"repeated vertex {cyc}"
            for a, b in zip(cyc, cyc[1:] + cyc[:1]):
                assert b in cm.neighbors(a), f"{a}-{b} not adjacent in {cyc}"


def test_isolated_root():
    G = nx.Graph()
    G.add_nodes_from(range(3))
    _, cycles = cycles_from(G, 1)
    assert cycles == []
