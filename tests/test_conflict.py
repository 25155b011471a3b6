"""Tests for the conflict model."""

import networkx as nx
import pytest

from graph.conflict import THREE, FOUR, ConflictModel, bits_to_color, color_to_bits


def test_color_codes():
    assert [color_to_bits(c) for c in range(4)] == [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert [bits_to_color(*color_to_bits(c)) for c in range(4)] == [0, 1, 2, 3]


def test_indexing_and_weights():
    G = nx.Graph()
    G.add_edge("a", "b", weight=3)
    G.add_edge("b", "c")
    cm = ConflictModel(G)
    assert cm.nodes == ["a", "b", "c"]
    assert list(cm.edges()) == [(0, 1, 3), (1, 2, 1)]
    assert cm.degree(1) == 2
    assert sorted(cm.neighbors(1)) == [0, 2]
    assert cm.colors == [-1, -1, -1]


def test_max_degree_vertex_first_on_ties():
    cm = ConflictModel(nx.path_graph(4))  # degrees 1,2,2,1
    assert cm.max_degree_vertex() == 1
    iso = nx.Graph()
    iso.add_nodes_from([7, 8, 9])
    assert ConflictModel(iso).max_degree_vertex() == 0


def test_color_policy():
    assert ConflictModel(nx.path_graph(2), color_num=THREE).valid_colors() == [0, 1, 2]
    assert ConflictModel(nx.path_graph(2), color_num=FOUR).valid_colors() == [0, 1, 2, 3]
    with pytest.raises(ValueError, match="color_num"):
        ConflictModel(nx.path_graph(2), color_num=5)


def test_precolor_validation():
    cm = ConflictModel(nx.path_graph(3), precolored={2: 3})
    assert cm.has_precolored()
    assert cm.is_precolored(2) and not cm.is_precolored(0)
    assert cm.precolor_value(2) == 3
    assert cm.colors == [-1, -1, 3]
    with pytest.raises(ValueError, match="out of range"):
        ConflictModel(nx.path_graph(3), color_num=THREE, precolored={0: 3})
    with pytest.raises(ValueError, match="not in the graph"):
        ConflictModel(nx.path_graph(3), precolored={42: 0})


def test_self_loop_rejected():
    G = nx.Graph()
    G.add_edge(0, 0)
    with pytest.raises(ValueError, match="self-loop"):
        ConflictModel(G)


def test_cost_counts_weights_of_same_colored_edges():
    G = nx.Graph()
    G.add_edge(0, 1, weight=2)
    G.add_edge(1, 2, weight=5)
    G.add_edge(0, 2, weight=1)
    cm = ConflictModel(G)
    cm.colors = [0, 0, 0]
    assert cm.calc_cost() == 8
    cm.colors = [0, 0, 1]
    assert cm.calc_cost() == 2
    assert cm.conflict_edges() == [(0, 1, 2)]
    assert cm.coloring() == {0: 0, 1: 0, 2: 1}
