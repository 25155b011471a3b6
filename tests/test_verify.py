import networkx as nx

from graph.verify import print_check_summary, verify_coloring


def test_proper_coloring():
    G = nx.cycle_graph(4)
    rep = verify_coloring(G, {0: 0, 1: 1, 2: 0, 3: 1}, allowed_colors=range(3))
    assert rep["feasible"]
    assert rep["cost"] == 0 and rep["num_conflicts"] == 0
    assert rep["used_colors"] == [0, 1] and rep["num_used_colors"] == 2


def test_weighted_conflicts_and_range():
    G = nx.Graph()
    G.add_edge("a", "b", weight=3)
    G.add_edge("b", "c", weight=2)
    rep = verify_coloring(G, {"a": 3, "b": 3, "c": 1}, allowed_colors=[0, 1, 2])
    assert not rep["feasible"]
    assert rep["conflicts"] == [("a", "b", 3)]
    assert rep["cost"] == 3
    assert sorted(rep["out_of_range_nodes"]) == ["a", "b"]


def test_missing_nodes_count_as_conflicts():
    G = nx.path_graph(3)
    rep = verify_coloring(G, {0: 0, 1: 1})
    assert rep["missing_nodes"] == [2]
    assert rep["num_conflicts"] == 1
    assert not rep["feasible"]


def test_summary_prints(capsys):
    G = nx.path_graph(2)
    print_check_summary(verify_coloring(G, {0: 1, 1: 1}), prefix="[T] ")
    out = capsys.readouterr().out
    assert "[T] feasible=False" in out
    assert "conflicts_sample" in out
