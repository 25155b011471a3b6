import os

import networkx as nx

from graph.loader import load_demo_graph
from visualisierung.draw import _sanitize_step, visualize_coloring


def test_sanitize_step():
    assert _sanitize_step("Final 3 Masks!") == "final-3-masks"
    assert _sanitize_step("  ") == "step"


def test_picture_written(tmp_path):
    G = nx.cycle_graph(3)
    path = visualize_coloring(G, {0: 0, 1: 1, 2: 1}, step="after refine", out_dir=str(tmp_path))
    assert os.path.isfile(path)
    assert os.path.basename(path) == "step-after-refine_conflicts-001.png"


def test_geometric_positions_used(tmp_path):
    G = load_demo_graph(n=15, radius=0.3, seed=4)
    col = {v: v % 4 for v in G.nodes()}
    path = visualize_coloring(G, col, out_dir=str(tmp_path), show_labels=False)
    assert path.endswith(".png") and os.path.getsize(path) > 0
