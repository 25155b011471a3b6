# tests/smoke_tests.py
import os, sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import networkx as nx
from driver.iterate_lp import run_lp_coloring
from graph.verify import verify_coloring
from graph.loader import load_demo_graph

def as_int_labels(G):

    return nx.convert_node_labels_to_integers(G)

def run_and_check(G, masks=4, expect_clean=None, name="Graph"):
    G = as_int_labels(G)
    res = run_lp_coloring(G, color_num=masks, time_limit_sec=10, max_rounds=50, verbose=False)
    cost = res["cost"]
    unresolved = res["num_unresolved"]

    assert all(0 <= c < masks for c in res["coloring"].values()), f"{name}: mask out of range"
    assert (cost == 0) == (unresolved == 0), f"{name}: cost={cost} but unresolved={unresolved}"

    if expect_clean is not None:
        assert res["feasible"] == expect_clean, f"{name}: expect clean={expect_clean}, got cost={cost}"

    rep = verify_coloring(G, res["coloring"], allowed_colors=range(masks))
    assert rep["cost"] == cost, f"{name}: verify_coloring cost {rep['cost']} != {cost}"
    print(f"[PASS] {name:20s}  masks={masks}  cost={cost}  unresolved={unresolved}  rounds={res['iters']}")
    return cost

SUITE = [
    (nx.complete_graph(3), 3, True, "K3"),
    (nx.complete_graph(4), 4, True, "K4"),
    (nx.complete_graph(4), 3, False, "K4 (3 masks)"),
    (nx.complete_graph(5), 4, False, "K5"),
    (nx.cycle_graph(4), 3, True, "C4 (even cycle)"),
    (nx.cycle_graph(5), 3, True, "C5 (odd cycle)"),
    (nx.petersen_graph(), 4, True, "Petersen"),
    (nx.complete_bipartite_graph(3, 4), 4, None, "K3,4"),
    (nx.grid_2d_graph(5, 5), 3, None, "Grid 5x5"),
]

def test_smoke_suite():
    for G, masks, clean, name in SUITE:
        run_and_check(G, masks=masks, expect_clean=clean, name=name)

def test_smoke_random_layouts():
    for i, r in enumerate([0.15, 0.2], start=1):
        run_and_check(load_demo_graph(n=40, radius=r, seed=i), masks=3, name=f"RGG(40,{r})")

if __name__ == "__main__":

    test_smoke_suite()
    for i, p in enumerate([0.05, 0.08, 0.12], start=1):
        G = nx.erdos_renyi_graph(40, p, seed=i)
        for masks in (3, 4):
            run_and_check(G, masks=masks, name=f"ER(40,{p})")

    test_smoke_random_layouts()
    print("All smoke tests passed.")
