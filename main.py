# main.py
import argparse, sys
from graph.loader import load_demo_graph, load_edge_list
from graph.verify import print_check_summary
from driver.iterate_lp import run_lp_coloring
from ilp.errors import InfeasibleRelaxation, InvalidEdgeWeight, LPSolveError

if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="LP-relaxation mask assignment for multi-patterning decomposition")
    ap.add_argument("--colors", type=int, default=4, choices=[3, 4], help="number of masks")
    ap.add_argument("--edges", default=None, help="weighted edge list 'u v w' (default: random geometric demo)")
    ap.add_argument("--nodes", type=int, default=60)
    ap.add_argument("--radius", type=float, default=0.18)
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--threads", type=int, default=0, help="LP worker threads (0 = backend default)")
    ap.add_argument("--time", type=float, default=60.0, help="time limit of the convergence loop (s)")
    ap.add_argument("--max-rounds", type=int, default=200)
    ap.add_argument("--viz-out", default="visualisierung/picture")
    ap.add_argument("--no-viz", action="store_true")
    ap.add_argument("--quiet", action="store_true")
    args = ap.parse_args()

    if args.edges:
        G = load_edge_list(args.edges)
    else:
        G = load_demo_graph(n=args.nodes, radius=args.radius, seed=args.seed)

    print("[Main] masks=%d | |V|=%d | |E|=%d | threads=%d | time=%.1fs"
          % (args.colors, G.number_of_nodes(), G.number_of_edges(), args.threads, args.time))
    try:
        res = run_lp_coloring(
            G,
            color_num=args.colors,
            threads=args.threads,
            max_rounds=args.max_rounds,
            time_limit_sec=args.time,
            verbose=not args.quiet,
        )
    except InvalidEdgeWeight as e:
        print(f"[Main] invalid input: {e}")
        sys.exit(2)
    except (InfeasibleRelaxation, LPSolveError) as e:
        print(f"[Main] LP failure on |V|={G.number_of_nodes()} |E|={G.number_of_edges()}: {e}")
        sys.exit(1)

    print_check_summary(res["final_check"], prefix="[LPColoring] ")
    if not args.no_viz:
        from visualisierung.draw import visualize_coloring
        path = visualize_coloring(G, res["coloring"], step=f"final-{args.colors}masks", out_dir=args.viz_out)
        print(f"[Main] picture -> {path}")
    print("[Main] Done. stop_reason=%s | rounds=%d | cost=%s | unresolved=%d | rounded=%d | declined=%d | refined=%d"
          % (res["stop_reason"], res["iters"], res["cost"], res["num_unresolved"],
             res["rounded"], res["declined"], res["refined"]))
