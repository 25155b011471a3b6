# visualisierung/draw.py
from __future__ import annotations
import os, re
from typing import Dict, Hashable, List, Tuple
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
import networkx as nx

# eine Farbe pro Maske (0..3), grau = keine Maske
MASK_PALETTE = ["#E63946", "#457B9D", "#2A9D8F", "#F4A261"]
UNASSIGNED = "#DDDDDD"


def _sanitize_step(step: str) -> str:
    """Schrittname für Dateinamen: nur [a-z0-9-_], Leerzeichen und Sonderzeichen werden zu '-'."""
    name = re.sub(r"[^a-z0-9\-_]+", "-", step.strip().lower())
    return re.sub(r"-+", "-", name).strip("-") or "step"


def _get_layout(G: nx.Graph, seed: int = 42) -> Dict:
    """Geometrische Positionen (Attribut 'pos') bevorzugen, sonst Spring-Layout."""
    pos = nx.get_node_attributes(G, "pos")
    if len(pos) == G.number_of_nodes():
        return pos
    return nx.spring_layout(G, seed=seed)


def _split_edges(G: nx.Graph, coloring: Dict[Hashable, int], weight: str):
    """Kanten trennen: Konflikte (gleiche Maske) mit Gewicht, Rest ohne."""
    bad: List[Tuple[Hashable, Hashable]] = []
    bad_w: List[float] = []
    ok: List[Tuple[Hashable, Hashable]] = []
    for u, v, w in G.edges(data=weight, default=1):
        if coloring.get(u) is not None and coloring.get(u) == coloring.get(v):
            bad.append((u, v))
            bad_w.append(w)
        else:
            ok.append((u, v))
    return bad, bad_w, ok


def visualize_coloring(
    G: nx.Graph,
    coloring: Dict[Hashable, int],
    step: str = "final",
    out_dir: str = "visualisierung/picture",
    weight: str = "weight",
    layout_seed: int = 42,
    show_labels: bool = True,
    figure_size: Tuple[float, float] = (8.0, 6.0),
    dpi: int = 220,
) -> str:
    """
    Maskenzuordnung als PNG speichern:
      - Knotenfarbe = Maske, Legende mit den benutzten Masken
      - Konfliktkanten schwarz, Linienbreite wächst mit dem Konfliktgewicht
      - Endknoten von Konflikten schwarz umrandet
    Gibt den Dateipfad zurück.
    """
    os.makedirs(out_dir, exist_ok=True)
    pos = _get_layout(G, seed=layout_seed)
    bad, bad_w, ok = _split_edges(G, coloring, weight)
    hot = {x for e in bad for x in e}

    fig, ax = plt.subplots(figsize=figure_size, dpi=dpi)
    if ok:
        nx.draw_networkx_edges(G, pos, edgelist=ok, width=0.6, alpha=0.35, edge_color="#BBBBBB", ax=ax)
    if bad:
        nx.draw_networkx_edges(G, pos, edgelist=bad, width=[1.2 + 0.6 * w for w in bad_w],
                               alpha=0.95, edge_color="black", ax=ax)

    nodes = list(G.nodes())
    if nodes:
        nx.draw_networkx_nodes(
            G, pos, nodelist=nodes, ax=ax, node_size=220,
            node_color=[MASK_PALETTE[coloring[v] % 4] if coloring.get(v) is not None else UNASSIGNED for v in nodes],
            edgecolors=["black" if v in hot else "#555555" for v in nodes],
            linewidths=[1.6 if v in hot else 0.8 for v in nodes],
        )
    if show_labels:
        nx.draw_networkx_labels(G, pos, labels={v: str(m) for v, m in coloring.items() if m is not None},
                                font_size=7, ax=ax)

    used = sorted({m for m in coloring.values() if m is not None})
    if used:
        ax.legend(handles=[Patch(color=MASK_PALETTE[m % 4], label=f"Maske {m}") for m in used],
                  loc="upper right", fontsize=7)
    cost = sum(bad_w)
    ax.set_title(f"{step} - masks={len(used)} - conflicts={len(bad)} - cost={cost}")
    ax.set_axis_off()
    fig.tight_layout()

    fpath = os.path.join(out_dir, f"step-{_sanitize_step(step)}_conflicts-{len(bad):03d}.png")
    fig.savefig(fpath, bbox_inches="tight")
    plt.close(fig)
    return fpath
