#!/usr/bin/env python3
"""
visualize.py - preview an exported graph before handing it over.

    python -m floorgraph.visualize out/nodes.csv out/edges.csv [--annotate] [--save PNGFILE]

Each floor_id gets its own panel in image orientation (y down). An edge is
drawn on the panel of its source node's floor; edges whose endpoints sit on
different floors are left out. Line colour tells the edge type apart.
"""
import argparse, math, pathlib

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

from .serializer import read_tables

EDGE_COLORS = {"elevator": "red", "stair": "blue", "floor": "green"}
NODE_SIZE   = 12


def group_by_floor(nodes, edges):
    """{floor_id: (nodes, segments_by_type)} in floor_id order."""
    pos = {n["id"]: (n["floor_id"], (n["x"], n["y"])) for n in nodes}
    floors = {}
    for n in nodes:
        floors.setdefault(n["floor_id"], ([], {}))[0].append(n)
    for e in edges:
        src, dst = pos.get(e["source_id"]), pos.get(e["target_id"])
        if src is None or dst is None or src[0] != dst[0]:
            continue
        floors[src[0]][1].setdefault(e["type"], []).append([src[1], dst[1]])
    return dict(sorted(floors.items()))


def build_figure(nodes, edges, annotate=False):
    floors = group_by_floor(nodes, edges) or {"": ([], {})}
    cols = math.ceil(math.sqrt(len(floors)))
    rows = math.ceil(len(floors) / cols)
    fig, grid = plt.subplots(rows, cols, figsize=(5 * cols, 5 * rows), squeeze=False)
    panels = grid.ravel()

    for ax, (floor, (f_nodes, segments)) in zip(panels, floors.items()):
        for kind, segs in segments.items():
            ax.add_collection(LineCollection(segs, colors=EDGE_COLORS.get(kind, "black"),
                                             linewidths=1.0, label=kind, zorder=1))
        ax.scatter([n["x"] for n in f_nodes], [n["y"] for n in f_nodes],
                   s=NODE_SIZE, c="black", zorder=2)
        if annotate:
            for n in f_nodes:
                ax.annotate(n["name"], (n["x"], n["y"]), xytext=(3, 3),
                            textcoords="offset points", fontsize=6)
        if segments:
            ax.legend(loc="upper right", fontsize=6)
        ax.set_title(f"Floor {floor or '-'}", fontsize=10)
        ax.autoscale()
        ax.set_aspect("equal")
        ax.invert_yaxis()
        ax.set_xticks([])
        ax.set_yticks([])

    for ax in panels[len(floors):]:
        ax.set_visible(False)

    fig.tight_layout()
    return fig


def main(argv=None):
    p = argparse.ArgumentParser(description="Plot exported floorplan graph tables")
    p.add_argument("nodes_csv", type=pathlib.Path)
    p.add_argument("edges_csv", type=pathlib.Path)
    p.add_argument("--annotate", action="store_true", help="label nodes with their names")
    p.add_argument("--save", metavar="PNGFILE", help="write a PNG instead of opening a window")
    args = p.parse_args(argv)

    nodes, edges = read_tables(args.nodes_csv, args.edges_csv)
    fig = build_figure(nodes, edges, annotate=args.annotate)

    if args.save:
        fig.savefig(args.save, dpi=200)
        print(f"Saved to {args.save}")
    else:
        plt.show()


if __name__ == "__main__":
    main()
