#!/usr/bin/env python3
"""
editor.py - interactive floorplan node/edge capture

Features:
  • Upload a floorplan image; it is drawn fitted and centered in the window
  • Click to place a named node (name asked in a dialog)
  • Edge mode: click two nodes to connect them (weight = pixel distance)
  • Right-click selects a node or edge for editing / deleting
  • Export nodes.csv / edges.csv (';'-separated)
Nodes are stored in image pixels, so resizing the window or swapping the
window size never moves them.

Controls:
  left-click : place node (node mode) / pick edge endpoints (edge mode)
  right-click: select node (or edge) under the cursor
  e: toggle edge mode
  t: cycle edge type (selected edge, otherwise the default for new edges)
  r: edit selected node (name, building, floor)
  c: cycle selected node colour
  v: toggle selected node searchable
  g: toggle searchable default for new nodes
  b: set default building id
  f: set default floor id
  d: delete selection
  u: upload image (starts a new graph)
  x: export CSVs
  q: quit
"""
import argparse
import logging
import pathlib

import cv2
import numpy as np
import tkinter as tk
from tkinter import filedialog, simpledialog

from .edge_mode import Mode
from .geometry import Size, contain_size, to_display_space, to_image_space
from .graph_store import EDGE_TYPES, NODE_COLORS
from .hit_test import find_nearest, find_nearest_edge
from .session import EditorSession

# ---------------- Appearance constants ----------------
NODE_RADIUS   = 8
EDGE_THICK    = 2
NODE_OUTLINE  = (0, 0, 0)
SEL_OUTLINE   = (0, 0, 255)
SRC_OUTLINE   = (255, 0, 255)
LETTERBOX     = (50, 50, 50)
TEXT_COLOR    = (255, 255, 255)

NODE_BGR = {
    "blue":   (255, 0, 0),
    "red":    (0, 0, 255),
    "green":  (0, 180, 0),
    "orange": (0, 165, 255),
    "purple": (160, 32, 160),
    "gray":   (160, 160, 160),
}
EDGE_BGR = {
    "elevator": (0, 0, 255),
    "stair":    (255, 0, 0),
    "floor":    (0, 255, 0),
}

WIN_W, WIN_H  = 1280, 800
# ------------------------------------------------------


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Floorplan node/edge capture editor")
    p.add_argument("--image", help="floorplan image to start with")
    p.add_argument("--out-dir", default=".", help="where x writes nodes.csv / edges.csv")
    p.add_argument("--building", default="", help="default building id for new nodes")
    p.add_argument("--floor", default="", help="default floor id for new nodes")
    p.add_argument("--edge-type", choices=EDGE_TYPES, default="elevator",
                   help="edge type for new edges")
    p.add_argument("--verbose", action="store_true", help="log refused operations")
    return p.parse_args(argv)


def layout(image_size, container=(WIN_W, WIN_H)):
    """(rendered size, container size) for an image drawn 'contained' in the window."""
    container = Size(*container)
    return contain_size(image_size, container), container


def render(session, img, selected=None, container=(WIN_W, WIN_H)):
    """
    Draw the letterboxed image with every edge and node on top.

    `selected` is ("node", id), ("edge", id) or None.
    """
    cw, ch = int(container[0]), int(container[1])
    canvas = np.full((ch, cw, 3), LETTERBOX, dtype=np.uint8)
    if img is None or not session.has_image:
        cv2.putText(canvas, "Press u to upload a floorplan", (20, ch // 2),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, TEXT_COLOR, 2)
        return canvas

    rendered, container = layout(session.image_size, (cw, ch))
    rw, rh = int(rendered.width), int(rendered.height)
    x0, y0 = int((cw - rw) / 2), int((ch - rh) / 2)
    canvas[y0:y0 + rh, x0:x0 + rw] = cv2.resize(img, (rw, rh), interpolation=cv2.INTER_AREA)

    def disp(pos):
        sx, sy = to_display_space(pos, session.image_size, rendered, container)
        return int(round(sx)), int(round(sy))

    sel_kind, sel_id = selected if selected else (None, None)

    for e in session.store.edges:
        u = session.store.get_node(e.source_id)
        v = session.store.get_node(e.target_id)
        thick = EDGE_THICK + 2 if (sel_kind == "edge" and sel_id == e.id) else EDGE_THICK
        cv2.line(canvas, disp(u.position), disp(v.position), EDGE_BGR[e.type], thick)

    src = session.pending_source
    for n in session.store.nodes:
        pt = disp(n.position)
        cv2.circle(canvas, pt, NODE_RADIUS, NODE_BGR[n.color], -1)
        cv2.circle(canvas, pt, NODE_RADIUS, NODE_OUTLINE, 1)
        if src is not None and src.id == n.id:
            cv2.circle(canvas, pt, NODE_RADIUS + 4, SRC_OUTLINE, 2)
        if sel_kind == "node" and sel_id == n.id:
            cv2.circle(canvas, pt, NODE_RADIUS + 6, SEL_OUTLINE, 2)
        cv2.putText(canvas, n.name, (pt[0] + NODE_RADIUS + 2, pt[1] - 2),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.45, NODE_OUTLINE, 1)

    cv2.putText(canvas, session.status(), (10, 20),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, TEXT_COLOR, 1)
    return canvas


def cycle(options, current):
    return options[(options.index(current) + 1) % len(options)]


def load_image(path):
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        print(f"Error: could not load image {path}")
    return img


def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    out_dir = pathlib.Path(args.out_dir)

    # Tk only for dialogs
    tk_root = tk.Tk()
    tk_root.withdraw()

    session = EditorSession(building_id=args.building, floor_id=args.floor,
                            edge_type=args.edge_type)
    img = None
    selected = None     # ("node", id) / ("edge", id)

    def adopt(path):
        nonlocal img, selected
        loaded = load_image(path)
        if loaded is None:
            return
        h, w = loaded.shape[:2]
        if session.load_image(w, h):
            img = loaded
            selected = None
            print(f"Loaded {path} ({w}x{h}); graph cleared")

    if args.image:
        adopt(args.image)

    def ask(title, prompt, initial=""):
        return simpledialog.askstring(title, prompt, initialvalue=initial, parent=tk_root)

    def selected_node():
        if selected and selected[0] == "node":
            return session.store.get_node(selected[1])
        return None

    def selected_edge():
        if selected and selected[0] == "edge":
            return session.store.get_edge(selected[1])
        return None

    def on_click(event, x, y, flags, param):
        nonlocal selected
        if not session.has_image:
            return
        rendered, container = layout(session.image_size)

        if event == cv2.EVENT_LBUTTONDOWN:
            before = session.store.edge_count
            pos = session.handle_click((x, y), rendered, container)
            if pos is None:
                return
            if session.mode == Mode.NODE:
                name = ask("New node", f"Name for node at ({int(pos.x)}, {int(pos.y)}):")
                node = session.submit_node(name) if name is not None else None
                if node is None:
                    session.cancel_node_form()
                    if name is not None:
                        print("Node not created: name is required")
                else:
                    print(f"Created node {node.id} '{node.name}' at ({node.position.x}, {node.position.y})")
            elif session.store.edge_count > before:
                e = session.store.edges[-1]
                print(f"Created {e.type} edge {e.source_id} -> {e.target_id} (weight {e.weight:.2f})")

        elif event == cv2.EVENT_RBUTTONDOWN:
            pos = to_image_space((x, y), session.image_size, rendered, container)
            if pos is None:
                selected = None
                return
            n = find_nearest(pos, session.store.nodes)
            if n is not None:
                selected = ("node", n.id)
                return
            by_id = {n.id: n for n in session.store.nodes}
            e = find_nearest_edge(pos, session.store.edges, by_id)
            selected = ("edge", e.id) if e is not None else None

    cv2.namedWindow("editor", cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback("editor", on_click)

    print("Modes: e edge | t type | r edit | c colour | v searchable | g default searchable")
    print("       b building | f floor | d delete | u upload | x export | q quit")
    print("Right-click a node or edge to select it.")

    while True:
        cv2.imshow("editor", render(session, img, selected))
        k = cv2.waitKey(20) & 0xFF

        if k == ord("q"):
            break

        elif k == ord("u"):
            path = filedialog.askopenfilename(
                title="Select floorplan image",
                filetypes=[("Image files", "*.png *.jpg *.jpeg *.bmp *.tif *.tiff")],
            )
            if path:
                adopt(path)

        elif k == ord("e"):
            if not session.toggle_edge_mode():
                print("Load an image first")
            else:
                print(f"Mode: {session.mode.value}")

        elif k == ord("t"):
            e = selected_edge()
            if e is not None:
                session.store.update_edge(e.id, type=cycle(EDGE_TYPES, e.type))
            else:
                session.edge_type = cycle(EDGE_TYPES, session.edge_type)
                print(f"New edges: {session.edge_type}")

        elif k == ord("r") and selected_node() is not None:
            n = selected_node()
            name = ask("Edit node", "Name:", n.name)
            if name is None:
                continue
            building = ask("Edit node", "Building id:", n.building_id)
            floor = ask("Edit node", "Floor id:", n.floor_id)
            changes = {"name": name}
            if building is not None:
                changes["building_id"] = building
            if floor is not None:
                changes["floor_id"] = floor
            if session.store.update_node(n.id, **changes) is None:
                print("Node not updated: name is required")

        elif k == ord("c") and selected_node() is not None:
            n = selected_node()
            session.store.update_node(n.id, color=cycle(NODE_COLORS, n.color))

        elif k == ord("v") and selected_node() is not None:
            n = selected_node()
            session.store.update_node(n.id, is_searchable=not n.is_searchable)

        elif k == ord("g"):
            session.default_searchable = not session.default_searchable

        elif k == ord("b"):
            val = ask("Defaults", "Default building id:", session.default_building_id)
            if val is not None:
                session.default_building_id = val

        elif k == ord("f"):
            val = ask("Defaults", "Default floor id:", session.default_floor_id)
            if val is not None:
                session.default_floor_id = val

        elif k == ord("d") and selected:
            kind, sid = selected
            if kind == "node":
                n = session.delete_node(sid)
                if n is not None:
                    print(f"Deleted node {n.id} '{n.name}' and its edges")
            else:
                session.delete_edge(sid)
            selected = None

        elif k == ord("x"):
            try:
                nodes_path, edges_path = session.export(out_dir)
            except OSError as e:
                print(f"Error: export failed: {e}")
            else:
                print(f"Saved {nodes_path} and {edges_path}")

    cv2.destroyAllWindows()
    tk_root.destroy()


if __name__ == "__main__":
    main()
