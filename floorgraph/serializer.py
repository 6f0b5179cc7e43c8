"""
serializer.py - export the graph as two ';'-separated tables.

nodes.csv
    id;building_id;floor_id;name;x;y;is_searchable
edges.csv
    building_id;floor_id;source_id;target_id;type;weight

Rows follow store order, joined with '\n' (no trailing newline). Field
values are written verbatim: a ';' inside a name or id will split the
column when read back.
"""
import pathlib

import numpy as np

DELIMITER    = ";"
NODE_HEADER  = ("id", "building_id", "floor_id", "name", "x", "y", "is_searchable")
EDGE_HEADER  = ("building_id", "floor_id", "source_id", "target_id", "type", "weight")
NODES_FILE   = "nodes.csv"
EDGES_FILE   = "edges.csv"


def _num(v) -> str:
    v = float(v)
    if v.is_integer():
        return str(int(v))
    # shortest round-tripping digits, never exponent notation
    return np.format_float_positional(v, trim="-")


def _bool(v) -> str:
    return "TRUE" if v else "FALSE"


def node_table(nodes) -> str:
    rows = [DELIMITER.join(NODE_HEADER)]
    for n in nodes:
        rows.append(DELIMITER.join([
            n.id, n.building_id, n.floor_id, n.name,
            _num(n.position[0]), _num(n.position[1]),
            _bool(n.is_searchable),
        ]))
    return "\n".join(rows)


def edge_table(edges) -> str:
    rows = [DELIMITER.join(EDGE_HEADER)]
    for e in edges:
        rows.append(DELIMITER.join([
            e.building_id, e.floor_id, e.source_id, e.target_id, e.type,
            f"{e.weight:.2f}",
        ]))
    return "\n".join(rows)


def write_tables(store, out_dir):
    """Write nodes.csv / edges.csv into out_dir; returns (nodes_path, edges_path)."""
    out = pathlib.Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    nodes_path = out / NODES_FILE
    edges_path = out / EDGES_FILE
    nodes_path.write_text(node_table(store.nodes), encoding="utf-8")
    edges_path.write_text(edge_table(store.edges), encoding="utf-8")
    return nodes_path, edges_path


def _parse(text, header):
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if not lines:
        return []
    cols = lines[0].split(DELIMITER)
    if tuple(cols) != header:
        raise ValueError(f"unexpected header: {lines[0]!r}")
    rows = []
    for ln in lines[1:]:
        vals = ln.split(DELIMITER)
        if len(vals) != len(cols):
            raise ValueError(f"expected {len(cols)} fields, got {len(vals)}: {ln!r}")
        rows.append(dict(zip(cols, vals)))
    return rows


def read_tables(nodes_path, edges_path):
    """
    Parse exported tables back into row dicts, with x/y/weight as floats and
    is_searchable as bool. Used by the preview plot.
    """
    nodes = _parse(pathlib.Path(nodes_path).read_text(encoding="utf-8"), NODE_HEADER)
    for n in nodes:
        n["x"] = float(n["x"])
        n["y"] = float(n["y"])
        n["is_searchable"] = n["is_searchable"] == "TRUE"
    edges = _parse(pathlib.Path(edges_path).read_text(encoding="utf-8"), EDGE_HEADER)
    for e in edges:
        e["weight"] = float(e["weight"])
    return nodes, edges
