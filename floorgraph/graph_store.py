"""
graph_store.py - the node/edge graph captured on top of a floorplan.

Nodes and edges are immutable records; edits swap the stored record for an
updated copy at the same key, so ids and creation order never change.
Every edge references two stored nodes: deleting a node deletes its edges.

Failed operations (blank or non-text name/labels, unknown id, self-loop,
bad type/colour)
return None and leave the store untouched.
"""
import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .geometry import Position
from .weights import edge_weight

log = logging.getLogger(__name__)

# ---------------- Vocabulary ----------------
NODE_COLORS        = ("blue", "red", "green", "orange", "purple", "gray")
DEFAULT_COLOR      = "blue"
EDGE_TYPES         = ("floor", "stair", "elevator")
DEFAULT_EDGE_TYPE  = "elevator"
# --------------------------------------------

NODE_FIELDS = ("name", "building_id", "floor_id", "position", "color", "is_searchable")
EDGE_FIELDS = ("type", "building_id", "floor_id")


@dataclass(frozen=True)
class Node:
    id: str
    name: str
    position: Position
    building_id: str = ""
    floor_id: str = ""
    color: str = DEFAULT_COLOR
    is_searchable: bool = True


@dataclass(frozen=True)
class Edge:
    id: str
    source_id: str
    target_id: str
    type: str
    weight: float
    building_id: str = ""
    floor_id: str = ""


def _blank(name) -> bool:
    return not isinstance(name, str) or not name.strip()


def _bad_labels(**labels):
    """Names of label fields that are not strings."""
    return sorted(k for k, v in labels.items() if not isinstance(v, str))


class GraphStore:
    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._next_node = 1
        self._next_edge = 1

    # -------------- reads --------------
    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def get_node(self, node_id) -> Optional[Node]:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def edges_of(self, node_id) -> List[Edge]:
        return [e for e in self._edges.values()
                if e.source_id == node_id or e.target_id == node_id]

    # -------------- nodes --------------
    def create_node(self, name, position, building_id="", floor_id="",
                    color=DEFAULT_COLOR, is_searchable=True) -> Optional[Node]:
        if _blank(name):
            log.debug("create_node refused: empty name")
            return None
        bad = _bad_labels(building_id=building_id, floor_id=floor_id)
        if bad:
            log.debug("create_node refused: non-text %s", bad)
            return None
        if color not in NODE_COLORS:
            log.debug("create_node refused: unknown color %r", color)
            return None
        nid = str(self._next_node)
        self._next_node += 1
        node = Node(
            id=nid,
            name=name,
            position=Position(*position),
            building_id=building_id,
            floor_id=floor_id,
            color=color,
            is_searchable=bool(is_searchable),
        )
        self._nodes[nid] = node
        return node

    def update_node(self, node_id, **changes) -> Optional[Node]:
        node = self._nodes.get(node_id)
        if node is None:
            log.debug("update_node refused: unknown node %r", node_id)
            return None
        unknown = set(changes) - set(NODE_FIELDS)
        if unknown:
            log.debug("update_node refused: unknown fields %s", sorted(unknown))
            return None
        if "name" in changes and _blank(changes["name"]):
            log.debug("update_node refused: empty name")
            return None
        bad = _bad_labels(**{k: changes[k] for k in ("building_id", "floor_id") if k in changes})
        if bad:
            log.debug("update_node refused: non-text %s", bad)
            return None
        if "color" in changes and changes["color"] not in NODE_COLORS:
            log.debug("update_node refused: unknown color %r", changes["color"])
            return None
        if "position" in changes:
            changes["position"] = Position(*changes["position"])
        if "is_searchable" in changes:
            changes["is_searchable"] = bool(changes["is_searchable"])
        updated = replace(node, **changes)
        self._nodes[node_id] = updated
        return updated

    def delete_node(self, node_id) -> Optional[Node]:
        node = self._nodes.pop(node_id, None)
        if node is None:
            return None
        # cascade: drop every edge touching the node
        self._edges = {eid: e for eid, e in self._edges.items()
                       if e.source_id != node_id and e.target_id != node_id}
        return node

    # -------------- edges --------------
    def create_edge(self, source_id, target_id, edge_type=DEFAULT_EDGE_TYPE) -> Optional[Edge]:
        src = self._nodes.get(source_id)
        dst = self._nodes.get(target_id)
        if src is None or dst is None:
            log.debug("create_edge refused: unknown endpoint %r -> %r", source_id, target_id)
            return None
        if source_id == target_id:
            log.debug("create_edge refused: self-loop on %r", source_id)
            return None
        if edge_type not in EDGE_TYPES:
            log.debug("create_edge refused: unknown type %r", edge_type)
            return None
        eid = f"edge-{self._next_edge}"
        self._next_edge += 1
        edge = Edge(
            id=eid,
            source_id=source_id,
            target_id=target_id,
            type=edge_type,
            weight=edge_weight(src.position, dst.position),
            building_id=src.building_id,
            floor_id=src.floor_id,
        )
        self._edges[eid] = edge
        return edge

    def update_edge(self, edge_id, **changes) -> Optional[Edge]:
        edge = self._edges.get(edge_id)
        if edge is None:
            log.debug("update_edge refused: unknown edge %r", edge_id)
            return None
        unknown = set(changes) - set(EDGE_FIELDS)
        if unknown:
            log.debug("update_edge refused: unknown fields %s", sorted(unknown))
            return None
        if "type" in changes and changes["type"] not in EDGE_TYPES:
            log.debug("update_edge refused: unknown type %r", changes["type"])
            return None
        bad = _bad_labels(**{k: changes[k] for k in ("building_id", "floor_id") if k in changes})
        if bad:
            log.debug("update_edge refused: non-text %s", bad)
            return None
        updated = replace(edge, **changes)
        self._edges[edge_id] = updated
        return updated

    def delete_edge(self, edge_id) -> Optional[Edge]:
        return self._edges.pop(edge_id, None)

    # -------------- reset --------------
    def clear(self):
        """Drop everything and restart ids (a new floorplan was loaded)."""
        self._nodes.clear()
        self._edges.clear()
        self._next_node = 1
        self._next_edge = 1
