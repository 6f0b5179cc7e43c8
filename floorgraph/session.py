"""
session.py - everything one editing session holds between clicks.

A session owns the graph, the loaded image's natural size, the current mode
and the defaults new nodes/edges inherit. Loading a new image wipes the
graph. Nothing here raises for a bad click or form: refused operations
return None/False and leave state as it was.
"""
import logging

from . import geometry, serializer
from .edge_mode import EdgeCreation, EdgeState, Mode
from .graph_store import DEFAULT_COLOR, DEFAULT_EDGE_TYPE, EDGE_TYPES, GraphStore
from .hit_test import HIT_RADIUS

log = logging.getLogger(__name__)


class EditorSession:
    def __init__(self, building_id="", floor_id="", searchable=True,
                 color=DEFAULT_COLOR, edge_type=DEFAULT_EDGE_TYPE, hit_radius=HIT_RADIUS):
        self.store = GraphStore()
        self.image_size = None          # geometry.Size once an image is decoded
        self.mode = Mode.NODE
        self.pending_position = None    # click waiting for the node form

        self.default_building_id = building_id
        self.default_floor_id = floor_id
        self.default_searchable = searchable
        self.default_color = color

        self.edge_creation = EdgeCreation(self.store, edge_type, hit_radius)

    # ---------------- image ----------------
    @property
    def has_image(self) -> bool:
        return self.image_size is not None

    def load_image(self, width, height) -> bool:
        """Adopt a freshly decoded image; the previous graph is discarded."""
        if not width or not height or width <= 0 or height <= 0:
            log.debug("load_image refused: bad size %rx%r", width, height)
            return False
        self.image_size = geometry.Size(width, height)
        self.store.clear()
        self.edge_creation.cancel()
        self.mode = Mode.NODE
        self.pending_position = None
        return True

    # ---------------- mapping ----------------
    def to_image_space(self, point, rendered, container):
        return geometry.to_image_space(point, self.image_size, rendered, container)

    def to_display_space(self, position, rendered, container):
        return geometry.to_display_space(position, self.image_size, rendered, container)

    # ---------------- modes ----------------
    @property
    def edge_type(self):
        return self.edge_creation.edge_type

    @edge_type.setter
    def edge_type(self, value):
        if value in EDGE_TYPES:
            self.edge_creation.edge_type = value

    @property
    def pending_source(self):
        """Node picked as the first end of an edge, if any."""
        return self.edge_creation.selected

    def set_mode(self, mode) -> bool:
        if mode == Mode.EDGE and not self.has_image:
            log.debug("edge mode refused: no image loaded")
            return False
        if mode != Mode.EDGE:
            self.edge_creation.cancel()
        else:
            self.pending_position = None
        self.mode = mode
        return True

    def toggle_edge_mode(self) -> bool:
        return self.set_mode(Mode.NODE if self.mode == Mode.EDGE else Mode.EDGE)

    # ---------------- clicks ----------------
    def handle_click(self, point, rendered, container):
        """
        Route a pointer click. Returns the canonical Position, or None if the
        click was rejected (no image, letterbox padding).
        """
        pos = self.to_image_space(point, rendered, container)
        if pos is None:
            return None
        if self.mode == Mode.EDGE:
            edge = self.edge_creation.click(pos)
            if edge is not None:
                log.debug("created %s %s -> %s", edge.id, edge.source_id, edge.target_id)
        else:
            self.pending_position = pos
        return pos

    def submit_node(self, name, building_id=None, floor_id=None, color=None,
                    is_searchable=None):
        if self.pending_position is None:
            return None
        node = self.store.create_node(
            name,
            self.pending_position,
            building_id=self.default_building_id if building_id is None else building_id,
            floor_id=self.default_floor_id if floor_id is None else floor_id,
            color=self.default_color if color is None else color,
            is_searchable=self.default_searchable if is_searchable is None else is_searchable,
        )
        if node is not None:
            self.pending_position = None
        return node

    def cancel_node_form(self):
        self.pending_position = None

    # ---------------- deletes ----------------
    def delete_node(self, node_id):
        node = self.store.delete_node(node_id)
        pending = self.edge_creation.selected
        if node is not None and pending is not None and pending.id == node_id:
            self.edge_creation.cancel()
        return node

    def delete_edge(self, edge_id):
        return self.store.delete_edge(edge_id)

    # ---------------- export ----------------
    def export(self, out_dir):
        return serializer.write_tables(self.store, out_dir)

    def status(self) -> str:
        waiting = ""
        if self.mode == Mode.EDGE and self.edge_creation.state == EdgeState.AWAITING_SECOND_NODE:
            waiting = f" (from {self.edge_creation.selected.name})"
        return (f"Mode: {self.mode.value}{waiting}  Edge type: {self.edge_type}  "
                f"Building: {self.default_building_id or '-'}  Floor: {self.default_floor_id or '-'}  "
                f"Searchable: {self.default_searchable}  "
                f"Nodes: {self.store.node_count}  Edges: {self.store.edge_count}")
