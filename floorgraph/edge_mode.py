"""
edge_mode.py - click-click edge creation.

    IDLE --click node A--> AWAITING(A) --click node B != A--> create A->B, IDLE

Clicking A again, or clicking empty space, keeps waiting for B.
cancel() (leaving edge mode) throws the pending selection away.
"""
import enum
import logging

from .graph_store import DEFAULT_EDGE_TYPE
from .hit_test import HIT_RADIUS, find_nearest

log = logging.getLogger(__name__)


class Mode(enum.Enum):
    NODE = "node"
    EDGE = "edge"


class EdgeState(enum.Enum):
    IDLE = "idle"
    AWAITING_SECOND_NODE = "awaiting-second-node"


class EdgeCreation:
    def __init__(self, store, edge_type=DEFAULT_EDGE_TYPE, radius=HIT_RADIUS):
        self.store = store
        self.edge_type = edge_type
        self.radius = radius
        self.selected = None

    @property
    def state(self) -> EdgeState:
        if self.selected is None:
            return EdgeState.IDLE
        return EdgeState.AWAITING_SECOND_NODE

    def cancel(self):
        self.selected = None

    def click(self, point):
        """
        Feed one canonical click. Returns the created Edge, or None if this
        click did not complete an edge.
        """
        hit = find_nearest(point, self.store.nodes, self.radius)
        if hit is None:
            return None

        if self.selected is None:
            self.selected = hit
            return None

        if hit.id == self.selected.id:
            return None

        if self.store.get_node(self.selected.id) is None:
            # first pick vanished in the meantime; start over from this one
            log.debug("pending source %r is gone, restarting at %r", self.selected.id, hit.id)
            self.selected = hit
            return None

        edge = self.store.create_edge(self.selected.id, hit.id, self.edge_type)
        self.selected = None
        return edge
