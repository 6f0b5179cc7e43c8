"""
geometry.py - viewport <-> image-pixel mapping for a letterboxed floorplan.

The editor draws the floorplan "contained" inside a fixed window: scaled to
fit while keeping its aspect ratio and centered, so one axis gets padding.
Nodes always live in canonical image pixels (the image's natural size);
everything on screen is derived from them through these two functions:

    image_x = (screen_x - offset_x) * natural_w / rendered_w
    screen_x = image_x * rendered_w / natural_w + offset_x
    offset_x = (container_w - rendered_w) / 2

(same for y).
"""
import math
from typing import NamedTuple, Optional, Tuple

_EDGE_EPS = 1e-6   # image pixels, per unit of scale


class Size(NamedTuple):
    width: float
    height: float


class Position(NamedTuple):
    x: float
    y: float


def _valid(size) -> bool:
    return size is not None and size[0] > 0 and size[1] > 0


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def _offset(rendered, container) -> Tuple[float, float]:
    return ((container[0] - rendered[0]) / 2.0,
            (container[1] - rendered[1]) / 2.0)


def contain_size(natural, container) -> Optional[Size]:
    """Largest aspect-preserving size of `natural` fitting inside `container`."""
    if not _valid(natural) or not _valid(container):
        return None
    s = min(container[0] / natural[0], container[1] / natural[1])
    return Size(max(1, _round_half_up(natural[0] * s)),
                max(1, _round_half_up(natural[1] * s)))


def to_image_space(point, natural, rendered, container) -> Optional[Position]:
    """
    Map a pointer position (relative to the container's top-left) to an
    integer image-pixel Position.

    Returns None if any size is missing/degenerate, or if the click lands in
    the letterbox padding outside [0, w] x [0, h].
    """
    if point is None or not (_valid(natural) and _valid(rendered) and _valid(container)):
        return None
    ox, oy = _offset(rendered, container)
    # multiply before dividing so the far image edge maps back exactly
    ix = (point[0] - ox) * natural[0] / rendered[0]
    iy = (point[1] - oy) * natural[1] / rendered[1]
    # float noise from a fractional rendered rect, not a real padding click
    ex = _EDGE_EPS * max(1.0, natural[0] / rendered[0])
    ey = _EDGE_EPS * max(1.0, natural[1] / rendered[1])
    if not (-ex <= ix <= natural[0] + ex and -ey <= iy <= natural[1] + ey):
        return None
    return Position(min(max(_round_half_up(ix), 0), natural[0]),
                    min(max(_round_half_up(iy), 0), natural[1]))


def to_display_space(position, natural, rendered, container) -> Optional[Tuple[float, float]]:
    """Inverse of to_image_space (no rounding)."""
    if position is None or not (_valid(natural) and _valid(rendered) and _valid(container)):
        return None
    ox, oy = _offset(rendered, container)
    return (position[0] * rendered[0] / natural[0] + ox,
            position[1] * rendered[1] / natural[1] + oy)
