import math
from typing import Sequence

import numpy as np

from .vector import Vector2

# Bias that pushes a snapped/floored coordinate off the boundary it sits on,
# so repeated stepping always makes progress.
EPS = 1e-3


def snap(x: float, dx: float) -> float:
    """Next grid line from x in the direction of dx (x itself if dx == 0)."""
    if dx > 0:
        return float(np.ceil(x + EPS))
    if dx < 0:
        return float(np.floor(x - EPS))
    return x


def ray_step(p1: Vector2, p2: Vector2) -> Vector2:
    """Advance the ray p1 -> p2 to the nearest grid line crossing past p2.

    Both the next vertical (x = n) and horizontal (y = m) crossings are
    computed on the line through p1 and p2; the one closer to p2 is returned.
    Axis-aligned rays only have one candidate. A zero-length ray returns p2.
    """
    d = p2.sub(p1)
    if d.x == 0:
        # Vertical motion: only horizontal lines can be crossed
        return Vector2(p2.x, snap(p2.y, d.y))

    k = d.y / d.x
    c = p1.y - k * p1.x

    x3 = snap(p2.x, d.x)
    p3 = Vector2(x3, k * x3 + c)

    if k != 0:
        y3 = snap(p2.y, d.y)
        p3_h = Vector2((y3 - c) / k, y3)
        if p2.distance_to(p3_h) < p2.distance_to(p3):
            p3 = p3_h

    return p3


def hitting_cell(p1: Vector2, p2: Vector2) -> Vector2:
    """Grid cell (col, row) the ray p1 -> p2 has just entered at p2."""
    d = p2.sub(p1)
    return Vector2(
        float(np.floor(p2.x + np.sign(d.x) * EPS)),
        float(np.floor(p2.y + np.sign(d.y) * EPS)),
    )


def scene_size(scene: Sequence[Sequence[int]]) -> Vector2:
    """(width, height) in cells; width is the longest row, 0 for no rows."""
    width = max((len(row) for row in scene), default=0)
    return Vector2(float(width), float(len(scene)))


def in_bounds(cell: Vector2, size: Vector2) -> bool:
    if not (math.isfinite(cell.x) and math.isfinite(cell.y)):
        return False
    return (0 <= cell.x < size.x) and (0 <= cell.y < size.y)


def canvas_to_grid(point: Vector2, canvas_size: Vector2, grid_size: Vector2) -> Vector2:
    """Pixel position on the drawing surface -> continuous grid coordinates."""
    return point.div(canvas_size).mul(grid_size)
