from typing import List, Optional, Tuple
import math
import numpy as np
from .utils import EPS, ray_step, hitting_cell
from .vector import Vector2

# (points, cells, hit_cell, dist): frontier points visited, the cell entered at
# each point, the first wall cell (None if no hit), distance origin -> last point
RayTrace = Tuple[List[Vector2], List[Vector2], Optional[Vector2], float]


def cast_ray(scene, p1: Vector2, p2: Vector2, max_steps: int) -> RayTrace:
    """Walk the ray from p1 towards p2 across the scene one grid line at a time.

    p2 only sets the direction: the walk starts just off the anchor, so the
    anchor's own cell and every cell before p2 are checked too. Stops on the
    first wall cell, on the first cell outside the scene, or after max_steps
    crossings, whichever comes first. The anchor stays at p1 for the whole
    walk so every frontier lies on the same line.
    """
    points: List[Vector2] = []
    cells: List[Vector2] = []
    hit = None

    if p2.sub(p1).length() == 0:
        return points, cells, hit, 0.0

    frontier = p1.add(p2.sub(p1).norm().scale(EPS))
    cell = hitting_cell(p1, frontier)
    if not scene.in_bounds(cell) or scene.is_wall(cell):
        # anchor outside the scene or inside a wall
        hit = cell if scene.is_wall(cell) else None
        return [frontier], [cell], hit, p1.distance_to(frontier)

    for _ in range(max(0, int(max_steps))):
        frontier = ray_step(p1, frontier)
        cell = hitting_cell(p1, frontier)
        points.append(frontier)
        cells.append(cell)

        if not scene.in_bounds(cell):
            break  # left the scene (or non-finite input)
        if scene.is_wall(cell):
            hit = cell
            break

    dist = p1.distance_to(points[-1]) if points else 0.0
    return points, cells, hit, dist


def cast_fan(scene, player, fov_deg: float, n_rays: int, max_steps: int) -> List[RayTrace]:
    """Cast n_rays evenly spread over fov_deg, centred on the player's heading."""
    fov = math.radians(fov_deg)
    K = max(1, int(n_rays))
    if K == 1:
        thetas = [player.direction]
    else:
        thetas = np.linspace(player.direction - fov / 2.0, player.direction + fov / 2.0, K)

    traces = []
    for theta in thetas:
        p2 = player.position.add(Vector2.from_angle(float(theta)))
        traces.append(cast_ray(scene, player.position, p2, max_steps))
    return traces
