# raycast_scene.py
# -------------------------------------------------------------
# Occupancy scene for the 2D grid raycaster:
# - Jagged occupancy grid (rows of ints, nonzero = wall)
# - Out-of-range reads are empty, never an error
# - Host config (grid extents, ray driver limits, minimap style)
#
# Notes:
# - Coordinates are (x=col, y=row) in grid units; scene[row][col].
# - The ray math itself lives in rays/utils.py and is scene-agnostic.
# -------------------------------------------------------------

import json
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from rays import utils as ray_utils
from rays import sensor as ray_sensor
from rays.player import Player, wrap_angle
from rays.vector import Vector2

# =========================
# ======  CONFIG  =========
# =========================

@dataclass
class RaycastConfig:
    # Grid
    grid_cols: int = 10
    grid_rows: int = 10

    # Drawing surface
    canvas_px: int = 800                    # square canvas side [px]
    origin_frac: Tuple[float, float] = (0.43, 0.33)  # ray anchor as fraction of grid extents

    # Ray driver
    max_steps: int = 64                     # hard cap on boundary crossings per ray
    fov_deg: float = 90.0                   # fan width for cast_fan
    n_rays: int = 9                         # rays per fan

    # Minimap style
    point_radius: float = 0.2               # [cells]
    line_width: float = 0.02                # [cells]
    background: str = "#181818"
    grid_color: str = "#303030"
    wall_color: str = "#606060"
    ray_color: str = "green"
    step_color: str = "red"
    hit_color: str = "blue"

    # Player motion
    player_speed: float = 1.5               # [cells/s]
    player_turn_rate: float = 0.0           # [rad/s]
    motion_substeps: int = 5                # sub-steps to avoid tunneling through walls

    def grid_size(self) -> Vector2:
        return Vector2(float(self.grid_cols), float(self.grid_rows))

    def origin(self) -> Vector2:
        return Vector2(self.grid_cols * self.origin_frac[0], self.grid_rows * self.origin_frac[1])

# =========================
# ======  SCENE  ==========
# =========================

class Scene:
    """Occupancy grid: rows of cells, nonzero = wall. Rows may differ in length."""

    def __init__(self, rows: Sequence[Sequence[int]]):
        self.rows: Tuple[Tuple[int, ...], ...] = tuple(tuple(int(v) for v in row) for row in rows)
        self.size = ray_utils.scene_size(self.rows)

    @property
    def width(self) -> int:
        return int(self.size.x)

    @property
    def height(self) -> int:
        return int(self.size.y)

    def in_bounds(self, cell: Vector2) -> bool:
        return ray_utils.in_bounds(cell, self.size)

    def cell_at(self, cell: Vector2) -> int:
        # Short rows, negative and non-finite indices all read as empty
        if not self.in_bounds(cell):
            return 0
        row = self.rows[int(cell.y)]
        col = int(cell.x)
        if col >= len(row):
            return 0
        return row[col]

    def is_wall(self, cell: Vector2) -> bool:
        return self.cell_at(cell) != 0

    def to_array(self) -> np.ndarray:
        """Dense (height, width) int8 wall mask (1 = wall), short rows padded with 0."""
        grid = np.zeros((self.height, self.width), dtype=np.int8)
        for r, row in enumerate(self.rows):
            # any nonzero value is a wall, whatever its magnitude
            grid[r, :len(row)] = [v != 0 for v in row]
        return grid

    # ---------- Rays ----------

    def cast_ray(self, p1: Vector2, p2: Vector2, max_steps: int) -> ray_sensor.RayTrace:
        return ray_sensor.cast_ray(self, p1, p2, max_steps)

    def cast_fan(self, player: Player, cfg: RaycastConfig) -> List[ray_sensor.RayTrace]:
        return ray_sensor.cast_fan(self, player, cfg.fov_deg, cfg.n_rays, cfg.max_steps)

    def __repr__(self) -> str:
        return f"Scene({self.width}x{self.height})"

# =========================
# ======  LOADING  ========
# =========================

def default_scene() -> Scene:
    """Built-in 10x10 demo room: boundary walls plus a few interior blocks."""
    n = 10
    rows = [[0] * n for _ in range(n)]
    for i in range(n):
        rows[0][i] = rows[n - 1][i] = 1
        rows[i][0] = rows[i][n - 1] = 1
    for (r, c) in [(2, 6), (2, 7), (3, 7), (6, 2), (7, 2), (7, 3), (5, 5)]:
        rows[r][c] = 1
    return Scene(rows)


def load_scene(path: str) -> Scene:
    """Read a scene from a JSON list of lists of ints."""
    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)

    if not isinstance(doc, list) or not all(isinstance(row, list) for row in doc):
        raise ValueError(f"{path}: scene must be a list of rows")
    for r, row in enumerate(doc):
        for c, v in enumerate(row):
            # true/false are ints to isinstance
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"{path}: cell ({r}, {c}) is {v!r}, expected an int")
    return Scene(doc)


def player_at_origin(cfg: RaycastConfig, direction: float = 0.0) -> Player:
    return Player(cfg.origin(), wrap_angle(direction))
