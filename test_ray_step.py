#!/usr/bin/env python3
"""
Grid traversal core: epsilon-biased snapping, ray stepping, hit cell, scene size.
Verifies: strict progress every step, each grid line crossed once, the cell
entered (not the one left) is reported.
"""

import math

import numpy as np

from rays.utils import EPS, snap, ray_step, hitting_cell, scene_size, in_bounds, canvas_to_grid
from rays.vector import Vector2


def test_snap_moves_strictly_in_direction_of_travel():
    for x in [-2.5, -1.0, 0.0, 0.3, 1.0, 2.0, 2.999, 7.5]:
        assert snap(x, 1.0) > x
        assert snap(x, -1.0) < x
        assert snap(x, 0.0) == x


def test_snap_values():
    assert snap(2.0, 1.0) == 3.0        # on a line: go to the next one
    assert snap(2.5, 0.1) == 3.0
    assert snap(2.0, -1.0) == 1.0
    assert snap(2.5, -0.1) == 2.0
    assert snap(2.5, 0.0) == 2.5
    # within EPS of a line counts as on it
    assert snap(3.0 - EPS / 2, 1.0) == 4.0
    assert snap(3.0 + EPS / 2, -1.0) == 2.0


def test_ray_step_first_vertical_crossing():
    p3 = ray_step(Vector2(0.0, 0.0), Vector2(0.5, 0.25))
    assert p3 == Vector2(1.0, 0.5)


def test_ray_step_continues_from_crossing():
    p3 = ray_step(Vector2(0.0, 0.0), Vector2(1.0, 0.5))
    assert p3 == Vector2(2.0, 1.0)
    p3 = ray_step(Vector2(0.0, 0.0), Vector2(2.0, 1.0))
    assert p3 == Vector2(3.0, 1.5)


def test_ray_step_picks_closer_horizontal_crossing():
    # steep ray: y = 2x, the horizontal line y=1 comes before x=1
    p3 = ray_step(Vector2(0.0, 0.0), Vector2(0.1, 0.2))
    assert p3.y == 1.0
    assert math.isclose(p3.x, 0.5)


def test_ray_step_axis_aligned():
    assert ray_step(Vector2(1.5, 0.5), Vector2(1.5, 0.7)) == Vector2(1.5, 1.0)
    assert ray_step(Vector2(1.5, 0.7), Vector2(1.5, 0.5)) == Vector2(1.5, 0.0)
    assert ray_step(Vector2(0.5, 2.5), Vector2(0.7, 2.5)) == Vector2(1.0, 2.5)
    assert ray_step(Vector2(0.7, 2.5), Vector2(0.5, 2.5)) == Vector2(0.0, 2.5)


def test_ray_step_zero_length_returns_frontier():
    p = Vector2(3.25, 1.75)
    assert ray_step(p, p) == p
    p = Vector2(3.0, 2.0)
    assert ray_step(p, p) == p


def test_ray_step_always_makes_progress():
    p1 = Vector2(0.3, 0.4)
    dirs = [Vector2.from_angle(float(t)) for t in np.linspace(0.05, 2 * math.pi + 0.05, 36, endpoint=False)]
    dirs += [Vector2(1.0, 0.0), Vector2(-1.0, 0.0), Vector2(0.0, 1.0), Vector2(0.0, -1.0)]
    for d in dirs:
        p2 = p1.add(d.scale(0.5))
        p3 = ray_step(p1, p2)
        along2 = p2.sub(p1).x * d.x + p2.sub(p1).y * d.y
        along3 = p3.sub(p1).x * d.x + p3.sub(p1).y * d.y
        assert along3 > along2, f"no progress along {d}"
        assert p1.distance_to(p3) > p1.distance_to(p2)


def test_repeated_steps_cross_each_grid_line_once():
    p1 = Vector2(0.25, 0.5)
    p = p1.add(Vector2(1.0, 0.3).scale(0.25))

    points = []
    for _ in range(8):
        p = ray_step(p1, p)
        points.append(p)

    xs = [q.x for q in points if q.x == round(q.x)]
    ys = [q.y for q in points if q.y == round(q.y)]
    assert xs == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert ys == [1.0, 2.0]

    dists = [p1.distance_to(q) for q in points]
    assert all(a < b for a, b in zip(dists, dists[1:]))


def test_hitting_cell_is_the_cell_entered():
    # moving right onto x=1: cell 1, not cell 0
    assert hitting_cell(Vector2(0.5, 0.5), Vector2(1.0, 0.5)) == Vector2(1.0, 0.0)
    # moving left onto x=1: cell 0
    assert hitting_cell(Vector2(1.5, 0.5), Vector2(1.0, 0.5)) == Vector2(0.0, 0.0)
    # landing a hair short of the line still enters the next cell
    assert hitting_cell(Vector2(0.5, 0.5), Vector2(1.0 - 1e-9, 0.5)) == Vector2(1.0, 0.0)
    assert hitting_cell(Vector2(0.5, 2.5), Vector2(0.5, 2.0)) == Vector2(0.0, 1.0)
    # no motion: plain floor
    assert hitting_cell(Vector2(0.5, 0.5), Vector2(0.5, 0.5)) == Vector2(0.0, 0.0)


def test_hitting_cell_after_horizontal_step():
    p1 = Vector2(0.3, 2.5)
    p3 = ray_step(p1, Vector2(0.6, 2.5))
    cell = hitting_cell(p1, p3)
    assert p3 == Vector2(1.0, 2.5)
    assert cell.x == math.floor(p3.x)
    assert cell.y == 2.0


def test_non_finite_input_propagates_without_raising():
    p3 = ray_step(Vector2(0.0, 0.0), Vector2(math.nan, 1.0))
    assert math.isnan(p3.x)
    cell = hitting_cell(Vector2(0.0, 0.0), Vector2(math.nan, math.inf))
    assert math.isnan(cell.x)
    assert math.isinf(cell.y)
    assert math.isnan(snap(math.nan, 1.0))
    assert snap(math.inf, 1.0) == math.inf


def test_scene_size():
    assert scene_size([[0, 0, 1], [1, 1]]) == Vector2(3.0, 2.0)
    assert scene_size([[1], [0, 0, 0, 0], []]) == Vector2(4.0, 3.0)
    assert scene_size([]) == Vector2(0.0, 0.0)


def test_in_bounds_and_canvas_to_grid():
    size = Vector2(3.0, 2.0)
    assert in_bounds(Vector2(0.0, 0.0), size)
    assert in_bounds(Vector2(2.0, 1.0), size)
    assert not in_bounds(Vector2(3.0, 1.0), size)
    assert not in_bounds(Vector2(-1.0, 0.0), size)
    assert not in_bounds(Vector2(math.nan, 0.0), size)

    p = canvas_to_grid(Vector2(400.0, 200.0), Vector2(800.0, 800.0), Vector2(10.0, 10.0))
    assert p == Vector2(5.0, 2.5)


if __name__ == "__main__":
    test_snap_moves_strictly_in_direction_of_travel()
    test_snap_values()
    test_ray_step_first_vertical_crossing()
    test_ray_step_continues_from_crossing()
    test_ray_step_picks_closer_horizontal_crossing()
    test_ray_step_axis_aligned()
    test_ray_step_zero_length_returns_frontier()
    test_ray_step_always_makes_progress()
    test_repeated_steps_cross_each_grid_line_once()
    test_hitting_cell_is_the_cell_entered()
    test_hitting_cell_after_horizontal_step()
    test_non_finite_input_propagates_without_raising()
    test_scene_size()
    test_in_bounds_and_canvas_to_grid()
    print("✓ grid traversal checks passed")
