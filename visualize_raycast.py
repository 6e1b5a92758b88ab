# visualize_raycast.py
# -------------------------------------------------------------
# Minimap view of the grid raycaster: grid, walls, anchor, frontier,
# every boundary crossing of the ray and the wall cell it stops on.
#
# Examples:
#   python visualize_raycast.py --target 7.5 6.2 --no-show
#   python visualize_raycast.py --scene maps/room.json --fan --heading 30 --walk 1.0 --no-show
#   python visualize_raycast.py --interactive   # follow the mouse, needs a GUI backend
# -------------------------------------------------------------

import argparse
import math
import os
from datetime import datetime
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from matplotlib.patches import Circle, Rectangle

from raycast_scene import RaycastConfig, Scene, default_scene, load_scene, player_at_origin
from rays.player import Player, propagate_player
from rays.utils import canvas_to_grid
from rays.vector import Vector2

INTERACTIVE_BACKENDS = {"qt5agg", "qtagg", "tkagg", "macosx", "gtk3agg", "wxagg"}


# ----------------- utils -----------------

def cells_to_points(ax, cells: float, n_cols: int) -> float:
    """Convert a length in grid cells to a matplotlib line width in points."""
    px_per_cell = ax.get_window_extent().width / max(1, n_cols)
    return cells * px_per_cell * 72.0 / ax.figure.dpi


def pointer_to_grid(ax, event, cfg: RaycastConfig) -> Vector2:
    """Mouse event (display pixels, y up) -> continuous grid coordinates."""
    bbox = ax.get_window_extent()
    offset = Vector2(event.x - bbox.x0, bbox.y1 - event.y)
    return canvas_to_grid(offset, Vector2(bbox.width, bbox.height), cfg.grid_size())


def fill_circle(ax, center: Vector2, radius: float, color: str):
    ax.add_patch(Circle(center.array(), radius, color=color))


def stroke_line(ax, p1: Vector2, p2: Vector2, color: str, lw: float):
    ax.plot([p1.x, p2.x], [p1.y, p2.y], color=color, linewidth=lw)


# ----------------- drawing -----------------

def draw_grid(ax, scene: Scene, cfg: RaycastConfig):
    cols, rows = cfg.grid_cols, cfg.grid_rows
    ax.set_facecolor(cfg.background)

    if scene.width > 0 and scene.height > 0:
        walls = np.ma.masked_equal(scene.to_array(), 0)
        ax.imshow(walls, cmap=ListedColormap([cfg.wall_color]), origin="upper",
                  extent=(0, scene.width, scene.height, 0), interpolation="nearest")

    ax.set_xlim(0, cols)
    ax.set_ylim(rows, 0)  # canvas convention: row 0 at the top
    ax.set_aspect("equal")
    ax.set_xticks([]); ax.set_yticks([])

    lw = cells_to_points(ax, cfg.line_width, cols)
    for x in range(cols + 1):
        stroke_line(ax, Vector2(x, 0), Vector2(x, rows), cfg.grid_color, lw)
    for y in range(rows + 1):
        stroke_line(ax, Vector2(0, y), Vector2(cols, y), cfg.grid_color, lw)


def draw_trace(ax, start: Vector2, trace, cfg: RaycastConfig, show_steps: bool = True):
    points, cells, hit, dist = trace
    lw = cells_to_points(ax, cfg.line_width * 2, cfg.grid_cols)
    prev = start
    for p in points:
        stroke_line(ax, prev, p, cfg.ray_color, lw)
        if show_steps:
            fill_circle(ax, p, cfg.point_radius * 0.5, cfg.step_color)
        prev = p
    if hit is not None:
        ax.add_patch(Rectangle(hit.array(), 1.0, 1.0, fill=False, edgecolor=cfg.hit_color, linewidth=lw * 2))


def render_minimap(ax, scene: Scene, cfg: RaycastConfig, p2: Vector2 = None, player: Player = None):
    """Draw one frame: grid, walls, the anchor and (if given) the stepped ray from it.

    Returns the ray trace for p2, or the fan traces for player, or None.
    """
    ax.clear()
    draw_grid(ax, scene, cfg)

    if player is not None:
        traces = scene.cast_fan(player, cfg)
        for tr in traces:
            draw_trace(ax, player.position, tr, cfg, show_steps=False)
        fill_circle(ax, player.position, cfg.point_radius, cfg.ray_color)
        tip = player.position.add(player.dir_vector().scale(cfg.point_radius * 2))
        stroke_line(ax, player.position, tip, cfg.hit_color, cells_to_points(ax, cfg.line_width * 3, cfg.grid_cols))
        return traces

    p1 = cfg.origin()
    fill_circle(ax, p1, cfg.point_radius, cfg.ray_color)
    if p2 is None:
        return None

    fill_circle(ax, p2, cfg.point_radius, cfg.ray_color)
    stroke_line(ax, p1, p2, cfg.ray_color, cells_to_points(ax, cfg.line_width * 2, cfg.grid_cols))
    trace = scene.cast_ray(p1, p2, cfg.max_steps)
    draw_trace(ax, p1, trace, cfg)
    return trace


def make_figure(cfg: RaycastConfig):
    dpi = 100
    side = cfg.canvas_px / dpi
    fig = plt.figure(figsize=(side, side), dpi=dpi, facecolor=cfg.background)
    ax = fig.add_axes([0, 0, 1, 1])
    return fig, ax


def save_minimap(fig, outdir: str, stamp: str) -> str:
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, f"minimap_{stamp}.png")
    fig.savefig(path, facecolor=fig.get_facecolor())
    print(f"Saved figure {path}")
    return path


def summarize(trace) -> str:
    points, cells, hit, dist = trace
    hit_s = f"({int(hit.x)}, {int(hit.y)})" if hit is not None else "none"
    return f"{len(points)} crossings, hit={hit_s}, dist={dist:.3f}"


# ----------------- main -----------------

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--scene", type=str, default="", help="JSON scene file (list of rows of ints). Default: built-in 10x10 room.")
    parser.add_argument("--target", type=float, nargs=2, metavar=("X", "Y"), default=None,
                        help="Frontier point p2 in grid units; the ray runs from the anchor through it.")
    parser.add_argument("--steps", type=int, default=None, help="Max grid crossings per ray (default from config)")
    parser.add_argument("--fan", action="store_true", help="Cast a fan of rays from a player at the anchor instead of a single ray")
    parser.add_argument("--heading", type=float, default=0.0, help="Player heading in degrees (with --fan)")
    parser.add_argument("--walk", type=float, default=0.0, help="Seconds to walk the player forward before casting (with --fan)")
    parser.add_argument("--outdir", type=str, default="visualizations", help="Root output directory")
    parser.add_argument("--interactive", action="store_true", help="Redraw on mouse movement (requires an interactive backend)")
    parser.add_argument("--no-show", action="store_true", help="Do not open GUI windows; just save results and exit.")
    args = parser.parse_args()

    if args.interactive and args.no_show:
        raise ValueError("--interactive and --no-show are mutually exclusive")
    if args.walk and not args.fan:
        raise ValueError("--walk only applies with --fan")

    scene = load_scene(args.scene) if args.scene else default_scene()
    cfg = RaycastConfig()
    cfg.grid_cols, cfg.grid_rows = max(1, scene.width), max(1, scene.height)
    if args.steps is not None:
        cfg.max_steps = args.steps
    print(f"Scene: {scene}, anchor at ({cfg.origin().x:.2f}, {cfg.origin().y:.2f})")

    backend = matplotlib.get_backend().lower()
    if args.interactive and backend not in INTERACTIVE_BACKENDS:
        raise RuntimeError(f"No drawable surface: matplotlib backend '{backend}' is not interactive")

    fig, ax = make_figure(cfg)

    player = None
    if args.fan:
        player = player_at_origin(cfg, math.radians(args.heading))
        if args.walk > 0:
            player = propagate_player(scene, player, cfg.player_speed, cfg.player_turn_rate,
                                      args.walk, cfg.motion_substeps)
            print(f"Player walked to ({player.position.x:.2f}, {player.position.y:.2f})")

    p2 = Vector2(*args.target) if args.target is not None else None
    result = render_minimap(ax, scene, cfg, p2=p2, player=player)
    if player is not None:
        for i, tr in enumerate(result):
            print(f"  Ray {i+1}: {summarize(tr)}")
    elif result is not None:
        print(f"Ray: {summarize(result)}")

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    save_minimap(fig, os.path.join(args.outdir, stamp), stamp)

    if args.interactive:
        def on_move(event):
            if event.inaxes is not ax:
                return
            render_minimap(ax, scene, cfg, p2=pointer_to_grid(ax, event, cfg), player=player)
            fig.canvas.draw_idle()

        fig.canvas.mpl_connect("motion_notify_event", on_move)
        plt.show()
    elif not args.no_show:
        if backend in INTERACTIVE_BACKENDS:
            plt.show()
        else:
            print("Non-interactive backend detected; skipping plt.show(). Use --no-show to suppress this message.")
    plt.close(fig)


if __name__ == "__main__":
    main()
