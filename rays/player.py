import math
from dataclasses import dataclass

from .utils import hitting_cell
from .vector import Vector2


def wrap_angle(theta: float) -> float:
    return (theta + math.pi) % (2 * math.pi) - math.pi


@dataclass(frozen=True)
class Player:
    """Viewer in grid space: position in cells, heading in radians."""
    position: Vector2
    direction: float

    def dir_vector(self) -> Vector2:
        return Vector2.from_angle(self.direction)


def propagate_player(scene, player: Player, speed: float, turn_rate: float,
                     dt: float, substeps: int = 5) -> Player:
    """Propagate the player over dt with a simple unicycle model.
       pos += speed*dir*h, direction += turn_rate*h
       Uses sub-steps to avoid tunneling; a sub-step ending in a wall or
       outside the scene is dropped along with the rest of the motion.
    """
    if dt <= 0.0:
        return player

    n = max(1, int(substeps))
    h = dt / n
    pos, yaw = player.position, player.direction

    for _ in range(n):
        npos = pos.add(Vector2.from_angle(yaw).scale(speed * h))
        nyaw = wrap_angle(yaw + turn_rate * h)

        # Cell containing npos, approached from pos
        cell = hitting_cell(pos, npos)
        if not scene.in_bounds(cell) or scene.is_wall(cell):
            break  # stop remaining motion this step
        pos, yaw = npos, nyaw

    return Player(pos, yaw)
