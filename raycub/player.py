"""The player's position, view direction, movement and mouse look."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .cells import Cell

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
ROTATION_DEGREES = 5
MOUSE_DEAD_ZONE = 3
_STEP_DIVISOR = 7

# direction x, direction y, plane x, plane y
_SPAWN_VECTORS = {
    Cell.SPAWN_N: (-1.0, 0.0, 0.0, 1.0),
    Cell.SPAWN_S: (1.0, 0.0, 0.0, -1.0),
    Cell.SPAWN_E: (0.0, 1.0, 1.0, 0.0),
}
_DEFAULT_VECTORS = (0.0, -1.0, -1.0, 0.0)


def _walkable(grid, row: int, col: int, door_blocks: bool) -> bool:
    cell = grid[row][col]
    return cell >= Cell.PATH and not (cell == Cell.DOOR and door_blocks)


@dataclass
class Player:
    """Position (x runs along rows, y along columns), direction and camera plane."""

    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float

    @classmethod
    def from_spawn(cls, row, col, direction):
        """Place the player in the middle of a spawn square, facing its way."""
        dir_x, dir_y, plane_x, plane_y = _SPAWN_VECTORS.get(direction, _DEFAULT_VECTORS)
        return cls(row + 0.5, col + 0.5, dir_x, dir_y, plane_x, plane_y)

    def rotate(self, clockwise) -> None:
        """Turn the view by a fixed angle."""
        degrees = -ROTATION_DEGREES if clockwise else ROTATION_DEGREES
        angle = math.radians(degrees)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        old_dir_x, old_dir_y = self.dir_x, self.dir_y
        self.dir_x = old_dir_x * cos_a - old_dir_y * sin_a
        self.dir_y = old_dir_x * sin_a + old_dir_y * cos_a
        old_plane_y = self.plane_y
        self.plane_x = self.plane_x * cos_a - old_plane_y * sin_a
        # The plane's y component turns with the direction's previous y component.
        self.plane_y = old_dir_y * sin_a + old_plane_y * cos_a

    def _move(self, grid, dx: float, dy: float, door_blocks: bool) -> None:
        target_x = self.pos_x + dx
        target_y = self.pos_y + dy
        if _walkable(grid, int(target_x), int(self.pos_y), door_blocks):
            self.pos_x = target_x
        if _walkable(grid, int(self.pos_x), int(target_y), door_blocks):
            self.pos_y = target_y

    def move_forward(self, grid, door_blocks) -> None:
        """Step along the view direction, sliding along walls."""
        self._move(grid, self.dir_x / _STEP_DIVISOR, self.dir_y / _STEP_DIVISOR, door_blocks)

    def move_back(self, grid, door_blocks) -> None:
        """Step against the view direction."""
        self._move(grid, -self.dir_x / _STEP_DIVISOR, -self.dir_y / _STEP_DIVISOR, door_blocks)

    def move_left(self, grid, door_blocks) -> None:
        """Strafe to the left of the view direction."""
        self._move(grid, -self.dir_y / _STEP_DIVISOR, self.dir_x / _STEP_DIVISOR, door_blocks)

    def move_right(self, grid, door_blocks) -> None:
        """Strafe to the right of the view direction."""
        self._move(grid, self.dir_y / _STEP_DIVISOR, -self.dir_x / _STEP_DIVISOR, door_blocks)


@dataclass
class MouseTracker:
    """Turns mouse motion into view rotation."""

    last_x: int = 0
    last_y: int = 0
    last_clockwise: bool | None = False

    def update(self, x, y, player) -> bool | None:
        """Rotate ``player`` for a move to ``(x, y)``; return the turn made, if any."""
        delta = self.last_x - x
        if delta < -MOUSE_DEAD_ZONE:
            clockwise = True
        elif delta > MOUSE_DEAD_ZONE:
            clockwise = False
        elif x < 0 and self.last_clockwise is False:
            clockwise = False
        elif x > SCREEN_WIDTH and self.last_clockwise is True:
            clockwise = True
        else:
            clockwise = None
        if clockwise is not None:
            player.rotate(clockwise)
        self.last_x = x
        self.last_y = y
        self.last_clockwise = clockwise
        return clockwise