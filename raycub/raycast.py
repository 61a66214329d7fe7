"""Casting rays through the map grid and sizing wall slices."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .cells import Cell
from .player import SCREEN_HEIGHT, SCREEN_WIDTH

_FAR = 1e30
_MAX_LINE = 2**31 - 1
_DOOR_FRAMES = 20


@dataclass(frozen=True)
class RayHit:
    """Where one screen column's ray met a wall, and the first door on the way."""

    ray_dx: float
    ray_dy: float
    side: int
    distance: float
    wall_x: float
    texture: int
    door_distance: float | None = None
    door_side: int | None = None
    door_wall_x: float | None = None

    def texture_column(self, texture_width) -> int:
        """Return the wall texture column this ray shows."""
        column = int(self.wall_x * texture_width)
        if (self.side == 0 and self.ray_dx > 0) or (self.side == 1 and self.ray_dy < 0):
            column = texture_width - column - 1
        return column

    def door_column(self, texture_width, opening=0) -> int | None:
        """Return the door texture column shown, or None where the door has slid away."""
        if self.door_wall_x is None:
            return None
        column = int(self.door_wall_x * texture_width) + opening
        return None if column >= texture_width else column


@dataclass(frozen=True)
class Slice:
    """The vertical span a wall at some distance takes on screen."""

    line_height: int
    draw_start: int
    draw_end: int

    def texture_rows(self, texture_height):
        """Yield ``(screen_y, texture_y)`` for every row of the slice."""
        step = texture_height / self.line_height if self.line_height else 0.0
        position = (self.draw_start - SCREEN_HEIGHT // 2 + self.line_height // 2) * step
        for y in range(self.draw_start, self.draw_end):
            yield y, int(position) % texture_height
            position += step


def wall_slice(distance) -> Slice:
    """Size the screen slice for a wall ``distance`` away."""
    line_height = int(SCREEN_HEIGHT / distance) if distance > 0 else _MAX_LINE
    draw_start = max(-(line_height // 2) + SCREEN_HEIGHT // 2, 0)
    draw_end = min(line_height // 2 + SCREEN_HEIGHT // 2, SCREEN_HEIGHT - 1)
    return Slice(line_height, draw_start, draw_end)


def wall_texture_index(side, ray_dx, ray_dy) -> int:
    """Pick which of the four wall textures a hit shows."""
    if side == 0:
        return 0 if ray_dx > 0 else 1
    return 2 if ray_dy < 0 else 3


def door_frame(time) -> int:
    """Return the texture index of the door animation frame for ``time``."""
    return 4 + (time % _DOOR_FRAMES) // 5


def _hit_point(player, distance: float, side: int, ray_dx: float, ray_dy: float) -> float:
    if side == 0:
        point = player.pos_y + distance * ray_dy
    else:
        point = player.pos_x + distance * ray_dx
    return point - math.floor(point)


def cast_ray(player, grid, column) -> RayHit:
    """Follow the ray for a screen column until it hits a wall."""
    camera_x = 2 * column / SCREEN_WIDTH - 1
    ray_dx = player.dir_x + player.plane_x * camera_x
    ray_dy = player.dir_y + player.plane_y * camera_x
    map_x, map_y = int(player.pos_x), int(player.pos_y)
    delta_x = _FAR if ray_dx == 0 else abs(1 / ray_dx)
    delta_y = _FAR if ray_dy == 0 else abs(1 / ray_dy)

    if ray_dx < 0:
        step_x, side_x = -1, (player.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.pos_x) * delta_x
    if ray_dy < 0:
        step_y, side_y = -1, (player.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.pos_y) * delta_y

    door_distance = door_side = None
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if not (0 <= map_x < len(grid) and 0 <= map_y < len(grid[map_x])):
            raise ValueError("ray left the map")
        cell = grid[map_x][map_y]
        if cell == Cell.DOOR and door_distance is None:
            door_side = side
            door_distance = side_x - delta_x if side == 0 else side_y - delta_y
        if cell == Cell.WALL:
            break

    distance = side_x - delta_x if side == 0 else side_y - delta_y
    door_wall_x = None
    if door_distance is not None:
        door_wall_x = _hit_point(player, door_distance, door_side, ray_dx, ray_dy)
    return RayHit(
        ray_dx=ray_dx,
        ray_dy=ray_dy,
        side=side,
        distance=distance,
        wall_x=_hit_point(player, distance, side, ray_dx, ray_dy),
        texture=wall_texture_index(side, ray_dx, ray_dy),
        door_distance=door_distance,
        door_side=door_side,
        door_wall_x=door_wall_x,
    )