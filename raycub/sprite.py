"""Finding and projecting the single billboard sprite."""

from __future__ import annotations

from dataclasses import dataclass

from .cells import Cell
from .player import SCREEN_HEIGHT, SCREEN_WIDTH

FRAME_WIDTH = 48
FRAME_COUNT = 4


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


@dataclass(frozen=True)
class SpriteProjection:
    """Where the sprite lands on screen for the current view."""

    transform_x: float
    transform_y: float
    screen_x: int
    height: int
    width: int
    draw_start_x: int
    draw_end_x: int
    draw_start_y: int
    draw_end_y: int

    @property
    def in_front(self) -> bool:
        return self.transform_y > 0

    def visible_in_column(self, x, wall_distance, door_distance) -> bool:
        """Tell whether the sprite is nearer than the wall and door in column ``x``."""
        return (
            self.in_front
            and 0 < x < SCREEN_WIDTH
            and self.transform_y < wall_distance
            and (not door_distance or self.transform_y < door_distance)
        )


def find_sprite(grid):
    """Return the centre of the first sprite square, row-major, or None."""
    for row, cells in enumerate(grid):
        for col, cell in enumerate(cells):
            if cell == Cell.SPRITE:
                return row + 0.5, col + 0.5
    return None


def project_sprite(player, sprite_pos) -> SpriteProjection:
    """Project the sprite at ``sprite_pos`` into the player's view."""
    rel_x = sprite_pos[0] - player.pos_x
    rel_y = sprite_pos[1] - player.pos_y
    inv_det = 1.0 / (player.plane_x * player.dir_y - player.dir_x * player.plane_y)
    transform_x = inv_det * (player.dir_y * rel_x - player.dir_x * rel_y)
    transform_y = inv_det * (-player.plane_y * rel_x + player.plane_x * rel_y)
    if transform_y == 0:
        screen_x, size = SCREEN_WIDTH // 2, 0
    else:
        screen_x = int((SCREEN_WIDTH // 2) * (1 + transform_x / transform_y))
        size = abs(int(SCREEN_HEIGHT / transform_y))
    return SpriteProjection(
        transform_x=transform_x,
        transform_y=transform_y,
        screen_x=screen_x,
        height=size,
        width=size,
        draw_start_x=max(-(size // 2) + screen_x, 0),
        draw_end_x=min(size // 2 + screen_x, SCREEN_WIDTH - 1),
        draw_start_y=max(-(size // 2) + SCREEN_HEIGHT // 2, 0),
        draw_end_y=min(size // 2 + SCREEN_HEIGHT // 2, SCREEN_HEIGHT - 1),
    )


def sprite_frame(time) -> int:
    """Return the animation frame shown at ``time`` (tenths of a second)."""
    return time // 2 % FRAME_COUNT


def sprite_texture_column(projection, x, texture_width, frame) -> int:
    """Return the texture column for screen column ``x`` in animation ``frame``."""
    offset = x - (-(projection.width // 2) + projection.screen_x)
    scaled = _cdiv(_cdiv(256 * offset * texture_width, 4), projection.width)
    return _cdiv(scaled, 256) + frame * FRAME_WIDTH


def sprite_texture_row(projection, y, texture_height) -> int:
    """Return the texture row for screen row ``y``."""
    d = y * 256 - SCREEN_HEIGHT * 128 + projection.height * 128
    return _cdiv(_cdiv(d * texture_height, projection.height), 256)