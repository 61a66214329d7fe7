import pytest

from raycub.cells import Cell
from raycub.player import SCREEN_HEIGHT, SCREEN_WIDTH, Player
from raycub.sprite import (
    FRAME_WIDTH,
    find_sprite,
    project_sprite,
    sprite_frame,
    sprite_texture_column,
    sprite_texture_row,
)


def make_grid(*rows):
    return [[Cell.from_char(char) for char in row] for row in rows]


def ahead_projection():
    player = Player.from_spawn(3, 2, Cell.SPAWN_N)
    return project_sprite(player, (1.5, 2.5))


def test_find_sprite_returns_centre():
    grid = make_grid("1111", "10C1", "1N01", "1111")
    assert find_sprite(grid) == (1.5, 2.5)


def test_find_sprite_none_when_absent():
    assert find_sprite(make_grid("111", "1N1", "111")) is None


def test_sprite_straight_ahead_is_centred():
    projection = ahead_projection()
    assert projection.transform_x == pytest.approx(0.0)
    assert projection.transform_y == pytest.approx(2.0)
    assert projection.screen_x == SCREEN_WIDTH // 2
    assert projection.height == projection.width
    assert projection.in_front


def test_draw_bounds_stay_on_screen():
    player = Player.from_spawn(2, 2, Cell.SPAWN_N)
    projection = project_sprite(player, (1.6, 2.9))
    assert 0 <= projection.draw_start_x <= projection.draw_end_x <= SCREEN_WIDTH - 1
    assert 0 <= projection.draw_start_y <= projection.draw_end_y <= SCREEN_HEIGHT - 1


def test_sprite_behind_player_not_in_front():
    player = Player.from_spawn(1, 2, Cell.SPAWN_N)
    projection = project_sprite(player, (3.5, 2.5))
    assert not projection.in_front
    assert not projection.visible_in_column(SCREEN_WIDTH // 2, 100.0, 0)


def test_visible_in_column_respects_depth():
    projection = ahead_projection()
    x = SCREEN_WIDTH // 2
    assert projection.visible_in_column(x, 10.0, 0)
    assert not projection.visible_in_column(x, 1.0, 0)
    assert not projection.visible_in_column(x, 10.0, 1.0)
    assert not projection.visible_in_column(0, 10.0, 0)


def test_texture_column_starts_at_frame_offset():
    projection = ahead_projection()
    x = projection.draw_start_x
    assert sprite_texture_column(projection, x, 192, 0) == 0
    assert sprite_texture_column(projection, x, 192, 2) == 2 * FRAME_WIDTH


def test_texture_column_stays_within_frame():
    projection = ahead_projection()
    columns = [
        sprite_texture_column(projection, x, 192, 1)
        for x in range(projection.draw_start_x, projection.draw_end_x)
    ]
    assert all(FRAME_WIDTH <= column < 2 * FRAME_WIDTH for column in columns)
    assert columns == sorted(columns)


def test_texture_row_range():
    projection = ahead_projection()
    assert sprite_texture_row(projection, projection.draw_start_y, 64) == 0
    rows = [
        sprite_texture_row(projection, y, 64)
        for y in range(projection.draw_start_y, projection.draw_end_y)
    ]
    assert all(0 <= row < 64 for row in rows)


@pytest.mark.parametrize("time, expected", [(0, 0), (1, 0), (2, 1), (7, 3), (8, 0)])
def test_sprite_frame_cycles(time, expected):
    assert sprite_frame(time) == expected