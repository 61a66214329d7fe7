import math

import pytest

from raycub.cells import Cell
from raycub.player import SCREEN_WIDTH, MouseTracker, Player


def make_grid(*rows):
    return [[Cell.from_char(char) for char in row] for row in rows]


ROOM = make_grid("11111", "10001", "10N01", "10001", "11111")


def test_from_spawn_north():
    player = Player.from_spawn(2, 3, Cell.SPAWN_N)
    assert (player.pos_x, player.pos_y) == (2.5, 3.5)
    assert (player.dir_x, player.dir_y) == (-1.0, 0.0)
    assert (player.plane_x, player.plane_y) == (0.0, 1.0)


def test_from_spawn_west_default():
    player = Player.from_spawn(1, 1, Cell.SPAWN_W)
    assert (player.dir_x, player.dir_y) == (0.0, -1.0)
    assert (player.plane_x, player.plane_y) == (-1.0, 0.0)


@pytest.mark.parametrize("direction", [Cell.SPAWN_N, Cell.SPAWN_S, Cell.SPAWN_E, Cell.SPAWN_W])
def test_spawn_vectors_are_unit_and_perpendicular(direction):
    player = Player.from_spawn(0, 0, direction)
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert player.dir_x * player.plane_x + player.dir_y * player.plane_y == pytest.approx(0.0)


def test_rotate_turns_by_five_degrees():
    player = Player.from_spawn(2, 2, Cell.SPAWN_N)
    old = (player.dir_x, player.dir_y)
    player.rotate(True)
    dot = old[0] * player.dir_x + old[1] * player.dir_y
    assert math.degrees(math.acos(dot)) == pytest.approx(5)
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)


def test_rotate_back_restores_direction():
    player = Player.from_spawn(2, 2, Cell.SPAWN_E)
    player.rotate(False)
    player.rotate(True)
    assert player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.dir_y == pytest.approx(1.0)


def test_move_forward_step():
    player = Player.from_spawn(2, 2, Cell.SPAWN_N)
    player.move_forward(ROOM, True)
    assert player.pos_x == pytest.approx(2.5 - 1 / 7)
    assert player.pos_y == pytest.approx(2.5)


def test_forward_then_back_returns():
    player = Player.from_spawn(2, 2, Cell.SPAWN_N)
    player.move_forward(ROOM, True)
    player.move_back(ROOM, True)
    assert player.pos_x == pytest.approx(2.5)
    assert player.pos_y == pytest.approx(2.5)


def test_strafe_left_and_right():
    player = Player.from_spawn(2, 2, Cell.SPAWN_N)
    player.move_left(ROOM, True)
    assert player.pos_y < 2.5
    player.move_right(ROOM, True)
    assert player.pos_y == pytest.approx(2.5)


def test_walls_stop_movement():
    grid = make_grid("111", "1N1", "111")
    player = Player.from_spawn(1, 1, Cell.SPAWN_N)
    for _ in range(20):
        player.move_forward(grid, True)
    assert int(player.pos_x) == 1
    assert player.pos_x >= 1.0


def test_closed_door_blocks_open_door_passes():
    grid = make_grid("111", "101", "1D1", "1N1", "111")
    blocked = Player.from_spawn(3, 1, Cell.SPAWN_N)
    free = Player.from_spawn(3, 1, Cell.SPAWN_N)
    for _ in range(10):
        blocked.move_forward(grid, True)
        free.move_forward(grid, False)
    assert int(blocked.pos_x) == 3
    assert int(free.pos_x) < 3


def test_mouse_tracker_turns():
    player = Player.from_spawn(2, 2, Cell.SPAWN_N)
    tracker = MouseTracker()
    assert tracker.update(100, 0, player) is True
    assert tracker.update(101, 0, player) is None
    assert tracker.update(-5, 0, player) is False
    assert tracker.update(-5, 0, player) is False
    assert (tracker.last_x, tracker.last_y) == (-5, 0)


def test_mouse_tracker_keeps_turning_past_right_edge():
    player = Player.from_spawn(2, 2, Cell.SPAWN_N)
    tracker = MouseTracker()
    assert tracker.update(SCREEN_WIDTH + 10, 0, player) is True
    before = (player.dir_x, player.dir_y)
    assert tracker.update(SCREEN_WIDTH + 10, 0, player) is True
    assert (player.dir_x, player.dir_y) != before