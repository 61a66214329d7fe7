import pytest

from raycub.cells import Cell
from raycub.errors import CubError
from raycub.validate import MapCheck, validate_map


def make_grid(*rows):
    width = max(len(row) for row in rows)
    return [[Cell.from_char(c) for c in row.ljust(width)] for row in rows]


def test_valid_map_reports_start():
    grid = make_grid("111111", "1000N1", "111111")
    check = validate_map(grid)
    assert isinstance(check, MapCheck)
    assert (check.start_row, check.start_col) == (1, 4)
    assert check.direction is Cell.SPAWN_N
    assert check.sprites == 0


def test_valid_map_with_outside_spaces():
    grid = make_grid(" 1111", " 1W01", " 1111")
    check = validate_map(grid)
    assert (check.start_row, check.start_col) == (1, 2)
    assert check.direction is Cell.SPAWN_W


def test_path_on_border_is_rejected():
    grid = make_grid("1111", "0N01", "1111")
    with pytest.raises(CubError) as info:
        validate_map(grid)
    assert (info.value.category, info.value.message) == ("map", "not a valid map")


def test_path_next_to_space_is_rejected():
    grid = make_grid("1111", "1N01", "1 01", "1111")
    with pytest.raises(CubError) as info:
        validate_map(grid)
    assert info.value.message == "not a valid map"


def test_space_next_to_path_is_rejected():
    grid = make_grid("11111", "1N0 1", "11111")
    with pytest.raises(CubError) as info:
        validate_map(grid)
    assert info.value.category == "map"


def test_door_between_walls_is_accepted():
    grid = make_grid("11111", "1N001", "11D11", "10001", "11111")
    check = validate_map(grid)
    assert check.direction is Cell.SPAWN_N


def test_door_without_walls_is_rejected():
    grid = make_grid("11111", "1ND01", "10001", "11111")
    with pytest.raises(CubError) as info:
        validate_map(grid)
    assert (info.value.category, info.value.message) == ("door", "not a valid door")


def test_sprites_are_counted():
    grid = make_grid("11111", "1NCC1", "11111")
    assert validate_map(grid).sprites == 2


def test_map_without_spawn_has_no_direction():
    grid = make_grid("1111", "1001", "1111")
    assert validate_map(grid).direction is None


def test_ragged_grid_is_rejected():
    grid = [[Cell.WALL, Cell.WALL], [Cell.WALL]]
    with pytest.raises(ValueError):
        validate_map(grid)