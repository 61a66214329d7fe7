"""Checks that a map is closed and its doors are placed correctly."""

from __future__ import annotations

from dataclasses import dataclass

from .cells import Cell
from .errors import CubError

_NEIGHBOURS = (
    (0, -1),
    (-1, -1),
    (1, -1),
    (0, 1),
    (-1, 1),
    (1, 1),
    (-1, 0),
    (1, 0),
)


@dataclass
class MapCheck:
    """What validation learned about a map."""

    start_row: int = 0
    start_col: int = 0
    direction: Cell | None = None
    sprites: int = 0


def _invalid_map() -> CubError:
    return CubError("map", "not a valid map")


def _check_door(grid, row, col) -> None:
    horizontal = grid[row][col - 1] == Cell.WALL and grid[row][col + 1] == Cell.WALL
    vertical = grid[row - 1][col] == Cell.WALL and grid[row + 1][col] == Cell.WALL
    if not (horizontal or vertical):
        raise CubError("door", "not a valid door")


def _check_inside(grid, row, col, check: MapCheck) -> None:
    cell = grid[row][col]
    if cell == Cell.DOOR:
        _check_door(grid, row, col)
    if cell == Cell.SPRITE:
        check.sprites += 1
    for dy, dx in _NEIGHBOURS:
        if grid[row + dy][col + dx] < Cell.WALL:
            raise _invalid_map()


def _check_outside(grid, row, col, height, width) -> None:
    for dy, dx in _NEIGHBOURS:
        y, x = row + dy, col + dx
        if 0 <= y < height and 0 <= x < width:
            if grid[y][x] not in (Cell.NONE, Cell.WALL):
                raise _invalid_map()


def validate_map(grid) -> MapCheck:
    """Validate a rectangular grid of cells and return what it holds.

    Raises ``CubError`` when the walkable area is open to the outside or a
    door is not set between two walls.
    """
    height = len(grid)
    width = len(grid[0]) if grid else 0
    if any(len(cells) != width for cells in grid):
        raise ValueError("grid rows must all have the same length")
    check = MapCheck()
    for row, cells in enumerate(grid):
        for col, cell in enumerate(cells):
            if cell == Cell.NONE:
                _check_outside(grid, row, col, height, width)
            if cell >= Cell.PATH:
                if row in (0, height - 1) or col in (0, width - 1):
                    raise _invalid_map()
                _check_inside(grid, row, col, check)
                if Cell(cell).is_spawn():
                    check.start_row = row
                    check.start_col = col
                    check.direction = Cell(cell)
    return check