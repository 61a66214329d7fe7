"""Kinds of map cells."""

from __future__ import annotations

from enum import IntEnum


class Cell(IntEnum):
    """What occupies one square of the map.

    The ordering matters: anything at or above ``PATH`` can be walked on,
    anything at or above ``WALL`` closes off the outside.
    """

    NONE = 0
    WALL = 1
    PATH = 2
    SPAWN_N = 3
    SPAWN_S = 4
    SPAWN_E = 5
    SPAWN_W = 6
    DOOR = 7
    SPRITE = 8

    @classmethod
    def from_char(cls, char):
        """Return the cell a map character stands for; unknown ones are empty."""
        return _CHAR_TO_CELL.get(char, cls.NONE)

    def is_spawn(self) -> bool:
        """Tell whether this cell marks the player's starting square."""
        return Cell.SPAWN_N <= self <= Cell.SPAWN_W


_CHAR_TO_CELL = {
    "0": Cell.PATH,
    "1": Cell.WALL,
    "N": Cell.SPAWN_N,
    "S": Cell.SPAWN_S,
    "E": Cell.SPAWN_E,
    "W": Cell.SPAWN_W,
    "D": Cell.DOOR,
    "C": Cell.SPRITE,
}