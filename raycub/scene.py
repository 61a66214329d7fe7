"""Reading and checking scene description files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from .cells import Cell
from .errors import CubError
from .validate import validate_map

_TEXTURE_KEYS = ("NO", "SO", "EA", "WE")
_COLOR_KEYS = ("F", "C")
_IDENTIFIER_COUNT = len(_TEXTURE_KEYS) + len(_COLOR_KEYS)
_MAP_CHARS = frozenset(" 10NSEWDC")
_SPAWN_CHARS = frozenset("NSEW")
_COLOR_RE = re.compile(r"(\d{1,3}),(\d{1,3}),(\d{1,3})\n?")


@dataclass
class Scene:
    """Everything a scene file describes."""

    north: str
    south: str
    east: str
    west: str
    floor: int
    ceiling: int
    grid: list
    start_row: int
    start_col: int
    start_direction: Cell
    sprites: int = 0

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0


def parse_color(text) -> int:
    """Turn ``"R,G,B"`` (optionally followed by a newline) into ``0xRRGGBB``."""
    match = _COLOR_RE.fullmatch(text)
    if match is None:
        raise CubError("map", "wrong color info")
    red, green, blue = (int(part) for part in match.groups())
    if not all(0 <= channel <= 255 for channel in (red, green, blue)):
        raise CubError("map", "wrong color info")
    return red << 16 | green << 8 | blue


def _is_blank(text: str) -> bool:
    return text == "" or text[0] == "\n"


class _MapState(Enum):
    BEFORE = auto()
    INSIDE = auto()
    AFTER = auto()


class _SceneReader:
    def __init__(self) -> None:
        self.textures: dict[str, str] = {}
        self.colors: dict[str, int] = {}
        self.map_lines: list[str] = []
        self.state = _MapState.BEFORE
        self.width = 0
        self.spawns = 0

    @property
    def count(self) -> int:
        return len(self.textures) + len(self.colors)

    def feed(self, line: str) -> None:
        if self.count < _IDENTIFIER_COUNT:
            self._identifier(line)
        else:
            self._map_line(line)

    def _identifier(self, line: str) -> None:
        rest = line.lstrip(" ")
        for key in _TEXTURE_KEYS:
            if rest.startswith(key + " "):
                self._texture(key, rest[len(key) + 1:])
                return
        for key in _COLOR_KEYS:
            if rest.startswith(key + " "):
                self._color(key, rest[len(key) + 1:])
                return
        if _is_blank(rest):
            return
        raise CubError("map", "not a vaild identifier")

    def _texture(self, key: str, value: str) -> None:
        if key in self.textures:
            raise CubError("map", f"{key} identifier overlapped")
        value = value.lstrip(" ")
        if _is_blank(value):
            raise CubError("map", f"no infomation for {key} identifier")
        self.textures[key] = value.strip("\n")

    def _color(self, key: str, value: str) -> None:
        if key in self.colors:
            raise CubError("map", f"{key} identifier overlapped")
        value = value.lstrip(" ")
        if value == "":
            raise CubError("map", f"no infomation for {key} identifier")
        self.colors[key] = parse_color(value)

    def _map_line(self, line: str) -> None:
        if _is_blank(line.lstrip(" ")):
            if self.state is _MapState.INSIDE:
                self.state = _MapState.AFTER
            return
        if self.state is _MapState.AFTER:
            raise CubError("map", "not a vaild map")
        self.state = _MapState.INSIDE
        content = line[:-1] if line.endswith("\n") else line
        if not set(content) <= _MAP_CHARS:
            raise CubError("map", "not a vaild element for map")
        self.spawns += sum(char in _SPAWN_CHARS for char in content)
        row = content.rstrip(" ")
        self.width = max(self.width, len(row))
        self.map_lines.append(row)

    def finish(self) -> Scene:
        if self.count < _IDENTIFIER_COUNT or not self.map_lines:
            raise CubError("map", "not enough elements")
        if self.spawns == 0:
            raise CubError("map", "none starting position")
        if self.spawns != 1:
            raise CubError("map", "to much starting positions")
        grid = [
            [Cell.from_char(char) for char in row.ljust(self.width)]
            for row in self.map_lines
        ]
        check = validate_map(grid)
        if check.sprites > 1:
            raise CubError("sprite", "we can handle only one")
        return Scene(
            north=self.textures["NO"],
            south=self.textures["SO"],
            east=self.textures["EA"],
            west=self.textures["WE"],
            floor=self.colors["F"],
            ceiling=self.colors["C"],
            grid=grid,
            start_row=check.start_row,
            start_col=check.start_col,
            start_direction=check.direction,
            sprites=check.sprites,
        )


def parse_scene(lines) -> Scene:
    """Build a scene from lines of text, each keeping its trailing newline."""
    reader = _SceneReader()
    for line in lines:
        reader.feed(line)
    return reader.finish()


def check_arguments(args) -> str:
    """Check the command-line arguments and return the scene file name."""
    if not args:
        raise CubError("argc", "none argument")
    if len(args) != 1:
        raise CubError("argc", "to much arguments")
    name = args[0]
    if len(name) < 4 or not name.endswith(".cub"):
        raise CubError("map", "mapname not valid")
    return name


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_scene(path) -> Scene:
    """Read and validate the scene file at ``path``."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("map", "failed to open map") from exc
    return parse_scene(_split_lines(text))