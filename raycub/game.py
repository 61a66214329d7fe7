"""The running game: input, door animation, frame rendering and the main loop."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from .cells import Cell
from .errors import CubError, get_time
from .player import SCREEN_HEIGHT, SCREEN_WIDTH, MouseTracker, Player
from .raycast import cast_ray, door_frame, wall_slice
from .scene import check_arguments, load_scene
from .sprite import find_sprite, project_sprite, sprite_frame, sprite_texture_column, sprite_texture_row
from .textures import DOOR_INDEX, SPRITE_INDEX, TRANSPARENT, load_textures, moon_index

DOOR_STEP = 4
DOOR_HOLD = 50
MINIMAP_CELLS = 15
MINIMAP_CELL_SIZE = 20
MINIMAP_LEFT = SCREEN_WIDTH - 301
MOON_SIZE = 192
MOON_SCALE = 4
MOON_TOP = 180
MOON_LEFT = 320

PLAYER_COLOR = 0xFF0000
FLOOR_MAP_COLOR = 0xDCCCAC
CLOSED_DOOR_COLOR = 0x000000
OPEN_DOOR_COLOR = 0xFFFF33
WALL_MAP_COLOR = 0x5F4541


class Key(IntEnum):
    """Key codes the game reacts to."""

    STRAFE_LEFT = 0
    BACK = 1
    STRAFE_RIGHT = 2
    FORWARD = 13
    SPACE = 49
    ESCAPE = 53
    TURN_LEFT = 123
    TURN_RIGHT = 124


@dataclass
class DoorState:
    """The shared state of all doors: sliding open, held open, then closing."""

    idle: bool = True
    blocking: bool = True
    opening: int = 0
    closing: bool = False
    since: int = 0

    def request_open(self, now) -> None:
        """Start opening the doors unless they are already moving."""
        if not self.idle:
            return
        self.idle = False
        self.since = now

    def update(self, now, player_on_door, door_width) -> None:
        """Advance the door animation by one frame."""
        if self.idle:
            return
        if self.blocking and not self.closing:
            if self.opening < door_width:
                self.opening += DOOR_STEP
            if self.opening == door_width:
                self.blocking = False
                self.since = now
        elif self.since + DOOR_HOLD < now and not player_on_door and not self.blocking:
            self.blocking = True
            self.closing = True
        elif self.closing:
            if self.opening > 0:
                self.opening -= DOOR_STEP
            if self.opening == 0:
                self.closing = False
                self.idle = True


def minimap_color(grid, player, x, y, door_closed) -> int:
    """Return the colour of minimap cell ``(x, y)``, centred on the player."""
    centre = MINIMAP_CELLS // 2
    if x == centre and y == centre:
        return PLAYER_COLOR
    row = int(player.pos_x) + y - centre
    col = int(player.pos_y) + x - centre
    height = len(grid)
    width = len(grid[0]) if grid else 0
    if not (0 <= row < height and 0 <= col < width):
        return FLOOR_MAP_COLOR
    cell = grid[row][col]
    if cell == Cell.DOOR:
        return CLOSED_DOOR_COLOR if door_closed else OPEN_DOOR_COLOR
    if cell == Cell.WALL:
        return WALL_MAP_COLOR
    return FLOOR_MAP_COLOR


def _draw_column(frame, x, span, texture, column) -> None:
    rows = span.draw_end - span.draw_start
    if rows <= 0:
        return
    step = texture.height / span.line_height
    start = (span.draw_start - SCREEN_HEIGHT // 2 + span.line_height // 2) * step
    positions = start + step * np.arange(rows)
    texture_rows = positions.astype(np.int64) % texture.height
    frame[span.draw_start:span.draw_end, x] = texture.pixels[texture_rows, column]


def _to_rgb(frame):
    return np.dstack(((frame >> 16) & 0xFF, (frame >> 8) & 0xFF, frame & 0xFF)).astype(np.uint8)


class Game:
    """A scene being played: the player, the doors and the frame buffer."""

    def __init__(self, scene, textures):
        self.scene = scene
        self.textures = textures
        self.player = Player.from_spawn(scene.start_row, scene.start_col, scene.start_direction)
        self.door = DoorState()
        self.mouse = MouseTracker()
        self.sprite = find_sprite(scene.grid)
        self.frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.uint32)
        self.running = True

    def handle_key(self, key) -> None:
        """React to a key press."""
        try:
            key = Key(key)
        except ValueError:
            return
        grid = self.scene.grid
        blocks = self.door.blocking
        if key is Key.FORWARD:
            self.player.move_forward(grid, blocks)
        elif key is Key.STRAFE_LEFT:
            self.player.move_left(grid, blocks)
        elif key is Key.BACK:
            self.player.move_back(grid, blocks)
        elif key is Key.STRAFE_RIGHT:
            self.player.move_right(grid, blocks)
        elif key is Key.ESCAPE:
            self.running = False
        elif key is Key.SPACE:
            self.door.request_open(get_time())
        elif key is Key.TURN_LEFT:
            self.player.rotate(False)
        elif key is Key.TURN_RIGHT:
            self.player.rotate(True)

    def handle_mouse(self, x, y):
        """Turn the view for a mouse move; return the turn made, if any."""
        return self.mouse.update(x, y, self.player)

    def render(self, now):
        """Draw one frame for time ``now`` and return the frame buffer."""
        frame = self.frame
        frame[: SCREEN_HEIGHT // 2] = self.scene.ceiling
        frame[SCREEN_HEIGHT // 2:] = self.scene.floor
        self._draw_moon(now)
        grid = self.scene.grid
        on_door = grid[int(self.player.pos_x)][int(self.player.pos_y)] == Cell.DOOR
        self.door.update(now, on_door, self.textures[DOOR_INDEX].width)

        wall_distances = np.zeros(SCREEN_WIDTH)
        door_distances = np.zeros(SCREEN_WIDTH)
        door_texture = self.textures[door_frame(now)]
        for x in range(SCREEN_WIDTH):
            hit = cast_ray(self.player, grid, x)
            texture = self.textures[hit.texture]
            _draw_column(frame, x, wall_slice(hit.distance), texture, hit.texture_column(texture.width))
            if hit.door_distance is not None:
                column = hit.door_column(door_texture.width, self.door.opening)
                if column is not None:
                    _draw_column(frame, x, wall_slice(hit.door_distance), door_texture, column)
                    door_distances[x] = hit.door_distance
            wall_distances[x] = hit.distance

        if self.sprite is not None:
            self._draw_sprite(now, wall_distances, door_distances)
        self._draw_minimap()
        return frame

    def _draw_moon(self, now) -> None:
        texture = self.textures[moon_index(now)]
        rows = min(MOON_SIZE // MOON_SCALE, texture.height)
        cols = min(MOON_SIZE // MOON_SCALE, texture.width)
        block = texture.pixels[:rows, :cols]
        scaled = np.repeat(np.repeat(block, MOON_SCALE, axis=0), MOON_SCALE, axis=1)
        region = self.frame[
            MOON_TOP:MOON_TOP + scaled.shape[0], MOON_LEFT:MOON_LEFT + scaled.shape[1]
        ]
        opaque = (scaled & TRANSPARENT) == 0
        region[opaque] = scaled[opaque]

    def _draw_sprite(self, now, wall_distances, door_distances) -> None:
        projection = project_sprite(self.player, self.sprite)
        if projection.height == 0 or projection.draw_start_y >= projection.draw_end_y:
            return
        texture = self.textures[SPRITE_INDEX]
        frame_number = sprite_frame(now)
        ys = np.arange(projection.draw_start_y, projection.draw_end_y)
        rows = np.array([sprite_texture_row(projection, int(y), texture.height) for y in ys])
        valid = (rows >= 0) & (rows < texture.height)
        safe_rows = np.where(valid, rows, 0)
        for x in range(projection.draw_start_x, projection.draw_end_x):
            column = sprite_texture_column(projection, x, texture.width, frame_number)
            if not 0 <= column < texture.width:
                continue
            if not projection.visible_in_column(x, wall_distances[x], door_distances[x]):
                continue
            colors = texture.pixels[safe_rows, column]
            mask = valid & ((colors & TRANSPARENT) == 0)
            self.frame[ys[mask], x] = colors[mask]

    def _draw_minimap(self) -> None:
        size = MINIMAP_CELL_SIZE
        for y in range(MINIMAP_CELLS):
            for x in range(MINIMAP_CELLS):
                color = minimap_color(self.scene.grid, self.player, x, y, self.door.blocking)
                left = MINIMAP_LEFT + x * size
                self.frame[y * size:(y + 1) * size, left:left + size] = color

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is pressed."""
        import pygame

        pygame.init()
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
            pygame.display.set_caption("Ray Casting")
            pygame.key.set_repeat(150, 30)
            keys = {
                pygame.K_w: Key.FORWARD,
                pygame.K_a: Key.STRAFE_LEFT,
                pygame.K_s: Key.BACK,
                pygame.K_d: Key.STRAFE_RIGHT,
                pygame.K_ESCAPE: Key.ESCAPE,
                pygame.K_SPACE: Key.SPACE,
                pygame.K_LEFT: Key.TURN_LEFT,
                pygame.K_RIGHT: Key.TURN_RIGHT,
            }
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN and event.key in keys:
                        self.handle_key(keys[event.key])
                    elif event.type == pygame.MOUSEMOTION:
                        self.handle_mouse(*event.pos)
                if not self.running:
                    break
                frame = self.render(get_time())
                surface = pygame.surfarray.make_surface(_to_rgb(frame).swapaxes(0, 1))
                screen.blit(surface, (0, 0))
                pygame.display.flip()
        finally:
            pygame.quit()


def main(argv=None) -> int:
    """Load the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        scene = load_scene(check_arguments(args))
        textures = load_textures(scene)
        Game(scene, textures).run()
    except CubError as error:
        sys.stderr.write(error.report())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())