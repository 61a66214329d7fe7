# raycub

A small first-person maze walker. It reads a `.cub` scene file, checks that
the map is closed, and draws a textured 3D view of it in a 1920×1080 window
using ray casting. The view also has sliding doors, one animated sprite, an
animated moon, and a minimap.

## Installing

```
pip install .
```

This installs numpy, Pillow and pygame as well.

## Running

```
raycub path/to/level.cub
```

The command takes exactly one argument, and that argument must end in `.cub`.
If the arguments, the scene or a texture is wrong, the program writes a
message of this form to standard error and exits with status 1:

```
Error
cub3D: map: not a valid map
```

### Texture files

Textures are loaded with Pillow, so each file must be in a format that Pillow
can open. The four wall textures are read from the paths given in the scene.
The other textures are read from fixed paths, relative to the current working
directory:

- `./img/door1.xpm` to `./img/door4.xpm` are the door animation frames.
- `./moon_xpm/moon1.xpm` to `./moon_xpm/moon60.xpm` are the moon animation frames.
- `./img/cute mushroom walk.xpm` is the sprite sheet. It holds four frames, each 48 pixels wide.

Fully transparent pixels in the moon and sprite images are not drawn. If any
texture fails to load, the program stops with `texture: load image fail`.

## Scene files

A scene file begins with six identifiers. They may come in any order, and
blank lines may appear between them:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

Each identifier may appear only once. Colours are written as `R,G,B`: each
part is one to three digits from 0 to 255, and there are no spaces between
the parts. `F` sets the floor colour and `C` sets the ceiling colour.

The map comes after the identifiers:

| char  | meaning                               |
|-------|---------------------------------------|
| `1`   | wall                                  |
| `0`   | floor                                 |
| `N` `S` `E` `W` | player start and facing direction |
| `D`   | door, with a wall on both sides, left and right or above and below |
| `C`   | sprite, at most one                   |
| space | outside the map                       |

The map must satisfy these rules:

- It holds exactly one start position.
- No blank line appears inside it.
- Every walkable square is closed off from the outside: no walkable square lies on the edge, and none touches a space, diagonals included.

Rows may differ in length. Shorter rows are padded with spaces.

## Controls

| key / input | action                  |
|-------------|-------------------------|
| W A S D     | move and strafe         |
| ← →         | turn by 5°              |
| mouse       | turn when the pointer moves more than 3 pixels sideways |
| Space       | open the doors          |
| Esc, or closing the window | quit     |

When Space is pressed, all doors slide open together. They stay open for
about five seconds. After that they close again, but only when the player is
not standing in a doorway. A door blocks movement unless it is fully open.
The minimap shows closed doors in black and open doors in yellow.

## Library use

The parser and the validator work without opening a window:

```python
from raycub.scene import load_scene, parse_color

scene = load_scene("level.cub")
print(scene.width, scene.height, scene.start_direction)
print(hex(parse_color("255,128,0")))   # 0xff8000
```

Every problem with a scene raises `raycub.errors.CubError`. The error has a
`category` and a `message`. Its `report()` method returns the text that the
command prints.

Other modules:

- `raycub.raycast.cast_ray` traces the ray for one screen column.
- `raycub.player.Player` handles movement and turning.
- `raycub.game.Game.render` draws one frame into a numpy array of `0xRRGGBB` values without needing a display.

## Limits

- The game has no sound.
- The game has no save or load support.
- Only one sprite is supported. The player can walk through it.
- The window size is fixed at 1920×1080.