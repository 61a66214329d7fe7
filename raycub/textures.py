"""Texture file names and loading of texture images."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from .errors import CubError

TEXTURE_COUNT = 69
DOOR_INDEX = 4
FIRST_MOON = 8
MOON_COUNT = 60
SPRITE_INDEX = 68
TRANSPARENT = 0xFF000000

DOOR_TEXTURES = (
    "./img/door1.xpm",
    "./img/door2.xpm",
    "./img/door3.xpm",
    "./img/door4.xpm",
)
SPRITE_TEXTURE = "./img/cute mushroom walk.xpm"


@dataclass(frozen=True, eq=False)
class Texture:
    """An image as rows of ``0xRRGGBB`` values; transparent pixels carry ``TRANSPARENT``."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @classmethod
    def from_image(cls, image):
        """Build a texture from a Pillow image."""
        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint32)
        red, green, blue, alpha = (rgba[..., channel] for channel in range(4))
        pixels = red << 16 | green << 8 | blue
        pixels = np.where(alpha == 0, pixels | TRANSPARENT, pixels).astype(np.uint32)
        return cls(pixels)


def moon_path(index) -> str:
    """Return the file of the moon animation frame stored at texture ``index``."""
    if not FIRST_MOON <= index < FIRST_MOON + MOON_COUNT:
        raise ValueError(f"no moon texture at index {index}")
    return f"./moon_xpm/moon{index - FIRST_MOON + 1}.xpm"


def moon_index(time) -> int:
    """Return the texture index of the moon frame shown at ``time``."""
    return time % MOON_COUNT + FIRST_MOON


def texture_path(index, scene) -> str:
    """Return the file that texture ``index`` is loaded from."""
    walls = (scene.north, scene.south, scene.east, scene.west)
    if not 0 <= index < TEXTURE_COUNT:
        raise ValueError(f"no texture at index {index}")
    if index < len(walls):
        return walls[index]
    if index < FIRST_MOON:
        return DOOR_TEXTURES[index - DOOR_INDEX]
    if index < SPRITE_INDEX:
        return moon_path(index)
    return SPRITE_TEXTURE


def load_texture(path) -> Texture:
    """Load one image file as a texture."""
    try:
        with Image.open(path) as image:
            image.load()
            return Texture.from_image(image)
    except (OSError, ValueError) as exc:
        raise CubError("texture", "load image fail") from exc


def load_textures(scene) -> list:
    """Load every texture the game uses, in index order."""
    return [load_texture(texture_path(index, scene)) for index in range(TEXTURE_COUNT)]