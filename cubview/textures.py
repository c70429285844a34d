"""Turning decoded XPM images into the wall textures the renderer samples."""

from __future__ import annotations

from os import PathLike
from typing import Iterable, Union

from cubview.raycast import TEX_HEIGHT, TEX_WIDTH
from cubview.xpm import XpmImage, load_xpm

TEXTURE_COUNT = 4
_TEXTURE_SIZE = TEX_WIDTH * TEX_HEIGHT


def texture_from_image(image: XpmImage) -> list[int]:
    """Copy an image into a 64x64 texture buffer.

    Pixels are copied at offset ``height * y + x``, so a square image up
    to 64x64 lands unchanged in the top-left of the buffer. Buffer cells
    the image does not reach stay 0; offsets beyond the buffer are
    dropped.
    """
    texture = [0] * _TEXTURE_SIZE
    pixels = image.pixels
    for y in range(image.height):
        for x in range(image.width):
            index = image.height * y + x
            if index >= _TEXTURE_SIZE:
                continue
            texture[index] = pixels[index] if index < len(pixels) else 0
    return texture


def load_textures(paths: Iterable[Union[str, "PathLike[str]"]]) -> tuple[list[int], ...]:
    """Load the NO, EA, SO and WE textures from XPM files.

    Only the first four paths are used. Raises ValueError when fewer
    are given and XpmError when a file cannot be read or decoded.
    """
    chosen = list(paths)[:TEXTURE_COUNT]
    if len(chosen) < TEXTURE_COUNT:
        raise ValueError(f"{TEXTURE_COUNT} texture paths are needed, got {len(chosen)}")
    return tuple(texture_from_image(load_xpm(path)) for path in chosen)