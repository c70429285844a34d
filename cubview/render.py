"""Drawing a frame: floor, ceiling, textured walls and a minimap."""

from __future__ import annotations

from array import array
from dataclasses import dataclass, field
from typing import Sequence

from cubview.raycast import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TEX_HEIGHT,
    TEX_WIDTH,
    Camera,
    RayHit,
    cast_all,
)

WALL_COLOR = 0x00F0F0F0
WALKABLE_COLOR = 0x00000000
PLAYER_COLOR = 0x00FF0000

# Halves every channel to darken walls seen from a y side.
_SHADE_MASK = 8355711
_MINIMAP_DIVISOR = 100


@dataclass
class Frame:
    """A width x height image of 32-bit 0xAARRGGBB pixels, row-major."""

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    pixels: array = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid frame size {self.width}x{self.height}")
        self.pixels = array("I", [0]) * (self.width * self.height)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at column ``x`` of row ``y``."""
        self.pixels[self._offset(x, y)] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at column ``x`` of row ``y``."""
        return self.pixels[self._offset(x, y)]


def _fill_rows(frame: Frame, start: int, stop: int, color: int) -> None:
    row = array("I", [color & 0xFFFFFFFF]) * frame.width
    for y in range(start, stop):
        frame.pixels[y * frame.width:(y + 1) * frame.width] = row


def draw_floor(frame: Frame, color: int) -> None:
    """Fill the lower half of the frame."""
    _fill_rows(frame, frame.height // 2, frame.height, color)


def draw_ceiling(frame: Frame, color: int) -> None:
    """Fill the upper half of the frame."""
    _fill_rows(frame, 0, frame.height // 2, color)


def draw_texture_stripe(frame: Frame, x: int, hit: RayHit, texture: Sequence[int]) -> None:
    """Draw the wall of one column, sampling a 64x64 texture."""
    if len(texture) < TEX_WIDTH * TEX_HEIGHT:
        raise ValueError(f"texture needs {TEX_WIDTH * TEX_HEIGHT} pixels, got {len(texture)}")
    if hit.draw_start >= hit.draw_end:
        return
    step = 1.0 * TEX_HEIGHT / hit.line_height
    tex_pos = (hit.draw_start - frame.height // 2 + hit.line_height // 2) * step
    for y in range(hit.draw_start, hit.draw_end):
        tex_y = int(tex_pos) & (TEX_HEIGHT - 1)
        tex_pos += step
        color = texture[TEX_HEIGHT * tex_y + hit.tex_x] & 0xFFFFFFFF
        if hit.side == 1:
            color = (color >> 1) & _SHADE_MASK
        frame.put_pixel(x, y, color)


def _draw_block(frame: Frame, left: int, top: int, width: int, height: int, color: int) -> None:
    for y in range(max(top, 0), min(top + height, frame.height)):
        for x in range(max(left, 0), min(left + width, frame.width)):
            frame.put_pixel(x, y, color)


def draw_minimap(frame: Frame, grid: Sequence[str], camera: Camera) -> None:
    """Draw the map in the top-left corner, marking the player's cell.

    Parts of the map that fall outside the frame are clipped.
    """
    cell_w = frame.width // _MINIMAP_DIVISOR
    cell_h = frame.height // _MINIMAP_DIVISOR
    player = (int(camera.pos_x), int(camera.pos_y))
    for row_index, row in enumerate(grid):
        top = row_index * cell_h
        for col, cell in enumerate(row):
            left = col * cell_w
            if cell == "1":
                _draw_block(frame, left, top, cell_w, cell_h, WALL_COLOR)
            elif cell in ("0", "N", "E", "S", "W"):
                _draw_block(frame, left, top, cell_w, cell_h, WALKABLE_COLOR)
            if (col, row_index) == player:
                _draw_block(frame, left, top, cell_w, cell_h, PLAYER_COLOR)


def render_scene(
    frame: Frame,
    grid: Sequence[str],
    camera: Camera,
    textures: Sequence[Sequence[int]],
    floor: int,
    ceiling: int,
) -> Frame:
    """Draw a complete view into ``frame`` and return it.

    ``textures`` holds the NO, EA, SO and WE textures in that order.
    """
    if len(textures) < 4:
        raise ValueError("four textures are needed: NO, EA, SO, WE")
    draw_floor(frame, floor)
    draw_ceiling(frame, ceiling)
    for hit in cast_all(grid, camera, frame.width, frame.height):
        draw_texture_stripe(frame, hit.column, hit, textures[hit.tex_num])
    draw_minimap(frame, grid, camera)
    return frame