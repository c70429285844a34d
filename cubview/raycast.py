"""Casting rays through the map grid, one per screen column."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from cubview.scene import PlayerStart

SCREEN_WIDTH = 512
SCREEN_HEIGHT = 512
TEX_WIDTH = 64
TEX_HEIGHT = 64

# Ray length used for an axis the ray never crosses.
_NEVER = 1e30
_MAX_LINE_HEIGHT = 2**31 - 1


@dataclass
class Camera:
    """Player position, view direction and camera plane."""

    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float

    @classmethod
    def from_start(cls, start: PlayerStart) -> "Camera":
        """Place a camera where a scene's player starts."""
        return cls(
            pos_x=start.pos_x,
            pos_y=start.pos_y,
            dir_x=start.dir_x,
            dir_y=start.dir_y,
            plane_x=start.plane_x,
            plane_y=start.plane_y,
        )


@dataclass(frozen=True)
class RayHit:
    """Where the ray of one screen column meets a wall.

    ``side`` is 0 when a vertical (x) face was hit and 1 for a
    horizontal (y) face. ``tex_num`` indexes the textures in NO, EA,
    SO, WE order. The wall is drawn from ``draw_start`` up to, but not
    including, ``draw_end``.
    """

    column: int
    ray_dir_x: float
    ray_dir_y: float
    map_x: int
    map_y: int
    side: int
    tex_num: int
    perp_wall_dist: float
    line_height: int
    draw_start: int
    draw_end: int
    wall_x: float
    tex_x: int


def _is_wall(grid: Sequence[str], x: int, y: int) -> bool:
    # Anything outside the map stops the ray like a wall would.
    if y < 0 or y >= len(grid) or x < 0 or x >= len(grid[y]):
        return True
    return grid[y][x] == "1"


def _line_height(screen_height: int, distance: float) -> int:
    if distance <= 0:
        return _MAX_LINE_HEIGHT
    height = screen_height / distance
    if not math.isfinite(height) or height > _MAX_LINE_HEIGHT:
        return _MAX_LINE_HEIGHT
    return int(height)


def cast_ray(
    grid: Sequence[str],
    camera: Camera,
    x: int,
    screen_width: int = SCREEN_WIDTH,
    screen_height: int = SCREEN_HEIGHT,
) -> RayHit:
    """Follow the ray of screen column ``x`` to the first wall it meets."""
    camera_x = 2 * x / float(screen_width) - 1
    ray_dir_x = camera.dir_x + camera.plane_x * camera_x
    ray_dir_y = camera.dir_y + camera.plane_y * camera_x

    map_x = int(camera.pos_x)
    map_y = int(camera.pos_y)
    delta_x = _NEVER if ray_dir_x == 0 else abs(1 / ray_dir_x)
    delta_y = _NEVER if ray_dir_y == 0 else abs(1 / ray_dir_y)

    if ray_dir_x < 0:
        step_x = -1
        side_x = (camera.pos_x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - camera.pos_x) * delta_x
    if ray_dir_y < 0:
        step_y = -1
        side_y = (camera.pos_y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - camera.pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _is_wall(grid, map_x, map_y):
            break

    if side == 0:
        tex_num = 1 if map_x > camera.pos_x else 3
        distance = side_x - delta_x
        wall_x = camera.pos_y + distance * ray_dir_y
    else:
        tex_num = 2 if map_y > camera.pos_y else 0
        distance = side_y - delta_y
        wall_x = camera.pos_x + distance * ray_dir_x

    line_height = _line_height(screen_height, distance)
    half = screen_height // 2
    draw_start = max(-(line_height // 2) + half, 0)
    draw_end = min(line_height // 2 + half, screen_height - 1)

    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * float(TEX_WIDTH))
    if (side == 0 and ray_dir_x > 0) or (side == 1 and ray_dir_y < 0):
        tex_x = TEX_WIDTH - tex_x - 1

    return RayHit(
        column=x,
        ray_dir_x=ray_dir_x,
        ray_dir_y=ray_dir_y,
        map_x=map_x,
        map_y=map_y,
        side=side,
        tex_num=tex_num,
        perp_wall_dist=distance,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
        wall_x=wall_x,
        tex_x=tex_x,
    )


def cast_all(
    grid: Sequence[str],
    camera: Camera,
    screen_width: int = SCREEN_WIDTH,
    screen_height: int = SCREEN_HEIGHT,
) -> list[RayHit]:
    """Cast the ray of every screen column, left to right."""
    return [
        cast_ray(grid, camera, x, screen_width, screen_height)
        for x in range(screen_width)
    ]