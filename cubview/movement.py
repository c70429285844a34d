"""Moving and turning the camera, sliding along walls."""

from __future__ import annotations

import math
from typing import Sequence

from cubview.raycast import Camera


def _blocked(grid: Sequence[str], x: int, y: int) -> bool:
    if y < 0 or y >= len(grid) or x < 0 or x >= len(grid[y]):
        return True
    return grid[y][x] == "1"


def _slide(camera: Camera, grid: Sequence[str], dx: float, dy: float) -> None:
    # Each axis is tried on its own so the player slides along walls.
    if not _blocked(grid, int(camera.pos_x + dx), int(camera.pos_y)):
        camera.pos_x += dx
    if not _blocked(grid, int(camera.pos_x), int(camera.pos_y + dy)):
        camera.pos_y += dy


def move_forward(camera: Camera, grid: Sequence[str], speed: float) -> None:
    """Step along the view direction."""
    _slide(camera, grid, camera.dir_x * speed, camera.dir_y * speed)


def move_backward(camera: Camera, grid: Sequence[str], speed: float) -> None:
    """Step against the view direction."""
    _slide(camera, grid, -camera.dir_x * speed, -camera.dir_y * speed)


def strafe_left(camera: Camera, grid: Sequence[str], speed: float) -> None:
    """Step sideways to the left of the view direction."""
    _slide(camera, grid, camera.dir_y * speed, -camera.dir_x * speed)


def strafe_right(camera: Camera, grid: Sequence[str], speed: float) -> None:
    """Step sideways to the right of the view direction."""
    _slide(camera, grid, -camera.dir_y * speed, camera.dir_x * speed)


def rotate(camera: Camera, angle: float) -> None:
    """Turn the view by ``angle`` radians; positive turns right."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dir_x = camera.dir_x
    camera.dir_x = dir_x * cos_a - camera.dir_y * sin_a
    camera.dir_y = dir_x * sin_a + camera.dir_y * cos_a
    plane_x = camera.plane_x
    camera.plane_x = plane_x * cos_a - camera.plane_y * sin_a
    camera.plane_y = plane_x * sin_a + camera.plane_y * cos_a