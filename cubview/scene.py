"""Reading and checking ``.cub`` scene descriptions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from cubview.textutil import atoi, get_extension, rgb_to_hex, split_fields

# Texture slots in the order the renderer indexes them.
TEXTURE_KEYS: tuple[str, ...] = ("NO", "EA", "SO", "WE")
# Colour slots: floor first, then ceiling.
COLOR_KEYS: tuple[str, ...] = ("F", "C")

MAP_CHARS = " 10NSEW"

# facing -> (dir_x, dir_y, plane_x, plane_y)
_START_VECTORS: dict[str, tuple[float, float, float, float]] = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "E": (1.0, 0.0, 0.0, 0.66),
    "W": (-1.0, 0.0, 0.0, -0.66),
}

_INVALID_INFO = "Invalid information"
_INVALID_MAP = "Invalid map"


class SceneError(ValueError):
    """Raised when a scene file cannot be read or is not valid."""


@dataclass(frozen=True)
class PlayerStart:
    """Where the player stands and looks when the scene opens."""

    facing: str
    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float


@dataclass(frozen=True)
class Scene:
    """A fully checked scene: texture paths, colours, map and start."""

    textures: tuple[str, ...]
    floor: int
    ceiling: int
    rows: tuple[str, ...]
    start: PlayerStart


def read_lines(path: Union[str, "os.PathLike[str]"]) -> list[str]:
    """Return the lines of a file split on newlines.

    The piece after the last newline is kept, so a file ending with a
    newline yields a final empty line.
    """
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise SceneError("Cannot open the map") from exc
    return raw.decode("utf-8", errors="surrogateescape").split("\n")


def parse_info(lines: Iterable[str]) -> tuple[tuple[Optional[str], ...], tuple[Optional[str], ...]]:
    """Read texture and colour entries until all of them are known.

    Returns the texture paths in NO, EA, SO, WE order and the floor and
    ceiling colour specifications; an entry never seen is ``None``.
    Only the lines needed are consumed, so an iterator passed in is left
    positioned at the start of the map.
    """
    source = iter(lines)
    textures: list[Optional[str]] = [None] * len(TEXTURE_KEYS)
    colors: list[Optional[str]] = [None] * len(COLOR_KEYS)
    while any(v is None for v in textures) or any(v is None for v in colors):
        line = next(source, None)
        if line is None:
            break
        if not line:
            continue
        tokens = split_fields(line, " ")
        if len(tokens) != 2:
            raise SceneError(_INVALID_INFO)
        key, value = tokens
        if key in TEXTURE_KEYS:
            textures[TEXTURE_KEYS.index(key)] = value
        elif key in COLOR_KEYS:
            colors[COLOR_KEYS.index(key)] = value
        else:
            raise SceneError(_INVALID_INFO)
    return tuple(textures), tuple(colors)


def parse_map(lines: Iterable[str]) -> list[str]:
    """Collect map rows, skipping the empty lines that precede them."""
    rows: list[str] = []
    for line in lines:
        if not line and not rows:
            continue
        rows.append(line)
    return rows


def parse_color(spec: str) -> int:
    """Turn an ``R,G,B`` specification into a 0xRRGGBB integer."""
    parts = split_fields(spec, ",")
    if len(parts) != 3:
        raise SceneError("Cannot load colors")
    values = [atoi(part) for part in parts]
    if any(not 0 <= value <= 255 for value in values):
        raise SceneError("Cannot load colors")
    return rgb_to_hex(*values)


def find_player(rows: Sequence[str]) -> PlayerStart:
    """Locate the single start cell (N, S, E or W) of the map.

    Raises SceneError if a row holds a character that is not allowed or
    if there is not exactly one start cell.
    """
    found: list[tuple[int, int, str]] = []
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell not in MAP_CHARS:
                raise SceneError(_INVALID_MAP)
            if cell in _START_VECTORS:
                found.append((x, y, cell))
    if len(found) != 1:
        raise SceneError(_INVALID_MAP)
    x, y, facing = found[0]
    dir_x, dir_y, plane_x, plane_y = _START_VECTORS[facing]
    return PlayerStart(facing, x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y)


def _is_open(grid: Sequence[str], i: int, j: int) -> bool:
    row = grid[i]
    if i == 0 or i == len(grid) - 1 or j == 0 or j == len(row) - 1:
        return True
    for ni, nj in ((i - 1, j), (i + 1, j), (i, j - 1), (i, j + 1)):
        neighbour = grid[ni]
        # A cell beyond the end of a shorter row is outside the map.
        if nj >= len(neighbour) or neighbour[nj] == " ":
            return True
    return False


def validate_map(rows: Sequence[str]) -> tuple[str, ...]:
    """Check that the map is closed and return its rows.

    The map ends at its first empty row; anything but empty rows after
    that is an error. Every walkable cell must be surrounded by cells
    that are neither spaces nor outside the map.
    """
    rows = list(rows)
    end = rows.index("") if "" in rows else len(rows)
    if any(rows[end:]):
        raise SceneError(_INVALID_MAP)
    grid = rows[:end]
    if len(grid) < 3:
        raise SceneError(_INVALID_MAP)
    find_player(grid)
    for i, row in enumerate(grid):
        for j, cell in enumerate(row):
            if cell not in "1 " and _is_open(grid, i, j):
                raise SceneError(_INVALID_MAP)
    return tuple(grid)


def parse_scene(path: Union[str, "os.PathLike[str]"]) -> Scene:
    """Read, parse and check a ``.cub`` scene file."""
    name = os.fsdecode(path)
    if get_extension(name) != "cub":
        raise SceneError("Invalid extension")
    lines = iter(read_lines(name))
    textures, colors = parse_info(lines)
    rows = parse_map(lines)
    if any(texture is None for texture in textures):
        raise SceneError("Cannot load textures")
    # Colours are taken in order and reading stops at the first missing
    # one; anything not read stays black.
    floor = ceiling = 0
    if colors[0] is not None:
        floor = parse_color(colors[0])
        if colors[1] is not None:
            ceiling = parse_color(colors[1])
    grid = validate_map(rows)
    return Scene(
        textures=tuple(t for t in textures if t is not None),
        floor=floor,
        ceiling=ceiling,
        rows=grid,
        start=find_player(grid),
    )