"""Reader for XPM images, as used for wall textures."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Sequence, Union

from cubview.colornames import lookup_color
from cubview.textutil import atoi

TRANSPARENT_PIXEL = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_BLOCK_OPEN = re.compile(r'"[^"]*"?|(/\*)')
_LINE_OPEN = re.compile(r'"[^"]*"?|(//)')
_QUOTED = re.compile(r'"([^"]*)"')
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: row-major 32-bit pixels in 0xAARRGGBB form."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split on runs of spaces and tabs; other characters stay in words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _find_unquoted(text: str, opener: re.Pattern[str]) -> int:
    for match in opener.finditer(text):
        if match.group(1):
            return match.start(1)
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside double quotes with spaces.

    Block comments are removed first, then line comments (together with
    their newline). The length of the text is kept.
    """
    while (begin := _find_unquoted(text, _BLOCK_OPEN)) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 2)
    while (begin := _find_unquoted(text, _LINE_OPEN)) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 1)
    return text


def extract_strings(text: str) -> list[str]:
    """Return the contents of the double-quoted strings in ``text``."""
    return _QUOTED.findall(text)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _color_value(name: str, following: str | None) -> int:
    if name.startswith("#"):
        match = _HEX_PREFIX.match(name, 1)
        if not match:
            return 0
        value = int(match.group(2), 16)
        return _to_int32(-value if match.group(1) == "-" else value)
    if following is not None:
        name = f"{name} {following}"
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _parse_color_line(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        after = words.index("c") + 1
    except ValueError:
        raise XpmError(f"colour line without a 'c' entry: {line!r}") from None
    if after >= len(words):
        raise XpmError(f"colour line without a colour: {line!r}")
    following = words[after + 1] if after + 1 < len(words) else None
    return line[:cpp], _color_value(words[after], following)


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode XPM data given as its sequence of strings."""
    source = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(source)
        except StopIteration:
            raise XpmError(f"XPM data ends before the {what}") from None

    header = split_words(next_line("header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header)!r}")

    colors: dict[str, int] = {}
    for _ in range(ncolors):
        key, value = _parse_color_line(next_line("colour table"), cpp)
        if cpp <= 2:
            colors[key] = value
        else:
            colors.setdefault(key, value)

    pixels: list[int] = []
    for row in range(height):
        line = next_line(f"pixel row {row}")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {row} is shorter than {width} pixels")
        for start in range(0, width * cpp, cpp):
            value = colors.get(line[start:start + cpp], 0)
            pixels.append(TRANSPARENT_PIXEL if value == -1 else value & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def load_xpm(path: Union[str, "PathLike[str]"]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read XPM file {path}: {exc.strerror}") from exc
    strings: Sequence[str] = extract_strings(strip_comments(raw.decode("latin-1")))
    return parse_xpm(strings)