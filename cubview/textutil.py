"""Small text helpers used when reading scene and image files."""

from __future__ import annotations

_INT_MAX = 2147483647
_INT_MIN = -2147483648
_SPACE = " \t\n\v\f\r"


def atoi(text: str) -> int:
    """Read a leading decimal integer the way the scene reader expects.

    Leading whitespace and one sign are accepted; reading stops at the
    first non-digit. A value above the 32-bit range yields -1 and one
    below it yields 0. Text without digits yields 0.
    """
    rest = text.lstrip(_SPACE)
    sign = 1
    if rest[:1] in ("+", "-"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    value = 0
    for char in rest:
        if not "0" <= char <= "9" or value >= _INT_MAX:
            break
        value = value * 10 + ord(char) - ord("0")
    value *= sign
    if value < _INT_MIN:
        return 0
    if value > _INT_MAX:
        return -1
    return value


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty pieces."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [piece for piece in text.split(sep) if piece]


def get_extension(filename: str) -> str:
    """Return what follows the last dot of ``filename``.

    A name without a dot, or whose only dot is its first character,
    has no extension and yields an empty string.
    """
    dot = filename.rfind(".")
    if dot <= 0:
        return ""
    return filename[dot + 1:]


def rgb_to_hex(r: int, g: int, b: int) -> int:
    """Pack three colour channels into a 0xRRGGBB integer."""
    return ((r & 0xFF) << 16) + ((g & 0xFF) << 8) + (b & 0xFF)