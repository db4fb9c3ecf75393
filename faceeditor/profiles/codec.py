"""
Encoding and validation rules for face profile fields.

Everything here is pure: no store access, no logging.

- Face text is stored as UTF-8 followed by one nul byte. Reading stops at the
  first nul, anything after it is padding and is dropped.
- The length rule counts UTF-16 code units, the unit the game measures in.
  It is advisory only; longer text is still stored.
- Color indices map onto a fixed seven-entry palette, every other index
  resolves to black.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

NUL = b"\x00"
MAX_DISPLAY_LENGTH = 3


class EmbeddedNulError(ValueError):
    """Face text contains a nul character and would be truncated on read."""


class Color(NamedTuple):
    red: int
    green: int
    blue: int

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def css(self) -> str:
        return f"rgb({self.red}, {self.green}, {self.blue})"


class PaletteEntry(NamedTuple):
    index: int
    name: str
    color: Color


UNKNOWN_COLOR = Color(0, 0, 0)

PALETTE: Tuple[PaletteEntry, ...] = (
    PaletteEntry(0, "Yellow", Color(250, 189, 0)),
    PaletteEntry(1, "Orange", Color(254, 134, 37)),
    PaletteEntry(2, "Red", Color(254, 88, 68)),
    PaletteEntry(3, "Pink", Color(254, 131, 238)),
    PaletteEntry(4, "Blue", Color(76, 177, 254)),
    PaletteEntry(5, "Teal", Color(120, 235, 198)),
    PaletteEntry(6, "Green", Color(141, 228, 28)),
)


def decode_text(raw: bytes) -> str:
    """
    Decode stored face text.

    Args:
        raw: Stored bytes, possibly nul-terminated and nul-padded

    Returns:
        The UTF-8 text before the first nul byte (or the whole input if
        there is none)

    Raises:
        UnicodeDecodeError: If that prefix is not valid UTF-8
    """
    end = raw.find(NUL)
    if end == -1:
        end = len(raw)
    return bytes(raw[:end]).decode("utf-8")


def encode_text(text: str) -> bytes:
    """
    Encode face text as UTF-8 with exactly one trailing nul byte.

    Raises:
        EmbeddedNulError: If text contains a nul character
    """
    if "\x00" in text:
        raise EmbeddedNulError("Face text must not contain a nul character")
    return text.encode("utf-8") + NUL


def display_length(text: str) -> int:
    """Number of UTF-16 code units in text."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def is_too_long(text: str) -> bool:
    return display_length(text) > MAX_DISPLAY_LENGTH


def is_known_color(index: int) -> bool:
    return 0 <= index < len(PALETTE)


def resolve_color(index: int) -> Color:
    """Palette color for index, or UNKNOWN_COLOR outside the palette."""
    if is_known_color(index):
        return PALETTE[index].color
    return UNKNOWN_COLOR


def color_name(index: int) -> Optional[str]:
    if is_known_color(index):
        return PALETTE[index].name
    return None
