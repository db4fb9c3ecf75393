"""
The face profile value object.

A `FaceProfile` is plain immutable data: edits go through `with_text()` and
`with_color_index()`, which build a new value and carry the other field over.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

UINT32_MAX = 0xFFFFFFFF

DEFAULT_FACE_TEXT = ":)"
DEFAULT_COLOR_INDEX = 0


@dataclass(frozen=True)
class FaceProfile:
    """
    The persisted face: a short label and a palette color index.

    Attributes:
        text: Face label shown by the game
        color_index: Unsigned 32-bit palette index; values outside the
            palette are legal and render as the unknown color
    """

    text: str = DEFAULT_FACE_TEXT
    color_index: int = DEFAULT_COLOR_INDEX

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"text must be a str, got {type(self.text).__name__}")
        if isinstance(self.color_index, bool) or not isinstance(self.color_index, int):
            raise TypeError(
                f"color_index must be an int, got {type(self.color_index).__name__}"
            )
        if not 0 <= self.color_index <= UINT32_MAX:
            raise ValueError(f"color_index must fit in 32 bits unsigned, got {self.color_index}")

    @classmethod
    def default(cls) -> FaceProfile:
        return cls(text=DEFAULT_FACE_TEXT, color_index=DEFAULT_COLOR_INDEX)

    def with_text(self, text: str) -> FaceProfile:
        return replace(self, text=text)

    def with_color_index(self, color_index: int) -> FaceProfile:
        return replace(self, color_index=color_index)
