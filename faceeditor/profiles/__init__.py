"""Face profile system.

This package exposes the face profile value, the field codec and rules, and
the transactional store that loads and saves profiles.
"""

from .codec import (
    MAX_DISPLAY_LENGTH,
    PALETTE,
    UNKNOWN_COLOR,
    Color,
    EmbeddedNulError,
    PaletteEntry,
    color_name,
    decode_text,
    display_length,
    encode_text,
    is_known_color,
    is_too_long,
    resolve_color,
)
from .errors import (
    AccessFailure,
    CommitFailure,
    EncodingFailure,
    InvalidProfileError,
    LoadError,
    ProfileStoreError,
    SaveError,
)
from .face_profile import FaceProfile
from .store import ProfileStore

__all__ = [
    "AccessFailure",
    "Color",
    "CommitFailure",
    "EmbeddedNulError",
    "EncodingFailure",
    "FaceProfile",
    "InvalidProfileError",
    "LoadError",
    "MAX_DISPLAY_LENGTH",
    "PALETTE",
    "PaletteEntry",
    "ProfileStore",
    "ProfileStoreError",
    "SaveError",
    "UNKNOWN_COLOR",
    "color_name",
    "decode_text",
    "display_length",
    "encode_text",
    "is_known_color",
    "is_too_long",
    "resolve_color",
]
