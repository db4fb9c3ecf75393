"""
Editor session for the face profile.

`ProfileEditor` is what a front end drives: it holds the profile being
edited, applies edits as copy-with-change, and only touches the store when
asked to load, reload or save. It has no UI of its own.

Contract:
- `start()` / `reload()` load from the store; on failure the editor falls back
  to the default profile and keeps the error in `last_error` for display.
- `set_text()` / `set_color_index()` replace the held profile, nothing is saved.
- `save()` persists the held profile and re-raises any failure. No retries.
- `warnings()` is advisory and never blocks a save.
"""

import logging
from typing import List, Optional

from faceeditor.profiles.codec import (
    MAX_DISPLAY_LENGTH,
    Color,
    color_name,
    is_known_color,
    is_too_long,
    resolve_color,
)
from faceeditor.profiles.errors import LoadError, ProfileStoreError, SaveError
from faceeditor.profiles.face_profile import FaceProfile
from faceeditor.profiles.store import ProfileStore

TOO_LONG_WARNING = f"Why the long face? \U0001f434 ({MAX_DISPLAY_LENGTH} character limit)"


class ProfileEditor:
    """
    Holds the face profile under edit and mediates store access.

    Attributes:
        store: Profile store used for load and save
        current: Profile currently being edited
        last_error: Most recent load or save failure, cleared on success
    """

    def __init__(self, store: ProfileStore) -> None:
        self.store = store
        self.current: FaceProfile = FaceProfile.default()
        self.last_error: Optional[ProfileStoreError] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def start(self) -> FaceProfile:
        """Load the stored profile, falling back to the default on failure."""
        return self.reload()

    def reload(self) -> FaceProfile:
        """
        Replace the held profile with the stored one.

        Returns:
            The profile now held (the default one if loading failed)
        """
        try:
            self.current = self.store.load()
            self.last_error = None
        except LoadError as e:
            self.logger.warning(f"Falling back to default face profile: {e}")
            self.current = FaceProfile.default()
            self.last_error = e
        return self.current

    def set_text(self, text: str) -> FaceProfile:
        self.current = self.current.with_text(text)
        return self.current

    def set_color_index(self, color_index: int) -> FaceProfile:
        self.current = self.current.with_color_index(color_index)
        return self.current

    def save(self) -> None:
        """
        Persist the held profile.

        Raises:
            SaveError: If the store rejects the write; the error is also kept
                in last_error
        """
        try:
            self.store.save(self.current)
        except SaveError as e:
            self.last_error = e
            raise
        self.last_error = None

    @property
    def color(self) -> Color:
        return resolve_color(self.current.color_index)

    @property
    def color_label(self) -> str:
        return color_name(self.current.color_index) or "Unknown"

    def warnings(self) -> List[str]:
        """Advisory messages for the held profile."""
        messages: List[str] = []
        if is_too_long(self.current.text):
            messages.append(TOO_LONG_WARNING)
        if not is_known_color(self.current.color_index):
            messages.append(f"Unknown color index {self.current.color_index}")
        return messages
