"""
Transactional load and save of the face profile.

The profile is two values inside one configuration location: the face text
(binary, nul-terminated UTF-8) and the color index (uint32). Both are read
inside one transaction and written inside one transaction, so a reader never
sees a new text next to a stale color or the other way round.

Saving upserts exactly those two values. Anything else stored in the
location (the game keeps rotation, visor color and size next to them) is
left as it was.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from faceeditor.config import AppConfig, FaceProfileConfig, settings
from faceeditor.database.create_tables import create_all_tables
from faceeditor.database.repositories import (
    ConfigLocationRepository,
    ConfigValueRepository,
    MissingValueError,
    ValueKindError,
)
from faceeditor.database.session import create_store_engine, make_session_factory, transaction
from faceeditor.profiles.codec import decode_text, encode_text
from faceeditor.profiles.errors import (
    AccessFailure,
    CommitFailure,
    EncodingFailure,
    InvalidProfileError,
    SaveError,
)
from faceeditor.profiles.face_profile import FaceProfile

logger = logging.getLogger(__name__)

# Failures that mean "the location or a value could not be opened or read"
_ACCESS_ERRORS = (SQLAlchemyError, MissingValueError, ValueKindError)


class ProfileStore:
    """
    All-or-nothing access to the face profile in the configuration store.

    Attributes:
        session_factory: Factory for store sessions
        location: Configuration location path
        text_key: Value name of the face text
        color_key: Value name of the color index
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        profile_config: FaceProfileConfig | None = None,
    ) -> None:
        profile_config = profile_config or settings.profile
        self.session_factory = session_factory
        self.location = profile_config.location
        self.text_key = profile_config.text_key
        self.color_key = profile_config.color_key

    @classmethod
    def from_engine(
        cls,
        engine: Engine,
        profile_config: FaceProfileConfig | None = None,
        create_tables: bool = False,
    ) -> ProfileStore:
        if create_tables:
            create_all_tables(engine)
        return cls(make_session_factory(engine), profile_config)

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> ProfileStore:
        """Build a store from application settings."""
        config = config or settings
        engine = create_store_engine(config.store)
        return cls.from_engine(engine, config.profile, create_tables=config.store.auto_create)

    def load(self) -> FaceProfile:
        """
        Read the face profile.

        Returns:
            The decoded FaceProfile

        Raises:
            AccessFailure: If the location or either value cannot be read
            EncodingFailure: If the face text is not valid UTF-8
        """
        logger.info(f"Loading face profile from {self.location}")

        try:
            with transaction(self.session_factory) as session:
                location = ConfigLocationRepository(session).open(self.location)
                values = ConfigValueRepository(session)
                raw_text = values.get_binary(location, self.text_key)
                color_index = values.get_uint32(location, self.color_key)
        except _ACCESS_ERRORS as e:
            logger.error(f"Failed to read face profile from {self.location}: {e}")
            raise AccessFailure("Failed to load face profile from the store", e) from e

        try:
            text = decode_text(raw_text)
        except UnicodeDecodeError as e:
            logger.error(f"Stored face text is not valid UTF-8: {e}")
            raise EncodingFailure("Failed to decode face text as UTF-8", e) from e

        return FaceProfile(text=text, color_index=color_index)

    def save(self, profile: FaceProfile) -> None:
        """
        Write both profile values in one transaction.

        The location is created if it does not exist. If staging either value
        fails, nothing is committed.

        Raises:
            InvalidProfileError: If the face text cannot be encoded
            SaveError: If the location cannot be opened or a value cannot be staged
            CommitFailure: If the staged transaction cannot be committed
        """
        logger.info(f"Saving face profile to {self.location}")

        try:
            text_bytes = encode_text(profile.text)
        except ValueError as e:
            logger.error(f"Refusing to save face profile: {e}")
            raise InvalidProfileError("Face text cannot be stored", e) from e

        staged = False
        try:
            with transaction(self.session_factory) as session:
                try:
                    location = ConfigLocationRepository(session).get_or_create(self.location)
                    values = ConfigValueRepository(session)
                    values.set_binary(location, self.text_key, text_bytes)
                    values.set_uint32(location, self.color_key, profile.color_index)
                except (SQLAlchemyError, ValueError, TypeError) as e:
                    logger.error(f"Failed to stage face profile in {self.location}: {e}")
                    raise SaveError("Failed to write face profile to the store", e) from e
                staged = True
        except SQLAlchemyError as e:
            # Only a failure after both values were staged belongs to the commit
            if not staged:
                logger.error(f"Failed to roll back face profile write in {self.location}: {e}")
                raise SaveError("Failed to write face profile to the store", e) from e
            logger.error(f"Failed to commit face profile to {self.location}: {e}")
            raise CommitFailure("Failed to commit face profile to the store", e) from e

        logger.info(
            f"Face profile saved (text_bytes={len(text_bytes)}, color_index={profile.color_index})"
        )
