from __future__ import annotations

from typing import Dict, Tuple

import pytest

from faceeditor.config import FaceProfileConfig, StoreConfig
from faceeditor.database.create_tables import create_all_tables
from faceeditor.database.models import ValueKind
from faceeditor.database.repositories import ConfigLocationRepository, ConfigValueRepository
from faceeditor.database.session import create_store_engine, make_session_factory, transaction
from faceeditor.profiles.store import ProfileStore

LOCATION = "Software\\Landfall Games\\Content Warning"
TEXT_KEY = "FaceText_h3883740665"
COLOR_KEY = "FaceColorIndex_h311401607"


@pytest.fixture
def engine():
    engine = create_store_engine(StoreConfig(FACE_STORE_URL="sqlite://"))
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def profile_config() -> FaceProfileConfig:
    return FaceProfileConfig(
        FACE_CONFIG_LOCATION=LOCATION,
        FACE_TEXT_KEY=TEXT_KEY,
        FACE_COLOR_KEY=COLOR_KEY,
    )


@pytest.fixture
def store(session_factory, profile_config) -> ProfileStore:
    return ProfileStore(session_factory, profile_config)


@pytest.fixture
def write_value(session_factory):
    """Write a raw value straight into the store, bypassing the profile codec."""

    def _write(name: str, kind: ValueKind, data: bytes, location: str = LOCATION) -> None:
        with transaction(session_factory) as session:
            loc = ConfigLocationRepository(session).get_or_create(location)
            ConfigValueRepository(session).set_raw(loc, name, kind, data)

    return _write


@pytest.fixture
def read_values(session_factory):
    """Snapshot every value under a location as {name: (kind, data)}."""

    def _read(location: str = LOCATION) -> Dict[str, Tuple[ValueKind, bytes]]:
        with transaction(session_factory) as session:
            loc = ConfigLocationRepository(session).get_by_path(location)
            if loc is None:
                return {}
            values = ConfigValueRepository(session)
            snapshot = {}
            for name in values.list_names(loc):
                value = values.find(loc, name)
                snapshot[name] = (value.kind, bytes(value.data))
            return snapshot

    return _read
