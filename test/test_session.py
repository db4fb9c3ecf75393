from __future__ import annotations

import pytest

from faceeditor.config import StoreConfig
from faceeditor.database import session as store_session
from faceeditor.database.repositories import ConfigLocationRepository


def test_transaction_commits_on_success(session_factory):
    with store_session.transaction(session_factory) as session:
        ConfigLocationRepository(session).get_or_create("Software\\Vendor\\App")

    with store_session.transaction(session_factory) as session:
        assert ConfigLocationRepository(session).get_by_path("Software\\Vendor\\App") is not None


def test_transaction_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        with store_session.transaction(session_factory) as session:
            ConfigLocationRepository(session).get_or_create("Software\\Vendor\\App")
            raise RuntimeError("boom")

    with store_session.transaction(session_factory) as session:
        assert ConfigLocationRepository(session).get_by_path("Software\\Vendor\\App") is None


def test_check_connection():
    assert store_session.check_connection(StoreConfig(FACE_STORE_URL="sqlite://")) is True
    assert store_session.check_connection(StoreConfig(FACE_STORE_URL="nosuchdb://host/db")) is False


def test_global_engine_lifecycle(monkeypatch):
    monkeypatch.setattr(store_session, "_engine", None)
    monkeypatch.setattr(store_session, "SessionLocal", None)

    engine = store_session.init_engine(StoreConfig(FACE_STORE_URL="sqlite://"))
    assert store_session.init_engine() is engine
    factory = store_session.get_session_factory()
    assert store_session.get_session_factory() is factory

    store_session.close_engine()
    assert store_session._engine is None
    assert store_session.SessionLocal is None
