"""
Session management for the key-value configuration store.

This module owns engine creation, the session factory, and the
``transaction()`` context manager every store read and write goes through.

Key Features:
    - Engine initialization from StoreConfig, with explicit BEGIN on SQLite
    - Session factory with explicit transaction control
    - Transaction context manager: commit on success, rollback on every
      other exit path, always close
    - Connection test to verify the store is reachable

Usage:
    ```python
    from faceeditor.database.session import transaction

    with transaction() as session:
        repo = ConfigValueRepository(session)
        repo.set_uint32(location, "Answer", 42)
    ```
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from faceeditor.config import StoreConfig, settings

logger = logging.getLogger(__name__)

# Global engine instance (initialized on first use)
_engine: Engine | None = None

# Session factory (initialized after engine creation)
SessionLocal: sessionmaker[Session] | None = None


def create_store_engine(config: StoreConfig) -> Engine:
    """
    Create an engine for the given store configuration.

    In-memory SQLite URLs get a StaticPool so every session shares the one
    connection that holds the data.

    Raises:
        ValueError: If the store URL is missing
        SQLAlchemyError: If engine creation fails
    """
    if not config.url:
        raise ValueError("Store URL is required. Set FACE_STORE_URL environment variable.")

    is_sqlite = config.url.startswith("sqlite")
    kwargs: dict = {"echo": config.echo}
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": config.busy_timeout}
        if config.url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    try:
        engine = create_engine(config.url, **kwargs)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create store engine: {e}")
        raise
    except Exception as e:
        logger.error(f"Unexpected error creating store engine: {e}")
        raise SQLAlchemyError(f"Failed to initialize store engine: {e}") from e

    if is_sqlite:
        _enable_sqlite_transactions(engine)
    return engine


def _enable_sqlite_transactions(engine: Engine) -> None:
    """
    Make every SQLite transaction start with an explicit BEGIN.

    pysqlite only opens a transaction before DML, so two SELECTs in one
    session would otherwise run as separate autocommit statements and a
    writer could commit between them. With BEGIN emitted up front the read
    lock is held until the transaction ends.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def init_engine(config: StoreConfig | None = None) -> Engine:
    """
    Initialize the global store engine.

    Args:
        config: Optional StoreConfig instance. If None, uses settings.store

    Returns:
        Initialized SQLAlchemy Engine instance
    """
    global _engine

    if _engine is not None:
        return _engine

    store_config = config or settings.store
    _engine = create_store_engine(store_config)
    logger.info(f"Store engine initialized ({_engine.url.render_as_string(hide_password=True)})")
    return _engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory with explicit commit and flush control."""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=True,
    )


def get_session_factory() -> sessionmaker[Session]:
    """
    Get or create the global session factory.

    Initializes the engine if not already initialized.
    """
    global SessionLocal

    if SessionLocal is not None:
        return SessionLocal

    SessionLocal = make_session_factory(init_engine())
    logger.debug("Session factory created")
    return SessionLocal


@contextmanager
def transaction(
    session_factory: sessionmaker[Session] | None = None,
) -> Generator[Session, None, None]:
    """
    Run a block inside one store transaction.

    The session is committed when the block finishes normally, rolled back
    when anything escapes it, and closed in all cases. An exception raised by
    the commit itself also triggers the rollback and propagates unchanged.

    Args:
        session_factory: Factory to open the session from. Defaults to the
            global factory.

    Yields:
        SQLAlchemy Session instance
    """
    factory = session_factory or get_session_factory()
    session: Session = factory()

    try:
        yield session
        session.commit()
        logger.debug("Transaction committed")
    except SQLAlchemyError as e:
        session.rollback()
        logger.debug(f"Store error, transaction rolled back: {e}")
        raise
    except Exception as e:
        session.rollback()
        logger.debug(f"Transaction rolled back: {e!r}")
        raise
    finally:
        session.close()


def check_connection(config: StoreConfig | None = None) -> bool:
    """
    Check that the store is reachable.

    Returns:
        True if a trivial query succeeds, False otherwise
    """
    store_config = config or settings.store

    try:
        engine = create_store_engine(store_config)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        engine.dispose()
        logger.info("Store connection test successful")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Store connection test failed: {e}")
        return False
    except ValueError as e:
        logger.error(f"Cannot test connection: {e}")
        return False


def close_engine() -> None:
    """Dispose of the global engine and forget the session factory."""
    global _engine, SessionLocal

    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.info("Store engine closed")

    SessionLocal = None
