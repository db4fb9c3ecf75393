"""
Create the configuration store tables.

Run once against a fresh store, or let the profile store do it on first use
when FACE_STORE_AUTO_CREATE is enabled.

Usage:
    python -m faceeditor.database.create_tables
"""

import logging

from sqlalchemy import Engine

from faceeditor.database.models import Base

logger = logging.getLogger(__name__)


def create_all_tables(engine: Engine) -> None:
    """Create every store table that does not exist yet."""
    Base.metadata.create_all(engine)
    logger.debug("Store tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    from faceeditor.database.session import init_engine

    print("Initializing store engine...")
    engine = init_engine()

    print("Creating tables...")
    create_all_tables(engine)

    print("Tables created:")
    print("  - config_locations")
    print("  - config_values")
