"""
Database models for the key-value configuration store.

The store is laid out like a registry hive: a location is a named path
(``Software\\Vendor\\Application``) and holds any number of named, typed
values. Every value keeps its payload as raw bytes; the ``kind`` column says
how those bytes are to be read.
"""

from datetime import datetime
from enum import Enum
from typing import List

from sqlalchemy import (
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class ValueKind(str, Enum):
    """
    Storage format of a configuration value.

    BINARY values are opaque blobs stored verbatim. UINT32 values are
    unsigned 32-bit integers stored as 4 little-endian bytes.
    """

    BINARY = "binary"
    UINT32 = "uint32"


class ConfigLocation(Base):
    """
    A configuration location (one path in the store).

    Attributes:
        id: Primary key
        path: Backslash-separated location path, unique
        created_at: Timestamp when the location was first created
        values: Values stored under this location
    """

    __tablename__ = "config_locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    path: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    values: Mapped[List["ConfigValue"]] = relationship(
        "ConfigValue",
        back_populates="location",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ConfigLocation(id={self.id}, path='{self.path}')>"


class ConfigValue(Base):
    """
    A named value inside a configuration location.

    Attributes:
        id: Primary key
        location_id: Owning location
        name: Value name, unique within its location
        kind: How ``data`` is to be interpreted
        data: Raw payload bytes
        updated_at: Timestamp of the last write
    """

    __tablename__ = "config_values"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("config_locations.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    kind: Mapped[ValueKind] = mapped_column(
        SQLEnum(ValueKind, native_enum=True),
        nullable=False,
    )
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    location: Mapped["ConfigLocation"] = relationship("ConfigLocation", back_populates="values")

    __table_args__ = (
        UniqueConstraint("location_id", "name", name="uq_config_values_location_name"),
    )

    def __repr__(self) -> str:
        return (
            f"<ConfigValue(id={self.id}, name='{self.name}', "
            f"kind={self.kind.value}, size={len(self.data)})>"
        )
