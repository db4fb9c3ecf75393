"""
Repository classes for the key-value configuration store.

Repositories hide the SQL layout from the profile store and translate the
store's value kinds into raw bytes and back:

- BINARY values are handed out verbatim.
- UINT32 values are 4 little-endian bytes, the registry DWORD layout.

None of the methods commit; the caller owns the transaction.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from faceeditor.database.models import ConfigLocation, ConfigValue, ValueKind

UINT32_SIZE = 4
UINT32_MAX = (1 << (8 * UINT32_SIZE)) - 1


class MissingValueError(LookupError):
    """A location or a value does not exist in the store."""


class ValueKindError(TypeError):
    """A stored value cannot be read as the requested kind."""


def uint32_to_bytes(value: int) -> bytes:
    """
    Encode an unsigned 32-bit integer as 4 little-endian bytes.

    Raises:
        TypeError: If value is not an int
        ValueError: If value is outside 0..2**32-1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"uint32 value must be an int, got {type(value).__name__}")
    if not 0 <= value <= UINT32_MAX:
        raise ValueError(f"uint32 value out of range: {value}")
    return value.to_bytes(UINT32_SIZE, "little")


def uint32_from_bytes(data: bytes) -> int:
    """
    Decode 4 little-endian bytes as an unsigned 32-bit integer.

    Raises:
        ValueKindError: If data is not exactly 4 bytes long
    """
    if len(data) != UINT32_SIZE:
        raise ValueKindError(f"uint32 payload must be {UINT32_SIZE} bytes, got {len(data)}")
    return int.from_bytes(data, "little")


class ConfigLocationRepository:
    """Repository for configuration locations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_path(self, path: str) -> Optional[ConfigLocation]:
        """
        Get a location by its path.

        Args:
            path: Backslash-separated location path

        Returns:
            ConfigLocation if found, None otherwise
        """
        return self.session.query(ConfigLocation).filter(ConfigLocation.path == path).first()

    def open(self, path: str) -> ConfigLocation:
        """
        Get an existing location.

        Raises:
            MissingValueError: If the location does not exist
        """
        location = self.get_by_path(path)
        if location is None:
            raise MissingValueError(f"Configuration location not found: {path}")
        return location

    def get_or_create(self, path: str) -> ConfigLocation:
        """
        Get a location, creating it if it does not exist yet.

        Note:
            Does not commit - caller must commit the session
        """
        location = self.get_by_path(path)
        if location is None:
            location = ConfigLocation(path=path)
            self.session.add(location)
            self.session.flush()
        return location


class ConfigValueRepository:
    """Repository for typed values inside a configuration location."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, location: ConfigLocation, name: str) -> Optional[ConfigValue]:
        return (
            self.session.query(ConfigValue)
            .filter(ConfigValue.location_id == location.id, ConfigValue.name == name)
            .first()
        )

    def list_names(self, location: ConfigLocation) -> List[str]:
        """Names of all values stored under a location, sorted."""
        rows = (
            self.session.query(ConfigValue.name)
            .filter(ConfigValue.location_id == location.id)
            .order_by(ConfigValue.name.asc())
            .all()
        )
        return [row.name for row in rows]

    def get_raw(self, location: ConfigLocation, name: str, kind: ValueKind) -> bytes:
        """
        Read the raw payload of a value of the expected kind.

        Raises:
            MissingValueError: If the value does not exist
            ValueKindError: If the value is stored with another kind
        """
        value = self.find(location, name)
        if value is None:
            raise MissingValueError(f"Value not found: {location.path}\\{name}")
        if value.kind != kind:
            raise ValueKindError(
                f"Value {location.path}\\{name} is {value.kind.value}, expected {kind.value}"
            )
        return bytes(value.data)

    def set_raw(self, location: ConfigLocation, name: str, kind: ValueKind, data: bytes) -> ConfigValue:
        """
        Insert or replace a single value, leaving its siblings untouched.

        Note:
            Does not commit - caller must commit the session
        """
        value = self.find(location, name)
        if value is None:
            value = ConfigValue(location_id=location.id, name=name, kind=kind, data=data)
            self.session.add(value)
        else:
            value.kind = kind
            value.data = data
        self.session.flush()
        return value

    def get_binary(self, location: ConfigLocation, name: str) -> bytes:
        return self.get_raw(location, name, ValueKind.BINARY)

    def set_binary(self, location: ConfigLocation, name: str, data: bytes) -> ConfigValue:
        return self.set_raw(location, name, ValueKind.BINARY, bytes(data))

    def get_uint32(self, location: ConfigLocation, name: str) -> int:
        return uint32_from_bytes(self.get_raw(location, name, ValueKind.UINT32))

    def set_uint32(self, location: ConfigLocation, name: str, value: int) -> ConfigValue:
        return self.set_raw(location, name, ValueKind.UINT32, uint32_to_bytes(value))
