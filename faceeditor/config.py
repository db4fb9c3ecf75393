"""
Configuration module for the face editor.

This module uses Pydantic Settings to load and validate environment variables
from a .env file. Every consumer (session management, the profile store, the
logging setup) reads from here instead of touching os.environ directly.

Architecture:
    - Each concern (store, profile location, logging) has its own config class
    - All config classes inherit from BaseSettings for automatic env var loading
    - Nested configs are initialized in AppConfig.__init__ to ensure .env is loaded first
    - A global `settings` instance provides singleton access throughout the package

Usage:
    ```python
    from faceeditor.config import settings

    store_url = settings.store.url
    text_key = settings.profile.text_key
    ```
"""

import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load .env file from project root
project_root: Path = Path(__file__).parent.parent
env_path: Path = project_root / ".env"
if env_path.exists():
    load_dotenv(env_path)


class StoreConfig(BaseSettings):
    """
    Key-value configuration store connection settings.

    Attributes:
        url: SQLAlchemy connection string of the store
        echo: Enable SQLAlchemy statement logging
        auto_create: Create the store tables on first use
        busy_timeout: SQLite lock wait in seconds
    """

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="", case_sensitive=True
    )

    url: str = Field(
        default="sqlite:///face_store.db",
        alias="FACE_STORE_URL",
        description="SQLAlchemy URL of the configuration store",
    )
    echo: bool = Field(default=False, alias="FACE_STORE_ECHO", description="SQLAlchemy echo mode")
    auto_create: bool = Field(
        default=True,
        alias="FACE_STORE_AUTO_CREATE",
        description="Create store tables if they are missing",
    )
    busy_timeout: float = Field(
        default=5.0,
        alias="FACE_STORE_BUSY_TIMEOUT",
        description="Seconds a SQLite connection waits on a locked store",
    )

    @field_validator("busy_timeout")
    @classmethod
    def validate_busy_timeout(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Busy timeout must not be negative")
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Reject blank store URLs."""
        if not v.strip():
            raise ValueError("Store URL must not be empty")
        return v.strip()


class FaceProfileConfig(BaseSettings):
    """
    Where the face profile lives inside the configuration store.

    The defaults match the names the companion game reads on startup.

    Attributes:
        location: Backslash-separated configuration location path
        text_key: Value name holding the nul-terminated UTF-8 face text
        color_key: Value name holding the 32-bit color index
    """

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="", case_sensitive=True
    )

    location: str = Field(
        default="Software\\Landfall Games\\Content Warning",
        alias="FACE_CONFIG_LOCATION",
        description="Configuration location path",
    )
    text_key: str = Field(
        default="FaceText_h3883740665",
        alias="FACE_TEXT_KEY",
        description="Value name of the face text",
    )
    color_key: str = Field(
        default="FaceColorIndex_h311401607",
        alias="FACE_COLOR_KEY",
        description="Value name of the face color index",
    )

    @field_validator("text_key", "color_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value name must not be empty")
        return v

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        """
        Normalize a location path.

        Forward slashes are accepted and converted, duplicate and surrounding
        separators are dropped.

        Raises:
            ValueError: If no path component remains
        """
        parts = [part for part in v.replace("/", "\\").split("\\") if part.strip()]
        if not parts:
            raise ValueError("Configuration location must not be empty")
        return "\\".join(parts)


class LoggingConfig(BaseSettings):
    """
    Logging configuration.

    Attributes:
        level: Root log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: logging format string
    """

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="", case_sensitive=True
    )

    level: str = Field(default="INFO", alias="LOG_LEVEL", description="Log level name")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        alias="LOG_FORMAT",
        description="Log record format",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


class AppConfig(BaseSettings):
    """
    Main application configuration.

    Aggregates the per-concern configurations into a single settings object.
    Each nested config reads its own environment variables; passing one in
    kwargs overrides it, which is how tests point the store at SQLite memory.

    Attributes:
        store: Configuration store connection
        profile: Location and value names of the face profile
        logging: Logging setup
    """

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_file=str(env_path) if env_path.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    store: StoreConfig
    profile: FaceProfileConfig
    logging: LoggingConfig

    def __init__(self, **kwargs: Any) -> None:
        # Ensure .env is loaded before nested configs read environment variables
        if env_path.exists():
            load_dotenv(env_path)
        else:
            load_dotenv()

        if "store" not in kwargs:
            kwargs["store"] = StoreConfig()
        if "profile" not in kwargs:
            kwargs["profile"] = FaceProfileConfig()
        if "logging" not in kwargs:
            kwargs["logging"] = LoggingConfig()

        super().__init__(**kwargs)


# Global settings instance (singleton pattern)
# Import this in other modules: `from faceeditor.config import settings`
settings: AppConfig = AppConfig()
