"""Directory configuration.

Provides directory-specific configuration with env var support.
Uses a protocol-based injection pattern so the calling application
can provide its own config implementation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .constants import DEFAULT_ROOM_PRIVATE, ENV_PREFIX, TRUTHY_VALUES


@runtime_checkable
class DirectoryConfigProtocol(Protocol):
    """Protocol defining directory configuration requirements.

    This allows the controller to depend on a config interface rather than
    a concrete settings class. Calling applications should implement
    this protocol and register via set_directory_config().
    """

    @property
    def ban_is_authoritative(self) -> bool:
        """Refuse to re-add banned users as members or moderators."""
        ...

    @property
    def default_room_private(self) -> bool:
        """Privacy flag for rooms created through generate_room()."""
        ...

    @property
    def write_through_rooms(self) -> bool:
        """Push every room mutation to the room provider."""
        ...


@dataclass
class DirectorySettings:
    """Concrete directory configuration.

    Reads from environment variables with OUR_DIRECTORY_ prefix.
    Can be instantiated directly for testing.
    """

    # Moderation
    ban_is_authoritative: bool = True

    # Rooms
    default_room_private: bool = DEFAULT_ROOM_PRIVATE

    # Persistence
    write_through_rooms: bool = False

    @classmethod
    def from_env(cls) -> DirectorySettings:
        """Create settings from environment variables."""
        return cls(
            ban_is_authoritative=_env_flag("BAN_IS_AUTHORITATIVE", True),
            default_room_private=_env_flag("DEFAULT_ROOM_PRIVATE", DEFAULT_ROOM_PRIVATE),
            write_through_rooms=_env_flag("WRITE_THROUGH_ROOMS", False),
        )


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    return raw.lower() in TRUTHY_VALUES


# Global directory config - set by application layer at startup
_directory_config: DirectoryConfigProtocol | None = None
_core_settings: DirectorySettings | None = None


def set_directory_config(config: DirectoryConfigProtocol) -> None:
    """Set the global directory config.

    Called by the application layer at startup to inject its settings.

    Args:
        config: An object implementing DirectoryConfigProtocol
    """
    global _directory_config
    _directory_config = config


def get_directory_config() -> DirectoryConfigProtocol:
    """Get the global directory config.

    Returns:
        The configured directory settings.

    Raises:
        RuntimeError: If directory config hasn't been set yet.
    """
    if _directory_config is None:
        raise RuntimeError("Directory config not initialized. Call set_directory_config() at application startup.")
    return _directory_config


def get_directory_config_or_none() -> DirectoryConfigProtocol | None:
    """Get the global directory config, or None if not set."""
    return _directory_config


def clear_directory_config() -> None:
    """Clear the global directory config. For testing."""
    global _directory_config
    _directory_config = None


def get_config() -> DirectoryConfigProtocol:
    """Get the active directory settings.

    Returns the injected config when one was registered, otherwise
    DirectorySettings loaded from environment.
    """
    global _core_settings
    if _directory_config is not None:
        return _directory_config
    if _core_settings is None:
        _core_settings = DirectorySettings.from_env()
    return _core_settings


def clear_config_cache() -> None:
    """Clear the config cache. For testing."""
    global _core_settings
    _core_settings = None
