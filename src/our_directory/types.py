"""Type definitions and enums for the room/user directory."""

from enum import StrEnum


class Role(StrEnum):
    """Capability tag attached to a user."""

    ADMIN = "admin"  # Private-room bypass, invite tokens
    USER = "user"  # Regular account
    GUEST = "guest"  # Invited, limited account


class UserState(StrEnum):
    """Presence state of a user."""

    ONLINE = "online"
    OFFLINE = "offline"
    AWAY = "away"
    BUSY = "busy"
