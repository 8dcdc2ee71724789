"""Directory exception hierarchy."""

from __future__ import annotations

from typing import Any


class DirectoryError(Exception):
    """Base exception for all directory errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class UserNotFoundError(DirectoryError):
    """User is not known to the directory."""

    pass


class RoomNotFoundError(DirectoryError):
    """Room does not exist in either partition."""

    pass


class PermissionDeniedError(DirectoryError):
    """User does not hold the role required for the operation."""

    pass


class MemberNotFoundError(DirectoryError):
    """User is not a member of the room."""

    pass
