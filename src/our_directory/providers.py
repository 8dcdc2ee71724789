"""Persistence contracts consumed by the directory controller.

The controller never persists anything itself. Calling applications
supply objects implementing these protocols; every call is treated as
synchronous and instantaneous, with no retries or caching across calls.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

from .rooms import Room
from .users import User


@runtime_checkable
class UserProvider(Protocol):
    """Storage of full user records."""

    def list_user_ids(self) -> list[UUID]:
        """Ids of every stored user."""
        ...

    def list_full_users(self) -> list[User]:
        """Every stored user record."""
        ...

    def get_user(self, user_id: UUID) -> User | None:
        """Fetch one user, or None if unknown."""
        ...

    def store_user(self, user: User) -> None:
        """Persist a new user."""
        ...

    def update_user(self, user: User) -> None:
        """Overwrite an existing user."""
        ...


@runtime_checkable
class RoomProvider(Protocol):
    """Storage of room records."""

    def list_rooms(self) -> list[Room]:
        """Every stored room."""
        ...

    def get_room(self, room_id: UUID) -> Room | None:
        """Fetch one room, or None if unknown."""
        ...

    def store_room(self, room: Room) -> None:
        """Persist a new room."""
        ...

    def update_room(self, room: Room) -> None:
        """Overwrite an existing room."""
        ...
