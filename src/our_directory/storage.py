"""In-memory providers for users and rooms."""

from __future__ import annotations

import copy
from uuid import UUID

from .rooms import Room
from .users import User


class InMemoryUserProvider:
    """UserProvider backed by a dict.

    Records are copied on the way in and out, so a fetched user only
    changes storage once it is passed back through update_user().
    """

    def __init__(self, users: list[User] | None = None) -> None:
        self._users: dict[UUID, User] = {}
        for user in users or []:
            self.store_user(user)

    def list_user_ids(self) -> list[UUID]:
        return list(self._users)

    def list_full_users(self) -> list[User]:
        return [copy.deepcopy(u) for u in self._users.values()]

    def get_user(self, user_id: UUID) -> User | None:
        user = self._users.get(user_id)
        return copy.deepcopy(user) if user else None

    def store_user(self, user: User) -> None:
        self._users[user.id] = copy.deepcopy(user)

    def update_user(self, user: User) -> None:
        self._users[user.id] = copy.deepcopy(user)

    def clear(self) -> None:
        """Clear the store (for testing)."""
        self._users.clear()


class InMemoryRoomProvider:
    """RoomProvider backed by a dict, with the same copy semantics."""

    def __init__(self, rooms: list[Room] | None = None) -> None:
        self._rooms: dict[UUID, Room] = {}
        for room in rooms or []:
            self.store_room(room)

    def list_rooms(self) -> list[Room]:
        return [copy.deepcopy(r) for r in self._rooms.values()]

    def get_room(self, room_id: UUID) -> Room | None:
        room = self._rooms.get(room_id)
        return copy.deepcopy(room) if room else None

    def store_room(self, room: Room) -> None:
        self._rooms[room.id] = copy.deepcopy(room)

    def update_room(self, room: Room) -> None:
        self._rooms[room.id] = copy.deepcopy(room)

    def clear(self) -> None:
        """Clear the store (for testing)."""
        self._rooms.clear()
