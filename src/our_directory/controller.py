"""Directory controller - the in-memory view of users and rooms.

Responsible for:
- Tracking the ids of known users and the public/private room partitions
- Room membership, moderation, bans, mutes and presence
- Admin-gated operations (private-room bypass, invite tokens)
- Round-tripping user changes through the user provider
"""

from __future__ import annotations

import copy
import functools
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import UUID

from .config import DirectoryConfigProtocol, get_config
from .exceptions import (
    MemberNotFoundError,
    PermissionDeniedError,
    RoomNotFoundError,
    UserNotFoundError,
)
from .providers import RoomProvider, UserProvider
from .rooms import Room
from .tokens import generate_invite_token
from .types import Role, UserState
from .users import User

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _serialized(func: F) -> F:
    """Run a controller method under the controller lock."""

    @functools.wraps(func)
    def wrapper(self: DirectoryController, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            return func(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class DirectoryController:
    """Authoritative in-memory directory of users and rooms.

    Rooms live in two id-keyed partitions matching their privacy flag.
    Read accessors (find_room, public_rooms, private_rooms) hand out
    snapshots; find_mut_room is the only way to reach the live Room.

    All public methods are serialized on one re-entrant lock, so the
    fetch-mutate-store sequences on user records cannot interleave
    between callers of the same controller.
    """

    def __init__(
        self,
        user_provider: UserProvider,
        room_provider: RoomProvider,
        settings: DirectoryConfigProtocol | None = None,
    ) -> None:
        """Initialize the controller and load users and rooms.

        Args:
            user_provider: Storage for user records
            room_provider: Storage for room records
            settings: Directory settings, defaults to get_config()
        """
        self.user_provider = user_provider
        self.room_provider = room_provider
        self.settings = settings or get_config()

        self._lock = threading.RLock()
        self._user_ids: list[UUID] = []
        self._public_rooms: dict[UUID, Room] = {}
        self._private_rooms: dict[UUID, Room] = {}

        self._fetch_user_data()
        self._fetch_room_data()
        logger.info(
            f"Directory loaded: {len(self._user_ids)} users, "
            f"{len(self._public_rooms)} public rooms, {len(self._private_rooms)} private rooms"
        )

    def _fetch_user_data(self) -> None:
        self._user_ids = list(self.user_provider.list_user_ids())

    def _fetch_room_data(self) -> None:
        for room in self.room_provider.list_rooms():
            self._partition_for(room)[room.id] = room

    def _partition_for(self, room: Room) -> dict[UUID, Room]:
        return self._private_rooms if room.is_private() else self._public_rooms

    # =========================================================================
    # USERS
    # =========================================================================

    @property
    def user_ids(self) -> list[UUID]:
        """Ids of known users, in registration order."""
        with self._lock:
            return list(self._user_ids)

    @_serialized
    def add_user(self, user: User) -> None:
        """Register a user and store the full record.

        No uniqueness check is made; adding the same user twice
        registers the id twice.
        """
        self._user_ids.append(user.id)
        self.user_provider.store_user(user)
        logger.info(f"User added: {user.id} ({user.username})")

    @_serialized
    def remove_user(self, user_id: UUID) -> bool:
        """Forget a user id.

        The record stays in the user provider; only the in-memory
        registry is updated.
        """
        try:
            self._user_ids.remove(user_id)
        except ValueError:
            return False
        logger.info(f"User removed from directory: {user_id}")
        return True

    @_serialized
    def is_user(self, user_id: UUID) -> bool:
        return user_id in self._user_ids

    @_serialized
    def find_user(self, user_id: UUID) -> User | None:
        """Fetch the full record from the provider (never cached)."""
        return self.user_provider.get_user(user_id)

    @_serialized
    def get_user(self, user_id: UUID) -> User:
        """Fetch the full record or raise UserNotFoundError."""
        user = self.user_provider.get_user(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found", {"user_id": str(user_id)})
        return user

    @_serialized
    def list_users(self) -> list[User]:
        return self.user_provider.list_full_users()

    def _update_user(self, user_id: UUID, mutate: Callable[[User], Any]) -> None:
        user = self.user_provider.get_user(user_id)
        if user is None:
            return
        mutate(user)
        self.user_provider.update_user(user)

    @_serialized
    def grant_role(self, user_id: UUID, role: Role) -> None:
        """Grant a role. Unknown users are ignored."""
        self._update_user(user_id, lambda u: u.grant_role(role))
        logger.debug(f"Granted {role} to {user_id}")

    @_serialized
    def revoke_role(self, user_id: UUID, role: Role) -> None:
        """Revoke a role. Unknown users are ignored."""
        self._update_user(user_id, lambda u: u.revoke_role(role))
        logger.debug(f"Revoked {role} from {user_id}")

    @_serialized
    def update_state(self, user_id: UUID, state: UserState) -> None:
        """Set the presence state. Unknown users are ignored."""
        self._update_user(user_id, lambda u: u.update_state(state))
        logger.debug(f"Set state of {user_id} to {state}")

    # =========================================================================
    # ROOMS
    # =========================================================================

    @_serialized
    def generate_room(self, name: str, owner_id: UUID) -> Room:
        """Create a room owned by owner_id and add it to the directory."""
        room = Room.create(name, owner_id, private=self.settings.default_room_private)
        self.add_room(room)
        return room

    @_serialized
    def add_room(self, room: Room) -> None:
        """Persist a room and insert it into its partition.

        A room already held under the same id is replaced, so ids stay
        unique across both partitions.
        """
        self.room_provider.store_room(copy.deepcopy(room))
        self._public_rooms.pop(room.id, None)
        self._private_rooms.pop(room.id, None)
        self._partition_for(room)[room.id] = room
        logger.info(f"Room added: {room.id} ({room.name}, private={room.is_private()})")

    @_serialized
    def remove_room(self, room_id: UUID) -> bool:
        """Drop a room from its partition.

        The room provider is not told; the stored record remains.
        """
        for partition in (self._public_rooms, self._private_rooms):
            if partition.pop(room_id, None) is not None:
                logger.info(f"Room removed: {room_id}")
                return True
        return False

    @_serialized
    def contains_room(self, room: Room) -> bool:
        return room.id in self._public_rooms or room.id in self._private_rooms

    @_serialized
    def find_room_match(self, room_id: UUID) -> tuple[int, bool] | None:
        """Resolve a room id to (position in partition, is_public).

        The public partition is checked first.
        """
        for is_public, partition in ((True, self._public_rooms), (False, self._private_rooms)):
            if room_id in partition:
                return list(partition).index(room_id), is_public
        return None

    def _resolve(self, room_id: UUID) -> Room | None:
        return self._public_rooms.get(room_id) or self._private_rooms.get(room_id)

    @_serialized
    def find_room(self, room_id: UUID) -> Room | None:
        """Return a snapshot of the room, or None."""
        room = self._resolve(room_id)
        return copy.deepcopy(room) if room else None

    @_serialized
    def find_mut_room(self, room_id: UUID) -> Room | None:
        """Return the live room, or None.

        Changes made through the returned object bypass the controller
        lock and write-through; prefer the controller operations.
        """
        return self._resolve(room_id)

    @_serialized
    def get_room(self, room_id: UUID) -> Room:
        """Return a snapshot of the room or raise RoomNotFoundError."""
        room = self._resolve(room_id)
        if room is None:
            raise RoomNotFoundError(f"Room {room_id} not found", {"room_id": str(room_id)})
        return copy.deepcopy(room)

    @_serialized
    def public_rooms(self) -> list[Room]:
        return [copy.deepcopy(r) for r in self._public_rooms.values()]

    @_serialized
    def private_rooms(self) -> list[Room]:
        return [copy.deepcopy(r) for r in self._private_rooms.values()]

    @_serialized
    def set_room_private(self, room_id: UUID, flag: bool) -> bool:
        """Change a room's privacy and move it to the matching partition."""
        room = self._resolve(room_id)
        if room is None:
            return False
        self._partition_for(room).pop(room_id)
        room.set_private(flag)
        self._partition_for(room)[room_id] = room
        self._persist_room(room)
        logger.info(f"Room {room_id} is now {'private' if flag else 'public'}")
        return True

    def _persist_room(self, room: Room) -> None:
        if self.settings.write_through_rooms:
            self.room_provider.update_room(copy.deepcopy(room))

    def _apply(self, room_id: UUID, action: Callable[[Room], bool]) -> bool:
        room = self._resolve(room_id)
        if room is None:
            return False
        changed = action(room)
        if changed:
            self._persist_room(room)
        return changed

    def _ban_blocks(self, room: Room, user_id: UUID) -> bool:
        if self.settings.ban_is_authoritative and room.is_member_banned(user_id):
            logger.debug(f"Refused to add banned user {user_id} to room {room.id}")
            return True
        return False

    # -- membership -------------------------------------------------------

    @_serialized
    def add_member_to_room(self, room_id: UUID, user_id: UUID) -> bool:
        """Add a member. Banned users are refused when bans are authoritative."""
        return self._apply(room_id, lambda r: not self._ban_blocks(r, user_id) and r.add_member(user_id))

    @_serialized
    def remove_member_from_room(self, room_id: UUID, user_id: UUID) -> bool:
        return self._apply(room_id, lambda r: r.remove_member(user_id))

    @_serialized
    def add_moderator_to_room(self, room_id: UUID, user_id: UUID) -> bool:
        """Make a user moderator, adding membership when missing."""
        return self._apply(room_id, lambda r: not self._ban_blocks(r, user_id) and r.add_moderator(user_id))

    @_serialized
    def remove_moderator_from_room(self, room_id: UUID, user_id: UUID) -> bool:
        """Drop moderator status; membership is kept."""
        return self._apply(room_id, lambda r: r.remove_moderator(user_id))

    @_serialized
    def require_member(self, room_id: UUID, user_id: UUID) -> Room:
        """Return a room snapshot, raising unless user_id is a member."""
        room = self.get_room(room_id)
        if not room.has_member(user_id):
            raise MemberNotFoundError(
                f"User {user_id} is not a member of room {room_id}",
                {"room_id": str(room_id), "user_id": str(user_id)},
            )
        return room

    # -- moderation -------------------------------------------------------

    @_serialized
    def ban_member(self, room_id: UUID, user_id: UUID) -> bool:
        """Ban a user, removing them as member and moderator."""
        banned = self._apply(room_id, lambda r: r.ban_member(user_id))
        if banned:
            logger.info(f"User {user_id} banned from room {room_id}")
        return banned

    @_serialized
    def unban_member(self, room_id: UUID, user_id: UUID) -> bool:
        """Lift a ban; the user comes back as a plain member."""
        unbanned = self._apply(room_id, lambda r: r.unban_member(user_id))
        if unbanned:
            logger.info(f"User {user_id} unbanned from room {room_id}")
        return unbanned

    @_serialized
    def mute_member(self, room_id: UUID, user_id: UUID) -> bool:
        return self._apply(room_id, lambda r: r.mute_member(user_id))

    @_serialized
    def unmute_member(self, room_id: UUID, user_id: UUID) -> bool:
        return self._apply(room_id, lambda r: r.unmute_member(user_id))

    # -- presence ---------------------------------------------------------

    @_serialized
    def join_room(self, room_id: UUID, user_id: UUID) -> bool:
        """Mark a user online in a room.

        Public rooms admit anyone. Private rooms admit members and
        administrators, who need not be members.

        Returns:
            True if the user is now online in the room
        """
        is_admin = self.verify_admin(user_id)

        room = self._resolve(room_id)
        if room is None:
            return False

        if room.is_private() and not (room.has_member(user_id) or is_admin):
            logger.debug(f"User {user_id} refused entry to private room {room_id}")
            return False

        if room.add_online_member(user_id):
            self._persist_room(room)
        return True

    @_serialized
    def leave_room(self, room_id: UUID, user_id: UUID) -> bool:
        return self._apply(room_id, lambda r: r.remove_online_member(user_id))

    @_serialized
    def get_online_members(self, room_id: UUID) -> list[UUID]:
        room = self._resolve(room_id)
        return room.get_online_members() if room else []

    # =========================================================================
    # ADMIN
    # =========================================================================

    @_serialized
    def verify_admin(self, user_id: UUID) -> bool:
        """Check the administrator role on a freshly fetched record."""
        user = self.user_provider.get_user(user_id)
        return user is not None and user.is_admin()

    @_serialized
    def require_admin(self, user_id: UUID) -> User:
        """Return the user record or raise PermissionDeniedError."""
        user = self.user_provider.get_user(user_id)
        if user is None or not user.is_admin():
            raise PermissionDeniedError(f"User {user_id} is not an administrator", {"user_id": str(user_id)})
        return user

    @_serialized
    def generate_invite_token(self, admin_id: UUID) -> int | None:
        """Issue an invite token for an administrator.

        Returns:
            A 64-bit token, or None if admin_id is not an administrator
        """
        if not self.verify_admin(admin_id):
            logger.warning(f"Invite token refused for non-admin {admin_id}")
            return None
        return generate_invite_token(admin_id)
