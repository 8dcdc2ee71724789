"""Room membership and moderation state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from .constants import DEFAULT_ROOM_HIDDEN, DEFAULT_ROOM_PRIVATE, DEFAULT_ROOM_TOPIC


@dataclass(eq=False)
class Room:
    """A chat room and its per-user relations.

    Each relation (member, moderator, banned, muted, online) holds a user id
    at most once. Online members are kept in arrival order. Banning removes
    membership and moderation; online presence is independent of
    membership so administrators can sit in private rooms.
    """

    id: UUID
    name: str
    owner: UUID

    # Relations
    members: set[UUID] = field(default_factory=set)
    online_members: dict[UUID, None] = field(default_factory=dict)  # arrival order
    moderators: set[UUID] = field(default_factory=set)
    banned_users: set[UUID] = field(default_factory=set)
    muted_users: set[UUID] = field(default_factory=set)

    # Visibility
    topic: str = DEFAULT_ROOM_TOPIC
    private: bool = DEFAULT_ROOM_PRIVATE
    hidden: bool = DEFAULT_ROOM_HIDDEN

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime | None = None
    last_message_at: datetime | None = None

    # Message log placeholder (delivery and history live elsewhere)
    messages: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, name: str, owner: UUID, private: bool = DEFAULT_ROOM_PRIVATE) -> Room:
        """Create a room with a fresh id. The owner starts as a member."""
        return cls(id=uuid4(), name=name, owner=owner, members={owner}, private=private)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Room):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def _touch(self) -> None:
        self.updated_at = datetime.now()

    # -- visibility -------------------------------------------------------

    def is_private(self) -> bool:
        return self.private

    def set_private(self, flag: bool) -> None:
        self.private = flag
        self._touch()

    def is_hidden(self) -> bool:
        return self.hidden

    def set_hidden(self, flag: bool) -> None:
        self.hidden = flag
        self._touch()

    def set_topic(self, topic: str) -> None:
        self.topic = topic
        self._touch()

    def timestamps(self) -> tuple[datetime, datetime | None, datetime | None]:
        """Return (created_at, updated_at, last_message_at)."""
        return self.created_at, self.updated_at, self.last_message_at

    # -- relations --------------------------------------------------------

    def _add(self, relation: set[UUID], user_id: UUID) -> bool:
        if user_id in relation:
            return False
        relation.add(user_id)
        self._touch()
        return True

    def _remove(self, relation: set[UUID], user_id: UUID) -> bool:
        if user_id not in relation:
            return False
        relation.discard(user_id)
        self._touch()
        return True

    def add_member(self, user_id: UUID) -> bool:
        return self._add(self.members, user_id)

    def remove_member(self, user_id: UUID) -> bool:
        return self._remove(self.members, user_id)

    def add_moderator(self, user_id: UUID) -> bool:
        """Grant moderation. Non-members are made members as well.

        Returns True if either relation changed.
        """
        added = self._add(self.moderators, user_id)
        joined = self._add(self.members, user_id)
        return added or joined

    def remove_moderator(self, user_id: UUID) -> bool:
        return self._remove(self.moderators, user_id)

    def mute_member(self, user_id: UUID) -> bool:
        return self._add(self.muted_users, user_id)

    def unmute_member(self, user_id: UUID) -> bool:
        return self._remove(self.muted_users, user_id)

    def ban_member(self, user_id: UUID) -> bool:
        """Ban a user, dropping membership and moderation.

        Returns True if any relation changed, so re-banning a user who was
        re-added as a member still reports the removal.
        """
        banned = self._add(self.banned_users, user_id)
        left = self._remove(self.members, user_id)
        demoted = self._remove(self.moderators, user_id)
        return banned or left or demoted

    def unban_member(self, user_id: UUID) -> bool:
        """Lift a ban and reinstate plain membership.

        Moderator status is not restored.
        """
        if not self._remove(self.banned_users, user_id):
            return False
        self._add(self.members, user_id)
        return True

    def has_member(self, user_id: UUID) -> bool:
        return user_id in self.members

    def has_moderator(self, user_id: UUID) -> bool:
        return user_id in self.moderators

    def is_member_muted(self, user_id: UUID) -> bool:
        return user_id in self.muted_users

    def is_member_banned(self, user_id: UUID) -> bool:
        return user_id in self.banned_users

    def count_members(self) -> int:
        return len(self.members)

    # -- presence ---------------------------------------------------------

    def add_online_member(self, user_id: UUID) -> bool:
        if user_id in self.online_members:
            return False
        self.online_members[user_id] = None
        self._touch()
        return True

    def remove_online_member(self, user_id: UUID) -> bool:
        if user_id not in self.online_members:
            return False
        del self.online_members[user_id]
        self._touch()
        return True

    def get_online_members(self) -> list[UUID]:
        """Online user ids in arrival order."""
        return list(self.online_members)

    # -- messages ---------------------------------------------------------

    def add_message(self, text: str) -> None:
        """Append to the message log and stamp last_message_at."""
        self.messages.append(text)
        self.last_message_at = datetime.now()

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": str(self.id),
            "name": self.name,
            "owner": str(self.owner),
            "members": _ids_to_list(self.members),
            "online_members": [str(i) for i in self.online_members],
            "moderators": _ids_to_list(self.moderators),
            "banned_users": _ids_to_list(self.banned_users),
            "muted_users": _ids_to_list(self.muted_users),
            "topic": self.topic,
            "private": self.private,
            "hidden": self.hidden,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "last_message_at": self.last_message_at.isoformat() if self.last_message_at else None,
            "messages": list(self.messages),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Room:
        """Create from dictionary."""
        return cls(
            id=UUID(data["id"]),
            name=data["name"],
            owner=UUID(data["owner"]),
            members=_ids_from_list(data.get("members")),
            online_members=dict.fromkeys(UUID(v) for v in data.get("online_members") or []),
            moderators=_ids_from_list(data.get("moderators")),
            banned_users=_ids_from_list(data.get("banned_users")),
            muted_users=_ids_from_list(data.get("muted_users")),
            topic=data.get("topic", DEFAULT_ROOM_TOPIC),
            private=data.get("private", DEFAULT_ROOM_PRIVATE),
            hidden=data.get("hidden", DEFAULT_ROOM_HIDDEN),
            created_at=(datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now()),
            updated_at=(datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else None),
            last_message_at=(
                datetime.fromisoformat(data["last_message_at"]) if data.get("last_message_at") else None
            ),
            messages=list(data.get("messages", [])),
        )


def _ids_to_list(ids: set[UUID]) -> list[str]:
    return sorted(str(i) for i in ids)


def _ids_from_list(values: list[str] | None) -> set[UUID]:
    return {UUID(v) for v in values or []}
