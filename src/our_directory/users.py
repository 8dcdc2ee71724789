"""User records held by the external user provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from .types import Role, UserState


@dataclass(eq=False)
class User:
    """Identity record with a role set and a presence state.

    The record is owned and persisted by the user provider; the
    directory only keeps the ids of known users.
    """

    id: UUID
    email: str
    display_name: str
    username: str

    # Credential secret, opaque here (hashing lives in the auth layer)
    password: str = field(default="", repr=False)

    roles: set[Role] = field(default_factory=set)
    state: UserState = UserState.OFFLINE

    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(cls, email: str, display_name: str, username: str, password: str) -> User:
        """Create a user with a fresh id and no roles."""
        return cls(
            id=uuid4(),
            email=email,
            display_name=display_name,
            username=username,
            password=password,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def grant_role(self, role: Role) -> None:
        self.roles.add(role)

    def revoke_role(self, role: Role) -> bool:
        """Remove a role. Returns False if the user did not hold it."""
        if role not in self.roles:
            return False
        self.roles.discard(role)
        return True

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    def update_state(self, state: UserState) -> None:
        self.state = state

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (without the credential secret)."""
        return {
            "id": str(self.id),
            "email": self.email,
            "display_name": self.display_name,
            "username": self.username,
            "roles": sorted(r.value for r in self.roles),
            "state": self.state.value,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        """Create from dictionary."""
        return cls(
            id=UUID(data["id"]),
            email=data.get("email", ""),
            display_name=data.get("display_name", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            roles={Role(r) for r in data.get("roles", [])},
            state=UserState(data.get("state", "offline")),
            created_at=(datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now()),
        )
