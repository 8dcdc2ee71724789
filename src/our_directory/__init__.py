"""Room/user directory control plane for a chat-room service.

Tracks known users and rooms and governs membership, moderation,
bans, mutes and presence. Privileged operations are gated on the
administrator role.

Key concepts:
- DirectoryController: In-memory view holding public and private room partitions
- Room: Per-room relations (members, moderators, banned, muted, online)
- Providers: Persistence contracts supplied by the calling application
"""

# Constants
from .constants import (
    DEFAULT_ROOM_HIDDEN,
    DEFAULT_ROOM_PRIVATE,
    DEFAULT_ROOM_TOPIC,
    INVITE_TOKEN_BITS,
)

# Configuration
from .config import (
    DirectoryConfigProtocol,
    DirectorySettings,
    clear_config_cache,
    clear_directory_config,
    get_config,
    get_directory_config,
    get_directory_config_or_none,
    set_directory_config,
)

# Controller
from .controller import DirectoryController

# Exceptions
from .exceptions import (
    DirectoryError,
    MemberNotFoundError,
    PermissionDeniedError,
    RoomNotFoundError,
    UserNotFoundError,
)

# Providers
from .providers import RoomProvider, UserProvider

# Data classes
from .rooms import Room

# Storage
from .storage import InMemoryRoomProvider, InMemoryUserProvider
from .tokens import generate_invite_token

# Types (enums)
from .types import Role, UserState
from .users import User

__all__ = [
    # Constants
    "DEFAULT_ROOM_TOPIC",
    "DEFAULT_ROOM_PRIVATE",
    "DEFAULT_ROOM_HIDDEN",
    "INVITE_TOKEN_BITS",
    # Configuration
    "DirectoryConfigProtocol",
    "DirectorySettings",
    "get_config",
    "clear_config_cache",
    "set_directory_config",
    "get_directory_config",
    "get_directory_config_or_none",
    "clear_directory_config",
    # Exceptions
    "DirectoryError",
    "UserNotFoundError",
    "RoomNotFoundError",
    "PermissionDeniedError",
    "MemberNotFoundError",
    # Types
    "Role",
    "UserState",
    # Data classes
    "User",
    "Room",
    # Providers
    "UserProvider",
    "RoomProvider",
    "InMemoryUserProvider",
    "InMemoryRoomProvider",
    # Controller
    "DirectoryController",
    "generate_invite_token",
]
