"""Constants for the room/user directory."""

# Room defaults
DEFAULT_ROOM_TOPIC = ""
DEFAULT_ROOM_PRIVATE = True
DEFAULT_ROOM_HIDDEN = False

# Invite tokens
INVITE_TOKEN_BITS = 64
INVITE_TOKEN_BYTES = INVITE_TOKEN_BITS // 8

# Environment
ENV_PREFIX = "OUR_DIRECTORY_"
TRUTHY_VALUES = ("1", "true", "yes")
