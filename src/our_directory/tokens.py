"""Invite token generation (experimental).

Tokens are a 64-bit digest of the issuing admin's id and the issue
time. They are not persisted, have no expiry and cannot be redeemed;
two calls at the same instant yield the same value. Authorization is
the caller's job (see DirectoryController.generate_invite_token).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from cryptography.hazmat.primitives import hashes

from .constants import INVITE_TOKEN_BYTES


def generate_invite_token(admin_id: UUID, now: datetime | None = None) -> int:
    """Derive an unsigned 64-bit token from admin id and timestamp.

    Args:
        admin_id: Id of the issuing administrator
        now: Issue time, defaults to the current local time

    Returns:
        Token as an int in [0, 2**64)
    """
    issued_at = now or datetime.now().astimezone()
    digest = hashes.Hash(hashes.SHA256())
    digest.update((str(admin_id) + issued_at.isoformat()).encode())
    return int.from_bytes(digest.finalize()[:INVITE_TOKEN_BYTES], "big")
