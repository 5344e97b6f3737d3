"""bcrypt helpers for storing and checking user credentials."""

from __future__ import annotations

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt ignores (newer releases reject) input beyond 72 bytes.
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > _BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {_BCRYPT_MAX_BYTES} bytes.")
    hashed = bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def compare_password(hashed_password: str, plain_password: str) -> bool:
    encoded = plain_password.encode("utf-8")
    if len(encoded) > _BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed_password.encode("ascii"))
    except ValueError:
        logger.warning("Stored credential is not a valid bcrypt hash")
        return False
