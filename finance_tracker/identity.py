"""Local owner identity.

A random token persisted on this machine stands in for a user account. It
scopes every store call but is not authentication: anyone with the token sees
the same ledger, and a second device gets a different one.
"""

from __future__ import annotations

import secrets
import string
from pathlib import Path

from .logging_setup import get_logger

logger = get_logger("finance_tracker.identity")

OWNER_ID_PREFIX = "user_"
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 9


def generate_owner_id() -> str:
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{OWNER_ID_PREFIX}{suffix}"


def get_or_create_local_owner_id(path: Path) -> str:
    """Return the owner id stored at ``path``, creating and persisting one if absent."""

    if path.exists():
        stored = path.read_text(encoding="utf-8").strip()
        if stored:
            return stored
        logger.warning("Owner id file %s is empty; generating a new id", path)

    owner_id = generate_owner_id()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(owner_id + "\n", encoding="utf-8")
    logger.info("Created local owner id at %s", path)
    return owner_id
