"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps int — public identity is always an integer, whatever the store
    - All valid backends encoded as an Enum — no raw string matching outside parse()

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON/log fields without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class StorageBackend(str, Enum):
    """Persistence backends a process may run on. AUTO defers to availability."""
    AUTO = "auto"
    MEMORY = "memory"
    POSTGRES = "postgres"
    MONGODB = "mongodb"

    @classmethod
    def parse(cls, value: str | None) -> "StorageBackend":
        """Map a configuration string to a backend. Unknown or empty → AUTO."""
        if not value:
            return cls.AUTO
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.AUTO


# ─── Cache Keys ──────────────────────────────────────────────────

USER_KEY_PREFIX = "user:"
ALL_USERS_KEY = "users:all"


def user_cache_key(user_id: int) -> str:
    return f"{USER_KEY_PREFIX}{user_id}"
