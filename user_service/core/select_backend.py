"""Backend Selection — decides which store a process runs on.

Invariants:
    - PURE: availability is probed by the shell and passed in
    - Never returns AUTO
    - Any unavailable external store falls back to MEMORY
    - AUTO prefers POSTGRES, never MONGODB

Design Decisions:
    - Fallback table lives here, not in the factory, so the policy is testable
      without connecting to anything
"""

from user_service.core.domain_types import StorageBackend


def resolve_backend(
    requested: StorageBackend,
    postgres_available: bool,
    mongodb_available: bool,
) -> StorageBackend:
    """Pick the concrete backend for `requested` given which stores answered."""
    if requested == StorageBackend.MEMORY:
        return StorageBackend.MEMORY
    if requested == StorageBackend.MONGODB:
        return StorageBackend.MONGODB if mongodb_available else StorageBackend.MEMORY
    # POSTGRES and AUTO share the same rule
    return StorageBackend.POSTGRES if postgres_available else StorageBackend.MEMORY


def stores_to_probe(requested: StorageBackend) -> set[StorageBackend]:
    """External stores worth connecting to for `requested`."""
    if requested == StorageBackend.MONGODB:
        return {StorageBackend.MONGODB}
    if requested in (StorageBackend.POSTGRES, StorageBackend.AUTO):
        return {StorageBackend.POSTGRES}
    return set()
