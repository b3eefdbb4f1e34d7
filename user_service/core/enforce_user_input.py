"""User Input Enforcement — business rules checked before any repository call.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Return UserValidationError on violation, None on success
    - validate_create_fields chains checks — first error wins

Design Decisions:
    - Return errors (not raise): the service decides when to raise, tests assert
      on values without pytest.raises
"""

from user_service.core.errors import UserValidationError


MAX_USER_ID = 2**63 - 1  # signed 64-bit column range


def check_user_id(user_id: int) -> UserValidationError | None:
    """Ids are positive 64-bit integers. bool is rejected even though it subclasses int."""
    if (
        isinstance(user_id, bool) or not isinstance(user_id, int)
        or not 0 < user_id <= MAX_USER_ID
    ):
        return UserValidationError(
            f"Invalid user id: {user_id!r}. Must be a positive 64-bit integer.",
            field="id",
        )
    return None


def check_required_text(value: str | None, field: str) -> UserValidationError | None:
    if value is None or not value.strip():
        return UserValidationError(f"{field} is required", field=field)
    return None


def validate_create_fields(name: str | None, email: str | None) -> UserValidationError | None:
    """Name first, then email."""
    return check_required_text(name, "name") or check_required_text(email, "email")
