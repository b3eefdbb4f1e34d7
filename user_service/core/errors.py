"""Error Hierarchy — typed, categorized exceptions for all user service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors (400-level) are recoverable; storage/cache errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Cache errors never double as cache misses (a miss is None, not an exception)

Design Decisions:
    - Single hierarchy with UserServiceError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CACHE = "cache"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    backend: str | None = None
    debug_info: dict[str, Any] | None = None


class UserServiceError(Exception):
    """Base exception for all user service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class UserValidationError(UserServiceError):
    """Caller input failed a business rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UserNotFoundError(UserServiceError):
    """No user matches the requested id."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"User '{user_id}' not found",
            "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(UserServiceError):
    """Backing store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class CacheError(UserServiceError):
    """Base for cache adapter failures."""


class CacheUnavailableError(CacheError):
    """Cache client missing or unreachable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cache unavailable: {message}",
            "CACHE_UNAVAILABLE", ErrorCategory.CACHE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class CacheDataError(CacheError):
    """Cached payload could not be encoded or decoded."""
    def __init__(self, message: str, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cache entry '{key}' unreadable: {message}",
            "CACHE_DATA_ERROR", ErrorCategory.CACHE,
            ErrorSeverity.ERROR, context, 500,
        )
        self.key = key
