"""Error Hierarchy — typed, categorized exceptions for all account failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages (causes stay on __cause__)

Design Decisions:
    - Single hierarchy with AccountsError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class AccountsError(Exception):
    """Base exception for all account errors."""

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
                "context": {
                    "user_id": self.context.user_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class MissingFieldError(AccountsError):
    """A required user field is empty."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"{field.capitalize()} required",
            "MISSING_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidEmailFormatError(AccountsError):
    """Email failed the syntax check."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email",
            "INVALID_EMAIL", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.email = email


class FieldTooLongError(AccountsError):
    """A normalized text field exceeds its column size in bytes."""
    def __init__(self, field: str, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"{field.capitalize()} too long (max {limit} bytes)",
            "FIELD_TOO_LONG", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field
        self.limit = limit


class InvalidPasswordError(AccountsError):
    """Password cannot be hashed as given (over 72 bytes or contains NUL)."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid password: {reason}",
            "INVALID_PASSWORD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.reason = reason


class UserNotFoundError(AccountsError):
    """No user row matches the requested id."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "User not found",
            "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AccountsError):
    """Database operation failed. The driver exception is kept as __cause__."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class HashingError(AccountsError):
    """Password hashing backend failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Password hashing failed: {message}",
            "HASHING_FAILURE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DuplicateRecordError(DatabaseError):
    """A unique constraint rejected the write. Retrying cannot succeed."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__("Integrity constraint violated", operation, context)
        self.code = "DUPLICATE_RECORD"
        self.category = ErrorCategory.CONFLICT
        self.severity = ErrorSeverity.ERROR
        self.http_status = 409
