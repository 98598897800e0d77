"""Error Hierarchy — typed, categorized exceptions for every HackerClone failure mode.

Invariants:
    - Every error carries an ErrorKind (one member per failure mode), a category and a severity
    - Request-level errors are recoverable; only ConfigurationError is fatal (startup)
    - to_response() produces the REST envelope the HTTP shell returns
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with HackerCloneError base: one global handler catches all
    - ErrorKind is the tagged variant; the shell maps it to a status code via http_status
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """One case per failure mode the core can report."""
    NOT_FOUND = "NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    DUPLICATE_USERNAME = "DUPLICATE_USERNAME"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    VALIDATION = "VALIDATION_ERROR"
    HASHING_FAILURE = "HASHING_FAILURE"
    POOL_EXHAUSTED = "POOL_EXHAUSTED"
    STORE_FAILURE = "STORE_FAILURE"
    CONFIGURATION = "CONFIGURATION_ERROR"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    username: str | None = None
    post_id: int | None = None
    comment_id: int | None = None
    user_message: str | None = None


class HackerCloneError(Exception):
    """Base exception for all HackerClone errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def recoverable(self) -> bool:
        return self.kind is not ErrorKind.CONFIGURATION

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationError(HackerCloneError):
    """Input failed a shape or content check inside the core."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.VALIDATION, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(HackerCloneError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            ErrorKind.NOT_FOUND, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidCredentialsError(HackerCloneError):
    """Unknown user or wrong password. The two are never distinguished."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password",
            ErrorKind.INVALID_CREDENTIALS, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class UnauthenticatedError(HackerCloneError):
    """Session token missing, forged, expired or bound to a vanished user."""
    def __init__(self, reason: str = "Not logged in", context: ErrorContext | None = None):
        super().__init__(
            reason, ErrorKind.UNAUTHENTICATED, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class DuplicateUsernameError(HackerCloneError):
    """Registration attempted with a username that is already taken."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.username = username
        super().__init__(
            f"Username '{username}' is already taken",
            ErrorKind.DUPLICATE_USERNAME, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.username = username


class ConstraintViolationError(HackerCloneError):
    """A relational constraint (uniqueness, foreign key, threading) was violated."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorKind.CONSTRAINT_VIOLATION, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class HashingFailureError(HackerCloneError):
    """Credential hashing primitive failed or the stored hash is unusable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "Credential processing failed"
        super().__init__(
            f"Hashing failed: {message}",
            ErrorKind.HASHING_FAILURE, ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )


class PoolExhaustedError(HackerCloneError):
    """No database connection became available within the pool timeout."""
    def __init__(self, timeout_seconds: float | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "Service busy, try again"
        super().__init__(
            f"Connection pool exhausted (timeout={timeout_seconds}s)",
            ErrorKind.POOL_EXHAUSTED, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.timeout_seconds = timeout_seconds


class StoreFailureError(HackerCloneError):
    """Database operation failed for a reason not otherwise classified."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "Database unavailable"
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorKind.STORE_FAILURE, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class ConfigurationError(HackerCloneError):
    """Required startup configuration missing or invalid. Fatal."""
    def __init__(self, message: str, setting: str | None = None):
        super().__init__(
            message, ErrorKind.CONFIGURATION, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.setting = setting
