"""Error Hierarchy - typed, categorized exceptions for all DevConnect failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Each error maps to exactly one HTTP status via http_status
    - to_response() produces the REST envelope used by the global handlers
    - No internal details leaked in user-facing messages (StorageError keeps a fixed message)

Design Decisions:
    - Single hierarchy with DevConnectError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Token failures subclass UnauthenticatedError so callers can catch the family
      or tell missing/invalid/expired apart by code
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None


class DevConnectError(Exception):
    """Base exception for all DevConnect errors."""

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
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Authentication (401) ───────────────────────────────────────

class UnauthenticatedError(DevConnectError):
    """Request carries no usable identity."""
    def __init__(
        self,
        message: str = "Authentication required",
        code: str = "UNAUTHENTICATED",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class TokenMissingError(UnauthenticatedError):
    """No token header on the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No token, authorization denied", "TOKEN_MISSING", context,
        )


class TokenInvalidError(UnauthenticatedError):
    """Token signature, structure or claims are wrong."""
    def __init__(self, reason: str = "Token is not valid", context: ErrorContext | None = None):
        super().__init__(reason, "TOKEN_INVALID", context)


class TokenExpiredError(UnauthenticatedError):
    """Token was well-formed but its expiry has passed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Token has expired", "TOKEN_EXPIRED", context)


# ─── Authorization (403) ────────────────────────────────────────

class ForbiddenError(DevConnectError):
    """Authenticated caller does not own the resource."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            "User not authorized", "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


# ─── Domain Errors (400/404-level) ──────────────────────────────

class ResourceNotFoundError(DevConnectError):
    """Requested resource or sub-entry does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class AlreadyLikedError(DevConnectError):
    """Caller already appears in the post's like-set."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Post already liked", "ALREADY_LIKED", ErrorCategory.CONFLICT,
            ErrorSeverity.INFO, context, 400,
        )


class NotLikedError(DevConnectError):
    """Caller does not appear in the post's like-set."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Post has not yet been liked", "NOT_LIKED", ErrorCategory.CONFLICT,
            ErrorSeverity.INFO, context, 400,
        )


class ValidationError(DevConnectError):
    """Input rejected by a core rule (schema validation happens earlier)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidCredentialsError(DevConnectError):
    """Login email/password pair did not match a user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid Credentials", "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class DuplicateUserError(DevConnectError):
    """Registration attempted with an email that is already taken."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User already exists", "USER_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (409/500-level) ──────────────────────

class ConcurrencyError(DevConnectError):
    """Concurrent modification detected on a versioned document."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class StorageError(DevConnectError):
    """Persistence operation failed. Fatal for the request, never retried."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Server error", "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
