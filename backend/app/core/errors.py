"""Error Hierarchy — typed, categorized exceptions for all user-service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Wire codes are the HTTP status as text ("400", "401", "404", "422")
    - to_response() produces the ErrorResponse envelope with a FRESH response header
    - Recoverable errors (400-level) are mapped at the service boundary;
      fatal errors (500-level) propagate to the catch-all handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserServiceError base: one handler shape for all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - NotFound carries a message for logs but never puts it on the wire (generic "404")
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from app.core.envelope import build_response_header
from app.schemas.envelope import ErrorResponse


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
    UNAUTHORIZED = "unauthorized"
    UNPROCESSABLE = "unprocessable"
    RESOURCE_EXHAUSTED = "resource_exhausted"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: UUID | None = None
    operation: str | None = None


class UserServiceError(Exception):
    """Base exception for all user-service errors."""

    expose_message: bool = True

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

    def to_response(self) -> ErrorResponse:
        """Convert to the structured error envelope."""
        return ErrorResponse(
            response_header=build_response_header(),
            code=self.code,
            message=self.message if self.expose_message else None,
        )


# ─── Recoverable Errors (400-level) ─────────────────────────────

class UserValidationError(UserServiceError):
    """One or more field rules violated. Message names every failing field."""
    def __init__(
        self, message: str, violations: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "400", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.violations = violations or []


class UnauthorizedError(UserServiceError):
    """Claims extractor returned no claims for a mutating operation."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Missing or invalid credentials", "401",
            ErrorCategory.UNAUTHORIZED, ErrorSeverity.WARNING, context, 401,
        )


class UserNotFoundError(UserServiceError):
    """Referenced id absent from the repository."""

    expose_message = False

    def __init__(self, user_id: UUID, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"User '{user_id}' not found", "404",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx, 404,
        )


class UnprocessableEntityError(UserServiceError):
    """Request body or path does not parse as the declared wire types."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "422", ErrorCategory.UNPROCESSABLE,
            ErrorSeverity.WARNING, context, 422,
        )


# ─── Fatal Errors (500-level) ───────────────────────────────────

class IdentifierSpaceExhaustedError(UserServiceError):
    """No unused identifier could be generated. Not recoverable."""
    def __init__(self, attempts: int, context: ErrorContext | None = None):
        super().__init__(
            f"Could not allocate an unused user id after {attempts} attempts",
            "500", ErrorCategory.RESOURCE_EXHAUSTED,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.attempts = attempts
