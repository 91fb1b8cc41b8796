"""Error Hierarchy: typed, categorized exceptions for every Helpdesk failure mode.

Invariants:
    - Every error has a code (ErrorCode), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the standard error envelope (core/envelope.py)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with HelpdeskError base, caught by one global FastAPI handler
    - Dependency probe failures are NOT part of this hierarchy: probes convert
      exceptions into report fields (services/health_check.py)
"""

from enum import Enum
from typing import Any

from helpdesk.core import envelope
from helpdesk.core.domain_types import ErrorCode


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
    INTERNAL = "internal"


class HelpdeskError(Exception):
    """Base exception for all Helpdesk errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return envelope.error(self.code, self.message, self.details)


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationFailedError(HelpdeskError):
    """Request payload violated its schema."""
    def __init__(self, details: list[dict], message: str = "Validation failed"):
        super().__init__(
            message, ErrorCode.VALIDATION_ERROR, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400, details,
        )


class UnauthorizedError(HelpdeskError):
    """Credentials missing or rejected."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message, ErrorCode.UNAUTHORIZED, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class ResourceNotFoundError(HelpdeskError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: object):
        super().__init__(
            f"{resource_type} with ID {resource_id} not found",
            ErrorCode.NOT_FOUND, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


EMAIL_TAKEN = "Email is already registered"
USERNAME_TAKEN = "Username is already taken"


class ConflictError(HelpdeskError):
    """Write would violate a uniqueness rule."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, ErrorCode.CONFLICT, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 409, [{"field": field, "message": message}],
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(HelpdeskError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorCode.DATABASE_ERROR, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation


class HealthReportUnavailableError(HelpdeskError):
    """System metrics could not be gathered; no partial report is produced."""
    def __init__(self, reason: str):
        super().__init__(
            "Failed to retrieve health information",
            ErrorCode.SERVER_ERROR, ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )
        self.reason = reason
