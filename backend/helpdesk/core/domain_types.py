"""Domain Types: enumerations shared by schemas, ORM models and the health policy.

Invariants:
    - All valid states encoded as Enums, no raw string matching
    - Enum values are the exact strings that travel over the wire and into the DB
"""

from enum import Enum


class ResponseStatus(str, Enum):
    """Top-level `status` of every response envelope."""
    SUCCESS = "success"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Short identifiers carried by error envelopes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    SERVER_ERROR = "SERVER_ERROR"
    CONFLICT = "CONFLICT"
    BAD_REQUEST = "BAD_REQUEST"
    DATABASE_ERROR = "DATABASE_ERROR"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class HealthStatus(str, Enum):
    """Overall status of a detailed health report."""
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class ProbeStatus(str, Enum):
    """Outcome of a single dependency probe."""
    OK = "ok"
    ERROR = "error"
    UNKNOWN = "unknown"
