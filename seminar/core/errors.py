"""Error Hierarchy — typed, categorized exceptions for every seminar failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are 4xx; infrastructure errors are 5xx
    - to_response() produces the REST envelope consumed by the API error handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SeminarError base: FastAPI global handler catches all
    - code is the machine-checkable kind; message is human-readable only
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
    BUSINESS_RULE = "business_rule"
    PERMISSION = "permission"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Context attached to an error for logging and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    seminar_id: str | None = None


class SeminarError(Exception):
    """Base exception for all seminar backend errors."""

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
                    "seminar_id": self.context.seminar_id,
                },
            }
        }


# ─── Validation Errors (400) ────────────────────────────────────

class InvalidTimeFormatError(SeminarError):
    """Seminar time is not H:MM / HH:MM in 24-hour form."""
    def __init__(self, time: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid time format '{time}'. Expected H:MM or HH:MM (1:00-23:59).",
            "INVALID_TIME_FORMAT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.time = time


class InvalidOnlineValueError(SeminarError):
    """online flag is neither 'true' nor 'false'."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"online should be 'true' or 'false', got '{value}'",
            "INVALID_ONLINE_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value


class InvalidRoleError(SeminarError):
    """Requested role is not one of the known role labels."""
    def __init__(self, role: str, context: ErrorContext | None = None):
        super().__init__(
            f"Role should be 'instructor' or 'participant', got '{role}'",
            "INVALID_ROLE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.role = role


# ─── Business Rule Errors (400) ─────────────────────────────────

class CapacityTooSmallError(SeminarError):
    """New capacity is below the current participant count."""
    def __init__(
        self, capacity: int, participant_count: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Capacity {capacity} is smaller than the current "
            f"participant count ({participant_count})",
            "CAPACITY_TOO_SMALL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.capacity = capacity
        self.participant_count = participant_count


class AlreadyFullError(SeminarError):
    """Seminar has no free participant seat."""
    def __init__(self, capacity: int, context: ErrorContext | None = None):
        super().__init__(
            f"Seminar is already full ({capacity}/{capacity})",
            "ALREADY_FULL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.capacity = capacity


class AlreadyEnteredError(SeminarError):
    """User already takes part in the seminar under some role."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User has already entered this seminar",
            "ALREADY_ENTERED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class AlreadyChargingError(SeminarError):
    """Instructor profile already charges another seminar."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Instructor is already in charge of a seminar",
            "ALREADY_CHARGING", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Permission Errors (403) ────────────────────────────────────

class NotInstructorError(SeminarError):
    """Acting user lacks the instructor role."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only instructors can register a seminar",
            "NOT_INSTRUCTOR", ErrorCategory.PERMISSION,
            ErrorSeverity.ERROR, context, 403,
        )


class NotChargerError(SeminarError):
    """Acting user is not the seminar's charger."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only the instructor in charge can modify this seminar",
            "NOT_CHARGER", ErrorCategory.PERMISSION,
            ErrorSeverity.ERROR, context, 403,
        )


class RoleNotSuitableError(SeminarError):
    """Acting user does not hold the role (or profile) the request needs."""
    def __init__(self, role: str, context: ErrorContext | None = None):
        super().__init__(
            f"User does not have the '{role}' role",
            "ROLE_NOT_SUITABLE", ErrorCategory.PERMISSION,
            ErrorSeverity.ERROR, context, 403,
        )
        self.role = role


class NotAcceptedError(SeminarError):
    """Participant profile has not been accepted."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Participant is not accepted and cannot enter seminars",
            "NOT_ACCEPTED", ErrorCategory.PERMISSION,
            ErrorSeverity.ERROR, context, 403,
        )


# ─── Authentication Errors (401) ────────────────────────────────

class InvalidCredentialsError(SeminarError):
    """Missing, malformed or unknown credentials."""
    def __init__(
        self, message: str = "Invalid credentials",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Not Found Errors (404) ─────────────────────────────────────

class ResourceNotFoundError(SeminarError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, code: str = "RESOURCE_NOT_FOUND",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UserNotFoundError(ResourceNotFoundError):
    """User does not exist (or vanished since authentication)."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        super().__init__("User", user_id, "USER_NOT_FOUND", context)


class SeminarNotFoundError(ResourceNotFoundError):
    """Seminar does not exist."""
    def __init__(self, seminar_id: str, context: ErrorContext | None = None):
        super().__init__("Seminar", seminar_id, "SEMINAR_NOT_FOUND", context)


# ─── Conflict Errors (409) ──────────────────────────────────────

class DuplicateEmailError(SeminarError):
    """Signup with an email that is already registered."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"Email '{email}' is already registered",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.email = email


class ConcurrencyError(SeminarError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SeminarError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
