"""Error Hierarchy — typed, categorized exceptions for all user registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope consumed by api/error_handlers.py
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserRegistryError base: one FastAPI handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - DuplicateFieldError takes http_status: create reports 409, update reports 400
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from user_registry.core.domain_types import UserField, UserLookup


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
    user_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class UserRegistryError(Exception):
    """Base exception for all user registry errors."""

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
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(UserRegistryError):
    """Requested resource does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        lookup: UserLookup = UserLookup.ID,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"No {resource_type.lower()} found with {lookup.value} '{resource_id}'",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.lookup = lookup


class DuplicateFieldError(UserRegistryError):
    """Another user already holds this email or phone number."""
    def __init__(
        self,
        user_field: UserField,
        http_status: int = 409,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = user_field.value
        label = "Email" if user_field is UserField.EMAIL else "Phone number"
        super().__init__(
            f"{label} already registered",
            user_field.error_code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, http_status,
        )
        self.user_field = user_field


class UniqueConstraintError(UserRegistryError):
    """Storage rejected a write that passed the uniqueness pre-check."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email or phone number already registered",
            "UNIQUE_CONSTRAINT_VIOLATED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UserRegistryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
