"""Error Hierarchy — typed, categorized exceptions for every Bookshelf failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - BookValidationError always carries at least one FieldError
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BookshelfError base: the fault boundary catches all of it
    - Handlers discriminate by exception class, never by error name strings
"""

from dataclasses import dataclass
from enum import Enum


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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    book_id: int | None = None


@dataclass(frozen=True)
class FieldError:
    """One field-scoped validation message."""
    field: str
    message: str


class BookshelfError(Exception):
    """Base exception for all Bookshelf errors."""

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


# ─── Domain Errors (400-level) ──────────────────────────────────

class BookValidationError(BookshelfError):
    """Submitted book fields failed validation."""
    def __init__(
        self, field_errors: list[FieldError], context: ErrorContext | None = None,
    ):
        if not field_errors:
            raise ValueError("BookValidationError requires at least one field error")
        super().__init__(
            "; ".join(e.message for e in field_errors),
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field_errors = list(field_errors)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.field_errors]


class ResourceNotFoundError(BookshelfError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class BookNotFoundError(ResourceNotFoundError):
    """No book with the given id."""
    def __init__(self, book_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.book_id = book_id
        super().__init__("Book", str(book_id), ctx)
        self.book_id = book_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BookshelfError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
