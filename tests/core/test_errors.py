"""Error hierarchy tests — codes, statuses and structured field errors.

Tests cover:
    - BookNotFoundError is a ResourceNotFoundError with status 404 and the id in context
    - BookValidationError carries FieldErrors and refuses an empty list
    - Validation errors are tagged with code and category for dispatch
    - DatabaseError is critical with status 503
"""

import pytest

from bookshelf.core.errors import (
    BookNotFoundError, BookshelfError, BookValidationError, DatabaseError,
    ErrorCategory, ErrorSeverity, FieldError, ResourceNotFoundError,
)


def test_book_not_found_is_resource_not_found():
    err = BookNotFoundError(42)
    assert isinstance(err, ResourceNotFoundError)
    assert isinstance(err, BookshelfError)
    assert err.http_status == 404
    assert err.code == "RESOURCE_NOT_FOUND"
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert err.context.book_id == 42
    assert err.message == "Book '42' not found"


def test_validation_error_collects_fields_and_messages():
    err = BookValidationError([
        FieldError("title", 'Please provide a value for "Title"'),
        FieldError("author", 'Please provide a value for "Author"'),
    ])
    assert err.fields == ["title", "author"]
    assert err.http_status == 400
    assert err.severity is ErrorSeverity.WARNING
    assert "Title" in err.message and "Author" in err.message


def test_validation_error_requires_field_errors():
    with pytest.raises(ValueError):
        BookValidationError([])


def test_validation_error_is_tagged_for_dispatch():
    err = BookValidationError([FieldError("year", '"Year" must be a whole number')])
    assert err.code == "VALIDATION_ERROR"
    assert err.category is ErrorCategory.VALIDATION
    assert err.field_errors == [FieldError("year", '"Year" must be a whole number')]


def test_database_error_is_critical():
    err = DatabaseError("Connection or operational error", "execute")
    assert err.http_status == 503
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.operation == "execute"
    assert err.message.startswith("Database execute failed")
