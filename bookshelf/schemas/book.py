"""Book Schemas — Pydantic model that validates submitted book fields.

Invariants:
    - title and author: stripped, non-empty, at most 255 chars
    - genre: stripped, blank becomes None
    - year: blank becomes None, otherwise a whole number in MIN_YEAR..MAX_YEAR
    - Error messages are user-facing and name the field they belong to

Design Decisions:
    - PydanticCustomError for required/numeric checks so messages reach the form
      without pydantic's "Value error, " prefix
"""

from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator,
)
from pydantic_core import PydanticCustomError

from bookshelf.core.domain_types import BookField
from bookshelf.core.errors import BookValidationError, FieldError

MAX_TEXT_LENGTH = 255
MIN_YEAR = -9999
MAX_YEAR = 9999


class BookFields(BaseModel):
    """Editable Book fields as submitted by the create/edit forms."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field("", max_length=MAX_TEXT_LENGTH, validate_default=True)
    author: str = Field("", max_length=MAX_TEXT_LENGTH, validate_default=True)
    genre: str | None = Field(None, max_length=MAX_TEXT_LENGTH)
    year: int | None = None

    @field_validator("title", "author", mode="before")
    @classmethod
    def require_value(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            label = BookField(info.field_name).label
            raise PydanticCustomError(
                "required", 'Please provide a value for "{label}"', {"label": label},
            )
        return v

    @field_validator("genre", mode="before")
    @classmethod
    def blank_genre_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("year", mode="before")
    @classmethod
    def parse_year(cls, v: Any) -> Any:
        if v is None:
            return None
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            try:
                v = int(v)
            except ValueError:
                raise PydanticCustomError(
                    "year_not_numeric", '"Year" must be a whole number',
                ) from None
        if isinstance(v, int) and not MIN_YEAR <= v <= MAX_YEAR:
            raise PydanticCustomError(
                "year_out_of_range",
                '"Year" must be between {min_year} and {max_year}',
                {"min_year": MIN_YEAR, "max_year": MAX_YEAR},
            )
        return v


def validate_book_fields(fields: Mapping[str, Any]) -> BookFields:
    """Validate raw fields or raise BookValidationError with one entry per failure."""
    try:
        return BookFields.model_validate(dict(fields))
    except ValidationError as exc:
        raise BookValidationError([
            FieldError(
                field=".".join(str(loc) for loc in e["loc"]),
                message=e["msg"],
            )
            for e in exc.errors()
        ]) from exc
