"""SQL Book Store — async SQLAlchemy implementation of the BookStore protocol.

Invariants:
    - Fields are validated before any write; a rejected submission never touches the DB
    - create/update/delete commit their own unit of work
    - get() returns None for unknown ids; update()/delete() raise BookNotFoundError
    - build() returns a transient Book that is never added to the session
"""

import logging
from collections.abc import Mapping
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.domain_types import BookField, BookId
from bookshelf.core.errors import BookNotFoundError
from bookshelf.models.book import Book
from bookshelf.schemas.book import validate_book_fields

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = tuple(f.value for f in BookField)


class SqlBookStore:
    """Book persistence over one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list(self) -> Sequence[Book]:
        result = await self._db.execute(select(Book).order_by(Book.id))
        return result.scalars().all()

    async def get(self, book_id: BookId) -> Book | None:
        return await self._db.get(Book, book_id)

    async def create(self, fields: Mapping[str, Any]) -> Book:
        validated = validate_book_fields(fields)
        book = Book(**validated.model_dump())
        self._db.add(book)
        await self._db.commit()
        await self._db.refresh(book)
        logger.debug("Book inserted", extra={"book_id": book.id})
        return book

    async def update(self, book_id: BookId, fields: Mapping[str, Any]) -> Book:
        validated = validate_book_fields(fields)
        book = await self.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        for name, value in validated.model_dump().items():
            setattr(book, name, value)
        await self._db.commit()
        await self._db.refresh(book)
        return book

    async def delete(self, book_id: BookId) -> None:
        book = await self.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        await self._db.delete(book)
        await self._db.commit()

    def build(
        self, fields: Mapping[str, Any], book_id: BookId | None = None,
    ) -> Book:
        """Unsaved Book holding the raw submitted values, for redisplaying a form."""
        book = Book(**{name: fields.get(name) for name in EDITABLE_FIELDS})
        if book_id is not None:
            book.id = book_id
        return book
