"""Boundary Protocols — contracts between the router and its collaborators.

Invariants:
    - The router depends only on these Protocols, never on SQLAlchemy or Jinja2
    - Store methods are async because implementations do IO
    - get() signals absence with None; mutating methods raise BookNotFoundError

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from collections.abc import Mapping
from typing import Any, Protocol, Sequence

from starlette.requests import Request
from starlette.responses import Response

from bookshelf.core.domain_types import BookId


class BookLike(Protocol):
    """Structural contract for Book records handed to views."""
    id: int | None
    title: str
    author: str
    genre: str | None
    year: int | None


class BookStore(Protocol):
    """Contract for Book persistence with field validation."""
    async def list(self) -> Sequence[BookLike]: ...
    async def get(self, book_id: BookId) -> BookLike | None: ...
    async def create(self, fields: Mapping[str, Any]) -> BookLike: ...
    async def update(self, book_id: BookId, fields: Mapping[str, Any]) -> BookLike: ...
    async def delete(self, book_id: BookId) -> None: ...
    def build(
        self, fields: Mapping[str, Any], book_id: BookId | None = None,
    ) -> BookLike: ...


class ViewRenderer(Protocol):
    """Contract for turning a template name and data bag into an HTML response."""
    def render(
        self,
        request: Request,
        template_name: str,
        context: dict[str, Any] | None = None,
        status_code: int = 200,
    ) -> Response: ...
