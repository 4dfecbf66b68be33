"""Book Routes — server-rendered CRUD pages for the catalog.

Invariants:
    - Successful writes redirect (302); pages are only rendered on GET or on rejected input
    - BookValidationError is handled here by re-rendering the submitted form
    - Unknown ids raise BookNotFoundError; the fault boundary renders the 404 page
    - Everything else propagates to the fault boundary untouched
    - Literal paths (/new) are registered before /{book_id} so they win the match
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Path, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.domain_types import BookId
from bookshelf.core.errors import BookNotFoundError, BookValidationError
from bookshelf.core.repository_protocols import BookLike, BookStore, ViewRenderer
from bookshelf.infrastructure.book_store import SqlBookStore
from bookshelf.infrastructure.database import get_db
from bookshelf.infrastructure.views import get_renderer

logger = logging.getLogger(__name__)

BOOKS_PATH = "/books"
# Ids outside a 32-bit INTEGER column cannot exist; they fail as 404 before any query.
MAX_BOOK_ID = 2**31 - 1
BookIdParam = Annotated[int, Path(ge=1, le=MAX_BOOK_ID)]
router = APIRouter(prefix=BOOKS_PATH, tags=["books"])


def get_book_store(db: AsyncSession = Depends(get_db)) -> BookStore:
    return SqlBookStore(db)


async def book_form(
    title: str = Form(""),
    author: str = Form(""),
    genre: str = Form(""),
    year: str = Form(""),
) -> dict[str, str]:
    """Submitted book fields; absent inputs arrive as empty strings."""
    return {"title": title, "author": author, "genre": genre, "year": year}


async def get_book_or_404(store: BookStore, book_id: BookId) -> BookLike:
    book = await store.get(book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("")
async def list_books(
    request: Request,
    store: BookStore = Depends(get_book_store),
    views: ViewRenderer = Depends(get_renderer),
):
    books = await store.list()
    return views.render(request, "books/index.html", {"books": books, "title": "Books"})


@router.get("/new")
async def new_book_form(
    request: Request, views: ViewRenderer = Depends(get_renderer),
):
    return views.render(request, "books/new.html", {"book": {}, "title": "New Book"})


@router.post("")
@router.post("/new")
async def create_book(
    request: Request,
    fields: dict[str, str] = Depends(book_form),
    store: BookStore = Depends(get_book_store),
    views: ViewRenderer = Depends(get_renderer),
):
    try:
        book = await store.create(fields)
    except BookValidationError as exc:
        logger.info(
            f"Rejected new book: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return views.render(request, "books/new.html", {
            "book": store.build(fields),
            "errors": exc.field_errors,
            "title": "New Book",
        })
    logger.info("Book created", extra={"book_id": book.id})
    return _redirect(f"{BOOKS_PATH}/{book.id}")


@router.get("/{book_id}")
async def show_book(
    request: Request,
    book_id: BookIdParam,
    store: BookStore = Depends(get_book_store),
    views: ViewRenderer = Depends(get_renderer),
):
    book = await get_book_or_404(store, book_id)
    return views.render(request, "books/show.html", {"book": book, "title": book.title})


@router.get("/{book_id}/edit")
async def edit_book_form(
    request: Request,
    book_id: BookIdParam,
    store: BookStore = Depends(get_book_store),
    views: ViewRenderer = Depends(get_renderer),
):
    book = await get_book_or_404(store, book_id)
    return views.render(request, "books/edit.html", {"book": book, "title": "Edit Book"})


@router.post("/{book_id}")
@router.post("/{book_id}/edit")
async def update_book(
    request: Request,
    book_id: BookIdParam,
    fields: dict[str, str] = Depends(book_form),
    store: BookStore = Depends(get_book_store),
    views: ViewRenderer = Depends(get_renderer),
):
    await get_book_or_404(store, book_id)
    try:
        await store.update(book_id, fields)
    except BookValidationError as exc:
        logger.info(
            f"Rejected edit: {exc.message}",
            extra={"book_id": book_id, "error_code": exc.code},
        )
        return views.render(request, "books/edit.html", {
            "book": store.build(fields, book_id=book_id),
            "errors": exc.field_errors,
            "title": "Edit Book",
        })
    logger.info("Book updated", extra={"book_id": book_id})
    return _redirect(BOOKS_PATH)


@router.get("/{book_id}/delete")
async def confirm_delete_book(
    request: Request,
    book_id: BookIdParam,
    store: BookStore = Depends(get_book_store),
    views: ViewRenderer = Depends(get_renderer),
):
    book = await get_book_or_404(store, book_id)
    return views.render(request, "books/delete.html", {"book": book, "title": "Delete Book"})


@router.post("/{book_id}/delete")
async def delete_book(
    book_id: BookIdParam, store: BookStore = Depends(get_book_store),
):
    await get_book_or_404(store, book_id)
    await store.delete(book_id)
    logger.info("Book deleted", extra={"book_id": book_id})
    return _redirect(BOOKS_PATH)
