"""Fault Boundary — global exception handlers that turn errors into HTML error pages.

Invariants:
    - ResourceNotFoundError → error page, status 404 (one policy for every route)
    - Other BookshelfError → error page with the error's own http_status
    - Unknown routes and malformed path parameters → "Page Not Found", status 404
    - Exception (catch-all) → error page, status 500, never leaks internal details

Design Decisions:
    - Wired by an explicit register_error_handlers(app) call in the composition root
    - BookValidationError is normally handled by the route; reaching here means a
      handler let it escape, so it renders as a 400 error page
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.core.errors import (
    BookNotFoundError, BookshelfError, BookValidationError, ResourceNotFoundError,
)
from bookshelf.infrastructure.views import get_renderer

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Sorry! We couldn't find the page you were looking for."
BOOK_NOT_FOUND_MESSAGE = "Sorry! We couldn't find the book you were looking for."
SERVER_ERROR_MESSAGE = "Sorry! There was an unexpected error on the server."


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_bookshelf_error_handler(app)
    _register_request_validation_handler(app)
    _register_http_exception_handler(app)
    _register_generic_error_handler(app)


def error_title(status_code: int) -> str:
    """Reason phrase for the status, e.g. "Bad Request", "Service Unavailable"."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Bad Request" if status_code < 500 else "Server Error"


def render_error_page(request: Request, status_code: int, message: str):
    """Render error.html with the given status and user-facing message."""
    template = "page-not-found.html" if status_code == 404 else "error.html"
    title = "Page Not Found" if status_code == 404 else error_title(status_code)
    return get_renderer().render(request, template, {
        "title": title,
        "error": {"status": status_code, "message": message},
    }, status_code=status_code)


def _describe(exc: BookshelfError) -> tuple[int, str]:
    """Map a domain error to (status, user-facing message)."""
    match exc:
        case BookNotFoundError():
            return status.HTTP_404_NOT_FOUND, BOOK_NOT_FOUND_MESSAGE
        case ResourceNotFoundError():
            return status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE
        case BookValidationError():
            return status.HTTP_400_BAD_REQUEST, exc.message
        case _:
            return exc.http_status, SERVER_ERROR_MESSAGE


def _register_bookshelf_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(BookshelfError)
    async def bookshelf_error_handler(request: Request, exc: BookshelfError):
        status_code, message = _describe(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "book_id": exc.context.book_id,
                "status_code": status_code,
            },
        )
        return render_error_page(request, status_code, message)


def _register_request_validation_handler(app: FastAPI) -> None:
    """Malformed path parameters (e.g. /books/abc) name no page."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Invalid request on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "status_code": 404},
        )
        return render_error_page(request, status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)


def _register_http_exception_handler(app: FastAPI) -> None:
    """Routing-level HTTP errors (unknown path, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = NOT_FOUND_MESSAGE
        else:
            message = str(exc.detail)
        logger.info(
            f"HTTP {exc.status_code} on {request.url.path}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        return render_error_page(request, exc.status_code, message)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method, "status_code": 500},
        )
        return render_error_page(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE,
        )
