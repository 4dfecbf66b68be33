"""Bookshelf — FastAPI application entry point (composition root).

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The fault boundary is installed here by register_error_handlers(app)
    - Database initialized on startup via the lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from bookshelf import __version__
from bookshelf.api.error_handlers import register_error_handlers
from bookshelf.api.routes import books, health
from bookshelf.config import get_settings
from bookshelf.infrastructure.database import init_db
from bookshelf.infrastructure.observability import setup_logging
from bookshelf.infrastructure.views import STATIC_DIR

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()
    logger.info("Bookshelf started")
    yield
    await manager.close()
    logger.info("Bookshelf shutting down")


app = FastAPI(title="Bookshelf", version=__version__, lifespan=lifespan)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

app.include_router(health.router)
app.include_router(books.router)


@app.get("/", include_in_schema=False)
async def index():
    return RedirectResponse(books.BOOKS_PATH, status_code=status.HTTP_302_FOUND)


register_error_handlers(app)
