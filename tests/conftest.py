"""Root conftest — async DB + FastAPI test client shared by every test package.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test database
    - db_manager patched so the readiness probe sees the test engine
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_CREATE_TABLES", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)

import bookshelf.infrastructure.database as db_module  # noqa: E402
import bookshelf.models  # noqa: E402,F401
from bookshelf.db.base import Base  # noqa: E402
from bookshelf.infrastructure.book_store import SqlBookStore  # noqa: E402
from bookshelf.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
from bookshelf.main import app  # noqa: E402
from bookshelf.models.book import Book  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlBookStore(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_book(test_db):
    """Insert one book directly into the test DB."""
    book = Book(title="Dune", author="Frank Herbert", genre="Science Fiction", year=1965)
    test_db.add(book)
    await test_db.commit()
    await test_db.refresh(book)
    return book


@pytest.fixture
def count_books(test_session_factory):
    """Count persisted books through a fresh session (no identity-map staleness)."""
    async def _count() -> int:
        async with test_session_factory() as session:
            result = await session.execute(select(func.count()).select_from(Book))
            return result.scalar_one()
    return _count
