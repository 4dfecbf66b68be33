"""SqlBookStore tests — persistence and validation against in-memory SQLite.

Tests cover:
    - create assigns an id and persists exactly the submitted values
    - rejected create/update leave the database untouched
    - get returns None for unknown ids; update/delete raise BookNotFoundError
    - list reflects N creates and M deletes
    - build returns an unsaved record holding the raw submission
"""

import pytest
from sqlalchemy import inspect

from bookshelf.core.errors import BookNotFoundError, BookValidationError
from bookshelf.models.book import Book


async def test_create_then_get_round_trips_fields(store):
    created = await store.create({
        "title": "The Left Hand of Darkness", "author": "Ursula K. Le Guin",
        "genre": "Science Fiction", "year": "1969",
    })
    assert created.id is not None

    fetched = await store.get(created.id)
    assert fetched is not None
    assert (fetched.title, fetched.author, fetched.genre, fetched.year) == (
        "The Left Hand of Darkness", "Ursula K. Le Guin", "Science Fiction", 1969,
    )


async def test_create_sets_timestamps(store):
    book = await store.create({"title": "Emma", "author": "Jane Austen"})
    assert book.created_at is not None
    assert book.updated_at is not None


async def test_rejected_create_persists_nothing(store, count_books):
    with pytest.raises(BookValidationError) as exc_info:
        await store.create({"title": "", "author": "Herbert"})
    assert exc_info.value.fields == ["title"]
    assert await count_books() == 0


async def test_get_unknown_id_returns_none(store):
    assert await store.get(999) is None


async def test_update_replaces_editable_fields(store, seed_book):
    await store.update(seed_book.id, {
        "title": "Dune Messiah", "author": "Frank Herbert", "genre": "", "year": "1969",
    })
    book = await store.get(seed_book.id)
    assert book.title == "Dune Messiah"
    assert book.genre is None
    assert book.year == 1969


async def test_rejected_update_keeps_stored_values(store, seed_book, test_session_factory):
    with pytest.raises(BookValidationError):
        await store.update(seed_book.id, {"title": "Dune", "author": ""})

    async with test_session_factory() as fresh:
        book = await fresh.get(Book, seed_book.id)
    assert book.author == "Frank Herbert"


async def test_update_unknown_id_raises_not_found(store):
    with pytest.raises(BookNotFoundError) as exc_info:
        await store.update(404, {"title": "Dune", "author": "Herbert"})
    assert exc_info.value.book_id == 404


async def test_delete_then_get_is_not_found(store, seed_book):
    await store.delete(seed_book.id)
    assert await store.get(seed_book.id) is None


async def test_delete_unknown_id_raises_not_found(store):
    with pytest.raises(BookNotFoundError):
        await store.delete(12345)


async def test_list_counts_creates_minus_deletes(store):
    created = [
        await store.create({"title": f"Book {i}", "author": "Anon"})
        for i in range(5)
    ]
    for book in created[:2]:
        await store.delete(book.id)

    books = await store.list()
    assert [b.title for b in books] == ["Book 2", "Book 3", "Book 4"]


async def test_build_is_transient_and_keeps_raw_values(store):
    book = store.build({"title": "", "author": "Herbert", "year": "soon"}, book_id=7)
    assert book.id == 7
    assert book.title == ""
    assert book.year == "soon"
    assert inspect(book).transient
