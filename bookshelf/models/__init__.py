"""ORM Models — imported here so Base.metadata is complete before create_all/autogenerate."""

from bookshelf.models.book import Book  # noqa: F401
