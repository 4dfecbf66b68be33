"""Bookshelf — server-rendered book catalog."""

__version__ = "1.0.0"
