"""Domain Types — identity and field names shared by the store and the router.

Invariants:
    - BookId wraps the store-assigned integer primary key
    - BookField members are exactly the editable form fields
"""

from enum import Enum
from typing import NewType

BookId = NewType("BookId", int)


class BookField(str, Enum):
    """Editable Book fields, in form order."""
    TITLE = "title"
    AUTHOR = "author"
    GENRE = "genre"
    YEAR = "year"

    @property
    def label(self) -> str:
        return self.value.capitalize()

