"""
Pydantic schema definitions for the catalog API.

Books travel over the wire as ``bookshelf.models.Book`` directly. The
models here wrap lists and requests around it.
"""

from typing import List

from pydantic import BaseModel, Field
from typing_extensions import Literal

from ..models import Book

SortField = Literal["isbn", "title", "author", "year", "page_count", "price"]


class PaginatedBooks(BaseModel):
    """A wrapper for paginated results returned from ``/books`` endpoint."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: List[Book]


class SortRequest(BaseModel):
    field: SortField
    descending: bool = False
    # Sorting only touches memory unless the caller asks for a save.
    persist: bool = Field(default=False, description="Write the new order to the backing file")


class FormattedBook(BaseModel):
    isbn: str
    code: str
    text: str
