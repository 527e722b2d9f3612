from decimal import Decimal
from typing import Iterable, List

import pytest

from bookshelf.catalog import BookCatalog
from bookshelf.models import Book
from bookshelf.storage import FileStorage


class RecordingStorage:
    """In-memory backend that keeps every write for inspection."""

    def __init__(self, books=None):
        self.initial = list(books or [])
        self.writes: List[List[Book]] = []

    def read(self) -> List[Book]:
        return list(self.initial)

    def write(self, books: Iterable[Book]) -> None:
        self.writes.append(list(books))


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep a developer's env vars and .env file out of the tests."""
    monkeypatch.delenv("BOOKSHELF_PATH_TO_FILE", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_book():
    def _make(**overrides) -> Book:
        fields = dict(
            isbn="978-1",
            author="A. Author",
            title="Title",
            publisher="Pub",
            year=2001,
            page_count=300,
            price=Decimal("19.99"),
        )
        fields.update(overrides)
        return Book(**fields)

    return _make


@pytest.fixture
def book(make_book):
    return make_book()


@pytest.fixture
def book_file(tmp_path):
    return tmp_path / "Book.txt"


@pytest.fixture
def file_storage(book_file):
    return FileStorage(book_file)


@pytest.fixture
def recording_storage():
    return RecordingStorage()


@pytest.fixture
def catalog(recording_storage):
    return BookCatalog(recording_storage)
