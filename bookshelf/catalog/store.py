"""
In-memory catalogue of books backed by a storage backend.

A ``BookCatalog`` is hydrated from its storage once, at construction.
Every ``add`` and ``remove`` then rewrites the whole backing store
before returning. ``sort_by`` only reorders the in-memory list; call
``save()`` afterwards if the new order should survive a restart.
"""

from __future__ import annotations

import functools
import logging
from typing import Iterator, List, Optional, Tuple, Union

from ..config import get_settings
from ..errors import EmptyCollectionError, InvalidArgumentError
from ..models import Book
from ..results import Unsupported
from ..storage import FileStorage, Storage
from .comparators import Comparator

logger = logging.getLogger(__name__)


def _default_storage() -> Storage:
    return FileStorage(get_settings().path_to_file)


class BookCatalog:
    """An ordered, write-through collection of ``Book`` records."""

    def __init__(self, storage: Optional[Storage]) -> None:
        if storage is None:
            logger.error("BookCatalog was created without a storage backend")
            raise InvalidArgumentError("storage can't be None")
        self._storage: Storage = storage
        self._books: List[Book] = list(storage.read())
        logger.info("Loaded %d books from %r", len(self._books), storage)

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def books(self) -> Tuple[Book, ...]:
        """Snapshot of the catalogue in its current order."""
        return tuple(self._books)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(tuple(self._books))

    def __contains__(self, book: object) -> bool:
        return book in self._books

    def add(self, book: Book) -> bool:
        """Append a book and persist the catalogue.

        Parameters
        ----------
        book : Book
            The record to add.

        Returns
        -------
        bool
            ``False`` when a book with identical fields is already in
            the catalogue (nothing is changed or written), ``True``
            otherwise.

        Raises
        ------
        OSError
            If the write fails. The book is not kept in memory then.
        """
        if book is None:
            logger.error("add() was called without a book")
            raise InvalidArgumentError("book can't be None")
        if book in self._books:
            logger.info("Book %s is already in the catalogue", book.isbn)
            return False
        self._books.append(book)
        try:
            self.save()
        except Exception:
            # keep memory in step with the file
            self._books.pop()
            raise
        return True

    def remove(self, book: Book) -> None:
        """Remove the first book equal to ``book`` and persist.

        Removing a book that is not present is a no-op apart from the
        rewrite of the backing store.
        If the write fails the book is put back and the error propagates.
        """
        try:
            index = self._books.index(book)
        except ValueError:
            logger.info("Book %s is not in the catalogue", getattr(book, "isbn", book))
            index = None
        else:
            removed = self._books.pop(index)
        try:
            self.save()
        except Exception:
            if index is not None:
                self._books.insert(index, removed)
            raise

    def sort_by(self, comparator: Optional[Comparator]) -> None:
        """Reorder the catalogue in place.

        The sort is stable: books the comparator considers equal keep
        their relative order. Nothing is persisted.

        Parameters
        ----------
        comparator : Callable[[Book, Book], int]
            Three-way comparison of two books.

        Raises
        ------
        EmptyCollectionError
            If the catalogue has no books.
        InvalidArgumentError
            If ``comparator`` is ``None``.
        """
        if not self._books:
            logger.error("EmptyCollectionError: there are no books to sort")
            raise EmptyCollectionError("There are no books to sort.")
        if comparator is None:
            logger.error("InvalidArgumentError: comparator is None")
            raise InvalidArgumentError("comparator can't be None")
        self._books.sort(key=functools.cmp_to_key(comparator))

    def find_by_tag(self, tag: Optional[str] = None) -> Union[Book, Unsupported]:
        """Lookup by tag. Not available; always returns ``Unsupported``."""
        return Unsupported("find_by_tag")

    def save(self) -> None:
        """Rewrite the backing store with the current catalogue."""
        self._storage.write(self._books)

    def replace_storage(self, storage: Optional[Storage] = None) -> None:
        """Switch to another backend and reload the catalogue from it.

        ``None`` selects a file backend at the configured path.
        """
        self._storage = storage if storage is not None else _default_storage()
        self._books = list(self._storage.read())
        logger.info("Reloaded %d books from %r", len(self._books), self._storage)

    @classmethod
    def from_settings(cls) -> "BookCatalog":
        return cls(_default_storage())
