"""
Exceptions raised by the catalog core.

Only whole-operation failures are exceptions. A single corrupt record
found while reading the backing file is reported as a ``Skipped``
result instead (see ``results.py``) and never reaches the caller.
"""


class BookshelfError(Exception):
    """Base class for catalog errors."""


class InvalidArgumentError(BookshelfError, ValueError):
    """A required argument was missing or unusable."""


class EmptyCollectionError(BookshelfError):
    """The operation needs at least one book in the catalog."""
