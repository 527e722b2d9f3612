"""
Human-readable rendering of books.

A ``BookFormatter`` maps single-letter format codes to rendering
functions. ``format(book, "L")`` goes through the default formatter;
build a formatter with extra codes via ``BookFormatter.with_code``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .errors import InvalidArgumentError
from .models import Book

Renderer = Callable[[Book], str]


def _general(book: Book) -> str:
    return (
        f"{book.isbn}, {book.author}, {book.title}, {book.publisher}, "
        f"{book.year}, {book.page_count} pages, {format(book.price, 'f')}"
    )


def _short(book: Book) -> str:
    return f"{book.author}, {book.title}"


def _limited_edition(book: Book) -> str:
    return (
        f"Limited edition: {book.author}, {book.title}. "
        f"Special Price: {format(book.price, 'f')}"
    )


class BookFormatter:
    def __init__(self, renderers: Optional[Dict[str, Renderer]] = None) -> None:
        self._renderers: Dict[str, Renderer] = dict(renderers or {})

    @property
    def codes(self):
        return sorted(self._renderers)

    def with_code(self, code: str, renderer: Renderer) -> "BookFormatter":
        if not code:
            raise InvalidArgumentError("format code can't be empty")
        renderers = dict(self._renderers)
        renderers[code] = renderer
        return BookFormatter(renderers)

    def format(self, value: Any, code: str = "G") -> str:
        """Render ``value`` with the renderer registered for ``code``.

        Anything that is not a ``Book`` is rendered with ``str()``.
        """
        if not isinstance(value, Book):
            return str(value)
        renderer = self._renderers.get(code)
        if renderer is None:
            raise InvalidArgumentError(f"unknown format code: {code!r}")
        return renderer(value)


DEFAULT_FORMATTER = BookFormatter({"G": _general, "S": _short, "L": _limited_edition})


def format_book(value: Any, code: str = "G") -> str:
    return DEFAULT_FORMATTER.format(value, code)
