"""
Ready-made three-way comparators for ``BookCatalog.sort_by``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from ..models import Book

Comparator = Callable[[Book, Book], int]


def _normalize(s: str) -> str:
    return (s or "").strip().lower()


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def by_isbn(a: Book, b: Book) -> int:
    return _cmp(a.isbn, b.isbn)


def by_title(a: Book, b: Book) -> int:
    return _cmp(_normalize(a.title), _normalize(b.title))


def by_author(a: Book, b: Book) -> int:
    return _cmp(_normalize(a.author), _normalize(b.author))


def by_year(a: Book, b: Book) -> int:
    return _cmp(a.year, b.year)


def by_page_count(a: Book, b: Book) -> int:
    return _cmp(a.page_count, b.page_count)


def by_price(a: Book, b: Book) -> int:
    return _cmp(a.price, b.price)


def reverse(comparator: Comparator) -> Comparator:
    """Invert a comparator. Ties stay ties, so stability is kept."""

    def inverted(a: Book, b: Book) -> int:
        return comparator(b, a)

    return inverted


COMPARATORS: Dict[str, Comparator] = {
    "isbn": by_isbn,
    "title": by_title,
    "author": by_author,
    "year": by_year,
    "page_count": by_page_count,
    "price": by_price,
}
