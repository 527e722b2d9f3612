"""
Text encoding of a single book record.

A record is the seven book fields joined by ``/`` in a fixed order,
with a trailing delimiter::

    isbn/author/title/publisher/year/page_count/price/

The storage backend writes each encoded record as one length-prefixed
chunk. The format has no escaping: a ``/`` inside a field value
shifts every following token, so such a record either fails to decode
or decodes into the wrong fields. ``Book`` refuses text fields that
contain the delimiter, so records written by :func:`encode` are safe.

:func:`decode` also accepts a record whose trailing delimiter is
missing. Numbers must be plain ASCII digits (with a decimal point for
the price), the only form :func:`encode` writes.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import List

from pydantic import ValidationError

from .models import Book
from .results import DecodeResult, Decoded, Skipped


DELIMITER = "/"
FIELD_COUNT = 7

_INTEGER = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[0-9]+(\.[0-9]+)?")


def encode(book: Book) -> str:
    parts = [
        book.isbn,
        book.author,
        book.title,
        book.publisher,
        str(book.year),
        str(book.page_count),
        # plain notation, never an exponent such as 1E+2
        format(book.price, "f"),
    ]
    return "".join(part + DELIMITER for part in parts)


def _split(chunk: str) -> List[str]:
    tokens = chunk.split(DELIMITER)
    if tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


def decode(chunk: str) -> DecodeResult:
    """Parse one record produced by :func:`encode`.

    Parameters
    ----------
    chunk : str
        The text of a single record.

    Returns
    -------
    DecodeResult
        ``Decoded`` holding the book, or ``Skipped`` with the reason
        the record is malformed. This function does not raise for bad
        input.
    """
    tokens = _split(chunk)
    if len(tokens) != FIELD_COUNT:
        return Skipped(f"expected {FIELD_COUNT} fields, found {len(tokens)}")
    if any(not token for token in tokens):
        return Skipped("record contains an empty field")

    isbn, author, title, publisher, year, page_count, price = tokens
    if not (_INTEGER.fullmatch(year) and _INTEGER.fullmatch(page_count)):
        return Skipped("year and page count must be plain digits")
    if not _DECIMAL.fullmatch(price):
        return Skipped(f"price is not a plain decimal: {price!r}")
    try:
        book = Book(
            isbn=isbn,
            author=author,
            title=title,
            publisher=publisher,
            year=int(year),
            page_count=int(page_count),
            price=Decimal(price),
        )
    except (ValueError, InvalidOperation, ValidationError) as exc:
        return Skipped(f"invalid field value: {exc}")
    return Decoded(book)
