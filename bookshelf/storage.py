# bookshelf/storage.py
"""
Flat-file persistence for the catalog.

The file is a plain sequence of chunks with no header. Each chunk is
the byte length of one encoded record as a 7-bit variable-length
integer (low groups first, high bit set on every byte but the last)
followed by that many bytes of UTF-8 text from ``codec.encode``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Protocol, Union, runtime_checkable

from . import codec
from .errors import BookshelfError, InvalidArgumentError
from .models import Book
from .results import DecodeResult, Skipped

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
# a 32-bit length never needs more than five 7-bit groups
MAX_PREFIX_BYTES = 5
MAX_CHUNK_LENGTH = 2**31 - 1


class FramingError(BookshelfError):
    """A length prefix or payload could not be read in full."""


@runtime_checkable
class Storage(Protocol):
    """Anything the catalog can hydrate from and write through to."""

    def write(self, books: Iterable[Book]) -> None:
        ...

    def read(self) -> List[Book]:
        ...


def write_7bit_int(stream: BinaryIO, value: int) -> None:
    if value < 0 or value > MAX_CHUNK_LENGTH:
        raise ValueError(f"length out of range: {value}")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    stream.write(bytes(out))


def read_7bit_int(stream: BinaryIO) -> Optional[int]:
    """Read one length prefix.

    Returns ``None`` at a clean end of stream, i.e. when not a single
    byte of the prefix is available. Raises ``FramingError`` when the
    stream ends mid-prefix or the prefix runs past five bytes.
    """
    value = 0
    shift = 0
    for position in range(MAX_PREFIX_BYTES):
        raw = stream.read(1)
        if not raw:
            if position == 0:
                return None
            raise FramingError("stream ended inside a length prefix")
        byte = raw[0]
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            if value > MAX_CHUNK_LENGTH:
                raise FramingError(f"length prefix out of range: {value}")
            return value
        shift += 7
    raise FramingError("length prefix longer than five bytes")


def write_chunk(stream: BinaryIO, text: str) -> None:
    payload = text.encode(ENCODING)
    write_7bit_int(stream, len(payload))
    stream.write(payload)


def read_chunk(stream: BinaryIO) -> Optional[bytes]:
    length = read_7bit_int(stream)
    if length is None:
        return None
    payload = stream.read(length)
    if len(payload) < length:
        raise FramingError(f"expected {length} bytes, found {len(payload)}")
    return payload


class FileStorage:
    """Stores the whole catalog in one file, rewritten on every write.

    The file handle only lives for the duration of a single ``read``
    or ``write`` call.
    """

    def __init__(self, path: Union[str, Path, None]) -> None:
        if path is None:
            logger.error("FileStorage needs a path to the catalog file")
            raise InvalidArgumentError("path can't be None")
        self.path = Path(path)

    def write(self, books: Iterable[Book]) -> None:
        count = 0
        with self.path.open("wb") as f:
            for book in books:
                write_chunk(f, codec.encode(book))
                count += 1
        logger.debug("Wrote %d books to %s", count, self.path)

    def read(self) -> List[Book]:
        books: List[Book] = []
        # a+b creates a missing file so the first run starts empty
        with self.path.open("a+b") as f:
            f.seek(0)
            while True:
                try:
                    payload = read_chunk(f)
                except FramingError as exc:
                    logger.warning("Stopped reading %s at a damaged chunk: %s", self.path, exc)
                    break
                if payload is None:
                    break
                result = self._decode(payload)
                if isinstance(result, Skipped):
                    logger.warning("Skipping malformed record in %s: %s", self.path, result.reason)
                    continue
                books.append(result.book)
        logger.debug("Read %d books from %s", len(books), self.path)
        return books

    @staticmethod
    def _decode(payload: bytes) -> DecodeResult:
        try:
            text = payload.decode(ENCODING)
        except UnicodeDecodeError as exc:
            return Skipped(f"not valid {ENCODING}: {exc}")
        return codec.decode(text)

    def __repr__(self) -> str:
        return f"FileStorage({str(self.path)!r})"
