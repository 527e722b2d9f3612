"""
Tagged results returned instead of raising.

``Decoded`` / ``Skipped`` are produced by the record codec; the storage
read loop keeps the former and drops the latter. ``Unsupported`` marks
a catalog capability that exists in the interface but is not
implemented, so callers can check for it rather than catch it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .models import Book


@dataclass(frozen=True)
class Decoded:
    book: Book


@dataclass(frozen=True)
class Skipped:
    reason: str


@dataclass(frozen=True)
class Unsupported:
    capability: str

    @property
    def message(self) -> str:
        return f"'{self.capability}' is not supported by this catalog"


DecodeResult = Union[Decoded, Skipped]
