# bookshelf/models.py
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Book(BaseModel):
    """A single catalogue record.

    Two books are equal only when every field matches. The hash only
    looks at the ISBN, which keeps it consistent with equality while
    the price is allowed to change. Text fields may not contain "/",
    the record delimiter of the storage format.
    """

    model_config = ConfigDict(validate_assignment=True)

    isbn: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    publisher: str = Field(..., min_length=1)
    year: int = Field(..., ge=0)
    page_count: int = Field(..., ge=0)
    price: Decimal = Field(..., gt=0)

    @field_validator("isbn", "author", "title", "publisher")
    @classmethod
    def _no_delimiter(cls, value: str) -> str:
        if "/" in value:
            raise ValueError("must not contain '/'")
        return value

    def change_price(self, new_price: Decimal) -> None:
        # validate_assignment rejects non-positive prices here too
        self.price = new_price

    def __hash__(self) -> int:
        return hash(self.isbn)

    def __format__(self, format_spec: str) -> str:
        from .formatting import format_book

        return format_book(self, format_spec or "G")
