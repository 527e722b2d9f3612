"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /books                   : list books in catalogue order (paginated)
- POST /books                   : add a book (409 if an identical one exists)
- POST /books/remove            : remove a book by value
- POST /books/sort              : reorder the catalogue, optionally persisting
- GET  /books/by-tag            : not supported (501)
- GET  /books/{isbn}/formatted  : render a book with a format code
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from ..errors import EmptyCollectionError, InvalidArgumentError
from ..formatting import format_book
from ..models import Book
from ..results import Unsupported
from .comparators import COMPARATORS, reverse
from .schemas import FormattedBook, PaginatedBooks, SortRequest
from .store import BookCatalog

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_catalog(request: Request) -> BookCatalog:
    """Return the catalogue owned by the running application.

    It is built from settings on first use when the application was
    created without one.
    """
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        catalog = BookCatalog.from_settings()
        request.app.state.catalog = catalog
    return catalog


@router.get("/books", response_model=PaginatedBooks)
def list_books(
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
    page_size: int = Query(default=12, ge=4, le=200, description="Page size"),
    catalog: BookCatalog = Depends(get_catalog),
) -> PaginatedBooks:
    books = catalog.books

    total = len(books)
    total_pages = max(1, (total + page_size - 1) // page_size) if total > 0 else 1
    page = min(max(1, page), total_pages)

    start = (page - 1) * page_size
    end = start + page_size

    return PaginatedBooks(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        items=list(books[start:end]),
    )


@router.post("/books", response_model=Book, status_code=201)
def add_book(book: Book, catalog: BookCatalog = Depends(get_catalog)) -> Book:
    if not catalog.add(book):
        raise HTTPException(status_code=409, detail="Book already in catalogue")
    return book


@router.post("/books/remove")
def remove_book(book: Book, catalog: BookCatalog = Depends(get_catalog)):
    """Remove the first book with the same fields. Unknown books are ignored."""
    catalog.remove(book)
    return {"status": "ok", "total": len(catalog)}


@router.post("/books/sort", response_model=PaginatedBooks)
def sort_books(
    req: SortRequest = Body(...),
    catalog: BookCatalog = Depends(get_catalog),
) -> PaginatedBooks:
    comparator = COMPARATORS[req.field]
    if req.descending:
        comparator = reverse(comparator)
    try:
        catalog.sort_by(comparator)
    except EmptyCollectionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if req.persist:
        catalog.save()
    books = list(catalog.books)
    return PaginatedBooks(
        page=1,
        page_size=len(books),
        total=len(books),
        total_pages=1,
        items=books,
    )


@router.get("/books/by-tag")
def find_by_tag(
    tag: Optional[str] = Query(default=None, description="Tag to look for"),
    catalog: BookCatalog = Depends(get_catalog),
):
    result = catalog.find_by_tag(tag)
    if isinstance(result, Unsupported):
        raise HTTPException(status_code=501, detail=result.message)
    return result


@router.get("/books/{isbn}/formatted", response_model=FormattedBook)
def formatted_book(
    isbn: str,
    code: str = Query(default="G", min_length=1, description="Format code"),
    catalog: BookCatalog = Depends(get_catalog),
) -> FormattedBook:
    book = next((b for b in catalog.books if b.isbn == isbn), None)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    try:
        text = format_book(book, code)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return FormattedBook(isbn=isbn, code=code, text=text)
