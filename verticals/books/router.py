"""Books API router: CRUD endpoints.

- Bodies are validated by the book rules before any store call
- The store is injected via FastAPI Depends
- Store errors (NotFoundError, StoreError) propagate to the app's
  exception handlers, which render the error envelope
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from core.errors import ValidationError
from verticals.books.models.schemas import (
    BookEnvelope,
    BookListEnvelope,
    ErrorResponse,
    MessageResponse,
    ValidationMode,
)
from verticals.books.repository import BookStore, get_book_store
from verticals.books.rules import validate_book

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}
INVALID = {400: {"model": ErrorResponse}}


def _require_valid(payload: Any, mode: ValidationMode, isbn: str | None = None) -> dict:
    result = validate_book(payload, mode, isbn=isbn)
    if not result.all_passed:
        raise ValidationError("; ".join(result.messages))
    return payload


# ============================================================================
# Book Endpoints
# ============================================================================

@router.get("/books", response_model=BookListEnvelope)
async def list_books(store: BookStore = Depends(get_book_store)):
    """List every book, ordered by title."""
    books = await store.list_all()
    return {"books": books}


@router.get("/books/{isbn}", response_model=BookEnvelope, responses=NOT_FOUND)
async def get_book(isbn: str, store: BookStore = Depends(get_book_store)):
    book = await store.get_by_isbn(isbn)
    return {"book": book}


@router.post("/books", status_code=201, response_model=BookEnvelope, responses=INVALID)
async def create_book(
    payload: Any = Body(None),
    store: BookStore = Depends(get_book_store),
):
    """Add a new book. Every field, isbn included, is required."""
    data = _require_valid(payload, ValidationMode.CREATE)
    book = await store.create(data)
    return {"book": book}


@router.put(
    "/books/{isbn}",
    response_model=BookEnvelope,
    responses={**INVALID, **NOT_FOUND},
)
async def update_book(
    isbn: str,
    payload: Any = Body(None),
    store: BookStore = Depends(get_book_store),
):
    """Replace every non-key field of an existing book."""
    data = _require_valid(payload, ValidationMode.UPDATE, isbn=isbn)
    book = await store.update(isbn, data)
    return {"book": book}


@router.delete("/books/{isbn}", response_model=MessageResponse, responses=NOT_FOUND)
async def delete_book(isbn: str, store: BookStore = Depends(get_book_store)):
    await store.remove(isbn)
    return {"message": "Book deleted"}
