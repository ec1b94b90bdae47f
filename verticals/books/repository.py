"""Book store: the only component that reads or writes the `books` table.

Extends BaseRepository with the book key and ordering, and exposes the
store operations under their domain names.
"""

import logging
from typing import Any

from fastapi import Request

from patterns.repository import BaseRepository
from verticals.books.models.db_models import Book

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Book store
# ---------------------------------------------------------------------------

class BookStore(BaseRepository[Book]):
    """Persistence for Book rows. Every call hits the database."""

    model = Book
    key = "isbn"
    ordering = ("title", "isbn")
    label = "book"

    async def list_all(self) -> list[dict]:
        """All books ordered by title, then isbn."""
        return await self.list()

    async def get_by_isbn(self, isbn: str) -> dict:
        return await self.get(isbn)

    async def create(self, data: dict[str, Any]) -> dict:
        book = await super().create(data)
        logger.info("Created book %s", book["isbn"])
        return book

    async def update(self, isbn: str, data: dict[str, Any]) -> dict:
        book = await super().update(isbn, data)
        logger.info("Updated book %s", isbn)
        return book

    async def remove(self, isbn: str) -> None:
        await self.delete(isbn)
        logger.info("Deleted book %s", isbn)


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_book_store(request: Request) -> BookStore:
    """FastAPI dependency returning the store built at startup."""
    return request.app.state.book_store
