"""Async repository pattern for database access.

Provides a generic base repository with keyed CRUD operations. Each
operation opens its own session on the injected ``Database``, runs a single
statement and commits, so every mutation is atomic. Missing rows raise
``NotFoundError``; SQLAlchemy and connection failures are translated into
``StoreError``.

Example: BookStore extending BaseRepository.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import Database
from core.errors import NotFoundError, StoreError
from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository keyed by a single primary key column.

    Subclass and set `model`, `key` and optionally `ordering`::

        class BookStore(BaseRepository[Book]):
            model = Book
            key = "isbn"
            ordering = ("title", "isbn")
    """

    model: type[ModelT]
    key: str = "id"
    ordering: tuple[str, ...] = ()
    label: str = "item"

    def __init__(self, database: Database):
        self.database = database

    @property
    def key_column(self):
        return getattr(self.model, self.key)

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self.database.session() as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            # drivers raise OSError unwrapped when the server is unreachable
            raise StoreError(f"{self.model.__tablename__} operation failed") from exc

    def _not_found(self, key_value: Any) -> NotFoundError:
        return NotFoundError(f"No {self.label} with {self.key} '{key_value}'")

    # -- List --

    async def list(self) -> list[dict]:
        """List every row in `ordering` order."""
        stmt = select(self.model).order_by(
            *(getattr(self.model, name) for name in self.ordering)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return [row.to_dict() for row in result.scalars().all()]

    # -- Get by key --

    async def get(self, key_value: Any) -> dict:
        """Get a single row by key. Raises NotFoundError if absent."""
        stmt = select(self.model).where(self.key_column == key_value)
        async with self._session() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
        if row is None:
            raise self._not_found(key_value)
        return row.to_dict()

    # -- Create --

    async def create(self, data: dict[str, Any]) -> dict:
        """Insert a new row. Constraint violations raise StoreError."""
        item = self.model(**data)
        async with self._session() as session:
            session.add(item)
            await session.flush()
            created = item.to_dict()
        return created

    # -- Replace --

    async def update(self, key_value: Any, data: dict[str, Any]) -> dict:
        """Overwrite the non-key columns of one row with a single UPDATE.

        Raises NotFoundError if no row has that key.
        """
        values = {k: v for k, v in data.items() if k != self.key}
        stmt = (
            update(self.model)
            .where(self.key_column == key_value)
            .values(**values)
            .returning(self.model)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
            updated = row.to_dict() if row is not None else None
        if updated is None:
            raise self._not_found(key_value)
        return updated

    # -- Delete --

    async def delete(self, key_value: Any) -> None:
        """Delete one row with a single DELETE. Raises NotFoundError if absent."""
        stmt = (
            delete(self.model)
            .where(self.key_column == key_value)
            .returning(self.key_column)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            deleted = result.scalar_one_or_none()
        if deleted is None:
            raise self._not_found(key_value)
