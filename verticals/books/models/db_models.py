"""SQLAlchemy models for the books vertical.

The to_dict() method provides the standard serialisation interface used by
the store and the router.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base


class Book(Base):
    """A catalog entry, keyed by isbn."""

    __tablename__ = "books"

    isbn: Mapped[str] = mapped_column(String, primary_key=True)
    amazon_url: Mapped[str] = mapped_column(String, nullable=False)
    author: Mapped[str] = mapped_column(String, nullable=False)
    language: Mapped[str] = mapped_column(String, nullable=False)
    pages: Mapped[int] = mapped_column(Integer, nullable=False)
    publisher: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False, index=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_dict(self) -> dict:
        return {
            "isbn": self.isbn,
            "amazon_url": self.amazon_url,
            "author": self.author,
            "language": self.language,
            "pages": self.pages,
            "publisher": self.publisher,
            "title": self.title,
            "year": self.year,
        }
