"""Pydantic schemas for API responses."""

from enum import Enum

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ValidationMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class BookResponse(BaseModel):
    isbn: str
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int


class BookEnvelope(BaseModel):
    book: BookResponse


class BookListEnvelope(BaseModel):
    books: list[BookResponse]


class MessageResponse(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    message: str
    status: int


class ErrorResponse(BaseModel):
    error: ErrorDetail
