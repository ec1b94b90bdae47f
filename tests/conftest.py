"""Shared fixtures: a fresh SQLite database file per test."""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from api.main import create_app
from core.config import Settings
from core.database import Database
from verticals.books.repository import BookStore

BOOK_DATA = {
    "isbn": "0691161518",
    "amazon_url": "http://a.co/eobPtX2",
    "author": "Matthew Lane",
    "language": "english",
    "pages": 264,
    "publisher": "Princeton University Press",
    "title": "Power-Up: Unlocking the Hidden Mathematics in Video Games",
    "year": 2017,
}

NEW_BOOK_DATA = {
    "isbn": "0783904090",
    "amazon_url": "http://a.co/djfkldc",
    "author": "Matthew Maddock",
    "language": "english",
    "pages": 600,
    "publisher": "Stanford University Press",
    "title": "How to get this money!",
    "year": 2019,
}


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'books.db'}")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def test_book(client):
    response = client.post("/books", json=BOOK_DATA)
    assert response.status_code == 201
    return response.json()["book"]


@pytest_asyncio.fixture
async def store(settings):
    database = Database.from_settings(settings)
    await database.init_models()
    yield BookStore(database)
    await database.close()


@pytest.fixture
def book_data():
    return dict(BOOK_DATA)


@pytest.fixture
def new_book_data():
    return dict(NEW_BOOK_DATA)
