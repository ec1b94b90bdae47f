"""Test the /books HTTP surface end to end."""
import logging

from fastapi.testclient import TestClient

from api.main import create_app
from core.config import Settings


def test_list_books_one_book(client, test_book):
    response = client.get("/books")
    assert response.status_code == 200
    assert response.json() == {"books": [test_book]}


def test_list_books_empty(client):
    response = client.get("/books")
    assert response.status_code == 200
    assert response.json() == {"books": []}


def test_list_books_ordered_by_title(client, test_book, new_book_data):
    client.post("/books", json=new_book_data)
    response = client.get("/books")
    titles = [b["title"] for b in response.json()["books"]]
    # "How to..." sorts before "Power-Up..."
    assert titles == [new_book_data["title"], test_book["title"]]


def test_get_book(client, test_book):
    response = client.get(f"/books/{test_book['isbn']}")
    assert response.status_code == 200
    assert response.json() == {"book": test_book}


def test_get_book_not_found(client, test_book):
    response = client.get("/books/58490")
    assert response.status_code == 404
    assert response.json()["error"]["status"] == 404


def test_create_book(client, new_book_data):
    response = client.post("/books", json=new_book_data)
    assert response.status_code == 201
    assert response.json() == {"book": new_book_data}

    fetched = client.get(f"/books/{new_book_data['isbn']}")
    assert fetched.json() == {"book": new_book_data}


def test_create_book_nan_year(client, new_book_data):
    payload = {**new_book_data, "year": "two thousand and nineteen"}
    response = client.post("/books", json=payload)
    assert response.status_code == 400
    assert "year must be an integer" in response.json()["error"]["message"]


def test_create_book_nan_pages(client, new_book_data):
    payload = {**new_book_data, "pages": "six hundred"}
    response = client.post("/books", json=payload)
    assert response.status_code == 400


def test_create_book_missing_field(client, new_book_data):
    payload = {k: v for k, v in new_book_data.items() if k != "publisher"}
    response = client.post("/books", json=payload)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "publisher is required"
    assert client.get("/books").json() == {"books": []}


def test_create_book_partial_payload(client, test_book):
    response = client.post("/books", json={"isbn": "0691161518", "title": "How to get this money!"})
    assert response.status_code == 400


def test_create_book_unknown_field(client, new_book_data):
    response = client.post("/books", json={**new_book_data, "rating": 5})
    assert response.status_code == 400
    assert "rating" in response.json()["error"]["message"]


def test_create_book_invalid_json(client):
    response = client.post(
        "/books",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_create_book_duplicate_isbn(client, test_book, book_data):
    response = client.post("/books", json=book_data)
    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal server error", "status": 500}}


def test_update_book(client, test_book, new_book_data):
    payload = {**new_book_data, "isbn": test_book["isbn"]}
    response = client.put(f"/books/{test_book['isbn']}", json=payload)
    assert response.status_code == 200
    assert response.json() == {"book": payload}
    assert client.get(f"/books/{test_book['isbn']}").json() == {"book": payload}


def test_update_book_without_isbn_in_body(client, test_book, new_book_data):
    payload = {k: v for k, v in new_book_data.items() if k != "isbn"}
    response = client.put(f"/books/{test_book['isbn']}", json=payload)
    assert response.status_code == 200
    assert response.json()["book"]["isbn"] == test_book["isbn"]


def test_update_book_missing_fields(client, test_book):
    response = client.put(
        f"/books/{test_book['isbn']}",
        json={"isbn": test_book["isbn"], "title": "How to get this money!"},
    )
    assert response.status_code == 400
    assert client.get(f"/books/{test_book['isbn']}").json() == {"book": test_book}


def test_update_book_isbn_mismatch(client, test_book, new_book_data):
    response = client.put(f"/books/{test_book['isbn']}", json=new_book_data)
    assert response.status_code == 400


def test_update_book_not_found(client, new_book_data):
    payload = {k: v for k, v in new_book_data.items() if k != "isbn"}
    response = client.put("/books/58490", json=payload)
    assert response.status_code == 404


def test_delete_book(client, test_book):
    response = client.delete(f"/books/{test_book['isbn']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Book deleted"}

    again = client.delete(f"/books/{test_book['isbn']}")
    assert again.status_code == 404
    assert client.get("/books").json() == {"books": []}


def test_request_id_echoed(client):
    response = client.get("/books", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json()["error"]["status"] == 404


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_book_pages_too_large(client, new_book_data):
    response = client.post("/books", json={**new_book_data, "pages": 2 ** 63})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "pages must be an integer"
    assert client.get("/books").json() == {"books": []}


def test_create_book_year_outside_int32(client, new_book_data):
    response = client.post("/books", json={**new_book_data, "year": 2 ** 31})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "year must be an integer"


def test_unreachable_database_uses_error_envelope():
    settings = Settings(
        database_url="postgresql+asyncpg://u:p@127.0.0.1:1/books",
        create_tables=False,
    )
    with TestClient(create_app(settings), raise_server_exceptions=False) as unreachable:
        response = unreachable.get("/books")
    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal server error", "status": 500}}


class BrokenStore:
    async def list_all(self):
        raise OSError("connection reset by peer")


def test_unexpected_store_failure_uses_error_envelope(settings, caplog):
    caplog.set_level(logging.INFO, logger="api.middleware")
    with TestClient(create_app(settings), raise_server_exceptions=False) as broken:
        broken.app.state.book_store = BrokenStore()
        response = broken.get("/books")
    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal server error", "status": 500}}
    assert any("GET /books -> 500" in r.getMessage() for r in caplog.records)
