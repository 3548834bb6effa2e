from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from bookshelf.core.settings import ServerSettings
from bookshelf.main import create_app
from bookshelf.services.book_store import BookStore, get_book_store


@pytest.fixture()
def store() -> BookStore:
    return BookStore()


@pytest.fixture()
def client(store: BookStore):
    app = create_app(ServerSettings())
    app.dependency_overrides[get_book_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _payload(**overrides):
    payload = {
        "name": "Laskar Pelangi",
        "year": 2005,
        "author": "Andrea Hirata",
        "summary": "Sepuluh anak di Belitung.",
        "publisher": "Bentang Pustaka",
        "pageCount": 529,
        "readPage": 120,
        "reading": True,
    }
    payload.update(overrides)
    return payload


def _create(client: TestClient, **overrides) -> str:
    response = client.post("/books", json=_payload(**overrides))
    assert response.status_code == 201
    return response.json()["data"]["bookId"]


def test_create_book_returns_id(client: TestClient):
    response = client.post("/books", json=_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Buku berhasil ditambahkan"
    assert body["data"]["bookId"]


def test_finished_book_is_marked_finished(client: TestClient):
    response = client.post("/books", json={"name": "A", "pageCount": 100, "readPage": 100})
    assert response.status_code == 201
    book_id = response.json()["data"]["bookId"]

    detail = client.get(f"/books/{book_id}")
    assert detail.status_code == 200
    assert detail.json()["data"]["book"]["finished"] is True


def test_create_without_name_fails(client: TestClient):
    payload = _payload()
    del payload["name"]

    response = client.post("/books", json=payload)

    assert response.status_code == 400
    assert response.json() == {
        "status": "fail",
        "message": "Gagal menambahkan buku. Mohon isi nama buku",
    }


def test_create_with_empty_name_fails(client: TestClient):
    response = client.post("/books", json=_payload(name=""))

    assert response.status_code == 400
    assert response.json()["message"] == "Gagal menambahkan buku. Mohon isi nama buku"


def test_create_with_page_overflow_leaves_shelf_unchanged(client: TestClient, store: BookStore):
    response = client.post("/books", json={"name": "B", "pageCount": 100, "readPage": 150})

    assert response.status_code == 400
    assert response.json() == {
        "status": "fail",
        "message": "Gagal menambahkan buku. readPage tidak boleh lebih besar dari pageCount",
    }
    assert len(store) == 0
    assert client.get("/books").json()["data"]["books"] == []


def test_create_rejects_non_numeric_page_count(client: TestClient, store: BookStore):
    response = client.post("/books", json=_payload(pageCount="529"))

    assert response.status_code == 400
    assert response.json() == {
        "status": "fail",
        "message": "Gagal menambahkan buku. Data buku tidak valid",
    }
    assert len(store) == 0


def test_create_rejects_negative_read_page(client: TestClient):
    response = client.post("/books", json=_payload(readPage=-1))

    assert response.status_code == 400
    assert response.json()["status"] == "fail"


def test_list_books_caps_at_three_in_insertion_order(client: TestClient):
    ids = [_create(client, name=f"Book {index}", publisher=f"Publisher {index}") for index in range(4)]

    response = client.get("/books")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    books = body["data"]["books"]
    assert [book["id"] for book in books] == ids[:3]
    assert books[0] == {"id": ids[0], "name": "Book 0", "publisher": "Publisher 0"}
    assert all(set(book) == {"id", "name", "publisher"} for book in books)


def test_get_book_returns_full_record(client: TestClient):
    book_id = _create(client)

    response = client.get(f"/books/{book_id}")

    assert response.status_code == 200
    book = response.json()["data"]["book"]
    assert book["id"] == book_id
    assert book["name"] == "Laskar Pelangi"
    assert book["pageCount"] == 529
    assert book["readPage"] == 120
    assert book["reading"] is True
    assert book["finished"] is False
    assert book["insertedAt"] == book["updatedAt"]
    assert book["insertedAt"].endswith("Z")


def test_get_unknown_book_returns_404(client: TestClient):
    response = client.get("/books/missing")

    assert response.status_code == 404
    assert response.json() == {"status": "fail", "message": "Buku tidak ditemukan"}


def test_update_book_replaces_fields(client: TestClient):
    book_id = _create(client)
    original = client.get(f"/books/{book_id}").json()["data"]["book"]

    response = client.put(
        f"/books/{book_id}",
        json=_payload(name="Sang Pemimpi", pageCount=300, readPage=300, reading=False),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Buku berhasil diperbarui"
    book = body["data"]["book"]
    assert book["id"] == book_id
    assert book["name"] == "Sang Pemimpi"
    assert book["finished"] is True
    assert book["reading"] is False
    assert book["insertedAt"] == original["insertedAt"]

    fetched = client.get(f"/books/{book_id}").json()["data"]["book"]
    assert fetched == book


def test_update_unknown_book_returns_404(client: TestClient, store: BookStore):
    book_id = _create(client)

    response = client.put("/books/missing", json=_payload(name="Other"))

    assert response.status_code == 404
    assert response.json() == {
        "status": "fail",
        "message": "Gagal memperbarui buku. Id tidak ditemukan",
    }
    assert store.get_book(book_id).name == "Laskar Pelangi"


def test_update_unknown_book_without_name_reports_not_found(client: TestClient):
    response = client.put("/books/missing", json={"pageCount": 10, "readPage": 20})

    assert response.status_code == 404
    assert response.json()["message"] == "Gagal memperbarui buku. Id tidak ditemukan"


def test_update_without_name_fails(client: TestClient):
    book_id = _create(client)

    response = client.put(f"/books/{book_id}", json=_payload(name=None))

    assert response.status_code == 400
    assert response.json() == {
        "status": "fail",
        "message": "Gagal memperbarui buku. Mohon isi nama buku",
    }


def test_update_with_page_overflow_fails(client: TestClient, store: BookStore):
    book_id = _create(client)

    response = client.put(f"/books/{book_id}", json=_payload(pageCount=10, readPage=11))

    assert response.status_code == 400
    assert response.json() == {
        "status": "fail",
        "message": "Gagal memperbarui buku. readPage tidak boleh lebih besar dari pageCount",
    }
    assert store.get_book(book_id).page_count == 529


def test_update_rejects_invalid_body(client: TestClient):
    book_id = _create(client)

    response = client.put(f"/books/{book_id}", json=_payload(reading="yes"))

    assert response.status_code == 400
    assert response.json()["message"] == "Gagal memperbarui buku. Data buku tidak valid"


def test_delete_book(client: TestClient):
    book_id = _create(client)

    response = client.delete(f"/books/{book_id}")

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Buku berhasil dihapus"}
    assert client.get(f"/books/{book_id}").status_code == 404
    assert client.get("/books").json()["data"]["books"] == []


def test_delete_twice_reports_not_found(client: TestClient):
    book_id = _create(client)
    client.delete(f"/books/{book_id}")

    response = client.delete(f"/books/{book_id}")

    assert response.status_code == 404
    assert response.json() == {
        "status": "fail",
        "message": "Buku gagal dihapus. Id tidak ditemukan",
    }


def test_unknown_route_uses_fail_envelope(client: TestClient):
    response = client.get("/shelves")

    assert response.status_code == 404
    assert response.json()["status"] == "fail"
