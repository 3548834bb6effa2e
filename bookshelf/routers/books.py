from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from bookshelf.core.exceptions import BookNotFoundError, BookValidationError, ValidationReason
from bookshelf.schemas.book import (
    BookCreatedData,
    BookCreatedResponse,
    BookData,
    BookListData,
    BookListResponse,
    BookOut,
    BookPayload,
    BookResponse,
    BookSummaryOut,
    BookUpdatedResponse,
    FailResponse,
    MessageResponse,
)
from bookshelf.services.book_store import BookStore, get_book_store

router = APIRouter(prefix="/books", tags=["books"])

CREATE_SUCCESS = "Buku berhasil ditambahkan"
CREATE_FAILURES = {
    ValidationReason.MISSING_NAME: "Gagal menambahkan buku. Mohon isi nama buku",
    ValidationReason.PAGE_OVERFLOW: "Gagal menambahkan buku. readPage tidak boleh lebih besar dari pageCount",
}
CREATE_INVALID_BODY = "Gagal menambahkan buku. Data buku tidak valid"

GET_NOT_FOUND = "Buku tidak ditemukan"

UPDATE_SUCCESS = "Buku berhasil diperbarui"
UPDATE_NOT_FOUND = "Gagal memperbarui buku. Id tidak ditemukan"
UPDATE_FAILURES = {
    ValidationReason.MISSING_NAME: "Gagal memperbarui buku. Mohon isi nama buku",
    ValidationReason.PAGE_OVERFLOW: "Gagal memperbarui buku. readPage tidak boleh lebih besar dari pageCount",
}
UPDATE_INVALID_BODY = "Gagal memperbarui buku. Data buku tidak valid"

DELETE_SUCCESS = "Buku berhasil dihapus"
DELETE_NOT_FOUND = "Buku gagal dihapus. Id tidak ditemukan"

# Used by the request validation handler, keyed by HTTP method.
INVALID_BODY_MESSAGES = {
    "POST": CREATE_INVALID_BODY,
    "PUT": UPDATE_INVALID_BODY,
}

_FAIL_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": FailResponse},
    status.HTTP_404_NOT_FOUND: {"model": FailResponse},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookCreatedResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": FailResponse}},
)
def create_book(
    payload: BookPayload,
    store: BookStore = Depends(get_book_store),
) -> BookCreatedResponse:
    """Add a book to the shelf and return its generated id."""
    try:
        book_id = store.create_book(payload)
    except BookValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=CREATE_FAILURES[exc.reason],
        ) from exc
    return BookCreatedResponse(message=CREATE_SUCCESS, data=BookCreatedData(book_id=book_id))


@router.get("", response_model=BookListResponse)
def list_books(store: BookStore = Depends(get_book_store)) -> BookListResponse:
    """Return id, name and publisher of the first books on the shelf."""
    books = [BookSummaryOut.model_validate(summary) for summary in store.list_books()]
    return BookListResponse(data=BookListData(books=books))


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": FailResponse}},
)
def get_book(
    book_id: str,
    store: BookStore = Depends(get_book_store),
) -> BookResponse:
    try:
        book = store.get_book(book_id)
    except BookNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=GET_NOT_FOUND) from exc
    return BookResponse(data=BookData(book=BookOut.model_validate(book)))


@router.put(
    "/{book_id}",
    response_model=BookUpdatedResponse,
    responses=_FAIL_RESPONSES,
)
def update_book(
    book_id: str,
    payload: BookPayload,
    store: BookStore = Depends(get_book_store),
) -> BookUpdatedResponse:
    """Replace every mutable field of an existing book."""
    try:
        book = store.update_book(book_id, payload)
    except BookNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=UPDATE_NOT_FOUND) from exc
    except BookValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=UPDATE_FAILURES[exc.reason],
        ) from exc
    return BookUpdatedResponse(message=UPDATE_SUCCESS, data=BookData(book=BookOut.model_validate(book)))


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": FailResponse}},
)
def delete_book(
    book_id: str,
    store: BookStore = Depends(get_book_store),
) -> MessageResponse:
    try:
        store.delete_book(book_id)
    except BookNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DELETE_NOT_FOUND) from exc
    return MessageResponse(message=DELETE_SUCCESS)
