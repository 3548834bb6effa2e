from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request

from bookshelf.core.exceptions import BookNotFoundError, BookValidationError, ValidationReason
from bookshelf.models.book import Book, BookSummary
from bookshelf.schemas.book import BookPayload

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. ``2026-10-19T08:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BookStore:
    """In-memory, insertion-ordered collection of books."""

    LIST_LIMIT = 3

    def __init__(self, clock: Callable[[], str] = utc_timestamp):
        self._clock = clock
        self._books: list[Book] = []
        self._lock = threading.Lock()

    # ---------------------------------------------------------------------- #
    # Helpers
    # ---------------------------------------------------------------------- #
    def _find_index(self, book_id: str) -> Optional[int]:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return None

    def _require_index(self, book_id: str) -> int:
        index = self._find_index(book_id)
        if index is None:
            logger.debug("Book %s not found", book_id)
            raise BookNotFoundError(book_id)
        return index

    def _validate(self, payload: BookPayload) -> None:
        reason: Optional[ValidationReason] = None
        if not payload.name:
            reason = ValidationReason.MISSING_NAME
        elif (
            payload.read_page is not None
            and payload.page_count is not None
            and payload.read_page > payload.page_count
        ):
            reason = ValidationReason.PAGE_OVERFLOW
        if reason is not None:
            logger.debug("Rejected book payload: %s", reason.value)
            raise BookValidationError(reason)

    # ---------------------------------------------------------------------- #
    # Operations
    # ---------------------------------------------------------------------- #
    def create_book(self, payload: BookPayload) -> str:
        self._validate(payload)
        timestamp = self._clock()
        book = Book(
            id=str(uuid.uuid4()),
            name=payload.name,
            year=payload.year,
            author=payload.author,
            summary=payload.summary,
            publisher=payload.publisher,
            page_count=payload.page_count,
            read_page=payload.read_page,
            reading=payload.reading,
            finished=payload.read_page == payload.page_count,
            inserted_at=timestamp,
            updated_at=timestamp,
        )
        with self._lock:
            self._books.append(book)
        logger.info("Created book %s (%r)", book.id, book.name)
        return book.id

    def list_books(self) -> list[BookSummary]:
        with self._lock:
            return [book.to_summary() for book in self._books[: self.LIST_LIMIT]]

    def get_book(self, book_id: str) -> Book:
        with self._lock:
            index = self._require_index(book_id)
            return replace(self._books[index])

    def update_book(self, book_id: str, payload: BookPayload) -> Book:
        with self._lock:
            index = self._require_index(book_id)
            self._validate(payload)
            book = replace(
                self._books[index],
                name=payload.name,
                year=payload.year,
                author=payload.author,
                summary=payload.summary,
                publisher=payload.publisher,
                page_count=payload.page_count,
                read_page=payload.read_page,
                reading=payload.reading,
                finished=payload.read_page == payload.page_count,
                updated_at=self._clock(),
            )
            self._books[index] = book
        logger.info("Updated book %s", book_id)
        return replace(book)

    def delete_book(self, book_id: str) -> None:
        with self._lock:
            index = self._require_index(book_id)
            del self._books[index]
        logger.info("Deleted book %s", book_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)


def get_book_store(request: Request) -> BookStore:
    return request.app.state.book_store
