from __future__ import annotations

import enum


class BookshelfError(Exception):
    """Base class for errors raised by the book store."""


class ValidationReason(str, enum.Enum):
    MISSING_NAME = "missing-name"
    PAGE_OVERFLOW = "page-overflow"


class BookValidationError(BookshelfError):
    """Raised when a book payload breaks a field rule."""

    def __init__(self, reason: ValidationReason):
        super().__init__(reason.value)
        self.reason = reason


class BookNotFoundError(BookshelfError):
    """Raised when no stored book has the requested id."""

    def __init__(self, book_id: str):
        super().__init__(f"Book {book_id!r} not found")
        self.book_id = book_id
