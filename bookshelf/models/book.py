from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Book:
    """In-memory record representing one bookshelf entry."""

    id: str
    name: str
    year: Optional[int]
    author: Optional[str]
    summary: Optional[str]
    publisher: Optional[str]
    page_count: Optional[int]
    read_page: Optional[int]
    reading: Optional[bool]
    finished: bool
    inserted_at: str
    updated_at: str

    def to_summary(self) -> BookSummary:
        return BookSummary(id=self.id, name=self.name, publisher=self.publisher)


@dataclass(frozen=True)
class BookSummary:
    id: str
    name: str
    publisher: Optional[str]
