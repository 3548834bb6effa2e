from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator


class BookPayload(BaseModel):
    """Request body shared by create and update.

    ``name`` is optional here so that a missing name reaches the store and is
    reported with its own message instead of a generic schema error.
    """

    name: Optional[StrictStr] = None
    year: Optional[StrictInt] = None
    author: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    publisher: Optional[StrictStr] = None
    page_count: Optional[StrictInt] = Field(default=None, alias="pageCount")
    read_page: Optional[StrictInt] = Field(default=None, alias="readPage")
    reading: Optional[StrictBool] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("page_count", "read_page")
    @classmethod
    def validate_page_number(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("page numbers must be non-negative integers")
        return value


class BookOut(BaseModel):
    id: str
    name: str
    year: Optional[int] = None
    author: Optional[str] = None
    summary: Optional[str] = None
    publisher: Optional[str] = None
    page_count: Optional[int] = Field(default=None, alias="pageCount")
    read_page: Optional[int] = Field(default=None, alias="readPage")
    reading: Optional[bool] = None
    finished: bool
    inserted_at: str = Field(alias="insertedAt")
    updated_at: str = Field(alias="updatedAt")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        extra="forbid",
    )


class BookSummaryOut(BaseModel):
    id: str
    name: str
    publisher: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, extra="forbid")


class BookCreatedData(BaseModel):
    book_id: str = Field(alias="bookId")

    model_config = ConfigDict(populate_by_name=True)


class BookListData(BaseModel):
    books: list[BookSummaryOut]


class BookData(BaseModel):
    book: BookOut


class MessageResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str


class BookCreatedResponse(MessageResponse):
    data: BookCreatedData


class BookUpdatedResponse(MessageResponse):
    data: BookData


class BookListResponse(BaseModel):
    status: Literal["success"] = "success"
    data: BookListData


class BookResponse(BaseModel):
    status: Literal["success"] = "success"
    data: BookData


class FailResponse(BaseModel):
    status: Literal["fail"] = "fail"
    message: str
