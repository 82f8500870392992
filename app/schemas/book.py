"""Schemas for catalog books."""

from datetime import datetime

from pydantic import ConfigDict, Field

from app.schemas.base import CamelModel


class BookCreate(CamelModel):
    """Text fields of the multipart POST /admin/books form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=512)
    author: str = Field(..., min_length=1, max_length=512)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)


class BookOut(CamelModel):
    id: int
    title: str
    author: str
    description: str
    price: float
    cover_image_url: str | None = None
    book_file_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
