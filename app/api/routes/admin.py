"""Admin-only endpoints: user list, role changes and book creation."""

from typing import Annotated

import pydantic
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.api.routes.auth import require_admin
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import ValidationError, first_error_message
from app.models import User
from app.schemas.book import BookCreate, BookOut
from app.schemas.user import RoleUpdateRequest, UserPublic
from app.services import catalog, storage, users

router = APIRouter()

BOOK_TEXT_FIELDS = ("title", "author", "description", "price")


@router.get("/users", response_model=list[UserPublic])
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserPublic]:
    """List all users, newest first (no password hashes)."""
    return [UserPublic.model_validate(u) for u in users.list_all(db)]


@router.put("/users/{user_id}/role", response_model=UserPublic)
def update_user_role(
    user_id: int,
    body: RoleUpdateRequest,
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Set a user's role to 'user' or 'admin'. Unknown role → 400; unknown user → 404."""
    user = users.update_role(db, user_id, body.role)
    return UserPublic.model_validate(user)


@router.post("/books", response_model=BookOut, status_code=status.HTTP_201_CREATED)
async def create_book(
    request: Request,
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> BookOut:
    """
    Create a book from a multipart form.

    Fields: title, author, description, price, plus file parts `cover` (an
    image) and `pdf` (application/pdf). Both files are required.
    """
    settings = get_settings()
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise ValidationError("Content-Type must be multipart/form-data.")
    form = await request.form()
    cover = form.get("cover")
    pdf = form.get("pdf")
    if not storage.is_upload_file(cover) or not storage.is_upload_file(pdf):
        raise ValidationError("Both cover image and PDF file are required")

    fields = {k: form.get(k) for k in BOOK_TEXT_FIELDS if isinstance(form.get(k), str)}
    try:
        data = BookCreate.model_validate(fields)
    except pydantic.ValidationError as e:
        raise ValidationError(first_error_message(e)) from e

    stored: list[str] = []
    try:
        stored.append(await storage.save_upload(cover, storage.BOOK_COVER, settings))
        stored.append(await storage.save_upload(pdf, storage.BOOK_PDF, settings))
        book = catalog.insert(db, data, cover_image_url=stored[0], book_file_url=stored[1])
    except Exception:
        for url in stored:
            storage.delete_upload(url, settings)
        raise
    return BookOut.model_validate(book)
