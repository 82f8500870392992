"""Current-user profile: read and update, including the avatar upload."""

import json
from typing import Annotated, Any

import pydantic
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.routes.auth import get_current_user
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import ValidationError, first_error_message
from app.models import User
from app.schemas.user import ProfileUpdate, UserPublic
from app.services import storage, users

router = APIRouter()

PROFILE_IMAGE_FIELD = "profileImage"


async def _read_profile_request(request: Request) -> tuple[dict[str, Any], Any]:
    """Return (fields, image_part_or_None) from a JSON or multipart body."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "multipart/form-data":
        form = await request.form()
        image = form.get(PROFILE_IMAGE_FIELD)
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        return fields, image if storage.is_upload_file(image) else None
    if content_type == "application/json":
        try:
            body = await request.json()
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e!s}") from e
        if not isinstance(body, dict):
            raise ValidationError("JSON body must be an object.")
        return body, None
    return {}, None


@router.get("/me", response_model=UserPublic)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserPublic:
    """Return the authenticated user's profile (never the password hash)."""
    return UserPublic.model_validate(current_user)


@router.put("/me", response_model=UserPublic)
async def update_me(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """
    Update profile fields and optionally the profile image.

    - **JSON body**: any of firstName, lastName, email, passwordHint.
    - **Multipart**: the same fields plus a `profileImage` image part. The
      previous image file is removed once the new one is saved.
    """
    settings = get_settings()
    fields, image = await _read_profile_request(request)
    try:
        update = ProfileUpdate.model_validate(fields)
    except pydantic.ValidationError as e:
        raise ValidationError(first_error_message(e)) from e

    changes = update.changes()
    old_image_url = current_user.profile_image_url
    if image is not None:
        changes["profile_image_url"] = await storage.save_upload(
            image, storage.PROFILE_IMAGE, settings
        )

    try:
        user = users.update_profile(db, current_user, changes)
    except Exception:
        if image is not None:
            storage.delete_upload(changes["profile_image_url"], settings)
        raise
    if image is not None and old_image_url:
        storage.delete_upload(old_image_url, settings)
    return UserPublic.model_validate(user)
