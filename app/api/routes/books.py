"""Catalog listing for authenticated users."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.routes.auth import get_current_user
from app.core.database import get_db
from app.models import User
from app.schemas.book import BookOut
from app.services import catalog

router = APIRouter()


@router.get("", response_model=list[BookOut])
def list_books(
    _user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[BookOut]:
    """All books, newest first."""
    return [BookOut.model_validate(b) for b in catalog.list_all(db)]
