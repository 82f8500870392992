"""Catalog store: create and list books."""

import logging

from sqlalchemy.orm import Session

from app.models import Book
from app.schemas.book import BookCreate

logger = logging.getLogger(__name__)


def insert(db: Session, data: BookCreate, cover_image_url: str | None, book_file_url: str) -> Book:
    book = Book(
        title=data.title,
        author=data.author,
        description=data.description,
        price=data.price,
        cover_image_url=cover_image_url,
        book_file_url=book_file_url,
    )
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info("New book created: %s by %s", book.title, book.author)
    return book


def list_all(db: Session) -> list[Book]:
    """All books, most recently created first."""
    return db.query(Book).order_by(Book.created_at.desc(), Book.id.desc()).all()
