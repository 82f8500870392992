"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.book import Book
from app.models.user import User, UserRole

__all__ = ["Base", "Book", "User", "UserRole"]
