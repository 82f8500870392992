"""ORM model for catalog books."""

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String, Text, func

from app.models.base import Base


class Book(Base):
    """
    A catalog entry: metadata plus public URLs of the stored cover and PDF.

    Books are created by admins and listed by any authenticated user.
    """

    __tablename__ = "books"
    __table_args__ = (CheckConstraint("price >= 0", name="price_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(512), nullable=False)
    author = Column(String(512), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    cover_image_url = Column(String(1024), nullable=True)
    book_file_url = Column(String(1024), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
