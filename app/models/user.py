"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class UserRole(str, enum.Enum):
    """Roles a user can hold. Capabilities are gated by explicit checks on this value."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    The first user ever created is assigned ADMIN; everyone after defaults to USER.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    password_hint = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default=UserRole.USER.value)
    profile_image_url = Column(String(1024), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
