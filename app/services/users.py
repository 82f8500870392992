"""Credential store: persistence of user records behind a small contract."""

import logging
from typing import Any

from sqlalchemy import case, func, or_, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.core.errors import Conflict, NotFound, ValidationError
from app.models import User, UserRole

logger = logging.getLogger(__name__)


def find_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_by_id(db: Session, user_id: int) -> User:
    """Return the user or raise NotFound."""
    user = find_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def find_by_username_or_email(db: Session, username: str, email: str) -> User | None:
    """First user whose username equals ``username`` or whose email equals ``email``."""
    return (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )


def find_by_identifier(db: Session, identifier: str) -> User | None:
    """Login lookup: the identifier may be a username or an email address."""
    return find_by_username_or_email(db, identifier, identifier)


def count_all(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0


def lock_for_registration(db: Session) -> None:
    """
    Serialize registrations until the current transaction ends.

    SHARE ROW EXCLUSIVE conflicts with itself and with row inserts, so a second
    registration waits until the first one commits and then sees its row.
    SQLite already serializes writers at the database level.
    """
    if db.get_bind().dialect.name == "postgresql":
        db.execute(text("LOCK TABLE users IN SHARE ROW EXCLUSIVE MODE"))


def bootstrap_role() -> ColumnElement[str]:
    """
    SQL expression for a new user's role: admin when the table is empty, else user.

    Evaluated by the INSERT itself, so it reflects rows committed up to that statement.
    """
    user_count = select(func.count(User.id)).scalar_subquery()
    return case(
        (user_count == 0, UserRole.ADMIN.value),
        else_=UserRole.USER.value,
    )


def list_all(db: Session) -> list[User]:
    """All users, newest first."""
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def insert(db: Session, user: User) -> User:
    """
    Persist a new user.

    Uniqueness of username and email is enforced by the table's unique indexes;
    a violation rolls the session back and raises Conflict.
    """
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("User with this email or username already exists") from e
    db.refresh(user)
    return user


def update_role(db: Session, user_id: int, role: str | None) -> User:
    """Set a user's role. Raises ValidationError for unknown roles, NotFound for unknown ids."""
    try:
        new_role = UserRole(role)
    except ValueError as e:
        raise ValidationError("Invalid role") from e
    user = get_by_id(db, user_id)
    user.role = new_role.value
    db.commit()
    db.refresh(user)
    logger.info("User role updated: %s -> %s", user.username, new_role.value)
    return user


def update_profile(db: Session, user: User, changes: dict[str, Any]) -> User:
    """Apply profile changes; an email already used by someone else raises Conflict."""
    for field, value in changes.items():
        setattr(user, field, value)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("Email already exists") from e
    db.refresh(user)
    logger.info("User updated profile: %s", user.username)
    return user
