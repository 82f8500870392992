"""Registration and login: password hashing, admin bootstrap and token issuance."""

import logging
from functools import lru_cache

from sqlalchemy.orm import Session

from app.core.errors import Conflict, Unauthorized
from app.core.security import (
    PASSWORD_MAX_LEN,
    create_access_token,
    hash_password,
    verify_password,
)
from app.models import User
from app.schemas.auth import RegisterRequest
from app.services import users

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Checked against when the identifier is unknown so both failure paths cost one bcrypt verify.
    return hash_password("not-a-real-password")


def register(db: Session, body: RegisterRequest) -> User:
    """
    Create a user account.

    The first user in an empty store becomes admin. The role is computed by the
    INSERT statement itself from the live row count, after the registration
    lock is held, so overlapping first registrations cannot both become admin.
    Concurrent duplicate usernames or emails are rejected by the unique indexes.
    """
    if users.find_by_username_or_email(db, body.username, body.email) is not None:
        raise Conflict("User with this email or username already exists")

    password_hash = hash_password(body.password)
    users.lock_for_registration(db)
    user = User(
        first_name=body.first_name,
        last_name=body.last_name,
        username=body.username,
        email=body.email,
        password_hash=password_hash,
        password_hint=body.password_hint,
        role=users.bootstrap_role(),
    )
    user = users.insert(db, user)
    logger.info("New user registered: %s with role: %s", user.username, user.role)
    return user


def login(db: Session, identifier: str, password: str) -> tuple[str, User]:
    """
    Authenticate by username or email. Returns (token, user).

    Unknown identifier and wrong password raise the same Unauthorized error.
    """
    user = users.find_by_identifier(db, identifier)
    # No registered password is empty or longer than PASSWORD_MAX_LEN.
    if user is None or not password or len(password) > PASSWORD_MAX_LEN:
        verify_password(password, _dummy_hash())
        raise Unauthorized(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        raise Unauthorized(INVALID_CREDENTIALS)
    token = create_access_token(sub=user.id)
    logger.info("User logged in: %s", user.username)
    return token, user
