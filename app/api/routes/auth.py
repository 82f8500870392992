"""Registration, login and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import Forbidden, Unauthorized
from app.core.security import decode_access_token
from app.models import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
)
from app.services import auth as auth_service
from app.services import users

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """
    Create an account. The very first account becomes an admin; every later one is a user.
    Duplicate username or email returns 400.
    """
    user = auth_service.register(db, body)
    return RegisterResponse(user=RegisteredUser.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username (or email) and password; returns a JWT valid for 24 hours.
    Include the token in the Authorization header as: Bearer <token>
    """
    token, user = auth_service.login(db, body.identifier, body.password)
    return LoginResponse(token=token, user=LoginUser.model_validate(user))


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise Unauthorized("Access token required")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise Unauthorized("Invalid or expired token")
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise Unauthorized("Invalid token payload")
    user = users.find_by_id(db, user_id)
    if user is None:
        raise Unauthorized("User not found")
    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if not current_user.is_admin:
        raise Forbidden("Admin access required")
    return current_user
