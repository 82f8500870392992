"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
)
from app.schemas.book import BookCreate, BookOut
from app.schemas.health import HealthResponse
from app.schemas.user import ProfileUpdate, RoleUpdateRequest, UserPublic

__all__ = [
    "BookCreate",
    "BookOut",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "ProfileUpdate",
    "RegisterRequest",
    "RegisterResponse",
    "RegisteredUser",
    "RoleUpdateRequest",
    "UserPublic",
]
