"""Request/response schemas for registration and login."""

from pydantic import Field, model_validator

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.schemas.base import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(CamelModel):
    """Body of POST /auth/register."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    password_hint: str | None = Field(default=None, max_length=255)


class RegisteredUser(CamelModel):
    id: int
    username: str
    email: str
    role: str


class RegisterResponse(CamelModel):
    message: str = "User registered successfully"
    user: RegisteredUser


class LoginRequest(CamelModel):
    """
    Credentials for login.

    The identifier is sent as ``username`` (which may hold an email address)
    or as ``email``; the first one present wins. Lengths are not checked here
    so that any bad password is answered with the same 401 by the service.
    """

    username: str | None = None
    email: str | None = None
    password: str

    @model_validator(mode="after")
    def require_identifier(self) -> "LoginRequest":
        if not self.identifier:
            raise ValueError("username or email is required")
        return self

    @property
    def identifier(self) -> str | None:
        return self.username or self.email


class LoginUser(CamelModel):
    """Public user view returned with a fresh token."""

    id: int
    first_name: str
    last_name: str
    username: str
    email: str
    role: str
    profile_image_url: str | None = None


class LoginResponse(CamelModel):
    """JWT returned after successful login. Send it as: Authorization: Bearer <token>."""

    token: str
    user: LoginUser
