"""Schemas for the current-user profile and admin user management."""

import re
from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.auth import EMAIL_PATTERN
from app.schemas.base import CamelModel


class UserPublic(CamelModel):
    """Everything about a user except the password hash."""

    id: int
    first_name: str
    last_name: str
    username: str
    email: str
    password_hint: str | None = None
    role: str
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdate(CamelModel):
    """
    Editable profile fields for PUT /users/me.

    Empty names and email are ignored; password_hint is applied whenever it is
    present in the request, so an empty string clears it.
    """

    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    password_hint: str | None = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v and not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email address")
        return v

    def changes(self) -> dict[str, str | None]:
        """Column values to write, keyed by model attribute."""
        data: dict[str, str | None] = {}
        if self.first_name:
            data["first_name"] = self.first_name
        if self.last_name:
            data["last_name"] = self.last_name
        if self.email:
            data["email"] = self.email
        if "password_hint" in self.model_fields_set:
            data["password_hint"] = self.password_hint
        return data


class RoleUpdateRequest(CamelModel):
    """Body of PUT /admin/users/{id}/role. Checked against UserRole by the service."""

    role: str | None = None
