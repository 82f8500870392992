"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = settings.BCRYPT_ROUNDS
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    sub: str | int,
    *,
    now: datetime | None = None,
    expires_delta: timedelta | None = None,
    secret: str | None = None,
) -> str:
    """Create a JWT access token carrying only the user id (sub), iat and exp."""
    now = now or datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "iat": now,
        "exp": now + expires_delta,
    }
    if secret is None:
        secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(
    token: str,
    *,
    now: datetime | None = None,
    secret: str | None = None,
) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, iat, exp).

    Pure function of (secret, token, clock): pass ``now`` to check expiry
    against an explicit instant instead of the system clock.
    Raises jwt.PyJWTError on invalid or expired token.
    """
    if secret is None:
        secret = settings.JWT_SECRET.get_secret_value()
    if now is None:
        return jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    payload = jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"], "verify_exp": False, "verify_iat": False},
    )
    if int(payload["exp"]) <= int(now.timestamp()):
        raise jwt.ExpiredSignatureError("Signature has expired")
    return payload
