"""Domain error taxonomy. Rendered to JSON responses by the handlers in app.main."""


class BookshopError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, headers: dict[str, str] | None = None) -> None:
        self.message = message
        self.headers = headers
        super().__init__(message)


class ValidationError(BookshopError):
    """Bad or missing fields, invalid role value, bad upload."""

    status_code = 400


class Unauthorized(BookshopError):
    """Missing or invalid credentials or token."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(BookshopError):
    """Authenticated but lacking the required role."""

    status_code = 403


class NotFound(BookshopError):
    status_code = 404


class Conflict(BookshopError):
    """Duplicate unique field. Clients of this API expect 400, not 409."""

    status_code = 400


def first_error_message(exc: Exception) -> str:
    """
    Human-readable message for the first error of a pydantic or FastAPI
    request validation error, e.g. ``price: Input should be a valid number``.
    """
    errors = exc.errors() if hasattr(exc, "errors") else []
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    msg = err.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg
