"""Upload storage: validate uploaded files and write them under UPLOAD_DIR."""

import logging
import secrets
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from starlette.datastructures import UploadFile

from app.core.errors import ValidationError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

PUBLIC_URL_PREFIX = "/uploads"


@dataclass(frozen=True)
class UploadKind:
    """Where a class of upload is stored and which content types it accepts."""

    subdir: str
    prefix: str
    content_type_prefix: str


PROFILE_IMAGE = UploadKind(subdir="profile", prefix="profile-", content_type_prefix="image/")
BOOK_COVER = UploadKind(subdir="books", prefix="cover-", content_type_prefix="image/")
BOOK_PDF = UploadKind(subdir="books", prefix="book-", content_type_prefix="application/pdf")

ALL_KINDS = (PROFILE_IMAGE, BOOK_COVER, BOOK_PDF)


def is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file part (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def ensure_upload_dirs(settings: "Settings") -> Path:
    """Create UPLOAD_DIR and its per-kind subdirectories; return the root."""
    root = Path(settings.UPLOAD_DIR)
    for kind in ALL_KINDS:
        (root / kind.subdir).mkdir(parents=True, exist_ok=True)
    return root


def _unique_name(kind: UploadKind, original_filename: str | None) -> str:
    suffix = PurePosixPath(original_filename or "").suffix.lower()
    if not suffix.isascii() or len(suffix) > 10:
        suffix = ""
    return f"{kind.prefix}{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"


async def save_upload(upload: UploadFile, kind: UploadKind, settings: "Settings") -> str:
    """
    Validate and store an uploaded file. Returns its public URL (/uploads/<subdir>/<name>).

    Raises ValidationError for a wrong content type or a file over MAX_UPLOAD_BYTES.
    """
    content_type = (getattr(upload, "content_type", None) or "").split(";")[0].strip().lower()
    if not content_type.startswith(kind.content_type_prefix):
        raise ValidationError("Invalid file type")
    content = await upload.read()
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"File size must not exceed {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB."
        )
    root = ensure_upload_dirs(settings)
    name = _unique_name(kind, getattr(upload, "filename", None))
    (root / kind.subdir / name).write_bytes(content)
    logger.debug("Stored upload %s (%d bytes)", name, len(content))
    return f"{PUBLIC_URL_PREFIX}/{kind.subdir}/{name}"


def path_for_url(url: str, settings: "Settings") -> Path | None:
    """Map a public /uploads URL back to a file under UPLOAD_DIR; None if it points elsewhere."""
    if not url or not url.startswith(PUBLIC_URL_PREFIX + "/"):
        return None
    root = Path(settings.UPLOAD_DIR).resolve()
    candidate = (root / url[len(PUBLIC_URL_PREFIX) + 1 :]).resolve()
    if root not in candidate.parents:
        return None
    return candidate


def delete_upload(url: str | None, settings: "Settings") -> bool:
    """Delete a stored upload by its public URL. Returns True if a file was removed."""
    if not url:
        return False
    path = path_for_url(url, settings)
    if path is None or not path.is_file():
        return False
    try:
        path.unlink()
    except OSError as e:
        logger.warning("Could not delete upload %s: %s", url, e)
        return False
    return True
