"""Avatar image storage on local disk."""

import logging
import time
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from taskboard.core.errors import BadRequestError

if TYPE_CHECKING:
    from taskboard.core.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_AVATAR_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})
AVATARS_SUBDIR = "avatars"


def is_allowed_avatar(content_type: str | None) -> bool:
    return (content_type or "").split(";")[0].strip().lower() in ALLOWED_AVATAR_CONTENT_TYPES


def store_avatar(
    content: bytes, filename: str | None, settings: "Settings"
) -> str:
    """
    Write content to UPLOAD_DIR/avatars/<epoch-millis><ext>.

    Returns the relative path stored on the user, e.g. uploads/avatars/1712345678901.png.
    Raises BadRequestError when the file is empty or larger than AVATAR_MAX_BYTES.
    """
    if not content:
        raise BadRequestError("No file uploaded", error_code="FILE_NOT_UPLOADED")
    if len(content) > settings.AVATAR_MAX_BYTES:
        raise BadRequestError(
            f"File size must not exceed {settings.AVATAR_MAX_BYTES} bytes.",
            error_code="FILE_TOO_LARGE",
        )

    # Only the extension of the client-supplied name is kept.
    ext = PurePosixPath(filename or "").suffix.lower()
    name = f"{int(time.time() * 1000)}{ext}"

    upload_root = Path(settings.UPLOAD_DIR)
    target_dir = upload_root / AVATARS_SUBDIR
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / name).write_bytes(content)

    relative = PurePosixPath(upload_root.name or settings.UPLOAD_DIR, AVATARS_SUBDIR, name)
    logger.info("Avatar stored: %s (%s bytes)", relative, len(content))
    return str(relative)


def remove_avatar(relative_path: str, settings: "Settings") -> None:
    """Delete a file written by store_avatar; a missing file is ignored."""
    target = Path(settings.UPLOAD_DIR) / AVATARS_SUBDIR / PurePosixPath(relative_path).name
    target.unlink(missing_ok=True)
    logger.info("Avatar removed: %s", relative_path)
