"""Local filesystem storage for staff avatar images."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from ...errors import StorageFailure, ValidationError
from ...platform.config import settings
from ..grading.roles import StaffRole

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


def storage_root() -> Path:
    return Path(settings.AVATAR_STORAGE_DIR).resolve()


def _file_prefix(staff_id: str) -> str:
    return f"staff-{staff_id}-"


def validate_avatar(filename: str, content: bytes) -> str:
    """Validate an avatar upload. Returns the lower-cased extension."""
    name = (filename or "").strip()
    if not name:
        raise ValidationError("Filename is required")
    ext = name.lower().rsplit(".", 1)[-1] if "." in name else ""
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(f"Only {', '.join(sorted(ALLOWED_EXTENSIONS)).upper()} images are allowed")
    if not content:
        raise ValidationError("Uploaded file is empty")
    if len(content) > settings.AVATAR_MAX_BYTES:
        raise ValidationError(f"Image must be {settings.AVATAR_MAX_BYTES // (1024 * 1024)}MB or smaller")
    return ext


def save_avatar(staff_id: str, role: StaffRole, filename: str, content: bytes) -> str:
    """Store an avatar and return its public URL path."""
    ext = validate_avatar(filename, content)
    folder = StaffRole(role).value.lower()
    target_dir = storage_root() / folder
    stored_name = f"{_file_prefix(staff_id)}{int(time.time() * 1000)}.{ext}"
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / stored_name).write_bytes(content)
    except OSError as exc:
        logger.error("Failed to store avatar for staff %s: %s", staff_id, exc)
        raise StorageFailure("Failed to store avatar image") from exc
    logger.info("Stored avatar for staff %s at %s/%s", staff_id, folder, stored_name)
    return f"{settings.AVATAR_PUBLIC_PREFIX.rstrip('/')}/{folder}/{stored_name}"


def cleanup_previous_avatars(staff_id: str, keep: str | None = None) -> int:
    """Delete stored avatars for ``staff_id`` other than the current one.

    ``keep`` is the current avatar URL; when it does not point at a stored file
    the most recent file is kept. Returns the number of files removed.
    """
    root = storage_root()
    if not root.exists():
        return 0
    files = sorted(root.glob(f"*/{_file_prefix(staff_id)}*"), key=lambda p: p.name)
    if len(files) <= 1:
        return 0

    keep_name = (keep or "").rsplit("/", 1)[-1]
    survivors = {p for p in files if p.name == keep_name} or {files[-1]}
    removed = 0
    for path in files:
        if path in survivors:
            continue
        path.unlink(missing_ok=True)
        removed += 1
    if removed:
        logger.info("Removed %d previous avatar(s) for staff %s", removed, staff_id)
    return removed
