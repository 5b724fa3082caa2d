"""Image attachment handling: validation and storage under UPLOAD_FOLDER."""

from __future__ import annotations

import logging
import os
import secrets
from pathlib import Path
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

IMAGE_DIR = "posts"

# extension -> accepted MIME types
IMAGE_MIME_TYPES = {
    "jpeg": {"image/jpeg", "image/pjpeg"},
    "jpg": {"image/jpeg", "image/pjpeg"},
    "png": {"image/png"},
    "gif": {"image/gif"},
    "svg": {"image/svg+xml"},
}

# Leading bytes of each stored format; the declared Content-Type is not trusted.
_RASTER_SIGNATURES = {
    "jpeg": (b"\xff\xd8\xff",),
    "jpg": (b"\xff\xd8\xff",),
    "png": (b"\x89PNG\r\n\x1a\n",),
    "gif": (b"GIF87a", b"GIF89a"),
}
SNIFF_BYTES = 1024


def _extension(filename: str) -> str:
    name = secure_filename(filename or "")
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def _size_bytes(file: FileStorage) -> int:
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def _head(file: FileStorage) -> bytes:
    stream = file.stream
    stream.seek(0)
    head = stream.read(SNIFF_BYTES)
    stream.seek(0)
    return head


def _content_matches(ext: str, head: bytes) -> bool:
    if ext == "svg":
        text = head.lstrip(b"\xef\xbb\xbf").lstrip().lower()
        return text.startswith((b"<?xml", b"<svg", b"<!doctype svg")) and b"<svg" in text
    return head.startswith(_RASTER_SIGNATURES.get(ext, ()))


def size_error(max_kb: Optional[int] = None) -> str:
    if max_kb is None:
        max_kb = int(current_app.config.get("IMAGE_MAX_KB", 2048))
    return f"The image may not be greater than {max_kb} kilobytes."


def validate_image(file: Optional[FileStorage]) -> Optional[str]:
    """Return an error message, or None when the upload is acceptable."""
    if file is None or not file.filename:
        return "The image field is required."
    allowed = current_app.config.get("IMAGE_ALLOWED_EXTENSIONS") or set(IMAGE_MIME_TYPES)
    ext = _extension(file.filename)
    if ext not in allowed or ext not in IMAGE_MIME_TYPES:
        return "The image must be a file of type: " + ", ".join(sorted(allowed)) + "."
    mimetype = (file.mimetype or "").lower()
    if mimetype not in IMAGE_MIME_TYPES[ext]:
        return "The image must be an image."
    max_kb = int(current_app.config.get("IMAGE_MAX_KB", 2048))
    if _size_bytes(file) > max_kb * 1024:
        return size_error(max_kb)
    if not _content_matches(ext, _head(file)):
        return "The image must be an image."
    return None


def upload_root() -> Path:
    return Path(current_app.config["UPLOAD_FOLDER"])


def store_image(file: FileStorage) -> str:
    """Persist a validated upload; returns a reference like ``posts/<name>.png``."""
    ext = _extension(file.filename or "")
    name = f"{secrets.token_hex(20)}.{ext}"
    target_dir = upload_root() / IMAGE_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    file.stream.seek(0)
    file.save(str(target_dir / name))
    reference = f"{IMAGE_DIR}/{name}"
    logger.debug("Stored image %s", reference)
    return reference


def discard_image(reference: Optional[str]) -> None:
    """Remove a stored image; missing files are ignored."""
    if not reference:
        return
    path = upload_root() / reference
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except OSError:
        logger.warning("Could not remove stored image %s", reference, exc_info=True)
