"""Test data builders shared by the API and service tests."""

from __future__ import annotations

import io

from werkzeug.datastructures import FileStorage

from moodjournal.core.auth import token_service
from moodjournal.core.auth.password import hash_password
from moodjournal.core.users.models import User
from moodjournal.extensions import db

# Only leading signatures are checked; image content is never decoded.
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"></svg>'


def make_user(email: str = "writer@example.org", password: str = "secret123", **fields) -> User:
    """Persist a user; call inside an app context."""
    user = User(
        name=fields.get("name", "Writer"),
        email=email,
        password_hash=hash_password(password),
        firstname=fields.get("firstname", "Wren"),
        lastname=fields.get("lastname", "Writer"),
    )
    db.session.add(user)
    db.session.commit()
    return user


def make_token(user: User, device_name: str = "pytest") -> str:
    token = token_service.issue(user, device_name)
    db.session.commit()
    return token


def jpeg_of_size(size: int) -> bytes:
    """A JPEG-signed payload of exactly ``size`` bytes."""
    return JPEG_BYTES + b"\x00" * (size - len(JPEG_BYTES))


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def image_upload(name: str = "valid.jpg", content: bytes = JPEG_BYTES, mimetype: str = "image/jpeg"):
    """Multipart tuple for the Flask test client."""
    return (io.BytesIO(content), name, mimetype)


def image_file(name: str = "valid.jpg", content: bytes = JPEG_BYTES, mimetype: str = "image/jpeg") -> FileStorage:
    """FileStorage for calling services directly."""
    return FileStorage(stream=io.BytesIO(content), filename=name, content_type=mimetype)
