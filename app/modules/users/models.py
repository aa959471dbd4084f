"""User documents as stored in the ``users`` collection."""
import base64
import hashlib
import os
from datetime import datetime, timezone

PBKDF2_ITERATIONS = 260_000

# Never sent to clients
PRIVATE_FIELDS = ("password", "refreshToken")


def hash_password(password: str, *, salt: bytes | None = None, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations)
    return "pbkdf2_sha256${}${}${}".format(
        iterations,
        base64.b64encode(salt).decode(),
        base64.b64encode(digest).decode(),
    )


def new_user_document(*, full_name: str, username: str, email: str, password: str, avatar: str, cover_image: str = "") -> dict:
    now = datetime.now(timezone.utc)
    return {
        "fullName": full_name,
        "username": username.lower(),
        "email": email,
        "password": hash_password(password),
        "avatar": avatar,
        "coverImage": cover_image,
        "watchHistory": [],
        "refreshToken": None,
        "createdAt": now,
        "updatedAt": now,
    }
