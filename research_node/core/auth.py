"""PBKDF2 password hashes stored in ``users.password``.

A stored hash reads ``pbkdf2_sha256$<iterations>$<hex salt>$<urlsafe b64 digest>``.
Anything else in the column is treated as a legacy plaintext password.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from typing import NamedTuple

DEFAULT_ITERATIONS = 200_000
SCHEME = "pbkdf2_sha256"


class PasswordHash(NamedTuple):
    iterations: int
    salt: str
    digest: bytes

    @classmethod
    def parse(cls, stored: str) -> "PasswordHash":
        parts = stored.split("$")
        if len(parts) != 4 or parts[0] != SCHEME:
            raise ValueError("Not a pbkdf2_sha256 password hash")
        _, iterations, salt, digest = parts
        if not iterations.isdigit() or int(iterations) < 1 or not salt:
            raise ValueError("Malformed password hash")
        padded = digest + "=" * (-len(digest) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        except (ValueError, UnicodeEncodeError) as exc:
            raise ValueError("Malformed password hash") from exc
        return cls(int(iterations), salt, raw)

    def render(self) -> str:
        encoded = base64.urlsafe_b64encode(self.digest).decode("ascii").rstrip("=")
        return f"{SCHEME}${self.iterations}${self.salt}${encoded}"


def _derive(password: str, salt: str, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)


def hash_password(password: str, *, iterations: int = DEFAULT_ITERATIONS) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    salt = secrets.token_hex(16)
    return PasswordHash(iterations, salt, _derive(password, salt, iterations)).render()


def is_password_hash(value: str | None) -> bool:
    """Tell stored hashes apart from legacy plaintext column values."""

    if not value:
        return False
    try:
        PasswordHash.parse(value)
    except ValueError:
        return False
    return True


def verify_password(password: str, stored_hash: str) -> bool:
    if not password or not stored_hash:
        return False
    try:
        parsed = PasswordHash.parse(stored_hash)
    except ValueError:
        return False
    return hmac.compare_digest(_derive(password, parsed.salt, parsed.iterations), parsed.digest)
