# storefront/utils/security.py
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from storefront.utils.settings import (
    JWT_SECRET,
    JWT_ALGORITHM,
    JWT_EXPIRES_HOURS,
    PASSWORD_HASH_ITERATIONS,
)

_HASH_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, iterations: int | None = None) -> str:
    """
    PBKDF2-HMAC-SHA256 z losowa sola per uzytkownik.
    Format: pbkdf2_sha256$<iteracje>$<sol>$<hash hex>
    """
    iterations = iterations or PASSWORD_HASH_ITERATIONS
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    ).hex()
    return f"{_HASH_SCHEME}${iterations}${salt}${digest}"


def verify_password(password: str, stored: str) -> bool:
    try:
        scheme, iterations, salt, digest = stored.split("$", 3)
    except ValueError:
        return False

    if scheme != _HASH_SCHEME:
        return False

    candidate = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations)
    ).hex()
    return hmac.compare_digest(candidate, digest)


def create_access_token(user_id: int, role: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=JWT_EXPIRES_HOURS))
    payload = {
        "user": {"id": user_id, "role": role},
        "exp": expire,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Zwraca czesc `user` z payloadu, rzuca jwt.PyJWTError gdy token jest zly."""
    payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    user = payload.get("user")
    if not isinstance(user, dict) or "id" not in user:
        raise jwt.InvalidTokenError("Missing user claim")
    return user
