"""
Auth security helpers: password hashing and access tokens.
"""

from __future__ import annotations

import os
import time
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from core.env import env_int

# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return os.environ.get("JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_minutes() -> int:
    return env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def bcrypt_rounds() -> int:
    return env_int("BCRYPT_ROUNDS", 12)


def now_epoch_s() -> int:
    return int(time.time())


class PasswordHasher:
    """
    One-way password hashing with a salt fixed at construction.

    The same instance serves every request; it holds no mutable state.
    `verify` reads the salt back out of the stored hash, so hashes made with
    a different salt still verify.
    """

    def __init__(self, salt: bytes | str) -> None:
        if isinstance(salt, str):
            salt = salt.encode("utf-8")
        if not salt:
            raise AuthSecurityError("Password salt is empty.")
        self._salt = salt

    def hash(self, plain_password: str) -> str:
        password = (plain_password or "").encode("utf-8")
        if not password:
            raise AuthSecurityError("Password is empty.")
        if len(password) > MAX_PASSWORD_BYTES:
            raise AuthSecurityError(f"Password is longer than {MAX_PASSWORD_BYTES} bytes.")
        try:
            return bcrypt.hashpw(password, self._salt).decode("utf-8")
        except ValueError as exc:
            raise AuthSecurityError("Password salt is invalid.") from exc

    def verify(self, plain_password: str, password_hash: str) -> bool:
        password = (plain_password or "").encode("utf-8")
        hashed = (password_hash or "").encode("utf-8")
        if not password or not hashed:
            return False
        try:
            return bcrypt.checkpw(password, hashed)
        except ValueError:
            return False


def password_salt() -> bytes:
    raw = os.environ.get("PASSWORD_SALT", "").strip()
    if raw:
        return raw.encode("utf-8")
    return bcrypt.gensalt(rounds=bcrypt_rounds())


@lru_cache
def get_password_hasher() -> PasswordHasher:
    # Built once per process; the salt is read-only afterwards.
    return PasswordHasher(password_salt())


def build_access_token(*, user_id: int, role: str) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    payload = {
        "sub": str(user_id),
        "role": role,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload
