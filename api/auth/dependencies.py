"""
Auth dependencies for FastAPI routes.

`get_caller` never rejects a request without credentials: it resolves to
`Anonymous`, and the policy decides what anonymous callers may do.
"""

from __future__ import annotations

from fastapi import Depends, Header

from core.errors import Forbidden

from . import policy, service
from .security import PasswordHasher, get_password_hasher


def _extract_bearer_token(authorization: str) -> str:
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2:
        raise Forbidden("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise Forbidden("Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    if authorization is None or not authorization.strip():
        return None
    return _extract_bearer_token(authorization)


async def get_caller(access_token: str | None = Depends(get_bearer_token)) -> policy.Caller:
    if access_token is None:
        return policy.ANONYMOUS
    return await service.get_caller_from_access_token(access_token)


async def get_hasher() -> PasswordHasher:
    return get_password_hasher()
