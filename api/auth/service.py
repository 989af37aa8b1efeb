"""
Auth business logic.
"""

from __future__ import annotations

import logging
from typing import Any

from core import validation
from core.errors import Forbidden, Unauthorized
from users import mapper as users_mapper
from users import repository as users_repository

from . import policy, schemas, security

logger = logging.getLogger(__name__)


async def login(payload: Any, *, hasher: security.PasswordHasher) -> schemas.LoginResponse:
    data = validation.parse(schemas.LoginRequest, payload)

    user_row = await users_repository.get_user_credentials_by_email(str(data.email))
    if user_row is None or not hasher.verify(data.password, str(user_row.get("password") or "")):
        logger.info("login_failed")
        raise Unauthorized("Invalid email or password.")

    user = users_mapper.to_user_response(user_row)
    token = security.build_access_token(user_id=user.user_id, role=user.role.value)
    logger.info("login_ok user_id=%s", user.user_id)
    return schemas.LoginResponse(message="Login successful", token=token, user=user)


async def get_caller_from_access_token(access_token: str) -> policy.Caller:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise Forbidden("token not valid") from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise Forbidden("token not valid")

    # Role comes from the stored row, not the token, so demotions apply immediately.
    user_row = await users_repository.find_user(int(subject))
    if user_row is None:
        raise Forbidden("token not valid")

    return policy.Authenticated(
        user_id=int(user_row["user_id"]),
        role=policy.Role(str(user_row["role"])),
    )
