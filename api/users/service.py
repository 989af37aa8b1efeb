"""
User business logic: validate, authorize, then dispatch to the repository.
"""

from __future__ import annotations

import logging
from typing import Any

from auth import policy
from auth.security import PasswordHasher
from core import validation
from core.errors import Forbidden
from core.schemas import MessageResponse

from . import repository, schemas

logger = logging.getLogger(__name__)


async def list_users(*, caller: policy.Caller = policy.ANONYMOUS) -> list[schemas.UserResponse]:
    if not policy.can_read(caller):
        raise Forbidden("Read access denied")
    return await repository.list_users()


async def get_user(user_id: int, *, caller: policy.Caller = policy.ANONYMOUS) -> schemas.UserResponse:
    if not policy.can_read(caller):
        raise Forbidden("Read access denied")
    return await repository.get_user(user_id)


def _with_allowed_role(data: schemas.UserCreate, caller: policy.Caller) -> schemas.UserCreate:
    # Only admins pick roles; everyone else gets the default (create) or keeps theirs (update).
    if policy.is_admin(caller):
        return data
    return data.model_copy(update={"role": None})


async def create_user(
    payload: Any,
    *,
    hasher: PasswordHasher,
    caller: policy.Caller = policy.ANONYMOUS,
) -> MessageResponse:
    data = validation.parse(schemas.UserCreate, payload)
    if not policy.can_create_user(caller):
        raise Forbidden("Signup is closed")

    data = _with_allowed_role(data, caller)
    data = data.model_copy(update={"password": hasher.hash(data.password)})
    user_id = await repository.create_user(data)
    logger.info("user_created user_id=%s", user_id)
    return MessageResponse(message="User added", id=user_id)


async def update_user(
    payload: Any,
    user_id: int,
    *,
    hasher: PasswordHasher,
    caller: policy.Caller,
) -> MessageResponse:
    data = validation.parse(schemas.UserUpdate, payload)
    policy.require_write(user_id, caller)

    data = _with_allowed_role(data, caller)
    data = data.model_copy(update={"password": hasher.hash(data.password)})
    await repository.update_user(data, user_id, caller=caller)
    logger.info("user_updated user_id=%s", user_id)
    return MessageResponse(message="User updated", id=user_id)


async def update_current_user(payload: Any, *, hasher: PasswordHasher, caller: policy.Caller) -> MessageResponse:
    current = policy.require_authenticated(caller)
    return await update_user(payload, current.user_id, hasher=hasher, caller=current)


async def delete_user(user_id: int, *, caller: policy.Caller) -> MessageResponse:
    policy.require_write(user_id, caller)
    await repository.delete_user(user_id)
    logger.info("user_deleted user_id=%s", user_id)
    return MessageResponse(message="User deleted", id=user_id)


async def delete_current_user(*, caller: policy.Caller) -> MessageResponse:
    current = policy.require_authenticated(caller)
    return await delete_user(current.user_id, caller=current)


async def check_token(*, caller: policy.Caller) -> schemas.UserResponse:
    if not isinstance(caller, policy.Authenticated):
        raise Forbidden("token not valid")
    return await repository.get_user(caller.user_id)
