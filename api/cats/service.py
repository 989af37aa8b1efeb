"""
Cat business logic.

Admins may create, update and delete any cat and assign any owner.
Other authenticated users only act on cats they own, and always own the
cats they create. Touching someone else's cat is `Forbidden`; a missing
cat is `NotFound`.
"""

from __future__ import annotations

import logging
from typing import Any

from auth import policy
from core import validation
from core.errors import Forbidden
from core.schemas import MessageResponse

from . import repository, schemas

logger = logging.getLogger(__name__)


async def list_cats(*, caller: policy.Caller = policy.ANONYMOUS) -> list[schemas.CatResponse]:
    if not policy.can_read(caller):
        raise Forbidden("Read access denied")
    return await repository.list_cats()


async def get_cat(cat_id: int, *, caller: policy.Caller = policy.ANONYMOUS) -> schemas.CatResponse:
    if not policy.can_read(caller):
        raise Forbidden("Read access denied")
    return await repository.get_cat(cat_id)


async def create_cat(payload: Any, *, caller: policy.Caller) -> MessageResponse:
    data = validation.parse(schemas.CatCreate, payload)
    current = policy.require_authenticated(caller)

    owner = data.owner if current.is_admin and data.owner is not None else current.user_id
    cat_id = await repository.create_cat(data.model_copy(update={"owner": owner}))
    logger.info("cat_created cat_id=%s owner=%s", cat_id, owner)
    return MessageResponse(message="Cat added", id=cat_id)


async def update_cat(payload: Any, cat_id: int, *, caller: policy.Caller) -> MessageResponse:
    data = validation.parse(schemas.CatUpdate, payload)
    current = policy.require_authenticated(caller)
    policy.require_write(await repository.get_cat_owner(cat_id), current)

    if not current.is_admin:
        data = data.model_copy(update={"owner": None})
    await repository.update_cat(data, cat_id, caller=current)
    logger.info("cat_updated cat_id=%s user_id=%s", cat_id, current.user_id)
    return MessageResponse(message="Cat updated", id=cat_id)


async def delete_cat(cat_id: int, *, caller: policy.Caller) -> MessageResponse:
    current = policy.require_authenticated(caller)
    policy.require_write(await repository.get_cat_owner(cat_id), current)

    await repository.delete_cat(cat_id, caller=current)
    logger.info("cat_deleted cat_id=%s user_id=%s", cat_id, current.user_id)
    return MessageResponse(message="Cat deleted", id=cat_id)
