"""
User API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Path

from auth import dependencies as auth_dependencies
from auth import policy
from auth.security import PasswordHasher
from core.schemas import MessageResponse

from . import schemas, service

router = APIRouter()


@router.get("/users", response_model=list[schemas.UserResponse])
async def list_users(
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> list[schemas.UserResponse]:
    return await service.list_users(caller=caller)


# Declared before /users/{user_id} so "token" is not parsed as an id.
@router.get("/users/token", response_model=schemas.UserResponse)
async def check_token(
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> schemas.UserResponse:
    return await service.check_token(caller=caller)


@router.get("/users/{user_id}", response_model=schemas.UserResponse)
async def get_user(
    user_id: int = Path(..., gt=0),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> schemas.UserResponse:
    return await service.get_user(user_id, caller=caller)


@router.post("/users", response_model=MessageResponse)
async def create_user(
    payload: dict[str, Any] = Body(...),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
    hasher: PasswordHasher = Depends(auth_dependencies.get_hasher),
) -> MessageResponse:
    return await service.create_user(payload, hasher=hasher, caller=caller)


@router.put("/users", response_model=MessageResponse)
async def update_current_user(
    payload: dict[str, Any] = Body(...),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
    hasher: PasswordHasher = Depends(auth_dependencies.get_hasher),
) -> MessageResponse:
    return await service.update_current_user(payload, hasher=hasher, caller=caller)


@router.put("/users/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: int = Path(..., gt=0),
    payload: dict[str, Any] = Body(...),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
    hasher: PasswordHasher = Depends(auth_dependencies.get_hasher),
) -> MessageResponse:
    return await service.update_user(payload, user_id, hasher=hasher, caller=caller)


@router.delete("/users", response_model=MessageResponse)
async def delete_current_user(
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> MessageResponse:
    return await service.delete_current_user(caller=caller)


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int = Path(..., gt=0),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> MessageResponse:
    return await service.delete_user(user_id, caller=caller)
