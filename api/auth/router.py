"""
Auth API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from . import dependencies, schemas, service
from .security import PasswordHasher

router = APIRouter()


@router.post("/auth/login", response_model=schemas.LoginResponse)
async def login(
    payload: dict[str, Any] = Body(...),
    hasher: PasswordHasher = Depends(dependencies.get_hasher),
) -> schemas.LoginResponse:
    return await service.login(payload, hasher=hasher)
