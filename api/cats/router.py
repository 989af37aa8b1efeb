"""
Cat API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Path

from auth import dependencies as auth_dependencies
from auth import policy
from core.schemas import MessageResponse

from . import schemas, service

router = APIRouter()


@router.get("/cats", response_model=list[schemas.CatResponse])
async def list_cats(
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> list[schemas.CatResponse]:
    return await service.list_cats(caller=caller)


@router.get("/cats/{cat_id}", response_model=schemas.CatResponse)
async def get_cat(
    cat_id: int = Path(..., gt=0),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> schemas.CatResponse:
    return await service.get_cat(cat_id, caller=caller)


@router.post("/cats", response_model=MessageResponse)
async def create_cat(
    payload: dict[str, Any] = Body(...),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> MessageResponse:
    return await service.create_cat(payload, caller=caller)


@router.put("/cats/{cat_id}", response_model=MessageResponse)
async def update_cat(
    cat_id: int = Path(..., gt=0),
    payload: dict[str, Any] = Body(...),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> MessageResponse:
    return await service.update_cat(payload, cat_id, caller=caller)


@router.delete("/cats/{cat_id}", response_model=MessageResponse)
async def delete_cat(
    cat_id: int = Path(..., gt=0),
    caller: policy.Caller = Depends(auth_dependencies.get_caller),
) -> MessageResponse:
    return await service.delete_cat(cat_id, caller=caller)
