"""
Cat API schemas (request/response models).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class CatCreate(BaseModel):
    cat_name: str = Field(..., min_length=1, max_length=255)
    weight: float = Field(..., gt=0)
    filename: str = Field(..., min_length=1, max_length=255)
    birthdate: date
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    # Bare user id on write. Non-admin callers always own what they create.
    owner: int | None = Field(default=None, gt=0)


class CatUpdate(CatCreate):
    """
    Full replace of the mutable fields. `owner` is kept when omitted.
    """


class OwnerSummary(BaseModel):
    user_id: int
    user_name: str


class CatResponse(BaseModel):
    cat_id: int
    cat_name: str
    weight: float
    filename: str
    birthdate: date
    lat: float
    lng: float
    # Owner summary, or {} when the joined owner could not be read.
    owner: dict[str, Any] = Field(default_factory=dict)
