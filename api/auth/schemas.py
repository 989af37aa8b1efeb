"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from users.schemas import UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserResponse
