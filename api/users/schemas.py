"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from auth.policy import Role
from auth.security import MAX_PASSWORD_BYTES


class UserCreate(BaseModel):
    user_name: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=5, max_length=128)
    # Only honoured for admin callers; signup always creates role "user".
    role: Role | None = None

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserUpdate(UserCreate):
    """
    Full replace of the mutable fields. `role` is kept when omitted.
    """


class UserResponse(BaseModel):
    user_id: int
    user_name: str
    email: str
    role: Role
