"""
Row <-> record mapping for users.
"""

from __future__ import annotations

from typing import Any

from . import schemas


def to_user_response(row: dict[str, Any]) -> schemas.UserResponse:
    # Built field by field so `password` can never leak into a response.
    return schemas.UserResponse(
        user_id=int(row["user_id"]),
        user_name=str(row["user_name"]),
        email=str(row["email"]),
        role=str(row.get("role") or "user"),
    )
