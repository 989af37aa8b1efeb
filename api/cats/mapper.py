"""
Row <-> record mapping for cats.

Storage keeps the location in one `point` column (x = lat, y = lng) and the
query joins the owner in as a JSON object; API records carry flat `lat`/`lng`
and a nested owner summary.
"""

from __future__ import annotations

import json
from typing import Any

from asyncpg.types import Point

from . import schemas


def coords_to_point(lat: float, lng: float) -> Point:
    return Point(float(lat), float(lng))


def point_to_coords(value: Any) -> tuple[float, float]:
    """
    Split a point value into (lat, lng).

    Accepts asyncpg's `Point` or any 2-item sequence.
    """
    if value is None:
        raise ValueError("coords is empty")
    lat, lng = value
    return float(lat), float(lng)


def parse_owner(raw: Any) -> dict[str, Any]:
    """
    Parse the joined owner object into `{user_id, user_name}`.

    Anything missing or malformed becomes `{}` instead of failing the read.
    """
    if isinstance(raw, dict):
        data = raw
    else:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else str(raw or "")
        try:
            data = json.loads(text or "{}")
        except ValueError:
            return {}
    if not isinstance(data, dict):
        return {}

    try:
        return schemas.OwnerSummary.model_validate(data).model_dump()
    except ValueError:
        return {}


def to_cat_response(row: dict[str, Any]) -> schemas.CatResponse:
    lat, lng = point_to_coords(row["coords"])
    return schemas.CatResponse(
        cat_id=int(row["cat_id"]),
        cat_name=str(row["cat_name"]),
        weight=float(row["weight"]),
        filename=str(row["filename"]),
        birthdate=row["birthdate"],
        lat=lat,
        lng=lng,
        owner=parse_owner(row.get("owner")),
    )
