"""
Cat persistence (raw SQL).

Reads join the owner row and return it as a JSON object; writes take the
owner as a bare user id and pack lat/lng into one point value.
The service checks ownership with `get_cat_owner` before a write; update and
delete also carry the rule in their WHERE clause.
"""

from __future__ import annotations

import asyncpg

from auth import policy
from core import db
from core.errors import CreateFailed, DeleteFailed, FieldError, NotFound, UpdateFailed, ValidationError

from . import mapper, schemas

_SELECT_CATS = """
    SELECT c.cat_id, c.cat_name, c.weight, c.filename, c.birthdate, c.coords,
           json_build_object('user_id', u.user_id, 'user_name', u.user_name) AS owner
    FROM cats c
    JOIN users u ON c.owner = u.user_id
"""

LIST_CATS_SQL = _SELECT_CATS + """
    ORDER BY c.cat_id
"""

GET_CAT_SQL = _SELECT_CATS + """
    WHERE c.cat_id = $1
"""

GET_CAT_OWNER_SQL = """
    SELECT owner
    FROM cats
    WHERE cat_id = $1
"""

INSERT_CAT_SQL = """
    INSERT INTO cats (cat_name, weight, owner, filename, birthdate, coords)
    VALUES ($1, $2, $3, $4, $5, $6)
    RETURNING cat_id
"""

UPDATE_CAT_SQL = """
    UPDATE cats
    SET cat_name = $1,
        weight = $2,
        owner = COALESCE($3, owner),
        filename = $4,
        birthdate = $5,
        coords = $6
    WHERE cat_id = $7
      AND ($8 OR owner = $9)
"""

DELETE_CAT_SQL = """
    DELETE FROM cats
    WHERE cat_id = $1
      AND ($2 OR owner = $3)
"""


def _unknown_owner() -> ValidationError:
    return ValidationError([FieldError(field="owner", rule="exists", message="Owner does not exist")])


async def list_cats() -> list[schemas.CatResponse]:
    rows = await db.fetch_all(LIST_CATS_SQL)
    if not rows:
        raise NotFound("No cats found")
    return [mapper.to_cat_response(row) for row in rows]


async def get_cat(cat_id: int) -> schemas.CatResponse:
    row = await db.fetch_one(GET_CAT_SQL, cat_id)
    if row is None:
        raise NotFound("Cat not found")
    return mapper.to_cat_response(row)


async def get_cat_owner(cat_id: int) -> int:
    row = await db.fetch_one(GET_CAT_OWNER_SQL, cat_id)
    if row is None:
        raise NotFound("Cat not found")
    return int(row["owner"])


async def create_cat(data: schemas.CatCreate) -> int:
    """
    Insert a cat. `data.owner` must be set by the caller.
    """
    if data.owner is None:
        raise _unknown_owner()
    try:
        row = await db.fetch_one(
            INSERT_CAT_SQL,
            data.cat_name,
            data.weight,
            data.owner,
            data.filename,
            data.birthdate,
            mapper.coords_to_point(data.lat, data.lng),
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise _unknown_owner() from exc
    if row is None:
        raise CreateFailed("No cats added")
    return int(row["cat_id"])


async def update_cat(data: schemas.CatUpdate, cat_id: int, *, caller: policy.Authenticated) -> None:
    try:
        affected = await db.execute(
            UPDATE_CAT_SQL,
            data.cat_name,
            data.weight,
            data.owner,
            data.filename,
            data.birthdate,
            mapper.coords_to_point(data.lat, data.lng),
            cat_id,
            caller.is_admin,
            caller.user_id,
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise _unknown_owner() from exc
    if affected == 0:
        raise UpdateFailed("No cats updated")


async def delete_cat(cat_id: int, *, caller: policy.Authenticated) -> None:
    affected = await db.execute(DELETE_CAT_SQL, cat_id, caller.is_admin, caller.user_id)
    if affected == 0:
        raise DeleteFailed("No cats deleted")
