"""
User persistence (raw SQL).

Every operation issues exactly one parameterized statement. Zero rows
affected is reported as a domain error, never as an empty success.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from auth import policy
from core import db
from core.errors import CreateFailed, DeleteFailed, FieldError, NotFound, UpdateFailed, ValidationError

from . import mapper, schemas

LIST_USERS_SQL = """
    SELECT user_id, user_name, email, role
    FROM users
    ORDER BY user_id
"""

GET_USER_SQL = """
    SELECT user_id, user_name, email, role
    FROM users
    WHERE user_id = $1
"""

GET_USER_CREDENTIALS_SQL = """
    SELECT user_id, user_name, email, password, role
    FROM users
    WHERE lower(email) = lower($1)
"""

INSERT_USER_SQL = """
    INSERT INTO users (user_name, email, password, role)
    VALUES ($1, $2, $3, $4)
    RETURNING user_id
"""

UPDATE_USER_SQL = """
    UPDATE users
    SET user_name = $1,
        email = $2,
        password = $3,
        role = COALESCE($4, role)
    WHERE user_id = $5
"""

DELETE_USER_SQL = """
    DELETE FROM users
    WHERE user_id = $1
"""


def _email_taken() -> ValidationError:
    return ValidationError([FieldError(field="email", rule="unique", message="Email is already registered")])


def _role_arg(role: policy.Role | None) -> str | None:
    return role.value if role is not None else None


async def list_users() -> list[schemas.UserResponse]:
    rows = await db.fetch_all(LIST_USERS_SQL)
    if not rows:
        raise NotFound("No users found")
    return [mapper.to_user_response(row) for row in rows]


async def find_user(user_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(GET_USER_SQL, user_id)


async def get_user(user_id: int) -> schemas.UserResponse:
    row = await find_user(user_id)
    if row is None:
        raise NotFound("User not found")
    return mapper.to_user_response(row)


async def get_user_credentials_by_email(email: str) -> dict[str, Any] | None:
    """
    Internal lookup for login: the only query that reads the password hash.
    """
    return await db.fetch_one(GET_USER_CREDENTIALS_SQL, (email or "").strip())


async def create_user(data: schemas.UserCreate) -> int:
    """
    Insert a user. `data.password` must already be hashed.
    """
    try:
        row = await db.fetch_one(
            INSERT_USER_SQL,
            data.user_name,
            str(data.email),
            data.password,
            _role_arg(data.role) or policy.Role.user.value,
        )
    except asyncpg.UniqueViolationError as exc:
        raise _email_taken() from exc
    if row is None:
        raise CreateFailed("No users added")
    return int(row["user_id"])


async def update_user(data: schemas.UserUpdate, user_id: int, *, caller: policy.Caller) -> None:
    """
    Replace the mutable fields of `user_id`. `data.password` must already be hashed.

    The caller is checked here as well as in the service, so direct callers of
    the data layer cannot bypass the self-or-admin rule.
    """
    policy.require_write(user_id, caller)
    try:
        affected = await db.execute(
            UPDATE_USER_SQL,
            data.user_name,
            str(data.email),
            data.password,
            _role_arg(data.role),
            user_id,
        )
    except asyncpg.UniqueViolationError as exc:
        raise _email_taken() from exc
    if affected == 0:
        raise UpdateFailed("No users updated")


async def delete_user(user_id: int) -> None:
    affected = await db.execute(DELETE_USER_SQL, user_id)
    if affected == 0:
        raise DeleteFailed("No users deleted")
