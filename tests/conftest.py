"""Shared fixtures.

`FakeDb` replaces the `core.db` helpers with an in-memory store. Each
repository statement is dispatched by its SQL constant to a handler that
reproduces what PostgreSQL would do with it (RETURNING rows, affected row
counts, the owner join, FK and unique violations).
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Callable

import asyncpg
import bcrypt
import pytest
from asyncpg.types import Point

from auth import policy, security
from cats import repository as cats_repository
from core import db
from users import repository as users_repository


class FakeDb:
    def __init__(self) -> None:
        self.users: dict[int, dict[str, Any]] = {}
        self.cats: dict[int, dict[str, Any]] = {}
        self.statements: list[tuple[str, tuple[Any, ...]]] = []
        self._next_user_id = 1
        self._next_cat_id = 1

        self._handlers: dict[str, Callable[..., Any]] = {
            users_repository.LIST_USERS_SQL: self._list_users,
            users_repository.GET_USER_SQL: self._get_user,
            users_repository.GET_USER_CREDENTIALS_SQL: self._get_user_credentials,
            users_repository.INSERT_USER_SQL: self._insert_user,
            users_repository.UPDATE_USER_SQL: self._update_user,
            users_repository.DELETE_USER_SQL: self._delete_user,
            cats_repository.LIST_CATS_SQL: self._list_cats,
            cats_repository.GET_CAT_SQL: self._get_cat,
            cats_repository.GET_CAT_OWNER_SQL: self._get_cat_owner,
            cats_repository.INSERT_CAT_SQL: self._insert_cat,
            cats_repository.UPDATE_CAT_SQL: self._update_cat,
            cats_repository.DELETE_CAT_SQL: self._delete_cat,
        }

    # -- core.db interface -------------------------------------------------

    def _run(self, sql: str, args: tuple[Any, ...]) -> Any:
        self.statements.append((sql, args))
        handler = self._handlers.get(sql)
        if handler is None:
            raise AssertionError(f"unexpected SQL: {sql}")
        return handler(*args)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        result = self._run(sql, args)
        if isinstance(result, list):
            return result[0] if result else None
        return result

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        return self._run(sql, args)

    async def execute(self, sql: str, *args: Any) -> int:
        return self._run(sql, args)

    # -- seeding -----------------------------------------------------------

    def add_user(self, user_name: str, email: str, password: str = "hash", role: str = "user") -> int:
        user_id = self._next_user_id
        self._next_user_id += 1
        self.users[user_id] = {
            "user_id": user_id,
            "user_name": user_name,
            "email": email,
            "password": password,
            "role": role,
        }
        return user_id

    def add_cat(
        self,
        owner: int,
        cat_name: str = "Miso",
        weight: float = 4.2,
        filename: str = "miso.jpg",
        birthdate: date = date(2020, 5, 1),
        lat: float = 60.17,
        lng: float = 24.94,
    ) -> int:
        cat_id = self._next_cat_id
        self._next_cat_id += 1
        self.cats[cat_id] = {
            "cat_id": cat_id,
            "cat_name": cat_name,
            "weight": weight,
            "owner": owner,
            "filename": filename,
            "birthdate": birthdate,
            "coords": Point(lat, lng),
        }
        return cat_id

    # -- users -------------------------------------------------------------

    @staticmethod
    def _public(user: dict[str, Any]) -> dict[str, Any]:
        return {k: user[k] for k in ("user_id", "user_name", "email", "role")}

    def _email_in_use(self, email: str, *, exclude: int | None = None) -> bool:
        return any(
            u["email"].lower() == email.lower() and u["user_id"] != exclude for u in self.users.values()
        )

    def _list_users(self) -> list[dict[str, Any]]:
        return [self._public(u) for _, u in sorted(self.users.items())]

    def _get_user(self, user_id: int) -> dict[str, Any] | None:
        user = self.users.get(user_id)
        return self._public(user) if user else None

    def _get_user_credentials(self, email: str) -> dict[str, Any] | None:
        for user in self.users.values():
            if user["email"].lower() == email.lower():
                return dict(user)
        return None

    def _insert_user(self, user_name: str, email: str, password: str, role: str) -> dict[str, Any]:
        if self._email_in_use(email):
            raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")
        return {"user_id": self.add_user(user_name, email, password, role)}

    def _update_user(self, user_name: str, email: str, password: str, role: str | None, user_id: int) -> int:
        user = self.users.get(user_id)
        if user is None:
            return 0
        if self._email_in_use(email, exclude=user_id):
            raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")
        user.update(user_name=user_name, email=email, password=password, role=role or user["role"])
        return 1

    def _delete_user(self, user_id: int) -> int:
        if self.users.pop(user_id, None) is None:
            return 0
        # ON DELETE CASCADE
        for cat_id in [c for c, cat in self.cats.items() if cat["owner"] == user_id]:
            del self.cats[cat_id]
        return 1

    # -- cats --------------------------------------------------------------

    def _cat_row(self, cat: dict[str, Any]) -> dict[str, Any] | None:
        owner = self.users.get(cat["owner"])
        if owner is None:
            return None
        row = {k: v for k, v in cat.items() if k != "owner"}
        row["owner"] = json.dumps({"user_id": owner["user_id"], "user_name": owner["user_name"]})
        return row

    def _list_cats(self) -> list[dict[str, Any]]:
        rows = [self._cat_row(cat) for _, cat in sorted(self.cats.items())]
        return [row for row in rows if row is not None]

    def _get_cat(self, cat_id: int) -> dict[str, Any] | None:
        cat = self.cats.get(cat_id)
        return self._cat_row(cat) if cat else None

    def _get_cat_owner(self, cat_id: int) -> dict[str, Any] | None:
        cat = self.cats.get(cat_id)
        return {"owner": cat["owner"]} if cat else None

    def _insert_cat(
        self, cat_name: str, weight: float, owner: int, filename: str, birthdate: date, coords: Point
    ) -> dict[str, Any]:
        if owner not in self.users:
            raise asyncpg.ForeignKeyViolationError("insert or update on table \"cats\" violates foreign key")
        lat, lng = coords
        cat_id = self.add_cat(owner, cat_name, weight, filename, birthdate, lat, lng)
        return {"cat_id": cat_id}

    def _update_cat(
        self,
        cat_name: str,
        weight: float,
        owner: int | None,
        filename: str,
        birthdate: date,
        coords: Point,
        cat_id: int,
        is_admin: bool,
        caller_id: int,
    ) -> int:
        cat = self.cats.get(cat_id)
        if cat is None or not (is_admin or cat["owner"] == caller_id):
            return 0
        if owner is not None and owner not in self.users:
            raise asyncpg.ForeignKeyViolationError("insert or update on table \"cats\" violates foreign key")
        cat.update(
            cat_name=cat_name,
            weight=weight,
            owner=owner if owner is not None else cat["owner"],
            filename=filename,
            birthdate=birthdate,
            coords=coords,
        )
        return 1

    def _delete_cat(self, cat_id: int, is_admin: bool, caller_id: int) -> int:
        cat = self.cats.get(cat_id)
        if cat is None or not (is_admin or cat["owner"] == caller_id):
            return 0
        del self.cats[cat_id]
        return 1


@pytest.fixture
def fake_db(monkeypatch: pytest.MonkeyPatch) -> FakeDb:
    fake = FakeDb()
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    monkeypatch.setattr(db, "execute", fake.execute)
    return fake


@pytest.fixture(scope="session")
def test_salt() -> bytes:
    # Low cost factor keeps the suite fast.
    return bcrypt.gensalt(rounds=4)


@pytest.fixture
def hasher(test_salt: bytes) -> security.PasswordHasher:
    return security.PasswordHasher(test_salt)


@pytest.fixture
def user_caller() -> Callable[[int], policy.Authenticated]:
    def _make(user_id: int) -> policy.Authenticated:
        return policy.Authenticated(user_id=user_id, role=policy.Role.user)

    return _make


@pytest.fixture
def admin_caller() -> Callable[[int], policy.Authenticated]:
    def _make(user_id: int) -> policy.Authenticated:
        return policy.Authenticated(user_id=user_id, role=policy.Role.admin)

    return _make
