"""Tests for the pure helpers in core.db."""

import pytest

from core import db


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("UPDATE 1", 1),
        ("DELETE 0", 0),
        ("INSERT 0 1", 1),
        ("UPDATE 12", 12),
        ("CREATE TABLE", 0),
        ("", 0),
    ],
)
def test_affected_rows(status: str, expected: int) -> None:
    assert db.affected_rows(status) == expected


def test_database_url_strips_sslmode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://cat:pw@db:5432/cats?sslmode=require&application_name=api")
    assert db.database_url() == "postgresql://cat:pw@db:5432/cats?application_name=api"


def test_database_url_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        db.database_url()


def test_pool_must_be_initialized() -> None:
    with pytest.raises(RuntimeError):
        db.pool()


@pytest.mark.asyncio
async def test_create_tables_issues_schema(monkeypatch: pytest.MonkeyPatch) -> None:
    from core import ddl

    seen: list[str] = []

    async def _execute(sql: str, *args) -> int:
        seen.append(sql)
        return 0

    monkeypatch.setattr(db, "execute", _execute)

    await ddl.create_tables()

    [sql] = seen
    assert "CREATE TABLE IF NOT EXISTS users" in sql
    assert "coords      POINT NOT NULL" in sql
    assert "REFERENCES users(user_id) ON DELETE CASCADE" in sql
    assert "ON users (lower(email))" in sql


def test_env_int_falls_back_on_missing_or_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    from core.env import env_int

    monkeypatch.delenv("DB_POOL_MAX", raising=False)
    assert env_int("DB_POOL_MAX", 5) == 5
    monkeypatch.setenv("DB_POOL_MAX", "many")
    assert env_int("DB_POOL_MAX", 5) == 5
    monkeypatch.setenv("DB_POOL_MAX", " 12 ")
    assert env_int("DB_POOL_MAX", 5) == 12
