"""
Database schema (tables) for users and cats.

`create_tables()` is safe to call multiple times (uses IF NOT EXISTS):
    python -m core.ddl
"""

from __future__ import annotations

import asyncio
import logging

from . import db

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
-- Users: password holds a bcrypt hash, never plaintext.
CREATE TABLE IF NOT EXISTS users (
    user_id     SERIAL PRIMARY KEY,
    user_name   VARCHAR(255) NOT NULL,
    email       VARCHAR(255) NOT NULL,
    password    VARCHAR(255) NOT NULL,
    role        VARCHAR(10) NOT NULL DEFAULT 'user' CHECK (role IN ('user', 'admin'))
);

-- Emails are unique regardless of letter case; login matches on lower(email).
CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email_lower ON users (lower(email));

-- Cats: coords is (lat, lng); every cat has exactly one owner.
CREATE TABLE IF NOT EXISTS cats (
    cat_id      SERIAL PRIMARY KEY,
    cat_name    VARCHAR(255) NOT NULL,
    weight      DOUBLE PRECISION NOT NULL CHECK (weight > 0),
    owner       INT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    filename    VARCHAR(255) NOT NULL,
    birthdate   DATE NOT NULL,
    coords      POINT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_cats_owner ON cats(owner);
"""


async def create_tables() -> None:
    await db.execute(SCHEMA_SQL)
    logger.info("schema_ready")


async def _main() -> None:
    await db.init_pool()
    try:
        await create_tables()
    finally:
        await db.close_pool()


if __name__ == "__main__":
    asyncio.run(_main())
