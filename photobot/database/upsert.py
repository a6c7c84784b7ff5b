# photobot/database/upsert.py
from __future__ import annotations

from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(session: AsyncSession, model: Any):
    """
    INSERT construct that supports on_conflict_do_update() for the bound dialect.
    Only SQLite and PostgreSQL are supported.
    """
    name = session.get_bind().dialect.name
    if name == "postgresql":
        return pg_insert(model)
    if name == "sqlite":
        return sqlite_insert(model)
    raise RuntimeError(f"Upsert not supported for dialect: {name}")
