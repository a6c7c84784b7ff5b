# photobot/utils/middleware.py
from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject, User as TgUser

from photobot.database.repo.users import get_or_create_user
from photobot.database.session import Database


class DbSessionMiddleware(BaseMiddleware):
    """
    One session per update, injected as `session`.

    Human senders are synced into `users` and injected as `db_user` (the voter
    and photo owner identity). Commits after the handler, rolls back on error.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        async with self.db.session() as session:
            data["session"] = session

            # filled in by aiogram's outer UserContextMiddleware
            tg: TgUser | None = data.get("event_from_user")
            if tg is not None and not tg.is_bot:
                data["db_user"] = await get_or_create_user(
                    session,
                    telegram_id=tg.id,
                    username=tg.username,
                    first_name=tg.first_name,
                    last_name=tg.last_name,
                )

            try:
                result = await handler(event, data)
            except Exception:
                await session.rollback()
                raise
            await session.commit()
            return result
