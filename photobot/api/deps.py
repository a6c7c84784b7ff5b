# photobot/api/deps.py
from __future__ import annotations

from typing import AsyncIterator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config.settings import Settings
from photobot.services.auth import verify_cron_secret


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.db.session() as session:
        yield session


def require_cron_secret(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    # raises AuthorizationError -> 401 before the endpoint body runs
    verify_cron_secret(authorization, settings.cron_secret)
