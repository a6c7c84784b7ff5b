# photobot/services/archiver.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.repo.category_repo import deactivate_category, select_expired_weekly_categories
from photobot.services.errors import StoreError
from photobot.utils.dates import to_naive_utc, utc_now_naive

log = logging.getLogger(__name__)

WEEKLY_LIFETIME = timedelta(days=7)


@dataclass(frozen=True, slots=True)
class ArchiveResult:
    archived: int
    category_ids: list[int] = field(default_factory=list)


class CategoryArchiver:
    @staticmethod
    async def archive_expired(session: AsyncSession, *, now: datetime | None = None) -> ArchiveResult:
        """
        Deactivates weekly categories whose week started more than 7 days ago.
        One commit per category: an interrupted sweep is finished by the next run.
        """
        cutoff = to_naive_utc(now or utc_now_naive()) - WEEKLY_LIFETIME

        try:
            candidates = await select_expired_weekly_categories(session, before=cutoff)
        except SQLAlchemyError as e:
            raise StoreError("Failed to select expired categories") from e

        archived: list[int] = []
        for category_id in candidates:
            try:
                if await deactivate_category(session, category_id):
                    archived.append(category_id)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(f"Failed to archive category {category_id}") from e

        log.info("Archived %d categories", len(archived))
        return ArchiveResult(archived=len(archived), category_ids=archived)
