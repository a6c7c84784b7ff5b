# photobot/services/hall_of_fame.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.repo.category_repo import list_category_ids
from photobot.database.repo.hall_of_fame_repo import (
    HallOfFameRow,
    prune_hall_of_fame,
    upsert_hall_of_fame_entries,
)
from photobot.database.repo.photo_repo import PhotoScoreRow, select_top_photos
from photobot.services.errors import StoreError, ValidationError
from photobot.utils.dates import MonthWindow, month_window, month_window_of, utc_now_naive

log = logging.getLogger(__name__)

DEFAULT_SIZE = 10


@dataclass(frozen=True, slots=True)
class HallOfFameRunResult:
    month_year: str
    categories_processed: int
    entries_added: int
    entries_pruned: int


def build_entries(category_id: int, month_year: str, photos: list[PhotoScoreRow]) -> list[HallOfFameRow]:
    # photos arrive already ordered by likes
    return [
        HallOfFameRow(
            rank=i + 1,
            photo_id=p.id,
            category_id=category_id,
            user_id=p.user_id,
            month_year=month_year,
            likes_count=p.likes_count,
        )
        for i, p in enumerate(photos)
    ]


class HallOfFameService:
    @staticmethod
    async def calculate_category(
        session: AsyncSession,
        category_id: int,
        window: MonthWindow,
        *,
        limit: int = DEFAULT_SIZE,
    ) -> tuple[list[HallOfFameRow], int]:
        """
        Upserts the month's top-N for one category, then removes rows this run
        did not write. Returns (entries, pruned_count).
        """
        try:
            top = await select_top_photos(
                session,
                category_id=category_id,
                start=window.start_utc,
                end=window.end_utc,
                limit=limit,
            )
            entries = build_entries(category_id, window.month_year, top)

            await upsert_hall_of_fame_entries(session, entries)
            pruned = await prune_hall_of_fame(
                session,
                category_id=category_id,
                month_year=window.month_year,
                keep={(e.user_id, e.rank) for e in entries},
            )
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Hall of fame calculation failed for category {category_id}") from e

        return entries, pruned

    @staticmethod
    async def calculate(
        session: AsyncSession,
        *,
        now: datetime | None = None,
        month_year: str | None = None,
        tz_name: str = "UTC",
        limit: int = DEFAULT_SIZE,
    ) -> HallOfFameRunResult:
        """
        Recomputes one month's hall of fame for every category: `month_year`
        when given, otherwise the month containing `now`.
        """
        if month_year:
            try:
                window = month_window_of(month_year, tz_name)
            except ValueError as e:
                raise ValidationError(str(e)) from e
        else:
            window = month_window(now or utc_now_naive(), tz_name)

        try:
            category_ids = await list_category_ids(session)
        except SQLAlchemyError as e:
            raise StoreError("Failed to list categories") from e

        added = 0
        pruned = 0
        for category_id in category_ids:
            entries, removed = await HallOfFameService.calculate_category(
                session, category_id, window, limit=limit
            )
            added += len(entries)
            pruned += removed

        log.info("Added %d hall of fame entries for %s (%d pruned)", added, window.month_year, pruned)
        return HallOfFameRunResult(
            month_year=window.month_year,
            categories_processed=len(category_ids),
            entries_added=added,
            entries_pruned=pruned,
        )
