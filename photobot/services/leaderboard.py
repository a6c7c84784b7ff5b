# photobot/services/leaderboard.py
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.repo.category_repo import list_category_ids
from photobot.database.repo.leaderboard_repo import LeaderboardRow, upsert_leaderboard_entries
from photobot.database.repo.photo_repo import PhotoScoreRow, select_photos_in_window
from photobot.services.errors import StoreError
from photobot.utils.dates import WeekWindow, utc_now_naive, week_window

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RankedUser:
    user_id: int
    rank: int
    points: int


@dataclass(frozen=True, slots=True)
class LeaderboardRunResult:
    week_start: date
    week_end: date
    categories_processed: int
    entries_written: int


def sum_user_scores(photos: Iterable[PhotoScoreRow]) -> dict[int, int]:
    """
    Net score per owner. Not clamped, a user can end up negative.
    """
    totals: dict[int, int] = {}
    for p in photos:
        totals[p.user_id] = totals.get(p.user_id, 0) + int(p.net_score)
    return totals


def rank_user_scores(scores: dict[int, int]) -> list[RankedUser]:
    """
    Points descending, ties broken by user id ascending.
    Ranks are positions 1..N with no gaps.
    """
    ordered = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))
    return [
        RankedUser(user_id=user_id, rank=i, points=points)
        for i, (user_id, points) in enumerate(ordered, start=1)
    ]


class LeaderboardService:
    @staticmethod
    async def calculate(
        session: AsyncSession,
        category_id: int,
        *,
        now: datetime | None = None,
        tz_name: str = "UTC",
    ) -> list[LeaderboardRow]:
        """
        Recomputes the current week's leaderboard for one category and upserts it.
        A category with no photos in the window writes nothing.
        """
        window = week_window(now or utc_now_naive(), tz_name)
        return await LeaderboardService._calculate_window(session, category_id, window)

    @staticmethod
    async def _calculate_window(
        session: AsyncSession,
        category_id: int,
        window: WeekWindow,
    ) -> list[LeaderboardRow]:
        try:
            photos = await select_photos_in_window(
                session,
                category_id=category_id,
                start=window.start_utc,
                end=window.end_utc,
            )
            ranked = rank_user_scores(sum_user_scores(photos))
            rows = [
                LeaderboardRow(
                    category_id=category_id,
                    user_id=r.user_id,
                    rank=r.rank,
                    points=r.points,
                    week_start_date=window.start_date,
                    week_end_date=window.end_date,
                )
                for r in ranked
            ]
            if rows:
                await upsert_leaderboard_entries(session, rows)
                await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Leaderboard calculation failed for category {category_id}") from e

        return rows

    @staticmethod
    async def calculate_all(
        session: AsyncSession,
        *,
        now: datetime | None = None,
        tz_name: str = "UTC",
    ) -> LeaderboardRunResult:
        """
        Runs calculate() for every active category. Each category commits on
        its own, so a failure part-way leaves earlier categories written.
        """
        window = week_window(now or utc_now_naive(), tz_name)

        try:
            category_ids = await list_category_ids(session, active_only=True)
        except SQLAlchemyError as e:
            raise StoreError("Failed to list categories") from e

        written = 0
        for category_id in category_ids:
            rows = await LeaderboardService._calculate_window(session, category_id, window)
            written += len(rows)

        log.info(
            "Leaderboards for week %s: %d categories, %d entries",
            window.start_date.isoformat(), len(category_ids), written,
        )
        return LeaderboardRunResult(
            week_start=window.start_date,
            week_end=window.end_date,
            categories_processed=len(category_ids),
            entries_written=written,
        )
