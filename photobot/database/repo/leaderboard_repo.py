from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import LeaderboardEntry, User
from photobot.database.upsert import dialect_insert
from photobot.utils.dates import utc_now_naive


@dataclass(frozen=True, slots=True)
class LeaderboardRow:
    category_id: int
    user_id: int
    rank: int
    points: int
    week_start_date: date
    week_end_date: date


@dataclass(frozen=True, slots=True)
class LeaderRow:
    rank: int
    user_id: int
    points: int
    username: str | None
    first_name: str | None
    last_name: str | None


async def upsert_leaderboard_entries(session: AsyncSession, rows: list[LeaderboardRow]) -> int:
    """
    Insert-or-replace keyed on (category_id, user_id, week_start_date).
    Returns number of rows written.
    """
    if not rows:
        return 0

    stmt = dialect_insert(session, LeaderboardEntry).values(
        [
            {
                "category_id": r.category_id,
                "user_id": r.user_id,
                "rank": r.rank,
                "points": r.points,
                "week_start_date": r.week_start_date,
                "week_end_date": r.week_end_date,
            }
            for r in rows
        ]
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["category_id", "user_id", "week_start_date"],
        set_={
            "rank": stmt.excluded.rank,
            "points": stmt.excluded.points,
            "week_end_date": stmt.excluded.week_end_date,
            "updated_at": utc_now_naive(),
        },
    )
    await session.execute(stmt)
    return len(rows)


async def get_leaderboard(
    session: AsyncSession,
    *,
    category_id: int,
    week_start: date,
    limit: int | None = 10,
) -> list[LeaderRow]:
    q = (
        select(
            LeaderboardEntry.rank,
            LeaderboardEntry.user_id,
            LeaderboardEntry.points,
            User.username,
            User.first_name,
            User.last_name,
        )
        .join(User, User.id == LeaderboardEntry.user_id)
        .where(
            LeaderboardEntry.category_id == category_id,
            LeaderboardEntry.week_start_date == week_start,
        )
        .order_by(LeaderboardEntry.rank.asc(), LeaderboardEntry.user_id.asc())
    )
    if limit is not None:
        q = q.limit(limit)

    res = await session.execute(q)
    rows: list[LeaderRow] = []

    for rank, user_id, points, username, first_name, last_name in res.all():
        rows.append(
            LeaderRow(
                rank=int(rank),
                user_id=int(user_id),
                points=int(points or 0),
                username=username,
                first_name=first_name,
                last_name=last_name,
            )
        )

    return rows


async def get_user_entry(
    session: AsyncSession,
    *,
    category_id: int,
    week_start: date,
    user_id: int,
) -> tuple[int | None, int]:
    """
    Returns (rank, points) for a user in a category week. rank is None if absent.
    """
    res = await session.execute(
        select(LeaderboardEntry.rank, LeaderboardEntry.points).where(
            LeaderboardEntry.category_id == category_id,
            LeaderboardEntry.week_start_date == week_start,
            LeaderboardEntry.user_id == user_id,
        )
    )
    row = res.first()
    if not row:
        return (None, 0)
    rank, points = row
    return (int(rank), int(points or 0))
