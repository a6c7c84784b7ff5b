from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import HallOfFameEntry, Photo, User
from photobot.database.upsert import dialect_insert
from photobot.utils.dates import utc_now_naive


@dataclass(frozen=True, slots=True)
class HallOfFameRow:
    rank: int
    photo_id: int
    category_id: int
    user_id: int
    month_year: str
    likes_count: int


@dataclass(frozen=True, slots=True)
class FameRow:
    rank: int
    photo_id: int
    user_id: int
    likes_count: int
    file_id: str
    caption: str | None
    username: str | None
    first_name: str | None
    last_name: str | None


async def upsert_hall_of_fame_entries(session: AsyncSession, rows: list[HallOfFameRow]) -> int:
    """
    Insert-or-replace keyed on (category_id, user_id, month_year, rank).
    """
    if not rows:
        return 0

    stmt = dialect_insert(session, HallOfFameEntry).values(
        [
            {
                "category_id": r.category_id,
                "user_id": r.user_id,
                "photo_id": r.photo_id,
                "month_year": r.month_year,
                "rank": r.rank,
                "likes_count": r.likes_count,
            }
            for r in rows
        ]
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["category_id", "user_id", "month_year", "rank"],
        set_={
            "photo_id": stmt.excluded.photo_id,
            "likes_count": stmt.excluded.likes_count,
            "updated_at": utc_now_naive(),
        },
    )
    await session.execute(stmt)
    return len(rows)


async def prune_hall_of_fame(
    session: AsyncSession,
    *,
    category_id: int,
    month_year: str,
    keep: set[tuple[int, int]],
) -> int:
    """
    Deletes rows of (category_id, month_year) whose (user_id, rank) is not in `keep`.
    Returns number of rows deleted.
    """
    res = await session.execute(
        select(HallOfFameEntry.id, HallOfFameEntry.user_id, HallOfFameEntry.rank).where(
            HallOfFameEntry.category_id == category_id,
            HallOfFameEntry.month_year == month_year,
        )
    )
    stale_ids = [int(entry_id) for entry_id, user_id, rank in res.all() if (int(user_id), int(rank)) not in keep]
    if not stale_ids:
        return 0

    await session.execute(delete(HallOfFameEntry).where(HallOfFameEntry.id.in_(stale_ids)))
    return len(stale_ids)


async def get_hall_of_fame(
    session: AsyncSession,
    *,
    category_id: int,
    month_year: str,
) -> list[FameRow]:
    q = (
        select(
            HallOfFameEntry.rank,
            HallOfFameEntry.photo_id,
            HallOfFameEntry.user_id,
            HallOfFameEntry.likes_count,
            Photo.file_id,
            Photo.caption,
            User.username,
            User.first_name,
            User.last_name,
        )
        .join(Photo, Photo.id == HallOfFameEntry.photo_id)
        .join(User, User.id == HallOfFameEntry.user_id)
        .where(
            HallOfFameEntry.category_id == category_id,
            HallOfFameEntry.month_year == month_year,
        )
        .order_by(HallOfFameEntry.rank.asc())
    )
    res = await session.execute(q)

    out: list[FameRow] = []
    for rank, photo_id, user_id, likes, file_id, caption, username, first_name, last_name in res.all():
        out.append(
            FameRow(
                rank=int(rank),
                photo_id=int(photo_id),
                user_id=int(user_id),
                likes_count=int(likes or 0),
                file_id=file_id,
                caption=caption,
                username=username,
                first_name=first_name,
                last_name=last_name,
            )
        )
    return out
