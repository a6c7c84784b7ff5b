from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import PhotoVote, VoteType
from photobot.database.upsert import dialect_insert
from photobot.utils.dates import utc_now_naive


async def upsert_vote(
    session: AsyncSession,
    *,
    photo_id: int,
    user_id: int,
    vote_type: VoteType,
) -> None:
    """
    Insert-or-update keyed on (photo_id, user_id).
    A repeated vote from the same user replaces the previous choice.
    """
    stmt = dialect_insert(session, PhotoVote).values(
        photo_id=photo_id,
        user_id=user_id,
        vote_type=vote_type,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["photo_id", "user_id"],
        set_={
            "vote_type": stmt.excluded.vote_type,
            "updated_at": utc_now_naive(),
        },
    )
    await session.execute(stmt)


async def select_vote_types(session: AsyncSession, photo_id: int) -> list[VoteType]:
    res = await session.execute(select(PhotoVote.vote_type).where(PhotoVote.photo_id == photo_id))
    return [VoteType(v) for v in res.scalars().all()]
