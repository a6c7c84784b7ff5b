from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import Photo
from photobot.utils.dates import utc_now_naive


@dataclass(frozen=True, slots=True)
class PhotoScoreRow:
    id: int
    user_id: int
    likes_count: int
    net_score: int
    created_at: datetime


def _score_columns():
    return (
        Photo.id,
        Photo.user_id,
        Photo.likes_count,
        Photo.net_score,
        Photo.created_at,
    )


def _to_rows(rows) -> list[PhotoScoreRow]:
    out: list[PhotoScoreRow] = []
    for photo_id, user_id, likes_count, net_score, created_at in rows:
        out.append(
            PhotoScoreRow(
                id=int(photo_id),
                user_id=int(user_id),
                likes_count=int(likes_count or 0),
                net_score=int(net_score or 0),
                created_at=created_at,
            )
        )
    return out


async def get_photo(session: AsyncSession, photo_id: int) -> Photo | None:
    res = await session.execute(select(Photo).where(Photo.id == photo_id))
    return res.scalar_one_or_none()


async def create_photo(
    session: AsyncSession,
    *,
    user_id: int,
    category_id: int,
    file_id: str,
    caption: str | None = None,
    created_at: datetime | None = None,
) -> Photo:
    photo = Photo(
        user_id=user_id,
        category_id=category_id,
        file_id=file_id,
        caption=caption or None,
        likes_count=0,
        dislikes_count=0,
        net_score=0,
        created_at=created_at or utc_now_naive(),
    )
    session.add(photo)
    await session.flush()  # photo.id ready
    return photo


async def update_photo_score(
    session: AsyncSession,
    *,
    photo_id: int,
    likes: int,
    dislikes: int,
    net_score: int,
) -> None:
    """
    Overwrites (never increments) the derived score fields.
    """
    await session.execute(
        update(Photo)
        .where(Photo.id == photo_id)
        .values(likes_count=likes, dislikes_count=dislikes, net_score=net_score)
    )


async def select_photos_in_window(
    session: AsyncSession,
    *,
    category_id: int,
    start: datetime,
    end: datetime,
) -> list[PhotoScoreRow]:
    """
    Photos of a category created within [start, end).
    """
    q = (
        select(*_score_columns())
        .where(
            Photo.category_id == category_id,
            Photo.created_at >= start,
            Photo.created_at < end,
        )
        .order_by(Photo.id.asc())
    )
    res = await session.execute(q)
    return _to_rows(res.all())


async def select_top_photos(
    session: AsyncSession,
    *,
    category_id: int,
    start: datetime,
    end: datetime,
    limit: int = 10,
) -> list[PhotoScoreRow]:
    """
    Top photos by likes within [start, end). Ties: older photo first, then lower id.
    """
    q = (
        select(*_score_columns())
        .where(
            Photo.category_id == category_id,
            Photo.created_at >= start,
            Photo.created_at < end,
        )
        .order_by(
            Photo.likes_count.desc(),
            Photo.created_at.asc(),
            Photo.id.asc(),
        )
        .limit(limit)
    )
    res = await session.execute(q)
    return _to_rows(res.all())


async def list_category_photos(
    session: AsyncSession,
    *,
    category_id: int,
    sort_by: str = "recent",
    limit: int = 50,
) -> list[Photo]:
    q = select(Photo).where(Photo.category_id == category_id, Photo.is_archived.is_(False))
    if sort_by == "trending":
        q = q.order_by(Photo.net_score.desc(), Photo.id.desc())
    else:
        q = q.order_by(Photo.created_at.desc(), Photo.id.desc())
    res = await session.execute(q.limit(limit))
    return list(res.scalars().all())


async def list_user_photos(session: AsyncSession, user_id: int, *, limit: int = 100) -> list[Photo]:
    """
    A user's photos across all categories, newest first. Archived ones included.
    """
    q = (
        select(Photo)
        .where(Photo.user_id == user_id)
        .order_by(Photo.created_at.desc(), Photo.id.desc())
        .limit(limit)
    )
    res = await session.execute(q)
    return list(res.scalars().all())
