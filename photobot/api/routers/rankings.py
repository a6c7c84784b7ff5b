from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.api.deps import get_session, get_settings
from photobot.api.schemas import (
    HallOfFameItem,
    HallOfFameOut,
    LeaderboardItem,
    LeaderboardOut,
    PhotoItem,
)
from photobot.config.settings import Settings
from photobot.database.repo.hall_of_fame_repo import get_hall_of_fame
from photobot.database.repo.leaderboard_repo import get_leaderboard
from photobot.database.repo.photo_repo import list_category_photos
from photobot.services.errors import StoreError, ValidationError
from photobot.utils.dates import month_window, parse_month_year, utc_now_naive, week_window

router = APIRouter(prefix="/api")


def _require_category(category_id: int | None) -> int:
    if not category_id:
        raise ValidationError("Missing categoryId")
    return category_id


@router.get("/leaderboard", response_model=LeaderboardOut)
async def leaderboard(
    categoryId: int | None = Query(None),
    weekStart: date | None = Query(None, description="Sunday of the week, defaults to current week"),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """
    Stored leaderboard for a category week, ordered by rank.
    """
    category_id = _require_category(categoryId)
    ws = weekStart or week_window(utc_now_naive(), settings.timezone).start_date

    try:
        rows = await get_leaderboard(session, category_id=category_id, week_start=ws, limit=None)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to read leaderboard for category {category_id}") from e

    return LeaderboardOut(
        categoryId=category_id,
        weekStart=ws,
        entries=[
            LeaderboardItem(rank=r.rank, userId=r.user_id, points=r.points, username=r.username)
            for r in rows
        ],
    )


@router.get("/hall-of-fame", response_model=HallOfFameOut)
async def hall_of_fame(
    categoryId: int | None = Query(None),
    monthYear: str | None = Query(None, description="YYYY-MM, defaults to current month"),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    category_id = _require_category(categoryId)
    if monthYear:
        try:
            month = parse_month_year(monthYear)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    else:
        month = month_window(utc_now_naive(), settings.timezone).month_year

    try:
        rows = await get_hall_of_fame(session, category_id=category_id, month_year=month)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to read hall of fame for category {category_id}") from e

    return HallOfFameOut(
        categoryId=category_id,
        monthYear=month,
        entries=[
            HallOfFameItem(
                rank=r.rank,
                photoId=r.photo_id,
                userId=r.user_id,
                likesCount=r.likes_count,
                caption=r.caption,
                username=r.username,
            )
            for r in rows
        ],
    )


@router.get("/photos", response_model=list[PhotoItem])
async def photos(
    categoryId: int | None = Query(None),
    sortBy: str = Query("recent", pattern="^(recent|trending)$"),
    session: AsyncSession = Depends(get_session),
):
    category_id = _require_category(categoryId)
    try:
        items = await list_category_photos(session, category_id=category_id, sort_by=sortBy)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to list photos for category {category_id}") from e

    return [PhotoItem.from_photo(p) for p in items]
