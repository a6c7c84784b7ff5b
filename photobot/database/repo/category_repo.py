from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import Category, CategoryType


async def get_category(session: AsyncSession, category_id: int) -> Category | None:
    res = await session.execute(select(Category).where(Category.id == category_id))
    return res.scalar_one_or_none()


async def list_categories(session: AsyncSession, *, active_only: bool = False) -> list[Category]:
    q = select(Category).order_by(Category.id.asc())
    if active_only:
        q = q.where(Category.is_active.is_(True))
    res = await session.execute(q)
    return list(res.scalars().all())


async def list_category_ids(session: AsyncSession, *, active_only: bool = False) -> list[int]:
    q = select(Category.id).order_by(Category.id.asc())
    if active_only:
        q = q.where(Category.is_active.is_(True))
    res = await session.execute(q)
    return [int(x) for x in res.scalars().all()]


async def create_category(
    session: AsyncSession,
    *,
    name: str,
    category_type: CategoryType,
    week_start_date: datetime | None = None,
) -> Category:
    cat = Category(
        name=name,
        category_type=category_type,
        is_active=True,
        week_start_date=week_start_date,
    )
    session.add(cat)
    await session.flush()  # cat.id ready
    return cat


async def select_expired_weekly_categories(session: AsyncSession, *, before: datetime) -> list[int]:
    """
    Active weekly categories whose week started before `before`.
    Already archived ones never match, so the sweep is idempotent.
    """
    q = (
        select(Category.id)
        .where(
            Category.category_type == CategoryType.WEEKLY,
            Category.is_active.is_(True),
            Category.week_start_date < before,
        )
        .order_by(Category.id.asc())
    )
    res = await session.execute(q)
    return [int(x) for x in res.scalars().all()]


async def deactivate_category(session: AsyncSession, category_id: int) -> bool:
    """
    One-way transition. Returns True if the row flipped from active to inactive.
    """
    res = await session.execute(
        update(Category)
        .where(Category.id == category_id, Category.is_active.is_(True))
        .values(is_active=False)
    )
    return (res.rowcount or 0) > 0
