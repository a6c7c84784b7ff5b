# photobot/services/photos.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import Category, CategoryType, Photo
from photobot.database.repo.category_repo import create_category, get_category
from photobot.database.repo.photo_repo import create_photo
from photobot.services.errors import NotFoundError, StoreError, ValidationError
from photobot.utils.dates import utc_now_naive, week_window


class PhotoService:
    @staticmethod
    async def post_photo(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
        file_id: str,
        caption: str | None = None,
    ) -> Photo:
        """
        Stores a new photo in an active category. Scores start at zero.
        """
        if not user_id or not category_id or not (file_id or "").strip():
            raise ValidationError("Missing required fields")

        try:
            category = await get_category(session, category_id)
            if category is None:
                raise NotFoundError(f"Category {category_id} not found")
            if not category.is_active:
                raise ValidationError(f"Category {category_id} is archived")

            photo = await create_photo(
                session,
                user_id=user_id,
                category_id=category_id,
                file_id=file_id.strip(),
                caption=(caption or "").strip()[:1024] or None,
            )
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError("Failed to store photo") from e
        return photo


class CategoryService:
    @staticmethod
    async def add_category(
        session: AsyncSession,
        *,
        name: str,
        category_type: CategoryType | str,
        now: datetime | None = None,
        tz_name: str = "UTC",
    ) -> Category:
        """
        Weekly categories get week_start_date = start of the current local week.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        try:
            kind = CategoryType(str(getattr(category_type, "value", category_type)).strip().lower())
        except ValueError as e:
            raise ValidationError(f"Invalid category type: {category_type!r}") from e

        week_start: datetime | None = None
        if kind is CategoryType.WEEKLY:
            week_start = week_window(now or utc_now_naive(), tz_name).start_utc

        try:
            cat = await create_category(session, name=name[:128], category_type=kind, week_start_date=week_start)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError("Failed to create category") from e
        return cat
