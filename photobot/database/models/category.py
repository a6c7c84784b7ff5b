# photobot/database/models/category.py
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from photobot.database.base import Base
from photobot.utils.dates import utc_now_naive


class CategoryType(str, enum.Enum):
    PERMANENT = "permanent"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class Category(Base):
    """
    Topical bucket photos are posted into.
    Weekly categories are time-boxed: once week_start_date is more than
    7 days old the archiver flips is_active to False (never back).
    """
    __tablename__ = "categories"
    __table_args__ = (
        Index("ix_categories_type_active_week", "category_type", "is_active", "week_start_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(128))

    category_type: Mapped[CategoryType] = mapped_column(
        Enum(CategoryType, native_enum=False),
        default=CategoryType.PERMANENT,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # weekly only (naive UTC)
    week_start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utc_now_naive)
