# photobot/database/models/hall_of_fame.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from photobot.database.base import Base
from photobot.utils.dates import utc_now_naive


class HallOfFameEntry(Base):
    """
    Monthly top-N snapshot per category.
    At most N rows per (category_id, month_year) after a run.
    """
    __tablename__ = "hall_of_fame"
    __table_args__ = (
        UniqueConstraint(
            "category_id", "user_id", "month_year", "rank", name="uq_hall_of_fame_cat_user_month_rank"
        ),
        Index("ix_hall_of_fame_cat_month_rank", "category_id", "month_year", "rank"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    photo_id: Mapped[int] = mapped_column(ForeignKey("photos.id", ondelete="CASCADE"), index=True)

    month_year: Mapped[str] = mapped_column(String(7), index=True)  # YYYY-MM
    rank: Mapped[int] = mapped_column(Integer)  # 1..N
    likes_count: Mapped[int] = mapped_column(Integer, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=utc_now_naive,
        onupdate=utc_now_naive,
    )
