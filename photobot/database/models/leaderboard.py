# photobot/database/models/leaderboard.py
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from photobot.database.base import Base
from photobot.utils.dates import utc_now_naive


class LeaderboardEntry(Base):
    """
    One row per (category, user, week). Recomputed wholesale and upserted on
    the composite key; week_start_date is the local Sunday of the week.
    """
    __tablename__ = "weekly_leaderboards"
    __table_args__ = (
        UniqueConstraint(
            "category_id", "user_id", "week_start_date", name="uq_weekly_leaderboards_cat_user_week"
        ),
        Index("ix_weekly_leaderboards_cat_week_rank", "category_id", "week_start_date", "rank"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    week_start_date: Mapped[date] = mapped_column(Date, index=True)
    week_end_date: Mapped[date] = mapped_column(Date)

    rank: Mapped[int] = mapped_column(Integer)
    points: Mapped[int] = mapped_column(Integer, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=utc_now_naive,
        onupdate=utc_now_naive,
    )
