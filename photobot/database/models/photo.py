# photobot/database/models/photo.py
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from photobot.database.base import Base
from photobot.utils.dates import utc_now_naive


class VoteType(str, enum.Enum):
    LIKE = "like"
    DISLIKE = "dislike"


class Photo(Base):
    """
    likes_count / dislikes_count / net_score are derived from photo_votes.
    They are always overwritten from a full recount, never incremented.
    """
    __tablename__ = "photos"
    __table_args__ = (
        Index("ix_photos_category_created", "category_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), index=True)

    file_id: Mapped[str] = mapped_column(String(256))  # Telegram file_id
    caption: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    likes_count: Mapped[int] = mapped_column(Integer, default=0)
    dislikes_count: Mapped[int] = mapped_column(Integer, default=0)
    net_score: Mapped[int] = mapped_column(Integer, default=0, index=True)

    is_archived: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=utc_now_naive, index=True
    )


class PhotoVote(Base):
    """
    One vote per user per photo (unique). A second vote overwrites the first.
    """
    __tablename__ = "photo_votes"
    __table_args__ = (
        UniqueConstraint("photo_id", "user_id", name="uq_photo_votes_photo_user"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    photo_id: Mapped[int] = mapped_column(ForeignKey("photos.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    vote_type: Mapped[VoteType] = mapped_column(Enum(VoteType, native_enum=False))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utc_now_naive)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=utc_now_naive,
        onupdate=utc_now_naive,
    )
