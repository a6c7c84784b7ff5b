# photobot/api/schemas.py
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel

from photobot.database.models import Photo, User


class VoteIn(BaseModel):
    # all optional so missing fields surface as our own 400, not a 422
    photoId: int | None = None
    userId: int | None = None
    voteType: str | None = None


class VoteOut(BaseModel):
    success: bool
    likes: int
    dislikes: int
    netScore: int


class LeaderboardItem(BaseModel):
    rank: int
    userId: int
    points: int
    username: str | None = None


class LeaderboardOut(BaseModel):
    categoryId: int
    weekStart: date
    entries: list[LeaderboardItem]


class HallOfFameItem(BaseModel):
    rank: int
    photoId: int
    userId: int
    likesCount: int
    caption: str | None = None
    username: str | None = None


class HallOfFameOut(BaseModel):
    categoryId: int
    monthYear: str
    entries: list[HallOfFameItem]


class PhotoItem(BaseModel):
    id: int
    userId: int
    categoryId: int
    caption: str | None = None
    likesCount: int
    dislikesCount: int
    netScore: int
    isArchived: bool = False
    createdAt: datetime | None = None

    @classmethod
    def from_photo(cls, p: Photo) -> "PhotoItem":
        return cls(
            id=p.id,
            userId=p.user_id,
            categoryId=p.category_id,
            caption=p.caption,
            likesCount=p.likes_count,
            dislikesCount=p.dislikes_count,
            netScore=p.net_score,
            isArchived=bool(p.is_archived),
            createdAt=p.created_at,
        )


class ProfileUser(BaseModel):
    id: int
    telegramId: int
    username: str | None = None
    firstName: str | None = None
    lastName: str | None = None

    @classmethod
    def from_user(cls, u: User) -> "ProfileUser":
        return cls(
            id=u.id,
            telegramId=u.telegram_id,
            username=u.username,
            firstName=u.first_name,
            lastName=u.last_name,
        )


class ProfileOut(BaseModel):
    user: ProfileUser
    photos: list[PhotoItem]
