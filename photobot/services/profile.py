from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import Photo, User
from photobot.database.repo.photo_repo import list_user_photos
from photobot.database.repo.users import get_user
from photobot.services.errors import NotFoundError, StoreError
from photobot.services.votes import parse_id


@dataclass(frozen=True, slots=True)
class Profile:
    user: User
    photos: list[Photo]


class ProfileService:
    @staticmethod
    async def get_profile(session: AsyncSession, user_id: int | str) -> Profile:
        uid = parse_id(user_id, "userId")
        try:
            user = await get_user(session, uid)
            photos = await list_user_photos(session, uid) if user is not None else []
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load profile of user {uid}") from e
        if user is None:
            raise NotFoundError(f"User {uid} not found")
        return Profile(user=user, photos=photos)
