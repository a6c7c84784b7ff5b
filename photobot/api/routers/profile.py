from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.api.deps import get_session
from photobot.api.schemas import PhotoItem, ProfileOut, ProfileUser
from photobot.services.profile import ProfileService

router = APIRouter(prefix="/api")


@router.get("/profile/{userId}", response_model=ProfileOut)
async def profile(userId: int, session: AsyncSession = Depends(get_session)):
    """
    A user and their photos, newest first.
    """
    p = await ProfileService.get_profile(session, userId)
    return ProfileOut(
        user=ProfileUser.from_user(p.user),
        photos=[PhotoItem.from_photo(photo) for photo in p.photos],
    )
