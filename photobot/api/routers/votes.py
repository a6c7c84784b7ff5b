# photobot/api/routers/votes.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.api.deps import get_session
from photobot.api.schemas import VoteIn, VoteOut
from photobot.services.votes import VoteService

router = APIRouter(prefix="/api")


@router.post("/votes", response_model=VoteOut)
async def submit_vote(payload: VoteIn, session: AsyncSession = Depends(get_session)) -> VoteOut:
    result = await VoteService.submit_vote(
        session,
        photo_id=payload.photoId,
        voter_id=payload.userId,
        vote_type=payload.voteType,
    )
    return VoteOut(
        success=True,
        likes=result.tally.likes,
        dislikes=result.tally.dislikes,
        netScore=result.tally.net_score,
    )
