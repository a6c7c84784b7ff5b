# photobot/services/votes.py
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import VoteType
from photobot.database.repo.photo_repo import get_photo, update_photo_score
from photobot.database.repo.users import get_user
from photobot.database.repo.vote_repo import select_vote_types, upsert_vote
from photobot.services.errors import NotFoundError, StoreError, ValidationError

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VoteTally:
    likes: int
    dislikes: int
    net_score: int


@dataclass(frozen=True, slots=True)
class VoteResult:
    photo_id: int
    voter_id: int
    vote_type: VoteType
    tally: VoteTally


def tally_votes(vote_types: Iterable[VoteType | str]) -> VoteTally:
    likes = 0
    dislikes = 0
    for v in vote_types:
        kind = VoteType(v)
        if kind is VoteType.LIKE:
            likes += 1
        else:
            dislikes += 1
    return VoteTally(likes=likes, dislikes=dislikes, net_score=likes - dislikes)


def parse_id(raw: object, field: str) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field}: {raw!r}") from e
    if value <= 0:
        raise ValidationError(f"Invalid {field}: {raw!r}")
    return value


def parse_vote_type(raw: object) -> VoteType:
    if isinstance(raw, VoteType):
        return raw
    try:
        return VoteType(str(raw).strip().lower())
    except ValueError as e:
        raise ValidationError(f"Invalid vote type: {raw!r}") from e


class VoteService:
    @staticmethod
    async def refresh_photo_score(session: AsyncSession, photo_id: int) -> VoteTally:
        """
        Recounts every vote of the photo and overwrites likes/dislikes/net_score.

        If reading the votes fails the write is skipped: a stale score is kept
        rather than a partial one.
        """
        try:
            vote_types = await select_vote_types(session, photo_id)
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Failed to read votes for photo {photo_id}") from e

        tally = tally_votes(vote_types)

        try:
            await update_photo_score(
                session,
                photo_id=photo_id,
                likes=tally.likes,
                dislikes=tally.dislikes,
                net_score=tally.net_score,
            )
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Failed to write score for photo {photo_id}") from e

        return tally

    @staticmethod
    async def submit_vote(
        session: AsyncSession,
        *,
        photo_id: int | None,
        voter_id: int | None,
        vote_type: VoteType | str | None,
    ) -> VoteResult:
        """
        Records (or replaces) a voter's choice on a photo, then re-syncs the
        photo's score from the full vote set.
        """
        if not photo_id or not voter_id or not vote_type:
            raise ValidationError("Missing required fields")
        pid = parse_id(photo_id, "photoId")
        uid = parse_id(voter_id, "userId")
        kind = parse_vote_type(vote_type)

        try:
            photo = await get_photo(session, pid)
            voter = await get_user(session, uid)
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Failed to load photo {pid}") from e
        if photo is None:
            raise NotFoundError(f"Photo {pid} not found")
        if voter is None:
            raise NotFoundError(f"User {uid} not found")

        try:
            await upsert_vote(session, photo_id=pid, user_id=uid, vote_type=kind)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Failed to record vote on photo {pid}") from e

        tally = await VoteService.refresh_photo_score(session, pid)
        log.debug(
            "Vote %s on photo %s by user %s -> %s/%s (%s)",
            kind.value, pid, uid, tally.likes, tally.dislikes, tally.net_score,
        )

        return VoteResult(photo_id=pid, voter_id=uid, vote_type=kind, tally=tally)
