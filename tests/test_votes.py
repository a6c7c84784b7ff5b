from datetime import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from photobot.database.models import PhotoVote, VoteType
from photobot.database.repo.photo_repo import update_photo_score
from photobot.services import votes as votes_module
from photobot.services.errors import NotFoundError, StoreError, ValidationError
from photobot.services.votes import VoteService, tally_votes

NOW = datetime(2024, 3, 13, 12, 0)


def test_tally_votes():
    t = tally_votes([VoteType.LIKE, "like", VoteType.DISLIKE])
    assert (t.likes, t.dislikes, t.net_score) == (2, 1, 1)
    assert tally_votes([]).net_score == 0


@pytest.mark.asyncio
async def test_votes_are_tallied_from_full_set(session, make_user, make_category, make_photo):
    owner = await make_user()
    voters = [await make_user() for _ in range(3)]
    cat = await make_category()
    photo = await make_photo(owner, cat, created_at=NOW)

    for voter, kind in zip(voters, ["like", "like", "dislike"]):
        res = await VoteService.submit_vote(session, photo_id=photo.id, voter_id=voter.id, vote_type=kind)

    assert (res.tally.likes, res.tally.dislikes, res.tally.net_score) == (2, 1, 1)

    await session.refresh(photo)
    assert photo.likes_count == 2
    assert photo.dislikes_count == 1
    assert photo.net_score == 1


@pytest.mark.asyncio
async def test_revote_overwrites_previous_choice(session, make_user, make_category, make_photo):
    owner = await make_user()
    voter = await make_user()
    cat = await make_category()
    photo = await make_photo(owner, cat, created_at=NOW)

    await VoteService.submit_vote(session, photo_id=photo.id, voter_id=voter.id, vote_type="like")
    res = await VoteService.submit_vote(session, photo_id=photo.id, voter_id=voter.id, vote_type="dislike")

    assert (res.tally.likes, res.tally.dislikes, res.tally.net_score) == (0, 1, -1)
    n = await session.scalar(select(func.count()).select_from(PhotoVote).where(PhotoVote.photo_id == photo.id))
    assert n == 1


@pytest.mark.asyncio
async def test_refresh_overwrites_drifted_counters(session, make_user, make_category, make_photo):
    owner = await make_user()
    voter = await make_user()
    cat = await make_category()
    photo = await make_photo(owner, cat, created_at=NOW, likes=99)

    await VoteService.submit_vote(session, photo_id=photo.id, voter_id=voter.id, vote_type="like")

    await session.refresh(photo)
    assert photo.likes_count == 1
    assert photo.net_score == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "photo_id, voter_id, vote_type",
    [(None, 1, "like"), (1, None, "like"), (1, 1, None), (1, 1, "")],
)
async def test_missing_fields_rejected(session, photo_id, voter_id, vote_type):
    with pytest.raises(ValidationError, match="Missing required fields"):
        await VoteService.submit_vote(session, photo_id=photo_id, voter_id=voter_id, vote_type=vote_type)


@pytest.mark.asyncio
async def test_invalid_vote_type_rejected(session):
    with pytest.raises(ValidationError):
        await VoteService.submit_vote(session, photo_id=1, voter_id=1, vote_type="love")


@pytest.mark.asyncio
async def test_unknown_photo(session, make_user):
    voter = await make_user()
    with pytest.raises(NotFoundError):
        await VoteService.submit_vote(session, photo_id=424242, voter_id=voter.id, vote_type="like")


@pytest.mark.asyncio
async def test_unknown_voter(session, make_user, make_category, make_photo):
    owner = await make_user()
    cat = await make_category()
    photo = await make_photo(owner, cat, created_at=NOW)

    with pytest.raises(NotFoundError, match="User 99999"):
        await VoteService.submit_vote(session, photo_id=photo.id, voter_id=99999, vote_type="like")

    count = await session.scalar(select(func.count()).select_from(PhotoVote))
    assert count == 0


@pytest.mark.asyncio
async def test_read_failure_skips_score_write(session, make_user, make_category, make_photo, monkeypatch):
    owner = await make_user()
    voter = await make_user()
    cat = await make_category()
    photo = await make_photo(owner, cat, created_at=NOW)
    await update_photo_score(session, photo_id=photo.id, likes=5, dislikes=0, net_score=5)
    await session.commit()

    async def broken_read(*args, **kwargs):
        raise SQLAlchemyError("read failed")

    monkeypatch.setattr(votes_module, "select_vote_types", broken_read)

    with pytest.raises(StoreError):
        await VoteService.submit_vote(session, photo_id=photo.id, voter_id=voter.id, vote_type="dislike")

    await session.refresh(photo)
    assert (photo.likes_count, photo.dislikes_count, photo.net_score) == (5, 0, 5)
