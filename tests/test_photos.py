from datetime import datetime

import pytest

from photobot.database.models import CategoryType
from photobot.database.repo import photo_repo
from photobot.services.errors import NotFoundError, ValidationError
from photobot.services.hall_of_fame import HallOfFameService
from photobot.services.leaderboard import LeaderboardService
from photobot.services.photos import CategoryService, PhotoService
from photobot.services.votes import VoteService


@pytest.mark.asyncio
async def test_weekly_category_starts_on_local_sunday(session):
    cat = await CategoryService.add_category(
        session, name="  Rainy days ", category_type="Weekly", now=datetime(2024, 3, 13, 9, 0)
    )
    assert cat.name == "Rainy days"
    assert cat.category_type is CategoryType.WEEKLY
    assert cat.is_active is True
    assert cat.week_start_date == datetime(2024, 3, 10)


@pytest.mark.asyncio
async def test_permanent_category_has_no_week(session):
    cat = await CategoryService.add_category(session, name="Street", category_type=CategoryType.PERMANENT)
    assert cat.week_start_date is None


@pytest.mark.asyncio
@pytest.mark.parametrize("name, kind", [("", "weekly"), ("Street", "daily")])
async def test_add_category_validation(session, name, kind):
    with pytest.raises(ValidationError):
        await CategoryService.add_category(session, name=name, category_type=kind)


@pytest.mark.asyncio
async def test_post_photo(session, make_user, make_category):
    user = await make_user()
    cat = await make_category()

    photo = await PhotoService.post_photo(
        session, user_id=user.id, category_id=cat.id, file_id="AgAD-1", caption=" sunset "
    )

    assert photo.id is not None
    assert photo.caption == "sunset"
    assert (photo.likes_count, photo.dislikes_count, photo.net_score) == (0, 0, 0)


@pytest.mark.asyncio
async def test_post_photo_rejects_archived_or_unknown_category(session, make_user, make_category):
    user = await make_user()
    archived = await make_category(is_active=False)

    with pytest.raises(ValidationError):
        await PhotoService.post_photo(session, user_id=user.id, category_id=archived.id, file_id="x")
    with pytest.raises(NotFoundError):
        await PhotoService.post_photo(session, user_id=user.id, category_id=9999, file_id="x")
    with pytest.raises(ValidationError, match="Missing required fields"):
        await PhotoService.post_photo(session, user_id=user.id, category_id=archived.id, file_id=" ")


@pytest.mark.asyncio
async def test_default_timestamps_are_set_on_insert(session, make_user, make_category):
    user = await make_user()
    cat = await make_category()
    photo = await PhotoService.post_photo(session, user_id=user.id, category_id=cat.id, file_id="AgAD-2")

    assert isinstance(user.created_at, datetime)
    assert isinstance(cat.created_at, datetime)
    assert isinstance(photo.created_at, datetime)
    assert photo.created_at.tzinfo is None


@pytest.mark.asyncio
async def test_photo_posted_at_sunday_midnight_counts_for_new_week(
    session, monkeypatch, make_user, make_category
):
    monkeypatch.setattr(photo_repo, "utc_now_naive", lambda: datetime(2024, 3, 10, 0, 0))
    owner = await make_user()
    voter = await make_user()
    cat = await make_category()

    photo = await PhotoService.post_photo(session, user_id=owner.id, category_id=cat.id, file_id="AgAD-3")
    await VoteService.submit_vote(session, photo_id=photo.id, voter_id=voter.id, vote_type="like")

    rows = await LeaderboardService.calculate(session, cat.id, now=datetime(2024, 3, 13, 12, 0))
    assert [(r.user_id, r.points) for r in rows] == [(owner.id, 1)]

    assert await LeaderboardService.calculate(session, cat.id, now=datetime(2024, 3, 6, 12, 0)) == []


@pytest.mark.asyncio
async def test_photo_posted_at_month_start_counts_for_that_month(
    session, monkeypatch, make_user, make_category
):
    monkeypatch.setattr(photo_repo, "utc_now_naive", lambda: datetime(2024, 3, 1, 0, 0))
    user = await make_user()
    cat = await make_category()
    await PhotoService.post_photo(session, user_id=user.id, category_id=cat.id, file_id="AgAD-4")

    march = await HallOfFameService.calculate(session, now=datetime(2024, 3, 15, 12, 0))
    assert (march.month_year, march.entries_added) == ("2024-03", 1)

    february = await HallOfFameService.calculate(session, now=datetime(2024, 2, 15, 12, 0))
    assert (february.month_year, february.entries_added) == ("2024-02", 0)
