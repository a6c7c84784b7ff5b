from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import func, select

from photobot.database.models import LeaderboardEntry
from photobot.database.repo.leaderboard_repo import get_leaderboard
from photobot.services.leaderboard import LeaderboardService, rank_user_scores

# Wednesday; the week runs Sunday 2024-03-10 .. Sunday 2024-03-17
NOW = datetime(2024, 3, 13, 12, 0)
WEEK_START = datetime(2024, 3, 10)
WEEK_END = datetime(2024, 3, 17)


async def _count_entries(session) -> int:
    return await session.scalar(select(func.count()).select_from(LeaderboardEntry))


def test_rank_user_scores_ties_by_user_id():
    ranked = rank_user_scores({7: 10, 3: 10, 5: 5})
    assert [(r.user_id, r.rank, r.points) for r in ranked] == [(3, 1, 10), (7, 2, 10), (5, 3, 5)]


@pytest.mark.asyncio
async def test_points_are_summed_per_user(session, make_user, make_category, make_photo):
    alice = await make_user("alice")
    bob = await make_user("bob")
    cat = await make_category()
    await make_photo(alice, cat, created_at=NOW, likes=4, dislikes=1)
    await make_photo(alice, cat, created_at=NOW, likes=2)
    await make_photo(bob, cat, created_at=NOW, likes=3)

    rows = await LeaderboardService.calculate(session, cat.id, now=NOW)

    assert [(r.user_id, r.rank, r.points) for r in rows] == [(alice.id, 1, 5), (bob.id, 2, 3)]
    assert rows[0].week_start_date == date(2024, 3, 10)
    assert rows[0].week_end_date == date(2024, 3, 17)


@pytest.mark.asyncio
async def test_recalculation_is_idempotent(session, make_user, make_category, make_photo):
    alice = await make_user("alice")
    cat = await make_category()
    await make_photo(alice, cat, created_at=NOW, likes=3)

    first = await LeaderboardService.calculate(session, cat.id, now=NOW)
    second = await LeaderboardService.calculate(session, cat.id, now=NOW)

    assert first == second
    assert await _count_entries(session) == 1


@pytest.mark.asyncio
async def test_window_boundaries(session, make_user, make_category, make_photo):
    at_start = await make_user("at_start")
    before = await make_user("before")
    at_end = await make_user("at_end")
    cat = await make_category()
    await make_photo(at_start, cat, created_at=WEEK_START, likes=1)
    await make_photo(before, cat, created_at=WEEK_START - timedelta(seconds=1), likes=10)
    await make_photo(at_end, cat, created_at=WEEK_END, likes=10)

    rows = await LeaderboardService.calculate(session, cat.id, now=NOW)

    assert [r.user_id for r in rows] == [at_start.id]


@pytest.mark.asyncio
async def test_tied_users_get_distinct_ranks(session, make_user, make_category, make_photo):
    a = await make_user("a")
    b = await make_user("b")
    c = await make_user("c")
    cat = await make_category()
    await make_photo(b, cat, created_at=NOW, likes=10)
    await make_photo(a, cat, created_at=NOW, likes=10)
    await make_photo(c, cat, created_at=NOW, likes=5)

    await LeaderboardService.calculate(session, cat.id, now=NOW)
    rows = await get_leaderboard(session, category_id=cat.id, week_start=date(2024, 3, 10))

    assert [(r.user_id, r.rank) for r in rows] == [(a.id, 1), (b.id, 2), (c.id, 3)]


@pytest.mark.asyncio
async def test_negative_points_are_kept(session, make_user, make_category, make_photo):
    good = await make_user("good")
    bad = await make_user("bad")
    cat = await make_category()
    await make_photo(good, cat, created_at=NOW, likes=1)
    await make_photo(bad, cat, created_at=NOW, dislikes=3)

    rows = await LeaderboardService.calculate(session, cat.id, now=NOW)

    assert [(r.user_id, r.points) for r in rows] == [(good.id, 1), (bad.id, -3)]


@pytest.mark.asyncio
async def test_empty_category_writes_nothing(session, make_category):
    cat = await make_category()

    rows = await LeaderboardService.calculate(session, cat.id, now=NOW)

    assert rows == []
    assert await _count_entries(session) == 0


@pytest.mark.asyncio
async def test_calculate_all_skips_inactive_categories(session, make_user, make_category, make_photo):
    alice = await make_user("alice")
    bob = await make_user("bob")
    street = await make_category("Street")
    nature = await make_category("Nature")
    old = await make_category("Old", is_active=False)
    await make_photo(alice, street, created_at=NOW, likes=2)
    await make_photo(bob, street, created_at=NOW, likes=1)
    await make_photo(alice, nature, created_at=NOW, likes=1)
    await make_photo(bob, old, created_at=NOW, likes=7)

    res = await LeaderboardService.calculate_all(session, now=NOW)

    assert res.week_start == date(2024, 3, 10)
    assert res.categories_processed == 2
    assert res.entries_written == 3
    assert await get_leaderboard(session, category_id=old.id, week_start=date(2024, 3, 10)) == []
