from datetime import datetime

import pytest
from sqlalchemy import select

from photobot.database.models import HallOfFameEntry
from photobot.scheduler.jobs import build_scheduler, calculate_hall_of_fame


def _fields(trigger) -> dict[str, str]:
    return {f.name: str(f) for f in trigger.fields if not f.is_default}


@pytest.mark.asyncio
async def test_jobs_are_registered(db, settings):
    scheduler = build_scheduler(db, settings)

    jobs = {job.id: job for job in scheduler.get_jobs()}

    assert set(jobs) == {"recompute_leaderboards", "calculate_hall_of_fame", "archive_categories"}
    assert _fields(jobs["recompute_leaderboards"].trigger) == {"minute": "0"}
    assert _fields(jobs["calculate_hall_of_fame"].trigger) == {"day": "1", "hour": "0", "minute": "5"}
    assert _fields(jobs["archive_categories"].trigger) == {"hour": "0", "minute": "5"}


@pytest.mark.asyncio
async def test_hall_of_fame_job_finalizes_previous_month(db, settings, session, make_user, make_category, make_photo):
    user = await make_user()
    cat = await make_category()
    last_minute = await make_photo(user, cat, created_at=datetime(2024, 2, 29, 23, 58), likes=2)
    await make_photo(user, cat, created_at=datetime(2024, 3, 1, 0, 1), likes=9)

    res = await calculate_hall_of_fame(db, settings, now=datetime(2024, 3, 1, 0, 5))

    assert res.month_year == "2024-02"
    assert res.entries_added == 1
    rows = (await session.execute(select(HallOfFameEntry.photo_id, HallOfFameEntry.month_year))).all()
    assert rows == [(last_minute.id, "2024-02")]
