from __future__ import annotations

import logging
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from photobot.config.settings import Settings
from photobot.database.session import Database
from photobot.services.archiver import ArchiveResult, CategoryArchiver
from photobot.services.hall_of_fame import HallOfFameRunResult, HallOfFameService
from photobot.services.leaderboard import LeaderboardRunResult, LeaderboardService
from photobot.utils.dates import previous_month_window, utc_now_naive

log = logging.getLogger(__name__)


# -------------------------------------------------
# Jobs
# -------------------------------------------------

async def recompute_leaderboards(db: Database, settings: Settings) -> LeaderboardRunResult | None:
    """
    Current week's leaderboard for every active category.
    Failures are logged; the next run recomputes from scratch.
    """
    try:
        async with db.session() as session:
            return await LeaderboardService.calculate_all(session, tz_name=settings.timezone)
    except Exception:
        log.exception("Leaderboard job failed")
        return None


async def calculate_hall_of_fame(
    db: Database,
    settings: Settings,
    now: datetime | None = None,
) -> HallOfFameRunResult | None:
    """
    Finalizes the month that just ended. Runs shortly after local midnight on
    the 1st, so every photo of that month is counted.
    """
    window = previous_month_window(now or utc_now_naive(), settings.timezone)
    try:
        async with db.session() as session:
            return await HallOfFameService.calculate(
                session,
                month_year=window.month_year,
                tz_name=settings.timezone,
                limit=settings.hall_of_fame_size,
            )
    except Exception:
        log.exception("Hall of fame job failed")
        return None


async def archive_categories(db: Database, settings: Settings) -> ArchiveResult | None:
    try:
        async with db.session() as session:
            return await CategoryArchiver.archive_expired(session)
    except Exception:
        log.exception("Archive job failed")
        return None


# -------------------------------------------------
# Scheduler setup
# -------------------------------------------------

def build_scheduler(db: Database, settings: Settings) -> AsyncIOScheduler:
    """
    Creates and returns an AsyncIOScheduler with our jobs registered.
    All jobs are idempotent, so overlapping external cron calls are harmless.
    """
    tz = settings.timezone
    scheduler = AsyncIOScheduler(timezone=tz)
    kwargs = {"db": db, "settings": settings}

    # Hourly: keep the current week's standings fresh
    scheduler.add_job(
        recompute_leaderboards,
        trigger=CronTrigger(minute=0, timezone=tz),
        kwargs=kwargs,
        id="recompute_leaderboards",
        replace_existing=True,
        coalesce=True,
        misfire_grace_time=300,
    )

    # 1st of the month, 00:05: final snapshot of the previous month
    scheduler.add_job(
        calculate_hall_of_fame,
        trigger=CronTrigger(day=1, hour=0, minute=5, timezone=tz),
        kwargs=kwargs,
        id="calculate_hall_of_fame",
        replace_existing=True,
        coalesce=True,
        misfire_grace_time=300,
    )

    # Daily 00:05: retire expired weekly categories
    scheduler.add_job(
        archive_categories,
        trigger=CronTrigger(hour=0, minute=5, timezone=tz),
        kwargs=kwargs,
        id="archive_categories",
        replace_existing=True,
        coalesce=True,
        misfire_grace_time=300,
    )

    return scheduler
