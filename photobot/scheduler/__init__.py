from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from photobot.config.settings import Settings
from photobot.database.session import Database
from photobot.scheduler.jobs import build_scheduler


def setup_scheduler(db: Database, settings: Settings) -> AsyncIOScheduler:
    scheduler = build_scheduler(db=db, settings=settings)
    scheduler.start()
    return scheduler
