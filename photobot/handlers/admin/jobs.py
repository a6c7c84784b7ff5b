# photobot/handlers/admin/jobs.py
from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config.settings import Settings
from photobot.handlers.admin.panel import require_admin_or_reply
from photobot.keyboards.admin import BTN_RUN_ARCHIVE, BTN_RUN_HALL_OF_FAME, BTN_RUN_LEADERBOARDS
from photobot.services.archiver import CategoryArchiver
from photobot.services.errors import EngineError
from photobot.services.hall_of_fame import HallOfFameService
from photobot.services.leaderboard import LeaderboardService

log = logging.getLogger(__name__)
router = Router()


@router.message(Command("run_leaderboards"))
@router.message(F.text == BTN_RUN_LEADERBOARDS)
async def run_leaderboards_cmd(message: Message, settings: Settings, session: AsyncSession) -> None:
    if not await require_admin_or_reply(message, settings, session):
        return

    await message.answer("⏳ Recomputing this week's leaderboards...")
    try:
        res = await LeaderboardService.calculate_all(session, tz_name=settings.timezone)
    except EngineError:
        log.exception("Manual leaderboard run failed")
        await message.answer("⚠️ Leaderboard run failed, see logs.")
        return

    await message.answer(
        f"✅ Week {res.week_start.isoformat()}: "
        f"{res.categories_processed} categories, {res.entries_written} entries."
    )


@router.message(Command("run_hall_of_fame"))
@router.message(F.text == BTN_RUN_HALL_OF_FAME)
async def run_hall_of_fame_cmd(message: Message, settings: Settings, session: AsyncSession) -> None:
    if not await require_admin_or_reply(message, settings, session):
        return

    await message.answer("⏳ Recomputing this month's hall of fame...")
    try:
        res = await HallOfFameService.calculate(
            session,
            tz_name=settings.timezone,
            limit=settings.hall_of_fame_size,
        )
    except EngineError:
        log.exception("Manual hall of fame run failed")
        await message.answer("⚠️ Hall of fame run failed, see logs.")
        return

    await message.answer(
        f"✅ {res.month_year}: {res.entries_added} entries added, {res.entries_pruned} pruned."
    )


@router.message(Command("run_archive"))
@router.message(F.text == BTN_RUN_ARCHIVE)
async def run_archive_cmd(message: Message, settings: Settings, session: AsyncSession) -> None:
    if not await require_admin_or_reply(message, settings, session):
        return

    try:
        res = await CategoryArchiver.archive_expired(session)
    except EngineError:
        log.exception("Manual archive run failed")
        await message.answer("⚠️ Archive run failed, see logs.")
        return

    await message.answer(f"🗄 Archived {res.archived} categories.")
