# photobot/api/routers/cron.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.api.deps import get_session, get_settings, require_cron_secret
from photobot.config.settings import Settings
from photobot.services.archiver import CategoryArchiver
from photobot.services.hall_of_fame import HallOfFameService
from photobot.services.leaderboard import LeaderboardService

# GET for hosted cron services that can only issue GETs, POST for everything else
router = APIRouter(prefix="/api/cron", dependencies=[Depends(require_cron_secret)])


@router.api_route("/archive-categories", methods=["GET", "POST"])
async def archive_categories(session: AsyncSession = Depends(get_session)) -> dict:
    result = await CategoryArchiver.archive_expired(session)
    return {"archived": result.archived, "success": True}


@router.api_route("/calculate-hall-of-fame", methods=["GET", "POST"])
async def calculate_hall_of_fame(
    monthYear: str | None = Query(None, description="YYYY-MM, defaults to current month"),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> dict:
    result = await HallOfFameService.calculate(
        session,
        month_year=monthYear,
        tz_name=settings.timezone,
        limit=settings.hall_of_fame_size,
    )
    return {
        "monthYear": result.month_year,
        "entriesAdded": result.entries_added,
        "entriesPruned": result.entries_pruned,
        "success": True,
    }


@router.api_route("/calculate-leaderboards", methods=["GET", "POST"])
async def calculate_leaderboards(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> dict:
    result = await LeaderboardService.calculate_all(session, tz_name=settings.timezone)
    return {
        "weekStart": result.week_start.isoformat(),
        "categories": result.categories_processed,
        "entriesWritten": result.entries_written,
        "success": True,
    }
