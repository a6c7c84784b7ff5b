from __future__ import annotations

import html

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config.settings import Settings
from photobot.database.models import User
from photobot.database.repo.category_repo import get_category, list_categories
from photobot.database.repo.leaderboard_repo import get_leaderboard, get_user_entry
from photobot.keyboards.main import BTN_LEADERBOARD
from photobot.keyboards.photos import categories_kb
from photobot.utils.dates import utc_now_naive, week_window
from photobot.utils.names import display_name
from photobot.utils.reply import reply_safe

router = Router()

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


async def build_leaderboard_text(
    session: AsyncSession,
    settings: Settings,
    *,
    category_id: int,
    user: User,
) -> str:
    category = await get_category(session, category_id)
    if category is None:
        return f"⚠️ Category {category_id} not found."

    window = week_window(utc_now_naive(), settings.timezone)
    top = await get_leaderboard(
        session,
        category_id=category_id,
        week_start=window.start_date,
        limit=settings.leaderboard_size,
    )

    lines = [
        f"🏆 <b>{html.escape(category.name)}: weekly leaderboard</b>",
        f"📅 <b>Week:</b> {window.start_date.isoformat()} → {window.end_date.isoformat()}",
        "",
    ]

    if not top:
        lines.append("ℹ️ No points yet for this week.")
        return "\n".join(lines)

    in_top = False
    for row in top:
        medal = MEDALS.get(row.rank, f"{row.rank}.")
        name = html.escape(display_name(row.username, row.first_name, row.last_name))
        you = ""
        if row.user_id == user.id:
            you = " <b>(you)</b>"
            in_top = True
        lines.append(f"{medal} {name}: <b>{row.points}</b> pts{you}")

    if not in_top:
        my_rank, my_points = await get_user_entry(
            session,
            category_id=category_id,
            week_start=window.start_date,
            user_id=user.id,
        )
        lines.append("")
        if my_rank is None:
            lines.append("📍 <b>Your rank:</b> unranked (0 pts)")
        else:
            lines.append(f"📍 <b>Your rank:</b> {my_rank} / <b>{my_points}</b> pts")

    return "\n".join(lines)


@router.message(Command("leaderboard"))
@router.message(F.text == BTN_LEADERBOARD)
async def leaderboard_cmd(
    message: Message,
    settings: Settings,
    session: AsyncSession,
    db_user: User,
    command: CommandObject | None = None,
) -> None:
    arg = (command.args or "").strip() if command else ""

    if not arg:
        cats = await list_categories(session, active_only=True)
        if not cats:
            await reply_safe(message, "ℹ️ No active categories yet.")
            return
        await message.answer(
            "🏆 Pick a category:",
            reply_markup=categories_kb(cats, prefix="lb"),
        )
        return

    if not arg.isdigit():
        await reply_safe(message, "Usage: <code>/leaderboard &lt;category_id&gt;</code>", parse_mode="HTML")
        return

    text = await build_leaderboard_text(session, settings, category_id=int(arg), user=db_user)
    await reply_safe(message, text, parse_mode="HTML")


@router.callback_query(F.data.startswith("lb:"))
async def leaderboard_pick(
    cb: CallbackQuery,
    settings: Settings,
    session: AsyncSession,
    db_user: User,
) -> None:
    try:
        category_id = int((cb.data or "").split(":", 1)[1])
    except (IndexError, ValueError):
        await cb.answer("Invalid category", show_alert=True)
        return

    await cb.answer()
    text = await build_leaderboard_text(session, settings, category_id=category_id, user=db_user)
    if cb.message:
        await cb.message.answer(text, parse_mode="HTML")
