from __future__ import annotations

import html

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import BufferedInputFile, CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config.settings import Settings
from photobot.database.repo.category_repo import get_category, list_categories
from photobot.database.repo.hall_of_fame_repo import get_hall_of_fame
from photobot.keyboards.main import BTN_HALL_OF_FAME
from photobot.keyboards.photos import categories_kb
from photobot.utils.cards.hall_of_fame_card import CardEntry, render_hall_of_fame_card
from photobot.utils.dates import month_window, parse_month_year, utc_now_naive
from photobot.utils.names import display_name
from photobot.utils.reply import reply_safe

router = Router()

USAGE = "Usage: <code>/halloffame &lt;category_id&gt; [YYYY-MM]</code>"


async def send_hall_of_fame(
    message: Message,
    session: AsyncSession,
    settings: Settings,
    *,
    category_id: int,
    month_year: str | None = None,
) -> None:
    category = await get_category(session, category_id)
    if category is None:
        await reply_safe(message, f"⚠️ Category {category_id} not found.")
        return

    month = month_year or month_window(utc_now_naive(), settings.timezone).month_year
    rows = await get_hall_of_fame(session, category_id=category_id, month_year=month)
    if not rows:
        await reply_safe(
            message,
            f"ℹ️ No hall of fame for <b>{html.escape(category.name)}</b> in {month} yet.",
            parse_mode="HTML",
        )
        return

    card = render_hall_of_fame_card(
        category_name=category.name,
        month_year=month,
        entries=[
            CardEntry(
                rank=r.rank,
                name=display_name(r.username, r.first_name, r.last_name),
                likes=r.likes_count,
            )
            for r in rows
        ],
    )

    lines = [f"🌟 <b>{html.escape(category.name)}: hall of fame {month}</b>", ""]
    for r in rows[:3]:
        name = html.escape(display_name(r.username, r.first_name, r.last_name))
        lines.append(f"#{r.rank} {name}: <b>{r.likes_count}</b> likes")

    await message.answer_photo(
        photo=BufferedInputFile(card, filename=f"hall_of_fame_{category_id}_{month}.png"),
        caption="\n".join(lines),
        parse_mode="HTML",
    )

    # the winning photo itself
    top = rows[0]
    await message.answer_photo(photo=top.file_id, caption=f"🥇 #{top.rank} of {month}")


@router.message(Command("halloffame"))
@router.message(F.text == BTN_HALL_OF_FAME)
async def hall_of_fame_cmd(
    message: Message,
    settings: Settings,
    session: AsyncSession,
    command: CommandObject | None = None,
) -> None:
    args = ((command.args or "") if command else "").split()

    if not args:
        cats = await list_categories(session)
        if not cats:
            await reply_safe(message, "ℹ️ No categories yet.")
            return
        await message.answer(
            "🌟 Pick a category:",
            reply_markup=categories_kb(cats, prefix="hof"),
        )
        return

    if not args[0].isdigit() or len(args) > 2:
        await reply_safe(message, USAGE, parse_mode="HTML")
        return

    month_year = None
    if len(args) == 2:
        try:
            month_year = parse_month_year(args[1])
        except ValueError:
            await reply_safe(message, USAGE, parse_mode="HTML")
            return

    await send_hall_of_fame(
        message,
        session,
        settings,
        category_id=int(args[0]),
        month_year=month_year,
    )


@router.callback_query(F.data.startswith("hof:"))
async def hall_of_fame_pick(cb: CallbackQuery, settings: Settings, session: AsyncSession) -> None:
    try:
        category_id = int((cb.data or "").split(":", 1)[1])
    except (IndexError, ValueError):
        await cb.answer("Invalid category", show_alert=True)
        return

    await cb.answer()
    if cb.message:
        await send_hall_of_fame(cb.message, session, settings, category_id=category_id)
