# photobot/handlers/user/categories.py
from __future__ import annotations

import html

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import CategoryType
from photobot.database.repo.category_repo import list_categories
from photobot.keyboards.main import BTN_CATEGORIES
from photobot.utils.reply import reply_safe

router = Router()


@router.message(Command("categories"))
@router.message(F.text == BTN_CATEGORIES)
async def categories_cmd(message: Message, session: AsyncSession) -> None:
    cats = await list_categories(session, active_only=True)
    if not cats:
        await reply_safe(message, "ℹ️ No active categories yet.")
        return

    lines = ["🗂 <b>Active categories</b>", ""]
    for c in cats:
        suffix = ""
        if c.category_type == CategoryType.WEEKLY and c.week_start_date:
            suffix = f" — weekly, since {c.week_start_date.date().isoformat()}"
        lines.append(f"<code>{c.id}</code> {html.escape(c.name)}{suffix}")

    await reply_safe(message, "\n".join(lines), parse_mode="HTML")
