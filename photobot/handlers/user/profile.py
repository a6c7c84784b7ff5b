from __future__ import annotations

import html

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import User
from photobot.keyboards.main import BTN_PROFILE
from photobot.services.profile import ProfileService
from photobot.utils.reply import reply_safe

router = Router()

RECENT = 10


@router.message(Command("profile"))
@router.message(F.text == BTN_PROFILE)
async def profile_cmd(message: Message, session: AsyncSession, db_user: User) -> None:
    profile = await ProfileService.get_profile(session, db_user.id)

    lines = [f"👤 <b>{html.escape(db_user.display_name)}</b>", ""]
    if not profile.photos:
        lines.append("ℹ️ You have not posted any photos yet. Use /post.")
        await reply_safe(message, "\n".join(lines), parse_mode="HTML")
        return

    total = sum(p.net_score for p in profile.photos)
    lines.append(f"📸 <b>{len(profile.photos)}</b> photos, net score <b>{total}</b>")
    lines.append("")
    for p in profile.photos[:RECENT]:
        caption = html.escape(p.caption) if p.caption else "<i>no caption</i>"
        archived = " (archived)" if p.is_archived else ""
        lines.append(
            f"#{p.id} {caption}: 👍 {p.likes_count} / 👎 {p.dislikes_count}{archived}"
        )

    await reply_safe(message, "\n".join(lines), parse_mode="HTML")
