# photobot/handlers/admin/panel.py
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config.settings import Settings
from photobot.keyboards.admin import BTN_BACK, admin_panel_kb
from photobot.services.auth import AuthService
from photobot.utils.reply import reply_safe

router = Router()

ADMIN_HELP = (
    "🛠 <b>Admin panel</b>\n\n"
    "<code>/category_add &lt;permanent|weekly|custom&gt; &lt;name&gt;</code>\n"
    "<code>/category_archive &lt;category_id&gt;</code>\n"
    "<code>/run_leaderboards</code> recompute this week's leaderboards\n"
    "<code>/run_hall_of_fame</code> recompute this month's hall of fame\n"
    "<code>/run_archive</code> archive expired weekly categories"
)


async def require_admin_or_reply(message: Message, settings: Settings, session: AsyncSession) -> bool:
    tg = message.from_user
    if not tg:
        await message.answer("⛔ You are not allowed to use admin commands.")
        return False

    auth = AuthService(settings)
    authz = await auth.resolve_by_telegram(
        session=session,
        telegram_id=tg.id,
        username=tg.username,
        first_name=tg.first_name,
        last_name=tg.last_name,
    )
    if not authz.is_admin:
        await message.answer("⛔ You are not allowed to use admin commands.")
        return False
    return True


@router.message(Command("admin"))
async def open_admin_panel(message: Message, settings: Settings, session: AsyncSession) -> None:
    if not await require_admin_or_reply(message, settings, session):
        return
    if message.chat.type != "private":
        await message.answer(ADMIN_HELP, parse_mode="HTML")
        return
    await message.answer(ADMIN_HELP, reply_markup=admin_panel_kb(), parse_mode="HTML")


@router.message(F.text == BTN_BACK)
async def back_to_menu(message: Message) -> None:
    await reply_safe(message, "⬅️ Back to the main menu.")
