from __future__ import annotations

import html
import logging

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config.settings import Settings
from photobot.database.repo.category_repo import deactivate_category
from photobot.handlers.admin.panel import require_admin_or_reply
from photobot.services.errors import EngineError, ValidationError
from photobot.services.photos import CategoryService

log = logging.getLogger(__name__)
router = Router()


@router.message(Command("category_add"))
async def category_add_cmd(
    message: Message,
    settings: Settings,
    session: AsyncSession,
    command: CommandObject,
) -> None:
    if not await require_admin_or_reply(message, settings, session):
        return

    parts = (command.args or "").strip().split(maxsplit=1)
    if len(parts) != 2:
        await message.answer(
            "Usage: <code>/category_add &lt;permanent|weekly|custom&gt; &lt;name&gt;</code>",
            parse_mode="HTML",
        )
        return

    kind, name = parts
    try:
        cat = await CategoryService.add_category(
            session,
            name=name,
            category_type=kind,
            tz_name=settings.timezone,
        )
    except ValidationError as e:
        await message.answer(f"⚠️ {html.escape(str(e))}")
        return
    except EngineError:
        log.exception("category_add failed")
        await message.answer("⚠️ Could not create the category.")
        return

    log.info("Category %s created: %s (%s)", cat.id, cat.name, cat.category_type.value)
    await message.answer(
        f"✅ Category <code>{cat.id}</code> <b>{html.escape(cat.name)}</b> ({cat.category_type.value}) created.",
        parse_mode="HTML",
    )


@router.message(Command("category_archive"))
async def category_archive_cmd(
    message: Message,
    settings: Settings,
    session: AsyncSession,
    command: CommandObject,
) -> None:
    if not await require_admin_or_reply(message, settings, session):
        return

    arg = (command.args or "").strip()
    if not arg.isdigit():
        await message.answer("Usage: <code>/category_archive &lt;category_id&gt;</code>", parse_mode="HTML")
        return

    try:
        changed = await deactivate_category(session, int(arg))
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        log.exception("category_archive failed for %s", arg)
        await message.answer("⚠️ Could not archive the category.")
        return

    if changed:
        await message.answer(f"🗄 Category {arg} archived.")
    else:
        await message.answer(f"ℹ️ Category {arg} not found or already archived.")
