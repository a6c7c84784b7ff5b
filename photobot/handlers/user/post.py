from __future__ import annotations

import html
import logging

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State, StatesGroup
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.config.settings import Settings
from photobot.database.models import User
from photobot.database.repo.category_repo import list_categories
from photobot.keyboards.main import BTN_POST
from photobot.keyboards.photos import categories_kb, vote_kb
from photobot.services.errors import EngineError, ValidationError
from photobot.services.photos import PhotoService
from photobot.utils.reply import reply_safe

log = logging.getLogger(__name__)
router = Router()


class PostStates(StatesGroup):
    choosing_category = State()
    waiting_photo = State()


@router.message(Command("post"))
@router.message(F.text == BTN_POST)
async def post_entry(message: Message, state: FSMContext, session: AsyncSession) -> None:
    if message.chat.type != "private":
        await message.answer("📸 Photo posting is available in private chat with the bot.")
        return

    cats = await list_categories(session, active_only=True)
    if not cats:
        await reply_safe(message, "ℹ️ No active categories yet.")
        return

    await state.set_state(PostStates.choosing_category)
    await message.answer(
        "📸 <b>Post a photo</b>\n\nPick a category:",
        reply_markup=categories_kb(cats, prefix="post"),
        parse_mode="HTML",
    )


@router.message(Command("cancel"))
async def post_cancel(message: Message, state: FSMContext) -> None:
    await state.clear()
    await reply_safe(message, "✅ Cancelled.")


@router.callback_query(PostStates.choosing_category, F.data.startswith("post:"))
async def post_choose_category(cb: CallbackQuery, state: FSMContext) -> None:
    try:
        category_id = int((cb.data or "").split(":", 1)[1])
    except (IndexError, ValueError):
        await cb.answer("Invalid category", show_alert=True)
        return

    await state.update_data(category_id=category_id)
    await state.set_state(PostStates.waiting_photo)
    await cb.answer()
    if cb.message:
        await cb.message.answer(
            "Now send <b>one</b> photo. Its caption is optional.\n\nCancel: /cancel",
            parse_mode="HTML",
        )


@router.message(PostStates.waiting_photo, F.photo)
async def post_receive_photo(
    message: Message,
    state: FSMContext,
    settings: Settings,
    session: AsyncSession,
    db_user: User,
    bot,
) -> None:
    data = await state.get_data()
    category_id = int(data.get("category_id") or 0)
    file_id = message.photo[-1].file_id

    try:
        photo = await PhotoService.post_photo(
            session,
            user_id=db_user.id,
            category_id=category_id,
            file_id=file_id,
            caption=message.caption,
        )
    except ValidationError as e:
        await state.clear()
        await reply_safe(message, f"⚠️ {html.escape(str(e))}")
        return
    except EngineError:
        log.exception("Failed to store photo for user %s", db_user.id)
        await reply_safe(message, "⚠️ Could not save your photo. Please try again.")
        return

    await state.clear()

    if settings.group_id:
        caption = f"📸 by {html.escape(db_user.display_name)}"
        if photo.caption:
            caption += f"\n\n{html.escape(photo.caption)}"
        try:
            await bot.send_photo(
                chat_id=settings.group_id,
                photo=file_id,
                caption=caption,
                reply_markup=vote_kb(photo_id=photo.id),
                parse_mode="HTML",
            )
        except Exception:
            log.exception("Failed to post photo %s to group", photo.id)

    await message.answer_photo(
        photo=file_id,
        caption=f"✅ Posted! Photo ID: {photo.id}",
        reply_markup=vote_kb(photo_id=photo.id),
    )


@router.message(PostStates.waiting_photo)
async def post_expect_photo(message: Message) -> None:
    await message.answer("🖼 Please send a photo (or /cancel).")
