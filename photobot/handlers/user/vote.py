from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import CallbackQuery
from sqlalchemy.ext.asyncio import AsyncSession

from photobot.database.models import User
from photobot.keyboards.photos import vote_kb
from photobot.services.errors import EngineError, NotFoundError, ValidationError
from photobot.services.votes import VoteService

log = logging.getLogger(__name__)
router = Router()


@router.callback_query(F.data.startswith("vote:"))
async def vote_action(cb: CallbackQuery, session: AsyncSession, db_user: User) -> None:
    # callback_data: vote:<photo_id>:<like|dislike>
    parts = (cb.data or "").split(":")
    if len(parts) != 3:
        await cb.answer("Invalid vote", show_alert=True)
        return
    _, photo_id, vote_type = parts

    try:
        result = await VoteService.submit_vote(
            session,
            photo_id=photo_id,
            voter_id=db_user.id,
            vote_type=vote_type,
        )
    except NotFoundError:
        await cb.answer("This photo no longer exists.", show_alert=True)
        return
    except ValidationError:
        await cb.answer("Invalid vote", show_alert=True)
        return
    except EngineError:
        log.exception("Vote failed photo=%s user=%s", photo_id, db_user.id)
        await cb.answer("⚠️ Vote failed, please try again.", show_alert=True)
        return

    emoji = "👍" if result.vote_type.value == "like" else "👎"
    await cb.answer(f"{emoji} Vote saved")

    if cb.message:
        try:
            await cb.message.edit_reply_markup(
                reply_markup=vote_kb(
                    photo_id=result.photo_id,
                    likes=result.tally.likes,
                    dislikes=result.tally.dislikes,
                )
            )
        except TelegramBadRequest:
            # "message is not modified" when the counts did not change
            pass
