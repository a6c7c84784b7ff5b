# photobot/keyboards/photos.py
from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from photobot.database.models import Category


def vote_kb(*, photo_id: int, likes: int = 0, dislikes: int = 0) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text=f"👍 {likes}", callback_data=f"vote:{photo_id}:like"),
                InlineKeyboardButton(text=f"👎 {dislikes}", callback_data=f"vote:{photo_id}:dislike"),
            ]
        ]
    )


def categories_kb(categories: list[Category], *, prefix: str) -> InlineKeyboardMarkup:
    """
    One button per category; callback_data = "<prefix>:<category_id>".
    """
    kb = InlineKeyboardBuilder()
    for c in categories:
        label = f"{c.name} (weekly)" if c.category_type.value == "weekly" else c.name
        kb.add(InlineKeyboardButton(text=label, callback_data=f"{prefix}:{c.id}"))
    kb.adjust(1)
    return kb.as_markup()
