# photobot/handlers/common.py
from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from photobot.utils.reply import reply_safe

router = Router(name="common")

HELP_TEXT = (
    "📌 Available commands:\n"
    "/post — post a photo into a category\n"
    "/categories — active categories\n"
    "/leaderboard &lt;category_id&gt; — this week's standings\n"
    "/halloffame &lt;category_id&gt; [YYYY-MM] — monthly top photos\n"
    "/profile — your photos and their scores\n"
    "/help — this message\n\n"
    "Vote with 👍 / 👎 under any photo. You can change your vote anytime."
)


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    await reply_safe(
        message,
        "👋 Welcome to the photo arena!\n\n"
        "Post photos into categories, vote on others, and climb the weekly leaderboard.\n"
        "Use the menu buttons below 👇",
    )


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await reply_safe(message, HELP_TEXT, parse_mode="HTML")
