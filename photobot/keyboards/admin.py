# photobot/keyboards/admin.py
from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

BTN_RUN_LEADERBOARDS = "🏆 Run leaderboards"
BTN_RUN_HALL_OF_FAME = "🌟 Run hall of fame"
BTN_RUN_ARCHIVE = "🗄 Run archive"
BTN_BACK = "⬅️ Back to Menu"


def admin_panel_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=BTN_RUN_LEADERBOARDS), KeyboardButton(text=BTN_RUN_HALL_OF_FAME)],
            [KeyboardButton(text=BTN_RUN_ARCHIVE)],
            [KeyboardButton(text=BTN_BACK)],
        ],
        resize_keyboard=True,
        input_field_placeholder="Admin panel…",
        selective=False,
        one_time_keyboard=False,
    )
