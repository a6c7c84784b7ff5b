# photobot/keyboards/main.py
from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

BTN_POST = "📸 Post photo"
BTN_CATEGORIES = "🗂 Categories"
BTN_LEADERBOARD = "🏆 Leaderboard"
BTN_HALL_OF_FAME = "🌟 Hall of Fame"
BTN_PROFILE = "👤 My photos"


def main_menu_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=BTN_POST), KeyboardButton(text=BTN_CATEGORIES)],
            [KeyboardButton(text=BTN_LEADERBOARD), KeyboardButton(text=BTN_HALL_OF_FAME)],
            [KeyboardButton(text=BTN_PROFILE)],
        ],
        resize_keyboard=True,
        input_field_placeholder="Choose an action…",
        selective=False,
        one_time_keyboard=False,
    )
