# photobot/handlers/user/router.py
from aiogram import Router

from photobot.handlers.user.categories import router as categories_router
from photobot.handlers.user.post import router as post_router
from photobot.handlers.user.vote import router as vote_router
from photobot.handlers.user.leaderboard import router as leaderboard_router
from photobot.handlers.user.hall_of_fame import router as hall_of_fame_router
from photobot.handlers.user.profile import router as profile_router

router = Router(name="user")

router.include_router(categories_router)
router.include_router(post_router)
router.include_router(vote_router)
router.include_router(leaderboard_router)
router.include_router(hall_of_fame_router)
router.include_router(profile_router)
