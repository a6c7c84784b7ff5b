from aiogram import Router

from photobot.handlers.admin.panel import router as panel_router
from photobot.handlers.admin.categories import router as categories_router
from photobot.handlers.admin.jobs import router as jobs_router

router = Router(name="admin")

router.include_router(panel_router)
router.include_router(categories_router)
router.include_router(jobs_router)
