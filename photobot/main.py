# photobot/main.py
import asyncio
import contextlib
import logging

import uvicorn
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from photobot.api.app import create_app
from photobot.config import Settings
from photobot.database import Database
from photobot.handlers.router import router as handlers_router
from photobot.scheduler import setup_scheduler
from photobot.utils.middleware import DbSessionMiddleware


def setup_logging(is_dev: bool) -> None:
    """
    App logs at INFO (DEBUG in dev); library chatter at WARNING+.
    """
    app_level = logging.DEBUG if is_dev else logging.INFO

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for name in (
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "sqlalchemy.orm",
        "asyncpg",
        "aiosqlite",
        "apscheduler",
        "uvicorn.access",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


class ApiServer(uvicorn.Server):
    """
    Shares the event loop with the bot; signals belong to aiogram polling.
    """

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self):
        yield


def build_api_server(settings: Settings, db: Database) -> ApiServer:
    config = uvicorn.Config(
        create_app(settings, db),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
        lifespan="off",
    )
    return ApiServer(config)


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("photobot")

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized")

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )

    dp = Dispatcher()

    # Inject workflow data
    dp.workflow_data["settings"] = settings
    dp.workflow_data["db"] = db

    # DB session per update
    dp.update.middleware(DbSessionMiddleware(db))

    dp.include_router(handlers_router)

    scheduler = setup_scheduler(db=db, settings=settings)
    log.info("Scheduler started (tz=%s)", settings.timezone)

    api_server: ApiServer | None = None
    api_task: asyncio.Task | None = None
    if settings.api_enabled:
        api_server = build_api_server(settings, db)
        api_task = asyncio.create_task(api_server.serve())
        log.info("HTTP API listening on %s:%s", settings.api_host, settings.api_port)

    try:
        await dp.start_polling(bot)
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Bot crashed")
        raise
    finally:
        if api_server is not None and api_task is not None:
            try:
                api_server.should_exit = True
                with contextlib.suppress(asyncio.CancelledError):
                    await api_task
            except Exception:
                log.exception("Failed to stop HTTP API")

        try:
            scheduler.shutdown(wait=False)
        except Exception:
            log.exception("Failed to shutdown scheduler")

        try:
            await db.close()
        except Exception:
            log.exception("Failed to close DB")

        try:
            await bot.session.close()
        except Exception:
            log.exception("Failed to close bot session")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
