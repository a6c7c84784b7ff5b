# photobot/api/app.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from photobot.api.routers import cron, profile, rankings, votes
from photobot.config.settings import Settings
from photobot.database.session import Database
from photobot.services.errors import (
    AuthorizationError,
    EngineError,
    NotFoundError,
    ValidationError,
)

log = logging.getLogger(__name__)


async def _authorization_error(request: Request, exc: AuthorizationError) -> JSONResponse:
    log.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": "Unauthorized"}, status_code=401)


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=404)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=400)


async def _engine_error(request: Request, exc: EngineError) -> JSONResponse:
    # store failures: details go to the log only
    log.error("Error handling %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(settings: Settings, db: Database) -> FastAPI:
    """
    HTTP entry points for the external scheduler plus vote submission and read views.
    The caller owns the Database lifecycle.
    """
    app = FastAPI(title="photobot", docs_url="/docs" if settings.is_dev else None)
    app.state.settings = settings
    app.state.db = db

    app.add_exception_handler(AuthorizationError, _authorization_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(EngineError, _engine_error)

    app.include_router(cron.router, tags=["Cron"])
    app.include_router(votes.router, tags=["Votes"])
    app.include_router(rankings.router, tags=["Rankings"])
    app.include_router(profile.router, tags=["Profile"])

    @app.get("/healthz")
    async def healthz() -> dict:
        return {"status": "ok"}

    return app
