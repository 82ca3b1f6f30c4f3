# office_hours/main.py
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from office_hours.api.errors import register_error_handlers
from office_hours.api.routes import coverage, health, notifications, series, sessions, settings, users
from office_hours.core.config import get_settings
from office_hours.core.logging import configure_logging
from office_hours.db.session import AsyncSessionLocal, init_db_for_startup
from office_hours.services.store import ScheduleStore
from office_hours.services.user_admin import bootstrap_admin

logger = logging.getLogger(__name__)


async def _bootstrap_admin() -> None:
    config = get_settings()
    if not config.BOOTSTRAP_ADMIN_PRINCIPAL:
        return

    async with AsyncSessionLocal() as db:
        await bootstrap_admin(
            ScheduleStore(db),
            config.BOOTSTRAP_ADMIN_PRINCIPAL,
            config.BOOTSTRAP_ADMIN_NAME,
            config.BOOTSTRAP_ADMIN_EMAIL,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Create missing tables and make sure an administrator exists.
    """
    await init_db_for_startup()
    await _bootstrap_admin()
    logger.info("%s started (env=%s)", app.title, get_settings().APP_ENV)
    yield


def create_app() -> FastAPI:
    """
    Application factory for the Office Hours Scheduler service.
    """
    config = get_settings()
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title=config.APP_NAME,
        description=(
            "Backend service for recurring office-hours sessions: recurring series,\n"
            "per-occurrence exceptions, one-off sessions, host assignment with\n"
            "availability checks, coverage statistics and a notification outbox."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(sessions.router)
    app.include_router(series.router)
    app.include_router(coverage.router)
    app.include_router(users.router)
    app.include_router(settings.router)
    app.include_router(notifications.router)

    return app


app = create_app()
