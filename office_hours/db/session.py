# office_hours/db/session.py
from collections.abc import AsyncGenerator

from sqlalchemy import create_engine as create_sync_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from office_hours.core.config import get_settings
from office_hours.db.base import Base

# Import ORM models so that Base.metadata is aware of them.
from office_hours.models.event_series import EventSeries  # noqa: F401
from office_hours.models.global_settings import GlobalSettings  # noqa: F401
from office_hours.models.notification_job import NotificationJob  # noqa: F401
from office_hours.models.occurrence_exception import OccurrenceException  # noqa: F401
from office_hours.models.one_off_session import OneOffSession  # noqa: F401
from office_hours.models.user import User  # noqa: F401

settings = get_settings()

IS_TEST = settings.APP_ENV == "test"

# ---------------------------------------------------------------------------
# Main application engine + session
# ---------------------------------------------------------------------------
engine = create_async_engine(
    settings.DB_URL,
    echo=False,
    future=True,
    # Tests drive the engine from several event loops (pytest-asyncio and the
    # TestClient portal), so connections must not be pooled across them.
    poolclass=NullPool if IS_TEST else None,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
    class_=AsyncSession,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async SQLAlchemy session.

    The session is automatically closed when the request is completed.
    """
    async with AsyncSessionLocal() as session:
        yield session


# ---------------------------------------------------------------------------
# PRODUCTION / DEV: DB init for app startup
# ---------------------------------------------------------------------------
async def init_db_for_startup() -> None:
    """
    Initialize DB schema for application startup.

    Creates missing tables only; existing data is left untouched.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------------------------------------------------------------------------
# TESTS ONLY: reset schema using a SYNC engine
# ---------------------------------------------------------------------------

def _build_sync_db_url(async_url: str) -> str:
    """
    Convert an async driver URL into its synchronous counterpart:
    'postgresql+asyncpg://...' -> 'postgresql://...',
    'sqlite+aiosqlite:///...'  -> 'sqlite:///...'.
    """
    for async_driver in ("+asyncpg", "+aiosqlite"):
        if async_driver in async_url:
            return async_url.replace(async_driver, "")
    return async_url


def reset_schema_sync() -> None:
    """
    TEST-ONLY: drop and recreate every table with a synchronous engine.

    This bypasses async drivers entirely, so it can be called from plain
    (non-async) pytest fixtures regardless of which event loop is running.
    """
    sync_engine = create_sync_engine(_build_sync_db_url(settings.DB_URL), future=True)

    with sync_engine.begin() as conn:
        Base.metadata.drop_all(bind=conn)
        Base.metadata.create_all(bind=conn)

    sync_engine.dispose()
