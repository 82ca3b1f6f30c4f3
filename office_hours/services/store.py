# office_hours/services/store.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from office_hours.core.config import get_settings
from office_hours.models.event_series import EventSeries
from office_hours.models.global_settings import SETTINGS_ROW_ID, GlobalSettings
from office_hours.models.notification_job import NotificationJob
from office_hours.models.occurrence_exception import OccurrenceException
from office_hours.models.one_off_session import OneOffSession
from office_hours.models.user import User
from office_hours.schemas.notification import NotificationStatus
from office_hours.schemas.session import SessionStatus


class ScheduleStore:
    """
    Key-value style access to the persisted scheduling state.

    The scheduling core only needs get/put by key, delete by id, a range
    scan of exceptions by series id and a few listings; this class maps
    those operations onto one SQLAlchemy `AsyncSession`.

    Notes
    -----
    - `put_*` methods add and flush, so later reads in the same unit of work
      see the change; nothing is durable until `commit()` is called once the
      whole read-modify-write sequence has been applied.
    - Listings are ordered by primary key so results never depend on the
      database's physical row order.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    @property
    def db(self) -> AsyncSession:
        return self._db

    async def commit(self) -> None:
        await self._db.commit()

    def savepoint(self):
        """
        Nested transaction (SAVEPOINT) usable as `async with store.savepoint():`.
        """
        return self._db.begin_nested()

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------
    async def get_series(self, series_id: str) -> EventSeries | None:
        return await self._db.get(EventSeries, series_id)

    async def put_series(self, series: EventSeries) -> None:
        self._db.add(series)
        await self._db.flush()

    async def delete_series(self, series_id: str) -> bool:
        series = await self.get_series(series_id)
        if series is None:
            return False
        await self._db.delete(series)
        await self._db.flush()
        return True

    async def list_series(self) -> list[EventSeries]:
        result = await self._db.execute(
            select(EventSeries).order_by(EventSeries.series_id.asc())
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Occurrence exceptions
    # ------------------------------------------------------------------
    async def get_exception(
        self, series_id: str, occurrence_start_utc: int
    ) -> OccurrenceException | None:
        return await self._db.get(OccurrenceException, (series_id, occurrence_start_utc))

    async def put_exception(self, exception: OccurrenceException) -> None:
        self._db.add(exception)
        await self._db.flush()

    async def list_exceptions_for_series(self, series_id: str) -> list[OccurrenceException]:
        """
        Range scan of every exception of one series, by original occurrence instant.
        """
        result = await self._db.execute(
            select(OccurrenceException)
            .where(OccurrenceException.series_id == series_id)
            .order_by(OccurrenceException.occurrence_start_utc.asc())
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # One-off sessions
    # ------------------------------------------------------------------
    async def get_one_off(self, session_id: str) -> OneOffSession | None:
        return await self._db.get(OneOffSession, session_id)

    async def put_one_off(self, session: OneOffSession) -> None:
        self._db.add(session)
        await self._db.flush()

    async def delete_one_off(self, session_id: str) -> bool:
        session = await self.get_one_off(session_id)
        if session is None:
            return False
        await self._db.delete(session)
        await self._db.flush()
        return True

    async def list_active_one_offs(
        self, window_start: int, window_end: int
    ) -> list[OneOffSession]:
        """
        Active one-off sessions whose start lies in `[window_start, window_end)`.
        """
        result = await self._db.execute(
            select(OneOffSession)
            .where(
                OneOffSession.start_utc >= window_start,
                OneOffSession.start_utc < window_end,
                OneOffSession.status == SessionStatus.ACTIVE.value,
            )
            .order_by(OneOffSession.start_utc.asc(), OneOffSession.session_id.asc())
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Global settings (singleton)
    # ------------------------------------------------------------------
    async def get_settings(self) -> GlobalSettings:
        """
        Return the settings row.

        Before the first `put_settings` there is no row; an unsaved instance
        built from the configured defaults is returned and nothing is written.
        """
        row = await self._db.get(GlobalSettings, SETTINGS_ROW_ID)
        if row is None:
            config = get_settings()
            row = GlobalSettings(
                id=SETTINGS_ROW_ID,
                forward_window_months=config.DEFAULT_FORWARD_WINDOW_MONTHS,
                claims_paused=False,
                default_event_duration_minutes=config.DEFAULT_SESSION_DURATION_MINUTES,
                org_name=config.ORG_NAME,
                org_description="",
            )
        return row

    async def put_settings(self, row: GlobalSettings) -> None:
        self._db.add(row)
        await self._db.flush()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    async def get_user(self, principal: str) -> User | None:
        return await self._db.get(User, principal)

    async def put_user(self, user: User) -> None:
        self._db.add(user)
        await self._db.flush()

    async def list_users(self) -> list[User]:
        result = await self._db.execute(select(User).order_by(User.principal.asc()))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Notification outbox
    # ------------------------------------------------------------------
    async def add_notification(self, job: NotificationJob) -> None:
        self._db.add(job)
        await self._db.flush()

    async def get_notification(self, job_id: str) -> NotificationJob | None:
        return await self._db.get(NotificationJob, job_id)

    async def list_pending_notifications(self) -> list[NotificationJob]:
        result = await self._db.execute(
            select(NotificationJob)
            .where(NotificationJob.status == NotificationStatus.PENDING.value)
            .order_by(NotificationJob.created_at.asc(), NotificationJob.job_id.asc())
        )
        return list(result.scalars().all())
