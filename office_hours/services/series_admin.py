# office_hours/services/series_admin.py
from __future__ import annotations

import logging

from office_hours.core.clock import now_nanos
from office_hours.core.errors import InvalidInputError, NotFoundError
from office_hours.core.ids import new_id, parse_id
from office_hours.models.event_series import EventSeries
from office_hours.models.one_off_session import OneOffSession
from office_hours.models.user import User
from office_hours.schemas.series import Frequency, SeriesCreate, SeriesUpdate
from office_hours.schemas.session import OneOffCreate, SessionStatus
from office_hours.services.store import ScheduleStore

logger = logging.getLogger(__name__)

# Fields of EventSeries that may be set back to NULL through an update.
_CLEARABLE_FIELDS = {"link", "end_utc", "color"}


async def create_series(
    store: ScheduleStore,
    payload: SeriesCreate,
    acting_user: User,
) -> EventSeries:
    """
    Create a recurring series.

    Validation
    ----------
    - MONTHLY requires `weekday_ordinal` (the ordinal is dropped for other
      frequencies, where it has no meaning).
    - `end_utc`, when given, must be after `start_utc`.
    - A missing duration falls back to the global default.
    """
    if payload.frequency is Frequency.MONTHLY and payload.weekday_ordinal is None:
        raise InvalidInputError("Monthly frequency requires weekday_ordinal")
    if payload.end_utc is not None and payload.end_utc <= payload.start_utc:
        raise InvalidInputError("end_utc must be after start_utc")

    settings = await store.get_settings()
    duration = payload.default_duration_minutes or settings.default_event_duration_minutes

    series = EventSeries(
        series_id=new_id(),
        title=payload.title,
        notes=payload.notes,
        link=payload.link,
        frequency=payload.frequency.value,
        weekday=payload.weekday.value,
        weekday_ordinal=(
            payload.weekday_ordinal.value
            if payload.frequency is Frequency.MONTHLY
            else None
        ),
        start_utc=payload.start_utc,
        end_utc=payload.end_utc,
        default_duration_minutes=duration,
        color=payload.color,
        paused=False,
        created_at=now_nanos(),
        created_by=acting_user.principal,
    )
    await store.put_series(series)
    await store.commit()

    logger.info("Created %s series %s (%s)", series.frequency, series.series_id, series.title)
    return series


async def get_series(store: ScheduleStore, series_id: str) -> EventSeries:
    series_id = parse_id(series_id, "series_id")
    series = await store.get_series(series_id)
    if series is None:
        raise NotFoundError(f"Series {series_id} not found")
    return series


async def update_series(
    store: ScheduleStore,
    series_id: str,
    payload: SeriesUpdate,
) -> EventSeries:
    """
    Apply the fields present in `payload`.

    Explicit nulls clear `link`, `end_utc` and `color`; for every other
    field a null is ignored. Existing exceptions stay keyed to the
    original occurrence instants.
    """
    series = await get_series(store, series_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field not in _CLEARABLE_FIELDS:
            continue
        setattr(series, field, value)

    if series.end_utc is not None and series.end_utc <= series.start_utc:
        raise InvalidInputError("end_utc must be after start_utc")

    await store.put_series(series)
    await store.commit()

    logger.info("Updated series %s", series.series_id)
    return series


async def delete_series(store: ScheduleStore, series_id: str) -> None:
    """
    Delete a series. Its exceptions are left orphaned; no occurrence is
    ever generated for them again.
    """
    series_id = parse_id(series_id, "series_id")
    if not await store.delete_series(series_id):
        raise NotFoundError(f"Series {series_id} not found")
    await store.commit()
    logger.info("Deleted series %s", series_id)


async def list_series(store: ScheduleStore) -> list[EventSeries]:
    return await store.list_series()


async def create_one_off_session(
    store: ScheduleStore,
    payload: OneOffCreate,
    acting_user: User,
) -> OneOffSession:
    """
    Store a standalone session. An initial host, if given, must exist.
    """
    if payload.end_utc <= payload.start_utc:
        raise InvalidInputError("End time must be after start time")

    if payload.host_principal is not None and await store.get_user(payload.host_principal) is None:
        raise NotFoundError(f"User {payload.host_principal} not found")

    session = OneOffSession(
        session_id=new_id(),
        start_utc=payload.start_utc,
        end_utc=payload.end_utc,
        title=payload.title,
        notes=payload.notes,
        link=payload.link,
        host_principal=payload.host_principal,
        status=SessionStatus.ACTIVE.value,
        color=payload.color,
        created_at=now_nanos(),
        created_by=acting_user.principal,
    )
    await store.put_one_off(session)
    await store.commit()

    logger.info("Created one-off session %s (%s)", session.session_id, session.title)
    return session
