# office_hours/services/occurrence_editor.py
from __future__ import annotations

import logging

from office_hours.core.clock import now_nanos
from office_hours.core.errors import InvalidInputError
from office_hours.models.occurrence_exception import OccurrenceException
from office_hours.models.user import User
from office_hours.schemas.notification import NotificationKind
from office_hours.schemas.session import (
    MaterializedSession,
    OccurrenceRef,
    OccurrenceUpdate,
    SessionStatus,
)
from office_hours.services.coverage import new_exception
from office_hours.services.materializer import ResolvedTarget, resolve_target
from office_hours.services.notifier import Notifier, OutboxNotifier, notify_safely
from office_hours.services.store import ScheduleStore

logger = logging.getLogger(__name__)


async def _notify_host(
    store: ScheduleStore,
    session: MaterializedSession,
    kind: NotificationKind,
    notifier: Notifier | None,
) -> None:
    if session.host_principal is None:
        return
    host = await store.get_user(session.host_principal)
    if host is None:
        return
    notifier = notifier or OutboxNotifier(store)
    await notify_safely(notifier, host, kind, session)


def _exception_for(target: ResolvedTarget, acting_user: User) -> OccurrenceException:
    return target.exception or new_exception(
        target.series.series_id, target.occurrence_start_utc, acting_user
    )


async def update_occurrence(
    store: ScheduleStore,
    update: OccurrenceUpdate,
    acting_user: User,
    notifier: Notifier | None = None,
) -> MaterializedSession:
    """
    Override start / end / notes of a single session.

    For a series occurrence only the provided fields are written into its
    exception; omitted fields keep inheriting from the series (an end that
    was never overridden stays at base instant + duration). One-off
    sessions are updated in place.

    The current host is notified with INSTANCE_TIME_CHANGED when the
    effective timing changed.
    """
    target = await resolve_target(store, update)
    before = target.session

    new_start = update.start_utc if update.start_utc is not None else before.start_utc
    new_end = update.end_utc if update.end_utc is not None else before.end_utc
    if new_end <= new_start:
        raise InvalidInputError("End time must be after start time")

    if target.series is not None:
        exception = _exception_for(target, acting_user)
        if update.start_utc is not None:
            exception.start_utc = update.start_utc
        if update.end_utc is not None:
            exception.end_utc = update.end_utc
        if update.notes is not None:
            exception.notes = update.notes
        exception.updated_at = now_nanos()
        exception.updated_by = acting_user.principal
        await store.put_exception(exception)
    else:
        one_off = target.one_off
        one_off.start_utc = new_start
        one_off.end_utc = new_end
        if update.notes is not None:
            one_off.notes = update.notes
        await store.put_one_off(one_off)

    updated = (await resolve_target(store, update)).session
    if (updated.start_utc, updated.end_utc) != (before.start_utc, before.end_utc):
        await _notify_host(store, updated, NotificationKind.INSTANCE_TIME_CHANGED, notifier)

    await store.commit()
    logger.info("Updated session %s (by %s)", updated.session_id, acting_user.principal)
    return updated


async def cancel_occurrence(
    store: ScheduleStore,
    ref: OccurrenceRef,
    acting_user: User,
    notifier: Notifier | None = None,
) -> MaterializedSession:
    """
    Cancel a single session; it disappears from every listing afterwards.

    Returns the session as it was right before cancellation, with status
    CANCELLED. The current host is notified with INSTANCE_CANCELLED.
    """
    target = await resolve_target(store, ref)

    if target.series is not None:
        exception = _exception_for(target, acting_user)
        exception.cancelled = True
        exception.updated_at = now_nanos()
        exception.updated_by = acting_user.principal
        await store.put_exception(exception)
    else:
        target.one_off.status = SessionStatus.CANCELLED.value
        await store.put_one_off(target.one_off)

    cancelled = target.session.model_copy(update={"status": SessionStatus.CANCELLED})
    await _notify_host(store, cancelled, NotificationKind.INSTANCE_CANCELLED, notifier)

    await store.commit()
    logger.info("Cancelled session %s (by %s)", cancelled.session_id, acting_user.principal)
    return cancelled
