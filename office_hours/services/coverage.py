# office_hours/services/coverage.py
from __future__ import annotations

import logging

from office_hours.core.clock import now_nanos
from office_hours.core.errors import ConflictError, NotFoundError
from office_hours.models.occurrence_exception import OccurrenceException
from office_hours.models.user import User
from office_hours.schemas.notification import NotificationKind
from office_hours.schemas.session import MaterializedSession, OccurrenceRef
from office_hours.schemas.user import Role, UserStatus
from office_hours.services.materializer import ResolvedTarget, resolve_target
from office_hours.services.notifier import Notifier, OutboxNotifier, notify_safely
from office_hours.services.store import ScheduleStore

logger = logging.getLogger(__name__)


def is_admin(user: User) -> bool:
    return user.role == Role.ADMIN.value


def overlaps(block_start: int, block_end: int, start: int, end: int) -> bool:
    """Half-open interval overlap: back-to-back intervals do not overlap."""
    return block_start < end and block_end > start


def is_host_eligible(user: User, start_utc: int, end_utc: int) -> bool:
    """
    A user can host `[start_utc, end_utc)` unless they are disabled or one of
    their out-of-office blocks overlaps it.
    """
    if user.status == UserStatus.DISABLED.value:
        return False

    for block in user.out_of_office or []:
        if overlaps(block["start_utc"], block["end_utc"], start_utc, end_utc):
            return False
    return True


async def _check_claims_gate(store: ScheduleStore, acting_user: User) -> None:
    settings = await store.get_settings()
    if settings.claims_paused and not is_admin(acting_user):
        raise ConflictError("Claims are currently paused")


def new_exception(series_id: str, occurrence_start_utc: int, acting_user: User) -> OccurrenceException:
    """
    Empty exception row for an occurrence: every field inherits from the series.
    """
    return OccurrenceException(
        series_id=series_id,
        occurrence_start_utc=occurrence_start_utc,
        start_utc=None,
        end_utc=None,
        notes=None,
        host_principal=None,
        host_cleared=False,
        cancelled=False,
        updated_at=now_nanos(),
        updated_by=acting_user.principal,
    )


async def write_host(
    store: ScheduleStore,
    target: ResolvedTarget,
    host_principal: str | None,
    acting_user: User,
) -> None:
    """
    Persist a host change for the target.

    Series occurrences get (or create) an exception row; assigning clears
    the `host_cleared` flag, unassigning sets it. One-off sessions are
    updated in place.
    """
    if target.series is not None:
        exception = target.exception or new_exception(
            target.series.series_id, target.occurrence_start_utc, acting_user
        )
        exception.host_principal = host_principal
        exception.host_cleared = host_principal is None
        exception.updated_at = now_nanos()
        exception.updated_by = acting_user.principal
        await store.put_exception(exception)
    else:
        target.one_off.host_principal = host_principal
        await store.put_one_off(target.one_off)


async def assign_host(
    store: ScheduleStore,
    ref: OccurrenceRef,
    host_principal: str,
    acting_user: User,
    admin_override: bool = False,
    notifier: Notifier | None = None,
) -> MaterializedSession:
    """
    Make `host_principal` the host of the referenced session.

    Steps
    -----
    1) Reject (Conflict) while claims are paused, unless the actor is an admin.
    2) Load the host (NotFound if unknown) and resolve the session's current
       effective timing (NotFound if it does not exist or is cancelled).
    3) Unless `admin_override`, reject (Conflict) a disabled host or one
       whose out-of-office blocks overlap the session.
    4) Write the exception / one-off, queue a HOST_ASSIGNED notification.

    Returns
    -------
    MaterializedSession
        The session re-resolved after the write.
    """
    await _check_claims_gate(store, acting_user)

    host = await store.get_user(host_principal)
    if host is None:
        raise NotFoundError(f"User {host_principal} not found")

    target = await resolve_target(store, ref)
    session = target.session

    if not admin_override and not is_host_eligible(host, session.start_utc, session.end_utc):
        raise ConflictError("User cannot be assigned (disabled or on out-of-office)")

    await write_host(store, target, host.principal, acting_user)
    updated = (await resolve_target(store, ref)).session

    notifier = notifier or OutboxNotifier(store)
    await notify_safely(notifier, host, NotificationKind.HOST_ASSIGNED, updated)

    await store.commit()
    logger.info(
        "Assigned host %s to session %s (by %s, override=%s)",
        host.principal,
        updated.session_id,
        acting_user.principal,
        admin_override,
    )
    return updated


async def unassign_host(
    store: ScheduleStore,
    ref: OccurrenceRef,
    acting_user: User,
    notifier: Notifier | None = None,
) -> MaterializedSession:
    """
    Remove the host of the referenced session.

    Only the claims-paused gate applies; removing a host needs no
    availability check. A series occurrence is marked as explicitly cleared.
    The previous host, if any, receives a HOST_REMOVED notification.
    """
    await _check_claims_gate(store, acting_user)

    target = await resolve_target(store, ref)
    previous_host = target.session.host_principal

    await write_host(store, target, None, acting_user)
    updated = (await resolve_target(store, ref)).session

    if previous_host is not None:
        previous_user = await store.get_user(previous_host)
        if previous_user is not None:
            notifier = notifier or OutboxNotifier(store)
            await notify_safely(
                notifier, previous_user, NotificationKind.HOST_REMOVED, target.session
            )

    await store.commit()
    logger.info(
        "Removed host %s from session %s (by %s)",
        previous_host,
        updated.session_id,
        acting_user.principal,
    )
    return updated
