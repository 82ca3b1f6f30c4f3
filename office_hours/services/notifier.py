# office_hours/services/notifier.py
from __future__ import annotations

import logging
from typing import Protocol

from office_hours.core.clock import now_nanos
from office_hours.core.errors import NotFoundError
from office_hours.core.ids import new_id, parse_id
from office_hours.models.notification_job import NotificationJob
from office_hours.models.user import User
from office_hours.schemas.notification import NotificationKind, NotificationStatus
from office_hours.schemas.session import MaterializedSession
from office_hours.schemas.user import NotificationPreferences
from office_hours.services.store import ScheduleStore

logger = logging.getLogger(__name__)

_PREFERENCE_FOR_KIND = {
    NotificationKind.HOST_ASSIGNED: "email_on_assigned",
    NotificationKind.HOST_REMOVED: "email_on_removed",
    NotificationKind.INSTANCE_CANCELLED: "email_on_cancelled",
    NotificationKind.INSTANCE_TIME_CHANGED: "email_on_time_changed",
}


class Notifier(Protocol):
    """
    Outbound notification collaborator.

    Scheduling mutations do not wait on, nor fail because of, notification
    delivery: callers go through `notify_safely`, which logs failures.
    """

    async def notify(
        self,
        recipient: User,
        kind: NotificationKind,
        session: MaterializedSession,
    ) -> None:
        ...


def build_message(kind: NotificationKind, session: MaterializedSession) -> tuple[str, str]:
    """
    Subject and plain-text body for a notification about `session`.
    """
    title = session.title
    if kind is NotificationKind.HOST_ASSIGNED:
        return (
            f"You've been assigned to an Office Hours session: {title}",
            f"You have been assigned as host for the Office Hours session '{title}'.",
        )
    if kind is NotificationKind.HOST_REMOVED:
        return (
            f"You've been removed from an Office Hours session: {title}",
            f"You have been removed as host for the Office Hours session '{title}'.",
        )
    if kind is NotificationKind.INSTANCE_CANCELLED:
        return (
            f"Office Hours session cancelled: {title}",
            f"The Office Hours session '{title}' has been cancelled.",
        )
    return (
        f"Office Hours session time changed: {title}",
        f"The time for Office Hours session '{title}' has been updated.",
    )


class OutboxNotifier:
    """
    Queues a PENDING NotificationJob row per notification, honouring the
    recipient's preferences. An external worker delivers and marks them sent.
    """

    def __init__(self, store: ScheduleStore) -> None:
        self._store = store

    async def notify(
        self,
        recipient: User,
        kind: NotificationKind,
        session: MaterializedSession,
    ) -> None:
        preferences = NotificationPreferences.model_validate(recipient.notification_settings or {})
        if not getattr(preferences, _PREFERENCE_FOR_KIND[kind]):
            logger.debug(
                "Skipping %s notification for %s (disabled in preferences)",
                kind.value,
                recipient.principal,
            )
            return

        subject, body = build_message(kind, session)
        job = NotificationJob(
            job_id=new_id(),
            created_at=now_nanos(),
            kind=kind.value,
            recipient_principal=recipient.principal,
            recipient_email=recipient.email,
            subject=subject,
            body_text=body,
            session_id=session.session_id,
            start_utc=session.start_utc,
            end_utc=session.end_utc,
            status=NotificationStatus.PENDING.value,
        )

        try:
            # A failed insert only rolls back the savepoint, never the
            # caller's pending mutation.
            async with self._store.savepoint():
                await self._store.add_notification(job)
        except Exception:
            logger.warning(
                "Failed to queue %s notification for %s",
                kind.value,
                recipient.principal,
                exc_info=True,
            )


async def notify_safely(
    notifier: Notifier,
    recipient: User,
    kind: NotificationKind,
    session: MaterializedSession,
) -> None:
    """
    Call `notifier` without letting its failures reach the scheduling
    mutation that triggered it.
    """
    try:
        await notifier.notify(recipient, kind, session)
    except Exception:
        logger.warning(
            "Notifier failed for %s notification to %s",
            kind.value,
            recipient.principal,
            exc_info=True,
        )


async def list_pending_notifications(store: ScheduleStore) -> list[NotificationJob]:
    return await store.list_pending_notifications()


async def mark_notification_sent(store: ScheduleStore, job_id: str) -> NotificationJob:
    """
    Mark an outbox job as delivered by the external worker.
    """
    job_id = parse_id(job_id, "job_id")
    job = await store.get_notification(job_id)
    if job is None:
        raise NotFoundError(f"Notification job {job_id} not found")

    job.status = NotificationStatus.SENT.value
    job.sent_at = now_nanos()
    job.error_message = None
    await store.commit()
    return job
