# office_hours/api/routes/notifications.py
from fastapi import APIRouter, Depends, Path

from office_hours.api.dependencies.auth import get_store, require_admin
from office_hours.models.user import User
from office_hours.schemas.notification import NotificationJobRead
from office_hours.services.notifier import list_pending_notifications, mark_notification_sent
from office_hours.services.store import ScheduleStore

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get(
    "/pending",
    response_model=list[NotificationJobRead],
    summary="Pending outbox jobs (admin / delivery worker)",
    description=(
        "Notification jobs queued by scheduling mutations and not yet "
        "delivered, oldest first."
    ),
)
async def pending(
    _: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> list[NotificationJobRead]:
    return [NotificationJobRead.model_validate(j) for j in await list_pending_notifications(store)]


@router.post(
    "/{job_id}/sent",
    response_model=NotificationJobRead,
    summary="Mark an outbox job as delivered",
    responses={404: {"description": "Notification job not found."}},
)
async def mark_sent(
    job_id: str = Path(..., description="32-character hex job id."),
    _: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> NotificationJobRead:
    return NotificationJobRead.model_validate(await mark_notification_sent(store, job_id))
