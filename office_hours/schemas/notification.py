# office_hours/schemas/notification.py
from enum import Enum

from pydantic import BaseModel, ConfigDict


class NotificationKind(str, Enum):
    HOST_ASSIGNED = "HOST_ASSIGNED"
    HOST_REMOVED = "HOST_REMOVED"
    INSTANCE_TIME_CHANGED = "INSTANCE_TIME_CHANGED"
    INSTANCE_CANCELLED = "INSTANCE_CANCELLED"


class NotificationStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"


class NotificationJobRead(BaseModel):
    """
    Outbox entry consumed by the external delivery worker.
    """

    model_config = ConfigDict(from_attributes=True)

    job_id: str
    created_at: int
    kind: NotificationKind
    recipient_principal: str
    recipient_email: str
    subject: str
    body_text: str
    session_id: str
    start_utc: int
    end_utc: int
    status: NotificationStatus
    sent_at: int | None = None
    error_message: str | None = None
