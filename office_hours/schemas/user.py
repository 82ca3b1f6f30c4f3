# office_hours/schemas/user.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from office_hours.core.clock import MAX_INSTANT


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DISABLED = "DISABLED"


class OOOBlock(BaseModel):
    """
    Out-of-office interval, half-open `[start_utc, end_utc)` in nanoseconds.
    """

    start_utc: int = Field(..., ge=0, le=MAX_INSTANT)
    end_utc: int = Field(..., ge=0, le=MAX_INSTANT)


class NotificationPreferences(BaseModel):
    """
    Per-user switches deciding which notification jobs are queued.
    """

    model_config = ConfigDict(from_attributes=True)

    email_on_assigned: bool = True
    email_on_removed: bool = True
    email_on_cancelled: bool = True
    email_on_time_changed: bool = True
    email_unclaimed_reminder: bool = False
    reminder_hours_before: int | None = Field(default=24, ge=0)


class UserCreate(BaseModel):
    """
    Admin payload authorizing a new principal.
    """

    principal: str = Field(..., min_length=1, max_length=64)
    name: str
    email: str
    role: Role = Role.USER


class UserUpdate(BaseModel):
    name: str
    email: str
    role: Role


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    principal: str
    name: str
    email: str
    role: Role
    status: UserStatus
    out_of_office: list[OOOBlock] = Field(default_factory=list)
    notification_settings: NotificationPreferences
    created_at: int
    updated_at: int
    last_active_at: int | None = None
