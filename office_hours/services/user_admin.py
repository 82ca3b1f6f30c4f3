# office_hours/services/user_admin.py
from __future__ import annotations

import logging

from office_hours.core.clock import now_nanos
from office_hours.core.errors import ConflictError, InvalidInputError, NotFoundError
from office_hours.models.user import User
from office_hours.schemas.user import (
    NotificationPreferences,
    OOOBlock,
    Role,
    UserCreate,
    UserStatus,
    UserUpdate,
)
from office_hours.services.store import ScheduleStore

logger = logging.getLogger(__name__)


async def get_user(store: ScheduleStore, principal: str) -> User:
    user = await store.get_user(principal)
    if user is None:
        raise NotFoundError(f"User {principal} not found")
    return user


async def authorize_user(store: ScheduleStore, payload: UserCreate) -> User:
    """
    Whitelist a new principal with default notification preferences.
    """
    if await store.get_user(payload.principal) is not None:
        raise ConflictError("User already exists")

    now = now_nanos()
    user = User(
        principal=payload.principal,
        name=payload.name,
        email=payload.email,
        role=payload.role.value,
        status=UserStatus.ACTIVE.value,
        out_of_office=[],
        notification_settings=NotificationPreferences().model_dump(),
        created_at=now,
        updated_at=now,
        last_active_at=None,
    )
    await store.put_user(user)
    await store.commit()

    logger.info("Authorized user %s as %s", user.principal, user.role)
    return user


async def set_user_status(store: ScheduleStore, principal: str, status: UserStatus) -> User:
    user = await get_user(store, principal)
    user.status = status.value
    user.updated_at = now_nanos()
    await store.put_user(user)
    await store.commit()

    logger.info("Set status of user %s to %s", principal, status.value)
    return user


async def update_user(store: ScheduleStore, principal: str, payload: UserUpdate) -> User:
    user = await get_user(store, principal)
    user.name = payload.name
    user.email = payload.email
    user.role = payload.role.value
    user.updated_at = now_nanos()
    await store.put_user(user)
    await store.commit()
    return user


async def set_out_of_office(
    store: ScheduleStore,
    user: User,
    blocks: list[OOOBlock],
) -> User:
    """
    Replace the user's out-of-office blocks. Each block must end after it starts.
    """
    for block in blocks:
        if block.end_utc <= block.start_utc:
            raise InvalidInputError("Out-of-office block must end after it starts")

    user.out_of_office = [block.model_dump() for block in blocks]
    user.updated_at = now_nanos()
    await store.put_user(user)
    await store.commit()
    return user


async def update_notification_settings(
    store: ScheduleStore,
    user: User,
    preferences: NotificationPreferences,
) -> User:
    user.notification_settings = preferences.model_dump()
    user.updated_at = now_nanos()
    await store.put_user(user)
    await store.commit()
    return user


async def touch_last_active(store: ScheduleStore, user: User) -> None:
    """
    Record activity of the acting user. Persisted with the request's commit.
    """
    user.last_active_at = now_nanos()
    await store.put_user(user)


async def bootstrap_admin(
    store: ScheduleStore,
    principal: str,
    name: str,
    email: str,
) -> User | None:
    """
    Authorize `principal` as administrator if it is not known yet.

    Returns the created user, or None when the principal already exists.
    """
    if await store.get_user(principal) is not None:
        return None

    user = await authorize_user(
        store,
        UserCreate(principal=principal, name=name, email=email, role=Role.ADMIN),
    )
    logger.info("Bootstrapped administrator %s", principal)
    return user
