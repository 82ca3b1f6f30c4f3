# office_hours/api/routes/users.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, Path

from office_hours.api.dependencies.auth import get_current_user, get_store, require_admin
from office_hours.models.user import User
from office_hours.schemas.user import (
    NotificationPreferences,
    OOOBlock,
    UserCreate,
    UserRead,
    UserStatus,
    UserUpdate,
)
from office_hours.services import user_admin
from office_hours.services.store import ScheduleStore

router = APIRouter(prefix="/users", tags=["Users"])


# --------------------------------------------------------------------------
# Self-service
# --------------------------------------------------------------------------

@router.get(
    "/me",
    response_model=UserRead,
    summary="Current user profile",
    responses={401: {"description": "Caller is not an authorized user."}},
)
async def read_me(user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(user)


@router.put(
    "/me/out-of-office",
    response_model=UserRead,
    summary="Replace my out-of-office blocks",
    description=(
        "Replace the caller's out-of-office intervals. While a block overlaps "
        "a session, the caller cannot be assigned to it (unless an "
        "administrator overrides)."
    ),
    responses={400: {"description": "A block does not end after it starts."}},
)
async def put_my_out_of_office(
    blocks: list[OOOBlock],
    user: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> UserRead:
    await user_admin.touch_last_active(store, user)
    return UserRead.model_validate(await user_admin.set_out_of_office(store, user, blocks))


@router.put(
    "/me/notification-settings",
    response_model=UserRead,
    summary="Replace my notification preferences",
)
async def put_my_notification_settings(
    preferences: NotificationPreferences,
    user: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> UserRead:
    await user_admin.touch_last_active(store, user)
    updated = await user_admin.update_notification_settings(store, user, preferences)
    return UserRead.model_validate(updated)


# --------------------------------------------------------------------------
# Administration
# --------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[UserRead],
    summary="List every authorized user (admin)",
)
async def list_users(
    _: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> list[UserRead]:
    return [UserRead.model_validate(u) for u in await store.list_users()]


@router.post(
    "",
    response_model=UserRead,
    status_code=HTTPStatus.CREATED,
    summary="Authorize a new principal (admin)",
    responses={
        409: {
            "description": "The principal is already authorized.",
            "content": {"application/json": {"example": {"detail": "User already exists"}}},
        },
    },
)
async def authorize_user(
    payload: UserCreate,
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> UserRead:
    await user_admin.touch_last_active(store, admin)
    return UserRead.model_validate(await user_admin.authorize_user(store, payload))


@router.put(
    "/{principal}",
    response_model=UserRead,
    summary="Update name, email and role of a user (admin)",
    responses={404: {"description": "User not found."}},
)
async def update_user(
    payload: UserUpdate,
    principal: str = Path(...),
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> UserRead:
    await user_admin.touch_last_active(store, admin)
    return UserRead.model_validate(await user_admin.update_user(store, principal, payload))


@router.post(
    "/{principal}/disable",
    response_model=UserRead,
    summary="Disable a user (admin)",
    description=(
        "A disabled user can no longer call the API and cannot be assigned "
        "as host. Existing assignments are kept."
    ),
    responses={404: {"description": "User not found."}},
)
async def disable_user(
    principal: str = Path(...),
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> UserRead:
    await user_admin.touch_last_active(store, admin)
    user = await user_admin.set_user_status(store, principal, UserStatus.DISABLED)
    return UserRead.model_validate(user)


@router.post(
    "/{principal}/enable",
    response_model=UserRead,
    summary="Re-enable a user (admin)",
    responses={404: {"description": "User not found."}},
)
async def enable_user(
    principal: str = Path(...),
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> UserRead:
    await user_admin.touch_last_active(store, admin)
    user = await user_admin.set_user_status(store, principal, UserStatus.ACTIVE)
    return UserRead.model_validate(user)
