# office_hours/api/routes/settings.py
from fastapi import APIRouter, Depends

from office_hours.api.dependencies.auth import get_current_user, get_store, require_admin
from office_hours.models.user import User
from office_hours.schemas.settings import GlobalSettingsRead, GlobalSettingsUpdate
from office_hours.services.settings_admin import update_global_settings
from office_hours.services.store import ScheduleStore
from office_hours.services.user_admin import touch_last_active

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get(
    "",
    response_model=GlobalSettingsRead,
    summary="Read the global scheduling settings",
)
async def read_settings(
    _: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> GlobalSettingsRead:
    return GlobalSettingsRead.model_validate(await store.get_settings())


@router.put(
    "",
    response_model=GlobalSettingsRead,
    summary="Replace the global scheduling settings (admin)",
    description=(
        "Update forward window, claims gate, default duration and organization "
        "details. Setting `claims_paused` blocks assign/unassign for non-admins."
    ),
)
async def put_settings(
    payload: GlobalSettingsUpdate,
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> GlobalSettingsRead:
    await touch_last_active(store, admin)
    return GlobalSettingsRead.model_validate(await update_global_settings(store, payload))
