# office_hours/services/settings_admin.py
import logging

from office_hours.models.global_settings import GlobalSettings
from office_hours.schemas.settings import GlobalSettingsUpdate
from office_hours.services.store import ScheduleStore

logger = logging.getLogger(__name__)


async def update_global_settings(
    store: ScheduleStore,
    payload: GlobalSettingsUpdate,
) -> GlobalSettings:
    """
    Replace every field of the settings singleton.
    """
    row = await store.get_settings()
    for field, value in payload.model_dump().items():
        setattr(row, field, value)
    await store.put_settings(row)
    await store.commit()

    logger.info(
        "Updated global settings (window=%s months, claims_paused=%s)",
        row.forward_window_months,
        row.claims_paused,
    )
    return row
