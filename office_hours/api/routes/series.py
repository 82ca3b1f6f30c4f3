# office_hours/api/routes/series.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, Path, Response

from office_hours.api.dependencies.auth import get_store, require_admin
from office_hours.models.user import User
from office_hours.schemas.series import SeriesCreate, SeriesRead, SeriesUpdate
from office_hours.services import series_admin
from office_hours.services.store import ScheduleStore
from office_hours.services.user_admin import touch_last_active

router = APIRouter(prefix="/series", tags=["Series"])


@router.post(
    "",
    response_model=SeriesRead,
    status_code=HTTPStatus.CREATED,
    summary="Create a recurring series (admin)",
    description=(
        "Define a WEEKLY, BIWEEKLY or MONTHLY series.\n\n"
        "- WEEKLY / BIWEEKLY occurrences fall on `weekday`, stepping 7 / 14 days "
        "from the first matching day on or after `start_utc`.\n"
        "- MONTHLY occurrences fall on the `weekday_ordinal` `weekday` of every "
        "month (months lacking a fifth/last match are skipped).\n\n"
        "Every occurrence carries the time of day of `start_utc`."
    ),
    responses={
        201: {
            "description": "Series successfully created.",
            "content": {
                "application/json": {
                    "example": {
                        "series_id": "3f1c8a0e2b7d4c5fa9e1d2c3b4a59687",
                        "title": "Office Hours",
                        "notes": "",
                        "link": None,
                        "frequency": "WEEKLY",
                        "weekday": "WED",
                        "weekday_ordinal": None,
                        "start_utc": 1_767_798_000_000_000_000,
                        "end_utc": None,
                        "default_duration_minutes": 60,
                        "color": None,
                        "paused": False,
                        "created_at": 1_767_000_000_000_000_000,
                        "created_by": "admin-principal",
                    }
                }
            },
        },
        400: {
            "description": "Monthly series without ordinal, or end before start.",
            "content": {
                "application/json": {
                    "example": {"detail": "Monthly frequency requires weekday_ordinal"}
                }
            },
        },
    },
)
async def create_series(
    payload: SeriesCreate,
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> SeriesRead:
    await touch_last_active(store, admin)
    series = await series_admin.create_series(store, payload, admin)
    return SeriesRead.model_validate(series)


@router.get(
    "",
    response_model=list[SeriesRead],
    summary="List every series (admin)",
)
async def list_series(
    _: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> list[SeriesRead]:
    return [SeriesRead.model_validate(s) for s in await series_admin.list_series(store)]


@router.get(
    "/{series_id}",
    response_model=SeriesRead,
    summary="Get one series (admin)",
    responses={404: {"description": "Series not found."}},
)
async def get_series(
    series_id: str = Path(..., description="32-character hex series id."),
    _: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> SeriesRead:
    return SeriesRead.model_validate(await series_admin.get_series(store, series_id))


@router.patch(
    "/{series_id}",
    response_model=SeriesRead,
    summary="Update a series (admin)",
    description=(
        "Partially update a series. Setting `paused` to true hides every "
        "occurrence until it is resumed; existing exceptions are kept."
    ),
    responses={404: {"description": "Series not found."}},
)
async def update_series(
    payload: SeriesUpdate,
    series_id: str = Path(...),
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> SeriesRead:
    await touch_last_active(store, admin)
    series = await series_admin.update_series(store, series_id, payload)
    return SeriesRead.model_validate(series)


@router.delete(
    "/{series_id}",
    status_code=HTTPStatus.NO_CONTENT,
    summary="Delete a series (admin)",
    responses={404: {"description": "Series not found."}},
)
async def delete_series(
    series_id: str = Path(...),
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> Response:
    await touch_last_active(store, admin)
    await series_admin.delete_series(store, series_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
