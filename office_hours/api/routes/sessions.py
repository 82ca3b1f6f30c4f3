# office_hours/api/routes/sessions.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, Query

from office_hours.api.dependencies.auth import get_current_user, get_store, require_admin
from office_hours.core.clock import MAX_INSTANT
from office_hours.models.user import User
from office_hours.schemas.session import (
    MaterializedSession,
    OccurrenceRef,
    OccurrenceUpdate,
    OneOffCreate,
    PublicSessionView,
)
from office_hours.services.materializer import list_unclaimed, materialize
from office_hours.services.occurrence_editor import cancel_occurrence, update_occurrence
from office_hours.services.overlay_resolver import OverlayResolver
from office_hours.services.series_admin import create_one_off_session
from office_hours.services.store import ScheduleStore
from office_hours.services.user_admin import touch_last_active

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get(
    "",
    response_model=list[MaterializedSession],
    summary="List sessions in a time window",
    description=(
        "Materialize every session whose start lies in `[window_start, window_end)`.\n\n"
        "Series occurrences are generated on the fly and overlaid with their "
        "per-occurrence exceptions; active one-off sessions are merged in. "
        "The result is sorted by effective start time."
    ),
)
async def list_sessions(
    window_start: int = Query(
        ..., ge=0, le=MAX_INSTANT, description="Inclusive window start (ns since epoch)."
    ),
    window_end: int = Query(
        ..., ge=0, le=MAX_INSTANT, description="Exclusive window end (ns since epoch)."
    ),
    _: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> list[MaterializedSession]:
    return await materialize(store, window_start, window_end)


@router.get(
    "/public",
    response_model=list[PublicSessionView],
    summary="Public calendar view of a time window",
    description=(
        "Same sessions as `GET /sessions`, without authentication. Hosts are "
        "shown by display name only."
    ),
)
async def list_public_sessions(
    window_start: int = Query(..., ge=0, le=MAX_INSTANT),
    window_end: int = Query(..., ge=0, le=MAX_INSTANT),
    store: ScheduleStore = Depends(get_store),
) -> list[PublicSessionView]:
    sessions = await materialize(store, window_start, window_end)

    views: list[PublicSessionView] = []
    for session in sessions:
        host_name = None
        if session.host_principal is not None:
            host = await store.get_user(session.host_principal)
            host_name = host.name if host is not None else None
        views.append(
            PublicSessionView(
                session_id=session.session_id,
                title=session.title,
                notes=session.notes,
                link=session.link,
                start_utc=session.start_utc,
                end_utc=session.end_utc,
                host_name=host_name,
                status=session.status,
                color=session.color,
            )
        )
    return views


@router.get(
    "/unclaimed",
    response_model=list[MaterializedSession],
    summary="Coverage queue: sessions without a host",
    description=(
        "Sessions from now until the end of the forward window "
        "(`forward_window_months` whole months, to month end) that have no host."
    ),
)
async def list_unclaimed_sessions(
    _: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> list[MaterializedSession]:
    return await list_unclaimed(store)


@router.post(
    "",
    response_model=MaterializedSession,
    status_code=HTTPStatus.CREATED,
    summary="Create a one-off session",
    responses={
        400: {"description": "End time is not after start time."},
        404: {"description": "Initial host does not exist."},
    },
)
async def create_session(
    payload: OneOffCreate,
    user: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> MaterializedSession:
    await touch_last_active(store, user)
    session = await create_one_off_session(store, payload, user)
    return OverlayResolver.resolve_one_off(session)


@router.patch(
    "/occurrence",
    response_model=MaterializedSession,
    summary="Edit a single session (admin)",
    description=(
        "Override start, end or notes of one series occurrence (written as an "
        "exception) or of a one-off session (updated in place). Fields left "
        "out keep their current value."
    ),
)
async def edit_occurrence(
    payload: OccurrenceUpdate,
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> MaterializedSession:
    await touch_last_active(store, admin)
    return await update_occurrence(store, payload, admin)


@router.post(
    "/occurrence/cancel",
    response_model=MaterializedSession,
    summary="Cancel a single session (admin)",
)
async def cancel_session(
    payload: OccurrenceRef,
    admin: User = Depends(require_admin),
    store: ScheduleStore = Depends(get_store),
) -> MaterializedSession:
    await touch_last_active(store, admin)
    return await cancel_occurrence(store, payload, admin)
