# office_hours/api/routes/coverage.py
from fastapi import APIRouter, Depends, Query

from office_hours.api.dependencies.auth import get_current_user, get_store
from office_hours.core.errors import UnauthorizedError
from office_hours.models.user import User
from office_hours.schemas.coverage import AssignHostRequest, CoverageStats, UnassignHostRequest
from office_hours.schemas.session import MaterializedSession
from office_hours.services.coverage import assign_host, is_admin, unassign_host
from office_hours.services.materializer import monthly_coverage_stats
from office_hours.services.store import ScheduleStore
from office_hours.services.user_admin import touch_last_active

router = APIRouter(prefix="/coverage", tags=["Coverage"])


@router.post(
    "/assign",
    response_model=MaterializedSession,
    summary="Assign a host to a session",
    description=(
        "Claim a session for yourself or assign another authorized user.\n\n"
        "Rules:\n"
        "- While claims are paused only administrators may assign (409 otherwise).\n"
        "- A disabled host, or one whose out-of-office overlaps the session, is "
        "rejected with 409 unless an administrator sets `admin_override`."
    ),
    responses={
        401: {"description": "Caller is not authorized for this assignment."},
        404: {"description": "Unknown session or host."},
        409: {
            "description": "Claims paused or host unavailable.",
            "content": {
                "application/json": {
                    "example": {"detail": "User cannot be assigned (disabled or on out-of-office)"}
                }
            },
        },
    },
)
async def assign(
    payload: AssignHostRequest,
    user: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> MaterializedSession:
    if payload.admin_override and not is_admin(user):
        raise UnauthorizedError("Only administrators may override availability.")

    await touch_last_active(store, user)
    return await assign_host(
        store,
        payload,
        payload.host_principal,
        user,
        admin_override=payload.admin_override,
    )


@router.post(
    "/unassign",
    response_model=MaterializedSession,
    summary="Remove the host of a session",
    description="Release a session. Only the claims-paused gate applies.",
    responses={
        404: {"description": "Unknown session."},
        409: {"description": "Claims are paused."},
    },
)
async def unassign(
    payload: UnassignHostRequest,
    user: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> MaterializedSession:
    await touch_last_active(store, user)
    return await unassign_host(store, payload, user)


@router.get(
    "/stats",
    response_model=list[CoverageStats],
    summary="Monthly coverage statistics",
    description=(
        "One entry per calendar month, starting with the current month, "
        "reporting how many sessions have a host."
    ),
)
async def stats(
    months: int = Query(1, ge=1, le=24, description="Number of calendar months to report."),
    _: User = Depends(get_current_user),
    store: ScheduleStore = Depends(get_store),
) -> list[CoverageStats]:
    return await monthly_coverage_stats(store, months)
