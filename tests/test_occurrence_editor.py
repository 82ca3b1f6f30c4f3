# tests/test_occurrence_editor.py
from datetime import datetime, timezone

import pytest

from office_hours.core.errors import InvalidInputError, NotFoundError
from office_hours.core.ids import instance_id
from office_hours.schemas.series import SeriesCreate
from office_hours.schemas.session import OccurrenceRef, OccurrenceUpdate, OneOffCreate, SessionStatus
from office_hours.services.coverage import assign_host
from office_hours.services.materializer import materialize
from office_hours.services.notifier import list_pending_notifications
from office_hours.services.occurrence_editor import cancel_occurrence, update_occurrence
from office_hours.services.series_admin import create_one_off_session, create_series

HOUR = 60 * 60 * 1_000_000_000


def _nanos(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp()) * 1_000_000_000


OCCURRENCE = _nanos(2025, 1, 8, 15)


async def _series_id(store, admin) -> str:
    series = await create_series(
        store,
        SeriesCreate(
            title="Office Hours",
            notes="Weekly drop-in",
            frequency="WEEKLY",
            weekday="WED",
            start_utc=_nanos(2025, 1, 1, 15),
        ),
        admin,
    )
    return series.series_id


@pytest.mark.asyncio
async def test_shift_start_keeps_identity_and_base_end(store, admin):
    series_id = await _series_id(store, admin)

    session = await update_occurrence(
        store,
        OccurrenceUpdate(
            series_id=series_id,
            occurrence_start_utc=OCCURRENCE,
            start_utc=OCCURRENCE + HOUR // 2,
        ),
        admin,
    )

    assert session.start_utc == OCCURRENCE + HOUR // 2
    assert session.end_utc == OCCURRENCE + HOUR
    assert session.session_id == instance_id(series_id, OCCURRENCE)
    assert session.notes == "Weekly drop-in"

    # Still addressable by the original instant.
    sessions = await materialize(store, _nanos(2025, 1, 8), _nanos(2025, 1, 9))
    assert [s.occurrence_start_utc for s in sessions] == [OCCURRENCE]


@pytest.mark.asyncio
async def test_update_notes_only(store, admin):
    series_id = await _series_id(store, admin)

    session = await update_occurrence(
        store,
        OccurrenceUpdate(series_id=series_id, occurrence_start_utc=OCCURRENCE, notes="Room 4"),
        admin,
    )

    assert session.notes == "Room 4"
    assert session.start_utc == OCCURRENCE
    assert await list_pending_notifications(store) == []


@pytest.mark.asyncio
async def test_update_rejects_end_before_start(store, admin):
    series_id = await _series_id(store, admin)

    with pytest.raises(InvalidInputError):
        await update_occurrence(
            store,
            OccurrenceUpdate(
                series_id=series_id,
                occurrence_start_utc=OCCURRENCE,
                end_utc=OCCURRENCE - 1,
            ),
            admin,
        )


@pytest.mark.asyncio
async def test_update_one_off_in_place(store, admin):
    one_off = await create_one_off_session(
        store,
        OneOffCreate(title="Exam prep", start_utc=OCCURRENCE, end_utc=OCCURRENCE + HOUR),
        admin,
    )

    session = await update_occurrence(
        store,
        OccurrenceUpdate(session_id=one_off.session_id, end_utc=OCCURRENCE + 2 * HOUR),
        admin,
    )

    assert session.end_utc == OCCURRENCE + 2 * HOUR
    assert (await store.get_one_off(one_off.session_id)).end_utc == OCCURRENCE + 2 * HOUR


@pytest.mark.asyncio
async def test_time_change_notifies_host(store, admin, member):
    series_id = await _series_id(store, admin)
    ref = OccurrenceRef(series_id=series_id, occurrence_start_utc=OCCURRENCE)
    await assign_host(store, ref, member.principal, member)

    await update_occurrence(
        store,
        OccurrenceUpdate(series_id=series_id, occurrence_start_utc=OCCURRENCE, end_utc=OCCURRENCE + 2 * HOUR),
        admin,
    )

    kinds = [job.kind for job in await list_pending_notifications(store)]
    assert kinds == ["HOST_ASSIGNED", "INSTANCE_TIME_CHANGED"]


@pytest.mark.asyncio
async def test_cancel_series_occurrence(store, admin, member):
    series_id = await _series_id(store, admin)
    ref = OccurrenceRef(series_id=series_id, occurrence_start_utc=OCCURRENCE)
    await assign_host(store, ref, member.principal, member)

    cancelled = await cancel_occurrence(store, ref, admin)

    assert cancelled.status == SessionStatus.CANCELLED
    assert cancelled.host_principal == member.principal
    assert (await store.get_exception(series_id, OCCURRENCE)).cancelled is True
    assert await materialize(store, _nanos(2025, 1, 8), _nanos(2025, 1, 9)) == []

    kinds = [job.kind for job in await list_pending_notifications(store)]
    assert kinds[-1] == "INSTANCE_CANCELLED"


@pytest.mark.asyncio
async def test_cancel_one_off(store, admin):
    one_off = await create_one_off_session(
        store,
        OneOffCreate(title="Exam prep", start_utc=OCCURRENCE, end_utc=OCCURRENCE + HOUR),
        admin,
    )
    ref = OccurrenceRef(session_id=one_off.session_id)

    await cancel_occurrence(store, ref, admin)

    assert await materialize(store, _nanos(2025, 1, 8), _nanos(2025, 1, 9)) == []
    with pytest.raises(NotFoundError):
        await cancel_occurrence(store, ref, admin)
