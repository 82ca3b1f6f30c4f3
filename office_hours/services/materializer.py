# office_hours/services/materializer.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from office_hours.core.clock import MAX_INSTANT, now_nanos
from office_hours.core.errors import InvalidInputError, NotFoundError
from office_hours.core.ids import parse_id
from office_hours.models.event_series import EventSeries
from office_hours.models.occurrence_exception import OccurrenceException
from office_hours.models.one_off_session import OneOffSession
from office_hours.schemas.coverage import CoverageStats
from office_hours.schemas.session import MaterializedSession, OccurrenceRef, SessionStatus
from office_hours.services import calendar_math as cal
from office_hours.services.occurrence_generator import generate_occurrences, is_occurrence
from office_hours.services.overlay_resolver import OverlayResolver
from office_hours.services.store import ScheduleStore

logger = logging.getLogger(__name__)


async def materialize(
    store: ScheduleStore,
    window_start: int,
    window_end: int,
) -> list[MaterializedSession]:
    """
    Every session in `[window_start, window_end)`, sorted by effective start.

    Steps
    -----
    1) For each non-paused series, generate base occurrences in the window.
    2) Overlay the series' exceptions (fetched with one range scan per
       series); cancelled occurrences are dropped.
    3) Merge in active one-off sessions starting inside the window.
    4) Sort by (start_utc, session_id).

    Nothing is written and nothing is cached, so two calls without an
    intervening write return identical lists.
    """
    if window_start < 0 or window_end > MAX_INSTANT:
        raise InvalidInputError("Window bounds must lie within [0, 2**63 - 1]")
    if window_end < window_start:
        raise InvalidInputError("window_end must be greater than or equal to window_start")

    sessions: list[MaterializedSession] = []

    for series in await store.list_series():
        if series.paused:
            continue

        occurrences = generate_occurrences(series, window_start, window_end)
        if not occurrences:
            continue

        exceptions = {
            exc.occurrence_start_utc: exc
            for exc in await store.list_exceptions_for_series(series.series_id)
        }
        for occurrence_start in occurrences:
            resolved = OverlayResolver.resolve_occurrence(
                series, occurrence_start, exceptions.get(occurrence_start)
            )
            if resolved is not None:
                sessions.append(resolved)

    for one_off in await store.list_active_one_offs(window_start, window_end):
        sessions.append(OverlayResolver.resolve_one_off(one_off))

    sessions.sort(key=lambda s: (s.start_utc, s.session_id))
    return sessions


async def list_unclaimed(
    store: ScheduleStore,
    now: int | None = None,
) -> list[MaterializedSession]:
    """
    Sessions without a host from `now` to the end of the forward window.
    """
    now = now_nanos() if now is None else now
    settings = await store.get_settings()
    window_end = cal.forward_window_end(now, settings.forward_window_months)

    return [s for s in await materialize(store, now, window_end) if s.host_principal is None]


async def coverage_stats(
    store: ScheduleStore,
    window_start: int,
    window_end: int,
) -> CoverageStats:
    """
    Count sessions in the window and how many of them have a host.

    coverage_pct = covered / total * 100 (0.0 when the window is empty).
    """
    sessions = await materialize(store, window_start, window_end)
    total = len(sessions)
    covered = sum(1 for s in sessions if s.host_principal is not None)

    if total > 0:
        coverage_pct = (covered / float(total)) * 100.0
    else:
        coverage_pct = 0.0

    return CoverageStats(
        window_start_utc=window_start,
        window_end_utc=window_end,
        total_sessions=total,
        covered_sessions=covered,
        coverage_pct=round(coverage_pct, 2),
    )


async def monthly_coverage_stats(
    store: ScheduleStore,
    months: int,
    now: int | None = None,
) -> list[CoverageStats]:
    """
    One CoverageStats per calendar month, starting with the month that
    contains `now` and covering `months` months in total.
    """
    if months < 1:
        raise InvalidInputError("months must be at least 1")

    now = now_nanos() if now is None else now
    year, month, _ = cal.nanos_to_ymd(now)

    stats: list[CoverageStats] = []
    for _ in range(months):
        next_year, next_month = cal.add_months(year, month, 1)
        stats.append(
            await coverage_stats(
                store,
                cal.month_start(year, month),
                cal.month_start(next_year, next_month),
            )
        )
        year, month = next_year, next_month
    return stats


@dataclass
class ResolvedTarget:
    """
    A session addressed by an OccurrenceRef, plus the records behind it.

    Exactly one of `series` / `one_off` is set. `exception` is the current
    exception row of a series occurrence, if one exists yet.
    """

    session: MaterializedSession
    series: EventSeries | None = None
    exception: OccurrenceException | None = None
    one_off: OneOffSession | None = None

    @property
    def occurrence_start_utc(self) -> int | None:
        return self.session.occurrence_start_utc


async def resolve_target(store: ScheduleStore, ref: OccurrenceRef) -> ResolvedTarget:
    """
    Resolve `ref` to its current effective session.

    Identifiers are validated before any storage access.

    Raises
    ------
    InvalidInputError
        Malformed ids, or a series reference without occurrence_start_utc.
    NotFoundError
        Unknown series / one-off, paused series, an instant that is not a
        generated occurrence, or a cancelled session.
    """
    if ref.series_id is not None:
        series_id = parse_id(ref.series_id, "series_id")
        if ref.occurrence_start_utc is None:
            raise InvalidInputError("occurrence_start_utc required for series occurrence")
        occurrence_start = ref.occurrence_start_utc

        series = await store.get_series(series_id)
        if series is None:
            raise NotFoundError(f"Series {series_id} not found")
        if series.paused or not is_occurrence(series, occurrence_start):
            raise NotFoundError(f"Series {series_id} has no occurrence at {occurrence_start}")

        exception = await store.get_exception(series_id, occurrence_start)
        session = OverlayResolver.resolve_occurrence(series, occurrence_start, exception)
        if session is None:
            raise NotFoundError(f"Occurrence {occurrence_start} of series {series_id} is cancelled")
        return ResolvedTarget(session=session, series=series, exception=exception)

    session_id = parse_id(ref.session_id, "session_id")
    one_off = await store.get_one_off(session_id)
    if one_off is None or one_off.status == SessionStatus.CANCELLED.value:
        raise NotFoundError(f"Session {session_id} not found")
    return ResolvedTarget(session=OverlayResolver.resolve_one_off(one_off), one_off=one_off)
