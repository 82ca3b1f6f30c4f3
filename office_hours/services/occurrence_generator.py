# office_hours/services/occurrence_generator.py
from __future__ import annotations

from typing import Protocol

from office_hours.schemas.series import Frequency, Weekday, WeekdayOrdinal
from office_hours.services import calendar_math as cal

_ORDINAL_POSITION = {
    WeekdayOrdinal.FIRST: 1,
    WeekdayOrdinal.SECOND: 2,
    WeekdayOrdinal.THIRD: 3,
    WeekdayOrdinal.FOURTH: 4,
}

_INTERVAL_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.BIWEEKLY: 14,
}


class RecurrenceRule(Protocol):
    """
    Attributes of a series the generator reads (satisfied by `EventSeries`).
    """

    frequency: str
    weekday: str
    weekday_ordinal: str | None
    start_utc: int
    end_utc: int | None


def generate_occurrences(
    rule: RecurrenceRule,
    window_start: int,
    window_end: int,
) -> list[int]:
    """
    Base occurrence instants of `rule` inside `[window_start, window_end)`.

    Every returned instant is >= max(window_start, rule.start_utc) and
    < min(window_end, rule.end_utc), in ascending order. Each occurrence
    keeps the time of day of `rule.start_utc`.

    Rules
    -----
    - WEEKLY / BIWEEKLY: the anchor weekday every 7 / 14 days, counted from
      the first anchor weekday on or after the series start date. The
      cadence never depends on where the query window begins.
    - MONTHLY: the Nth (or last) anchor weekday of every calendar month
      intersecting the window. A month without such a day contributes
      nothing; that is expected, not an error.
    """
    effective_start = max(window_start, rule.start_utc)
    effective_end = window_end if rule.end_utc is None else min(window_end, rule.end_utc)

    if effective_start >= effective_end:
        return []

    frequency = Frequency(rule.frequency)
    if frequency is Frequency.MONTHLY:
        return _monthly_occurrences(rule, effective_start, effective_end)
    return _interval_occurrences(rule, _INTERVAL_DAYS[frequency], effective_start, effective_end)


def is_occurrence(rule: RecurrenceRule, instant: int) -> bool:
    """
    True when `instant` is exactly one of the rule's generated occurrences.
    """
    return generate_occurrences(rule, instant, instant + 1) == [instant]


def _interval_occurrences(
    rule: RecurrenceRule,
    interval_days: int,
    effective_start: int,
    effective_end: int,
) -> list[int]:
    weekday = Weekday(rule.weekday).index
    time_of_day = cal.time_of_day_nanos(rule.start_utc)

    start_day = cal.nanos_to_days(rule.start_utc)
    first_day = start_day + (weekday - cal.weekday_of_day(start_day)) % 7
    first = cal.days_to_nanos(first_day) + time_of_day

    interval = interval_days * cal.NANOS_PER_DAY
    if first < effective_start:
        # Jump straight to the first step at or after the window start.
        steps = -(-(effective_start - first) // interval)
        first += steps * interval

    occurrences: list[int] = []
    occ = first
    while occ < effective_end:
        occurrences.append(occ)
        occ += interval
    return occurrences


def _monthly_occurrences(
    rule: RecurrenceRule,
    effective_start: int,
    effective_end: int,
) -> list[int]:
    weekday = Weekday(rule.weekday).index
    # Monthly series are validated to carry an ordinal; FIRST is only a
    # fallback for legacy rows.
    ordinal = WeekdayOrdinal(rule.weekday_ordinal or WeekdayOrdinal.FIRST)
    time_of_day = cal.time_of_day_nanos(rule.start_utc)

    year, month, _ = cal.nanos_to_ymd(effective_start)
    end_year, end_month, _ = cal.nanos_to_ymd(effective_end)

    occurrences: list[int] = []
    while (year, month) <= (end_year, end_month):
        if ordinal is WeekdayOrdinal.LAST:
            day: int | None = cal.last_weekday_day(year, month, weekday)
        else:
            day = cal.nth_weekday_day(year, month, weekday, _ORDINAL_POSITION[ordinal])

        if day is not None:
            occ = cal.ymd_to_nanos(year, month, day) + time_of_day
            if effective_start <= occ < effective_end:
                occurrences.append(occ)

        year, month = cal.add_months(year, month, 1)
    return occurrences
