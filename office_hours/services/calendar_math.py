# office_hours/services/calendar_math.py
"""
Integer calendar arithmetic on UTC instants.

Instants are nanoseconds since 1970-01-01T00:00:00Z. Dates are proleptic
Gregorian (year, month, day) triples and weekdays are indexed 0 (Monday)
through 6 (Sunday). Occurrence identifiers are derived from the instants
produced here, so everything is plain integer math with no dependency on
`datetime`, time zones, or the host's calendar settings.
"""
from __future__ import annotations

NANOS_PER_DAY = 86_400 * 1_000_000_000

# 1970-01-01 was a Thursday.
EPOCH_WEEKDAY = 3

_DAYS_PER_ERA = 146_097
# Days from 0000-03-01 to 1970-01-01.
_EPOCH_SHIFT = 719_468


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Number of days in `month` (1-12) of `year`; 0 for an invalid month."""
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    if month in (4, 6, 9, 11):
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 0


def nanos_to_days(nanos: int) -> int:
    """Whole days since the epoch (floored, so pre-epoch instants work too)."""
    return nanos // NANOS_PER_DAY


def days_to_nanos(days: int) -> int:
    """Midnight UTC of the given day number."""
    return days * NANOS_PER_DAY


def time_of_day_nanos(nanos: int) -> int:
    """Offset of the instant from midnight UTC of its own day."""
    return nanos - days_to_nanos(nanos_to_days(nanos))


def days_from_civil(year: int, month: int, day: int) -> int:
    """
    Day number (days since 1970-01-01) of a proleptic Gregorian date.

    Works on 400-year eras starting on March 1st so that the leap day is the
    last day of each computational year.
    """
    if month <= 2:
        year -= 1
    era = year // 400
    year_of_era = year - era * 400
    month_index = month - 3 if month > 2 else month + 9
    day_of_year = (153 * month_index + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_PER_ERA + day_of_era - _EPOCH_SHIFT


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of `days_from_civil`."""
    shifted = days + _EPOCH_SHIFT
    era = shifted // _DAYS_PER_ERA
    day_of_era = shifted - era * _DAYS_PER_ERA
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    month_index = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * month_index + 2) // 5 + 1
    month = month_index + 3 if month_index < 10 else month_index - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def nanos_to_ymd(nanos: int) -> tuple[int, int, int]:
    return civil_from_days(nanos_to_days(nanos))


def ymd_to_nanos(year: int, month: int, day: int) -> int:
    """Midnight UTC of the given date."""
    return days_to_nanos(days_from_civil(year, month, day))


def weekday_of_day(days: int) -> int:
    return (days + EPOCH_WEEKDAY) % 7


def weekday_from_nanos(nanos: int) -> int:
    """Weekday index of the instant, 0 = Monday ... 6 = Sunday."""
    return weekday_of_day(nanos_to_days(nanos))


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    total = year * 12 + (month - 1) + months
    return total // 12, total % 12 + 1


def month_start(year: int, month: int) -> int:
    return ymd_to_nanos(year, month, 1)


def nth_weekday_day(year: int, month: int, weekday: int, n: int) -> int | None:
    """
    Day of month of the `n`-th (1-based) `weekday` in the month.

    Returns None when the month has no such day (e.g. a fifth Monday).
    """
    first_weekday = weekday_of_day(days_from_civil(year, month, 1))
    day = 1 + (weekday - first_weekday) % 7 + (n - 1) * 7
    if day > days_in_month(year, month):
        return None
    return day


def last_weekday_day(year: int, month: int, weekday: int) -> int:
    """Day of month of the last `weekday` in the month (always exists)."""
    last_day = days_in_month(year, month)
    last_weekday = weekday_of_day(days_from_civil(year, month, last_day))
    return last_day - (last_weekday - weekday) % 7


def forward_window_end(from_nanos: int, months: int) -> int:
    """
    Exclusive end of the forward window.

    The window runs to the end of the calendar month that lies `months`
    months after the month containing `from_nanos`; the returned instant is
    midnight of the first day of the following month.
    """
    year, month, _ = nanos_to_ymd(from_nanos)
    year, month = add_months(year, month, months + 1)
    return month_start(year, month)
