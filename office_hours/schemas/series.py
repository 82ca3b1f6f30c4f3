# office_hours/schemas/series.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from office_hours.core.clock import MAX_INSTANT


class Frequency(str, Enum):
    """
    Supported recurrence cadences.
    """

    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"


class Weekday(str, Enum):
    """
    Anchor weekday of a series. Declaration order gives the 0 (Monday)
    through 6 (Sunday) index used by the calendar arithmetic.
    """

    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"
    SUN = "SUN"

    @property
    def index(self) -> int:
        return list(Weekday).index(self)


class WeekdayOrdinal(str, Enum):
    """
    Which occurrence of the anchor weekday inside a month a MONTHLY series uses.
    """

    FIRST = "FIRST"
    SECOND = "SECOND"
    THIRD = "THIRD"
    FOURTH = "FOURTH"
    LAST = "LAST"


# --------------------------------------------------------------------------
# Create schema (POST /series)
# --------------------------------------------------------------------------

class SeriesCreate(BaseModel):
    """
    Schema for creating a new recurring series.

    `weekday_ordinal` is required when `frequency` is MONTHLY and ignored
    otherwise. `default_duration_minutes` falls back to the global default.
    """

    title: str = Field(..., description="Display title of every occurrence.", examples=["Office Hours"])
    notes: str = Field(default="", description="Free-text notes shown on every occurrence.")
    link: str | None = Field(default=None, description="Optional meeting link.")
    frequency: Frequency = Field(..., examples=["WEEKLY"])
    weekday: Weekday = Field(..., examples=["WED"])
    weekday_ordinal: WeekdayOrdinal | None = Field(default=None, examples=["LAST"])
    start_utc: int = Field(
        ...,
        ge=0,
        le=MAX_INSTANT,
        description=(
            "First possible occurrence, in nanoseconds since the Unix epoch. "
            "Its time of day is the time of day of every occurrence."
        ),
        examples=[1_767_798_000_000_000_000],
    )
    end_utc: int | None = Field(
        default=None,
        ge=0,
        le=MAX_INSTANT,
        description="Exclusive end of the series (ns). Open-ended when omitted.",
    )
    default_duration_minutes: int | None = Field(default=None, gt=0, le=1440, examples=[60])
    color: str | None = Field(default=None, examples=["#FF5733"])


# --------------------------------------------------------------------------
# Update schema (PATCH /series/{series_id})
# --------------------------------------------------------------------------

class SeriesUpdate(BaseModel):
    """
    Partial update of a series. Only fields present in the payload are
    applied; an explicit null clears `link`, `end_utc` or `color`.

    The cadence (frequency, weekday, ordinal, start) cannot be changed:
    doing so would re-key every existing exception.
    """

    title: str | None = None
    notes: str | None = None
    link: str | None = None
    end_utc: int | None = Field(default=None, ge=0, le=MAX_INSTANT)
    default_duration_minutes: int | None = Field(default=None, gt=0, le=1440)
    color: str | None = None
    paused: bool | None = None


# --------------------------------------------------------------------------
# Read schema
# --------------------------------------------------------------------------

class SeriesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    series_id: str
    title: str
    notes: str
    link: str | None = None
    frequency: Frequency
    weekday: Weekday
    weekday_ordinal: WeekdayOrdinal | None = None
    start_utc: int
    end_utc: int | None = None
    default_duration_minutes: int
    color: str | None = None
    paused: bool
    created_at: int
    created_by: str
