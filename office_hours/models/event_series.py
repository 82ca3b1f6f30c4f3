# office_hours/models/event_series.py
from sqlalchemy import BigInteger, Boolean, Column, Integer, String, Text

from office_hours.db.base import Base


class EventSeries(Base):
    """
    A recurrence rule from which occurrences are generated on demand.

    Occurrences themselves are never stored; per-occurrence changes live in
    `OccurrenceException` rows keyed by (series_id, occurrence_start_utc).
    """

    __tablename__ = "event_series"

    series_id = Column(String(32), primary_key=True)

    title = Column(String(200), nullable=False)
    notes = Column(Text, nullable=False, default="")
    link = Column(String(500), nullable=True)

    # Stored as the string values of Frequency / Weekday / WeekdayOrdinal.
    frequency = Column(String(16), nullable=False)
    weekday = Column(String(3), nullable=False)
    weekday_ordinal = Column(String(8), nullable=True)

    start_utc = Column(BigInteger, nullable=False)
    end_utc = Column(BigInteger, nullable=True)

    default_duration_minutes = Column(Integer, nullable=False, default=60)
    color = Column(String(32), nullable=True)
    paused = Column(Boolean, nullable=False, default=False)

    created_at = Column(BigInteger, nullable=False)
    created_by = Column(String(64), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<EventSeries id={self.series_id} title={self.title!r} "
            f"frequency={self.frequency} weekday={self.weekday}>"
        )
