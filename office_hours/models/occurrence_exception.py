# office_hours/models/occurrence_exception.py
from sqlalchemy import BigInteger, Boolean, Column, String, Text

from office_hours.db.base import Base


class OccurrenceException(Base):
    """
    Sparse override of a single series occurrence.

    The primary key is the occurrence key: the series id plus the *original*
    generated start instant, which never moves even when `start_utc` is
    overridden. There is deliberately no foreign key to `event_series`:
    deleting a series leaves its exceptions orphaned and unreachable.

    Host is tri-state:
    - no row                          -> inherit (no host)
    - host_principal set              -> that host
    - host_cleared = True             -> explicitly unassigned
    """

    __tablename__ = "occurrence_exceptions"

    series_id = Column(String(32), primary_key=True)
    occurrence_start_utc = Column(BigInteger, primary_key=True)

    start_utc = Column(BigInteger, nullable=True)
    end_utc = Column(BigInteger, nullable=True)
    notes = Column(Text, nullable=True)

    host_principal = Column(String(64), nullable=True)
    host_cleared = Column(Boolean, nullable=False, default=False)
    cancelled = Column(Boolean, nullable=False, default=False)

    updated_at = Column(BigInteger, nullable=False)
    updated_by = Column(String(64), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<OccurrenceException series_id={self.series_id} "
            f"occurrence={self.occurrence_start_utc} cancelled={self.cancelled}>"
        )
