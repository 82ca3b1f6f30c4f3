# office_hours/models/one_off_session.py
from sqlalchemy import BigInteger, Column, String, Text

from office_hours.db.base import Base


class OneOffSession(Base):
    """
    A directly stored, non-recurring session. Mutated in place; never overlaid.
    """

    __tablename__ = "one_off_sessions"

    session_id = Column(String(32), primary_key=True)

    start_utc = Column(BigInteger, nullable=False, index=True)
    end_utc = Column(BigInteger, nullable=False)

    title = Column(String(200), nullable=False)
    notes = Column(Text, nullable=False, default="")
    link = Column(String(500), nullable=True)

    host_principal = Column(String(64), nullable=True)
    status = Column(String(16), nullable=False, default="ACTIVE")
    color = Column(String(32), nullable=True)

    created_at = Column(BigInteger, nullable=False)
    created_by = Column(String(64), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<OneOffSession id={self.session_id} start={self.start_utc} "
            f"status={self.status}>"
        )
