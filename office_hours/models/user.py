# office_hours/models/user.py
from sqlalchemy import JSON, BigInteger, Column, String

from office_hours.db.base import Base


class User(Base):
    """
    An authorized principal that can act on the schedule and host sessions.

    `out_of_office` holds a list of {"start_utc", "end_utc"} dicts and
    `notification_settings` the serialized NotificationPreferences. Both are
    replaced wholesale on update so that change tracking picks them up.
    """

    __tablename__ = "users"

    principal = Column(String(64), primary_key=True)

    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False)

    role = Column(String(16), nullable=False, default="USER")
    status = Column(String(16), nullable=False, default="ACTIVE")

    out_of_office = Column(JSON, nullable=False, default=list)
    notification_settings = Column(JSON, nullable=False, default=dict)

    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)
    last_active_at = Column(BigInteger, nullable=True)

    def __repr__(self) -> str:
        return f"<User principal={self.principal} role={self.role} status={self.status}>"
