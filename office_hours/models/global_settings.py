# office_hours/models/global_settings.py
from sqlalchemy import Boolean, Column, Integer, String, Text

from office_hours.db.base import Base

SETTINGS_ROW_ID = 1


class GlobalSettings(Base):
    """
    Singleton row (id = 1) holding process-wide scheduling settings.
    """

    __tablename__ = "global_settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID)

    forward_window_months = Column(Integer, nullable=False, default=2)
    claims_paused = Column(Boolean, nullable=False, default=False)
    default_event_duration_minutes = Column(Integer, nullable=False, default=60)

    org_name = Column(String(200), nullable=False, default="Office Hours")
    org_description = Column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return (
            f"<GlobalSettings window={self.forward_window_months} "
            f"claims_paused={self.claims_paused}>"
        )
