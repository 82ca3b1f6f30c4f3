# office_hours/models/notification_job.py
from sqlalchemy import BigInteger, Column, String, Text

from office_hours.db.base import Base


class NotificationJob(Base):
    """
    Outbox record describing a notification an external worker should deliver.
    """

    __tablename__ = "notification_jobs"

    job_id = Column(String(32), primary_key=True)
    created_at = Column(BigInteger, nullable=False)

    kind = Column(String(32), nullable=False)
    recipient_principal = Column(String(64), nullable=False)
    recipient_email = Column(String(320), nullable=False)
    subject = Column(String(300), nullable=False)
    body_text = Column(Text, nullable=False)

    session_id = Column(String(32), nullable=False)
    start_utc = Column(BigInteger, nullable=False)
    end_utc = Column(BigInteger, nullable=False)

    status = Column(String(16), nullable=False, default="PENDING", index=True)
    sent_at = Column(BigInteger, nullable=True)
    error_message = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<NotificationJob id={self.job_id} kind={self.kind} status={self.status}>"
