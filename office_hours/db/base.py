# office_hours/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models in the Office Hours Scheduler.

    Models register themselves on `Base.metadata` when imported; the schema
    helpers in `office_hours.db.session` import every model module.
    """
    pass
