# office_hours/core/errors.py
from __future__ import annotations


class SchedulerError(Exception):
    """
    Base class for all domain errors raised by the scheduling core.

    Every well-formed request either succeeds or raises one of the
    subclasses below; the API layer maps each kind to an HTTP status.
    """

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(SchedulerError):
    """
    Referenced series, occurrence, one-off session, user or job does not exist.
    """

    status_code = 404


class InvalidInputError(SchedulerError):
    """
    Malformed identifiers, missing ordinal for monthly series, end before start.
    """

    status_code = 400


class ConflictError(SchedulerError):
    """
    Assignment while claims are paused, ineligible host, duplicate user.
    """

    status_code = 409


class UnauthorizedError(SchedulerError):
    """
    Caller is unknown, disabled, or lacks the administrator role.
    """

    status_code = 401
