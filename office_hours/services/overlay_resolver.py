# office_hours/services/overlay_resolver.py
from __future__ import annotations

from office_hours.core.clock import NANOS_PER_MINUTE
from office_hours.core.ids import instance_id
from office_hours.models.event_series import EventSeries
from office_hours.models.occurrence_exception import OccurrenceException
from office_hours.models.one_off_session import OneOffSession
from office_hours.schemas.session import MaterializedSession, SessionStatus


class OverlayResolver:
    """
    Combines an immutable series with an optional per-occurrence exception
    into the effective, displayable session.

    Precedence
    ----------
    1) Cancelled exception                 => occurrence does not exist (None)
    2) start = exception.start_utc         else base occurrence instant
    3) end   = exception.end_utc           else base instant + default duration
       (an overridden start alone never moves the end)
    4) notes = exception.notes             else series notes
    5) host  = None if exception.host_cleared
               else exception.host_principal (None when there is no exception)

    Title, link and color always come from the series.
    """

    @staticmethod
    def resolve_occurrence(
        series: EventSeries,
        occurrence_start_utc: int,
        exception: OccurrenceException | None = None,
    ) -> MaterializedSession | None:
        """
        Resolve one generated occurrence of `series`.

        Returns None when the occurrence is cancelled.
        """
        if exception is not None and exception.cancelled:
            return None

        duration = series.default_duration_minutes * NANOS_PER_MINUTE
        start_utc = occurrence_start_utc
        end_utc = occurrence_start_utc + duration
        notes = series.notes or ""
        host_principal: str | None = None

        if exception is not None:
            if exception.start_utc is not None:
                start_utc = exception.start_utc
            if exception.end_utc is not None:
                end_utc = exception.end_utc
            if exception.notes is not None:
                notes = exception.notes
            if not exception.host_cleared:
                host_principal = exception.host_principal

        return MaterializedSession(
            session_id=instance_id(series.series_id, occurrence_start_utc),
            series_id=series.series_id,
            occurrence_start_utc=occurrence_start_utc,
            start_utc=start_utc,
            end_utc=end_utc,
            title=series.title,
            notes=notes,
            link=series.link,
            host_principal=host_principal,
            status=SessionStatus.ACTIVE,
            color=series.color,
        )

    @staticmethod
    def resolve_one_off(session: OneOffSession) -> MaterializedSession:
        """
        One-off sessions are their own state; this only reshapes them.
        """
        return MaterializedSession(
            session_id=session.session_id,
            series_id=None,
            occurrence_start_utc=None,
            start_utc=session.start_utc,
            end_utc=session.end_utc,
            title=session.title,
            notes=session.notes or "",
            link=session.link,
            host_principal=session.host_principal,
            status=SessionStatus(session.status or SessionStatus.ACTIVE),
            color=session.color,
        )
