# office_hours/schemas/session.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from office_hours.core.clock import MAX_INSTANT


class SessionStatus(str, Enum):
    """
    Lifecycle status of a session. Materialized series occurrences are
    always ACTIVE; cancelled ones are dropped from every listing.
    """

    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


class MaterializedSession(BaseModel):
    """
    Resolved, display-ready view of a single session.

    For series occurrences `session_id` is derived from
    (series_id, occurrence_start_utc) and is stable across recomputation;
    for one-off sessions it is the stored id. Never persisted.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(..., description="Deterministic occurrence id or one-off id.")
    series_id: str | None = Field(
        None, description="Parent series for recurring occurrences, null for one-offs."
    )
    occurrence_start_utc: int | None = Field(
        None,
        description=(
            "Original, never-shifted generated instant of the occurrence. "
            "Together with series_id it addresses the occurrence in mutations."
        ),
    )
    start_utc: int = Field(..., description="Effective start (ns since epoch).")
    end_utc: int = Field(..., description="Effective end (ns since epoch).")
    title: str
    notes: str
    link: str | None = None
    host_principal: str | None = Field(None, description="Effective host, null when unclaimed.")
    status: SessionStatus = SessionStatus.ACTIVE
    color: str | None = None

    @property
    def is_recurring(self) -> bool:
        return self.series_id is not None


class OneOffCreate(BaseModel):
    """
    Schema for creating a standalone (non-recurring) session.
    """

    title: str = Field(..., examples=["Exam prep session"])
    notes: str = ""
    link: str | None = None
    start_utc: int = Field(..., ge=0, le=MAX_INSTANT)
    end_utc: int = Field(..., ge=0, le=MAX_INSTANT)
    host_principal: str | None = None
    color: str | None = None


class OccurrenceRef(BaseModel):
    """
    Addresses one session for a mutation.

    Series occurrences are addressed by `series_id` + `occurrence_start_utc`
    (the original generated instant, not an overridden start). One-off
    sessions are addressed by `session_id`.
    """

    series_id: str | None = Field(None, examples=["3f1c8a0e2b7d4c5fa9e1d2c3b4a59687"])
    occurrence_start_utc: int | None = Field(
        None, ge=0, le=MAX_INSTANT, examples=[1_767_798_000_000_000_000]
    )
    session_id: str | None = None


class OccurrenceUpdate(OccurrenceRef):
    """
    Per-occurrence edit. Omitted fields keep their current value.
    """

    start_utc: int | None = Field(None, ge=0, le=MAX_INSTANT)
    end_utc: int | None = Field(None, ge=0, le=MAX_INSTANT)
    notes: str | None = None


class PublicSessionView(BaseModel):
    """
    Session as shown on the public calendar: the host is exposed by display
    name only, never by principal.
    """

    session_id: str
    title: str
    notes: str
    link: str | None = None
    start_utc: int
    end_utc: int
    host_name: str | None = None
    status: SessionStatus
    color: str | None = None
