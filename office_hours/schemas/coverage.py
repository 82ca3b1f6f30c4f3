# office_hours/schemas/coverage.py
from pydantic import BaseModel, Field

from office_hours.schemas.session import OccurrenceRef


class AssignHostRequest(OccurrenceRef):
    """
    Assign `host_principal` to the referenced session.

    `admin_override` skips the availability check (disabled host, out of
    office) and is only accepted from administrators. It never bypasses the
    claims-paused gate.
    """

    host_principal: str = Field(..., min_length=1, max_length=64)
    admin_override: bool = False


class UnassignHostRequest(OccurrenceRef):
    pass


class CoverageStats(BaseModel):
    """
    Host coverage over a time window.
    """

    window_start_utc: int = Field(..., description="Inclusive window start (ns).")
    window_end_utc: int = Field(..., description="Exclusive window end (ns).")
    total_sessions: int = Field(..., description="Sessions materialized in the window.", examples=[8])
    covered_sessions: int = Field(..., description="Sessions with an effective host.", examples=[6])
    coverage_pct: float = Field(
        ...,
        description=(
            "covered_sessions / total_sessions * 100, rounded to 2 decimals. "
            "0.0 when the window has no sessions."
        ),
        examples=[75.0],
    )
