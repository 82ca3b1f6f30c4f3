# office_hours/schemas/settings.py
from pydantic import BaseModel, ConfigDict, Field


class GlobalSettingsRead(BaseModel):
    """
    Process-wide scheduling settings.
    """

    model_config = ConfigDict(from_attributes=True)

    forward_window_months: int = Field(
        ...,
        description="Whole months ahead (to month end) covered by the unclaimed queue.",
        examples=[2],
    )
    claims_paused: bool = Field(
        ...,
        description="When true, only administrators may assign or unassign hosts.",
    )
    default_event_duration_minutes: int = Field(..., examples=[60])
    org_name: str = Field(..., examples=["Office Hours"])
    org_description: str = ""


class GlobalSettingsUpdate(BaseModel):
    forward_window_months: int = Field(..., ge=0, le=24)
    claims_paused: bool
    default_event_duration_minutes: int = Field(..., gt=0, le=1440)
    org_name: str
    org_description: str = ""
