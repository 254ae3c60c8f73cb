"""Schemas for report submission and dashboard endpoints."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .base import CamelModel

_Quantity = float | int | str | None


class ReportSubmission(BaseModel):
    """Loose payload; business rules are applied by the submission use case."""

    model_config = ConfigDict(populate_by_name=True)

    organization_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ngoId", "organizationId", "ngo_id", "organization_id"),
    )
    month: str | None = None
    people_helped: _Quantity = Field(
        default=None, validation_alias=AliasChoices("peopleHelped", "people_helped")
    )
    events_conducted: _Quantity = Field(
        default=None, validation_alias=AliasChoices("eventsConducted", "events_conducted")
    )
    funds_utilized: _Quantity = Field(
        default=None, validation_alias=AliasChoices("fundsUtilized", "funds_utilized")
    )


class MessageResponse(BaseModel):
    message: str


class DashboardRead(CamelModel):
    organization_count: int = Field(..., description="Distinct organizations reporting")
    total_people_helped: float
    total_events_conducted: float
    total_funds_utilized: float


__all__ = ["DashboardRead", "MessageResponse", "ReportSubmission"]
