"""Domain entity representing the monthly report of one organization."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Report:
    """Activity counters submitted by an organization for a month.

    ``(organization_id, month)`` identifies the report; a new submission for
    the same pair replaces every counter.
    """

    organization_id: str
    month: str
    people_helped: float
    events_conducted: float
    funds_utilized: float
    updated_at: datetime | None = None


__all__ = ["Report"]
