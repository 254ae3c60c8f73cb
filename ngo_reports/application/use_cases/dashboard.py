"""Use case for computing month-level dashboard aggregates."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from ngo_reports.application.use_cases.report_rows import INVALID_MONTH, is_valid_month
from ngo_reports.domain.entities import Report


class MonthlyReportSource(Protocol):
    def list_by_month(self, month: str) -> Sequence[Report]: ...


@dataclass
class DashboardSummary:
    """Aggregated counters of every report submitted for one month."""

    organization_count: int
    total_people_helped: float
    total_events_conducted: float
    total_funds_utilized: float


def _as_number(value: Any) -> float:
    """Return ``value`` as a float, treating missing or non-numeric values as 0."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def get_dashboard(store: MonthlyReportSource, month: str) -> DashboardSummary:
    """Aggregate the reports stored for ``month`` (``YYYY-MM``)."""

    month = (month or "").strip()
    if not is_valid_month(month):
        raise ValueError(INVALID_MONTH)

    organizations: set[str] = set()
    people = events = funds = 0.0
    for report in store.list_by_month(month):
        organizations.add(report.organization_id)
        people += _as_number(report.people_helped)
        events += _as_number(report.events_conducted)
        funds += _as_number(report.funds_utilized)

    return DashboardSummary(
        organization_count=len(organizations),
        total_people_helped=people,
        total_events_conducted=events,
        total_funds_utilized=funds,
    )


__all__ = ["DashboardSummary", "get_dashboard"]
