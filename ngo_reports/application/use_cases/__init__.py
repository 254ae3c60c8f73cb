"""Aggregate application use cases."""

from .dashboard import DashboardSummary, get_dashboard
from .ingestion import IngestionOrchestrator, get_job
from .reports import submit_report

__all__ = [
    "DashboardSummary",
    "IngestionOrchestrator",
    "get_dashboard",
    "get_job",
    "submit_report",
]
