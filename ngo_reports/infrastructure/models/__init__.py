"""ORM models used by the application infrastructure."""

from .job import JobModel
from .report import ReportModel

__all__ = ["JobModel", "ReportModel"]
