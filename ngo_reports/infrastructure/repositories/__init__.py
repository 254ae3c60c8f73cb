"""Repository implementations for infrastructure layer."""

from .job_repository import JobRepository
from .report_repository import ReportRepository

__all__ = ["JobRepository", "ReportRepository"]
