"""Domain entities exposed by the application."""

from .job import (
    JOB_STATUS_COMPLETED,
    JOB_STATUS_FAILED,
    JOB_STATUS_PENDING,
    JOB_STATUS_PROCESSING,
    TERMINAL_JOB_STATUSES,
    Job,
    JobError,
)
from .report import Report

__all__ = [
    "Job",
    "JobError",
    "JOB_STATUS_PENDING",
    "JOB_STATUS_PROCESSING",
    "JOB_STATUS_COMPLETED",
    "JOB_STATUS_FAILED",
    "TERMINAL_JOB_STATUSES",
    "Report",
]
