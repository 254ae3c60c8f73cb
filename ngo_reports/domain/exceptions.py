"""Exceptions shared by the report and ingestion layers."""

from __future__ import annotations

from collections.abc import Sequence


class StoreError(RuntimeError):
    """Raised when the underlying store cannot complete a read or write."""


class JobNotFoundError(LookupError):
    """Raised when a job id does not exist in the ledger."""


class JobStateError(RuntimeError):
    """Raised when a ledger operation does not fit the job's lifecycle."""


class JobFatalError(RuntimeError):
    """Raised when an ingestion job cannot continue past the current step."""


class ReportValidationError(ValueError):
    """Raised when a single report submission does not pass validation."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(self.errors) or "Invalid report")


__all__ = [
    "StoreError",
    "JobNotFoundError",
    "JobStateError",
    "JobFatalError",
    "ReportValidationError",
]
