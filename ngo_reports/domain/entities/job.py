"""Domain entity representing a bulk CSV ingestion job."""

from dataclasses import dataclass, field
from datetime import datetime

JOB_STATUS_PENDING = "pending"
JOB_STATUS_PROCESSING = "processing"
JOB_STATUS_COMPLETED = "completed"
JOB_STATUS_FAILED = "failed"

TERMINAL_JOB_STATUSES = frozenset({JOB_STATUS_COMPLETED, JOB_STATUS_FAILED})


@dataclass(frozen=True)
class JobError:
    """Errors reported for one source row.

    ``row`` is the 1-based position of the record in the uploaded file. Errors
    that aborted the whole job carry ``row=None``.
    """

    row: int | None
    errors: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        return {"row": self.row, "errors": list(self.errors)}

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "JobError":
        row = payload.get("row")
        messages = payload.get("errors") or ()
        if isinstance(messages, str):
            messages = (messages,)
        return cls(
            row=int(row) if row is not None else None,
            errors=tuple(str(message) for message in messages),
        )


@dataclass
class Job:
    """Lifecycle and progress counters of one ingestion run."""

    id: str
    status: str
    file_name: str
    total_rows: int
    processed_rows: int
    success_count: int
    failure_count: int
    errors: list[JobError] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_JOB_STATUSES


__all__ = [
    "Job",
    "JobError",
    "JOB_STATUS_PENDING",
    "JOB_STATUS_PROCESSING",
    "JOB_STATUS_COMPLETED",
    "JOB_STATUS_FAILED",
    "TERMINAL_JOB_STATUSES",
]
