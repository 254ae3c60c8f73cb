"""Use cases orchestrating bulk CSV ingestion jobs.

A job is created synchronously when an upload is accepted and then driven to
a terminal status by :meth:`IngestionOrchestrator.run`, which the transport
layer schedules in the background. Rows are processed one at a time and the
ledger is updated after each of them, so a poller sees ``processed_rows``
grow row by row. Ingestion is not transactional across the file: rows saved
before a fatal error stay saved.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from ngo_reports.application.use_cases.report_rows import normalize_and_validate
from ngo_reports.domain.entities import Job, JobError
from ngo_reports.domain.exceptions import (
    JobFatalError,
    JobNotFoundError,
    JobStateError,
    StoreError,
)
from ngo_reports.infrastructure.csv_records import parse_csv_records
from ngo_reports.utils import remove_file_safely, sanitize_filename

logger = logging.getLogger(__name__)

ROW_STORE_ERROR = "Failed to save report"
DEFAULT_FAILURE_MESSAGE = "Processing failed"

RecordParser = Callable[[str], Sequence[Mapping[str, Any]]]


class JobLedger(Protocol):
    def create_job(self, file_name: str) -> Job: ...

    def get_job(self, job_id: str) -> Job | None: ...

    def set_totals(self, job_id: str, total_rows: int) -> Job: ...

    def mark_processing(self, job_id: str) -> Job: ...

    def record_progress(
        self,
        job_id: str,
        processed_rows: int,
        success_count: int,
        failure_count: int,
        errors: Sequence[JobError],
    ) -> Job: ...

    def mark_completed(self, job_id: str) -> Job: ...

    def mark_failed(self, job_id: str, message: str) -> Job: ...


class ReportStore(Protocol):
    def upsert_report(
        self,
        organization_id: str,
        month: str,
        people_helped: float,
        events_conducted: float,
        funds_utilized: float,
    ) -> Any: ...


@dataclass(frozen=True)
class RowOutcome:
    """Result of processing one source row; never raised, always returned."""

    row: int
    accepted: bool
    errors: tuple[str, ...] = ()


@dataclass
class _JobProgress:
    processed_rows: int = 0
    success_count: int = 0
    failure_count: int = 0
    errors: list[JobError] = field(default_factory=list)

    def add(self, outcome: RowOutcome) -> None:
        self.processed_rows += 1
        if outcome.accepted:
            self.success_count += 1
        else:
            self.failure_count += 1
            self.errors.append(JobError(row=outcome.row, errors=outcome.errors))


class IngestionOrchestrator:
    """Drive one CSV upload from ``pending`` to ``completed`` or ``failed``."""

    def __init__(
        self,
        *,
        ledger: JobLedger,
        store: ReportStore,
        work_dir: Path,
        parser: RecordParser = parse_csv_records,
    ) -> None:
        self._ledger = ledger
        self._store = store
        self._work_dir = Path(work_dir)
        self._parser = parser

    def accept(self, file_name: str) -> str:
        """Register a new ``pending`` job and return its id before any parsing."""

        job = self._ledger.create_job(file_name)
        logger.info("Accepted upload %r as job %s", file_name, job.id)
        return job.id

    def run(self, job_id: str, *, source_path: Path, file_name: str) -> Job | None:
        """Process the upload at ``source_path`` for ``job_id``.

        Never raises: fatal errors are recorded on the job as ``failed``.
        """

        source_path = Path(source_path)
        working_path: Path | None = None
        progress = _JobProgress()
        try:
            working_path = self._relocate(job_id, source_path, file_name)
            records = self._read_records(working_path)
            self._ledger.set_totals(job_id, len(records))
            self._ledger.mark_processing(job_id)
            logger.info("Job %s processing %s rows", job_id, len(records))

            for row_number, raw in enumerate(records, start=1):
                progress.add(self._process_row(job_id, row_number, raw))
                self._ledger.record_progress(
                    job_id,
                    progress.processed_rows,
                    progress.success_count,
                    progress.failure_count,
                    list(progress.errors),
                )

            job = self._ledger.mark_completed(job_id)
            logger.info(
                "Job %s completed: %s saved, %s failed",
                job_id,
                progress.success_count,
                progress.failure_count,
            )
            return job
        except Exception as exc:
            if isinstance(exc, JobFatalError):
                logger.error("Job %s failed: %s", job_id, exc)
            else:
                logger.exception("Job %s aborted by an unexpected error", job_id)
            return self._fail(job_id, str(exc) or DEFAULT_FAILURE_MESSAGE)
        finally:
            remove_file_safely(working_path or source_path)

    def _relocate(self, job_id: str, source_path: Path, file_name: str) -> Path:
        if not source_path.is_file():
            raise JobFatalError("Upload not found")
        target = self._work_dir / f"{job_id}-{sanitize_filename(file_name)}"
        try:
            self._work_dir.mkdir(parents=True, exist_ok=True)
            return Path(shutil.move(str(source_path), str(target)))
        except OSError as exc:
            raise JobFatalError(f"Failed to relocate upload: {exc}") from exc

    def _read_records(self, path: Path) -> Sequence[Mapping[str, Any]]:
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise JobFatalError(f"Could not read upload: {exc}") from exc
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise JobFatalError("CSV must be UTF-8 encoded") from exc
        return self._parser(text)

    def _process_row(
        self, job_id: str, row_number: int, raw: Mapping[str, Any]
    ) -> RowOutcome:
        normalized = normalize_and_validate(raw)
        if not normalized.is_valid:
            return RowOutcome(row=row_number, accepted=False, errors=normalized.errors)
        try:
            self._store.upsert_report(
                normalized.organization_id,
                normalized.month,
                normalized.people_helped,
                normalized.events_conducted,
                normalized.funds_utilized,
            )
        except StoreError as exc:
            logger.warning("Job %s row %s not saved: %s", job_id, row_number, exc)
            return RowOutcome(row=row_number, accepted=False, errors=(ROW_STORE_ERROR,))
        return RowOutcome(row=row_number, accepted=True)

    def _fail(self, job_id: str, message: str) -> Job | None:
        try:
            return self._ledger.mark_failed(job_id, message)
        except (JobStateError, JobNotFoundError, StoreError):
            logger.exception("Could not mark job %s as failed", job_id)
            return None


def get_job(ledger: JobLedger, job_id: str) -> Job:
    """Return the job identified by ``job_id`` or raise :class:`JobNotFoundError`."""

    job = ledger.get_job(job_id)
    if job is None:
        raise JobNotFoundError("Job not found")
    return job


__all__ = [
    "IngestionOrchestrator",
    "JobLedger",
    "ReportStore",
    "RowOutcome",
    "ROW_STORE_ERROR",
    "get_job",
]
