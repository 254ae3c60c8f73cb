"""Persistence layer for ingestion job lifecycle and progress."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ngo_reports.domain.entities import (
    JOB_STATUS_COMPLETED,
    JOB_STATUS_FAILED,
    JOB_STATUS_PENDING,
    JOB_STATUS_PROCESSING,
    TERMINAL_JOB_STATUSES,
    Job,
    JobError,
)
from ngo_reports.domain.exceptions import JobNotFoundError, JobStateError, StoreError
from ngo_reports.infrastructure.models import JobModel
from ngo_reports.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = (JOB_STATUS_PENDING, JOB_STATUS_PROCESSING)


class JobRepository:
    """Job ledger: one narrow operation per lifecycle step.

    Every write is committed before returning so that status polls running on
    other sessions observe it. Calls that do not fit the current status raise
    :class:`JobStateError` without touching the row.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create_job(self, file_name: str) -> Job:
        now = now_in_app_timezone()
        model = JobModel(
            id=uuid4().hex,
            status=JOB_STATUS_PENDING,
            file_name=file_name,
            total_rows=0,
            processed_rows=0,
            success_count=0,
            failure_count=0,
            errors=[],
            created_at=now,
            updated_at=now,
        )
        self.session.add(model)
        self._commit()
        return self._to_entity(model)

    def get_job(self, job_id: str) -> Job | None:
        try:
            model = self.session.get(JobModel, job_id, populate_existing=True)
        except SQLAlchemyError as exc:
            raise StoreError("Could not read job") from exc
        return self._to_entity(model) if model else None

    def list_jobs(self, *, limit: int = 100) -> Sequence[Job]:
        stmt = (
            select(JobModel)
            .order_by(JobModel.created_at.desc(), JobModel.id.desc())
            .limit(max(1, limit))
        )
        try:
            models = self.session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise StoreError("Could not read jobs") from exc
        return [self._to_entity(model) for model in models]

    def set_totals(self, job_id: str, total_rows: int) -> Job:
        if total_rows < 0:
            raise ValueError("total_rows must be a non-negative integer")
        model = self._get_for_update(job_id, allowed=(JOB_STATUS_PENDING,))
        model.total_rows = total_rows
        model.processed_rows = 0
        model.success_count = 0
        model.failure_count = 0
        model.errors = []
        return self._save(model)

    def mark_processing(self, job_id: str) -> Job:
        model = self._get_for_update(job_id, allowed=_ACTIVE_STATUSES)
        if model.status == JOB_STATUS_PROCESSING:
            return self._to_entity(model)
        model.status = JOB_STATUS_PROCESSING
        return self._save(model)

    def record_progress(
        self,
        job_id: str,
        processed_rows: int,
        success_count: int,
        failure_count: int,
        errors: Sequence[JobError],
    ) -> Job:
        """Overwrite the four progress fields together in a single commit."""

        if min(processed_rows, success_count, failure_count) < 0:
            raise JobStateError("Progress counters must be non-negative")
        if processed_rows != success_count + failure_count:
            raise JobStateError(
                "processed_rows must equal success_count + failure_count"
            )
        model = self._get_for_update(job_id, allowed=(JOB_STATUS_PROCESSING,))
        if processed_rows > model.total_rows:
            raise JobStateError(
                f"processed_rows ({processed_rows}) exceeds total_rows ({model.total_rows})"
            )
        if processed_rows < model.processed_rows:
            raise JobStateError("processed_rows cannot decrease")
        model.processed_rows = processed_rows
        model.success_count = success_count
        model.failure_count = failure_count
        model.errors = [error.to_dict() for error in errors]
        return self._save(model)

    def mark_completed(self, job_id: str) -> Job:
        model = self._get_for_update(job_id, allowed=(JOB_STATUS_PROCESSING,))
        model.status = JOB_STATUS_COMPLETED
        return self._save(model)

    def mark_failed(self, job_id: str, message: str) -> Job:
        model = self._get_for_update(job_id, allowed=_ACTIVE_STATUSES)
        model.status = JOB_STATUS_FAILED
        model.errors = [
            *(model.errors or []),
            JobError(row=None, errors=(message,)).to_dict(),
        ]
        return self._save(model)

    def _get_for_update(self, job_id: str, *, allowed: Collection[str]) -> JobModel:
        try:
            model = self.session.get(JobModel, job_id, populate_existing=True)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError("Could not read job") from exc
        if model is None:
            raise JobNotFoundError(f"Job {job_id} not found")
        if model.status not in allowed:
            if model.status in TERMINAL_JOB_STATUSES:
                msg = f"Job {job_id} already finished with status '{model.status}'"
            else:
                msg = f"Job {job_id} is '{model.status}'; expected one of {sorted(allowed)}"
            raise JobStateError(msg)
        return model

    def _save(self, model: JobModel) -> Job:
        model.updated_at = now_in_app_timezone()
        self.session.add(model)
        self._commit()
        return self._to_entity(model)

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.warning("Job ledger write failed: %s", exc)
            raise StoreError("Could not save job") from exc

    @staticmethod
    def _to_entity(model: JobModel) -> Job:
        return Job(
            id=model.id,
            status=model.status,
            file_name=model.file_name,
            total_rows=model.total_rows,
            processed_rows=model.processed_rows,
            success_count=model.success_count,
            failure_count=model.failure_count,
            errors=[JobError.from_dict(entry) for entry in (model.errors or [])],
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["JobRepository"]
