"""Schemas exposed by the ingestion job endpoints."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class JobErrorRead(CamelModel):
    row: int | None = Field(
        ..., description="1-based source row; null for errors that aborted the job"
    )
    errors: list[str]


class JobRead(CamelModel):
    id: str
    status: str
    file_name: str
    total_rows: int
    processed_rows: int
    success_count: int
    failure_count: int
    errors: list[JobErrorRead]
    created_at: datetime | None
    updated_at: datetime | None


class JobAcceptedResponse(CamelModel):
    job_id: str


__all__ = ["JobAcceptedResponse", "JobErrorRead", "JobRead"]
