"""Utility script to ingest a CSV file of monthly reports from the command line."""

from __future__ import annotations

import argparse
import logging
import shutil
from pathlib import Path
from uuid import uuid4

from ngo_reports.application.use_cases.ingestion import IngestionOrchestrator
from ngo_reports.config import get_settings
from ngo_reports.domain.entities import JOB_STATUS_COMPLETED
from ngo_reports.infrastructure.database import Database
from ngo_reports.infrastructure.repositories import JobRepository, ReportRepository
from ngo_reports.utils import sanitize_filename


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the import."""

    parser = argparse.ArgumentParser(
        description="Import a CSV of monthly NGO reports into the configured database.",
    )
    parser.add_argument("csv_file", type=Path, help="Path of the CSV file to import")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL for this run",
    )
    return parser.parse_args()


def main() -> None:
    """Run an ingestion job synchronously and print its outcome."""

    args = parse_args()
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    source: Path = args.csv_file
    if not source.is_file():
        raise SystemExit(f"File not found: {source}")

    database = Database(args.database_url or settings.database_url)
    database.initialize()

    # The orchestrator moves and deletes its input, so hand it a copy.
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    staged = settings.upload_dir / f"{uuid4().hex}-{sanitize_filename(source.name)}"
    shutil.copyfile(source, staged)

    session = database.session()
    try:
        orchestrator = IngestionOrchestrator(
            ledger=JobRepository(session),
            store=ReportRepository(session),
            work_dir=settings.upload_dir,
        )
        job_id = orchestrator.accept(source.name)
        job = orchestrator.run(job_id, source_path=staged, file_name=source.name)
    finally:
        session.close()
        database.dispose()

    if job is None:
        raise SystemExit(f"Job {job_id} did not reach a terminal status")

    print(
        f"Job {job.id} {job.status}:\n"
        f"  Rows: {job.total_rows}\n"
        f"  Saved: {job.success_count}\n"
        f"  Failed: {job.failure_count}"
    )
    for error in job.errors:
        location = f"row {error.row}" if error.row is not None else "job"
        print(f"  - {location}: {'; '.join(error.errors)}")
    if job.status != JOB_STATUS_COMPLETED:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
