"""API routes for CSV bulk uploads and job status polling."""

import logging
import shutil
from pathlib import Path
from uuid import uuid4

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
    status,
)

from ngo_reports.application.use_cases.ingestion import (
    IngestionOrchestrator,
    get_job as get_job_uc,
)
from ngo_reports.config import Settings
from ngo_reports.domain.entities import Job
from ngo_reports.domain.exceptions import JobNotFoundError, StoreError
from ngo_reports.infrastructure.database import Database
from ngo_reports.infrastructure.repositories import JobRepository, ReportRepository
from ngo_reports.interfaces.api.dependencies import (
    get_app_settings,
    get_database,
    get_job_repository,
)
from ngo_reports.interfaces.api.schemas import JobAcceptedResponse, JobRead
from ngo_reports.utils import sanitize_filename

router = APIRouter(tags=["jobs"])
logger = logging.getLogger(__name__)


def _job_to_read_model(job: Job) -> JobRead:
    return JobRead.model_validate(job)


def _store_upload(file: UploadFile, upload_dir: Path) -> Path:
    """Write the multipart upload to a uniquely named file in ``upload_dir``."""

    upload_dir.mkdir(parents=True, exist_ok=True)
    destination = upload_dir / f"{uuid4().hex}-{sanitize_filename(file.filename or '')}"
    with destination.open("wb") as target:
        shutil.copyfileobj(file.file, target)
    return destination


@router.post(
    "/reports/upload",
    response_model=JobAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def upload_reports(
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(default=None),
    jobs: JobRepository = Depends(get_job_repository),
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> JobAcceptedResponse:
    """Accept a CSV file and schedule its ingestion in the background."""

    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="CSV file is required"
        )

    try:
        upload_path = _store_upload(file, settings.upload_dir)
    except OSError as exc:
        logger.exception("Could not store upload %r", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not store the uploaded file",
        ) from exc

    orchestrator = IngestionOrchestrator(
        ledger=jobs,
        store=ReportRepository(jobs.session),
        work_dir=settings.upload_dir,
    )
    try:
        job_id = orchestrator.accept(file.filename)
    except StoreError as exc:
        upload_path.unlink(missing_ok=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not register the upload",
        ) from exc

    background_tasks.add_task(
        _process_job_in_background,
        database=database,
        work_dir=settings.upload_dir,
        job_id=job_id,
        source_path=upload_path,
        file_name=file.filename,
    )
    return JobAcceptedResponse(job_id=job_id)


def _process_job_in_background(
    *,
    database: Database,
    work_dir: Path,
    job_id: str,
    source_path: Path,
    file_name: str,
) -> None:
    """Run the ingestion using an independent database session."""

    session = database.session()
    try:
        orchestrator = IngestionOrchestrator(
            ledger=JobRepository(session),
            store=ReportRepository(session),
            work_dir=work_dir,
        )
        orchestrator.run(job_id, source_path=source_path, file_name=file_name)
    finally:
        session.close()


@router.get("/job-status/{job_id}", response_model=JobRead)
def read_job_status(
    job_id: str,
    jobs: JobRepository = Depends(get_job_repository),
) -> JobRead:
    """Return the lifecycle status and row counters of a job."""

    try:
        job = get_job_uc(jobs, job_id)
    except JobNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _job_to_read_model(job)


@router.get("/jobs", response_model=list[JobRead])
def list_jobs(
    limit: int = Query(20, ge=1, le=200),
    jobs: JobRepository = Depends(get_job_repository),
) -> list[JobRead]:
    """Return the most recent jobs, newest first."""

    return [_job_to_read_model(job) for job in jobs.list_jobs(limit=limit)]


__all__ = ["router"]
