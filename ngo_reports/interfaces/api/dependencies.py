"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ngo_reports.config import Settings
from ngo_reports.infrastructure.database import Database
from ngo_reports.infrastructure.repositories import JobRepository, ReportRepository


def get_database(request: Request) -> Database:
    """Return the database owned by the running application."""

    return request.app.state.database


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    return request.app.state.settings


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = database.session()
    try:
        yield db
    finally:
        db.close()


def get_job_repository(db: Session = Depends(get_db)) -> JobRepository:
    return JobRepository(db)


def get_report_repository(db: Session = Depends(get_db)) -> ReportRepository:
    return ReportRepository(db)
