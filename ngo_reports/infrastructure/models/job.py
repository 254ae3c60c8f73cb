"""SQLAlchemy model for bulk ingestion jobs."""

from sqlalchemy import JSON, Column, DateTime, Integer, String

from ngo_reports.infrastructure.database import Base
from ngo_reports.utils import now_in_app_timezone


class JobModel(Base):
    """Database representation of a CSV ingestion job and its progress."""

    __tablename__ = "job"

    id = Column(String(32), primary_key=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    file_name = Column(String(255), nullable=False)
    total_rows = Column(Integer, nullable=False, default=0)
    processed_rows = Column(Integer, nullable=False, default=0)
    success_count = Column(Integer, nullable=False, default=0)
    failure_count = Column(Integer, nullable=False, default=0)
    errors = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone, index=True
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["JobModel"]
