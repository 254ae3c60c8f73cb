"""SQLAlchemy model for monthly organization reports."""

from sqlalchemy import Column, DateTime, Float, Integer, String, UniqueConstraint

from ngo_reports.infrastructure.database import Base
from ngo_reports.utils import now_in_app_timezone


class ReportModel(Base):
    """Database representation of one organization's report for one month."""

    __tablename__ = "report"
    __table_args__ = (
        UniqueConstraint("organization_id", "month", name="uq_report_organization_month"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(120), nullable=False, index=True)
    month = Column(String(7), nullable=False, index=True)
    people_helped = Column(Float, nullable=True, default=0)
    events_conducted = Column(Float, nullable=True, default=0)
    funds_utilized = Column(Float, nullable=True, default=0)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["ReportModel"]
