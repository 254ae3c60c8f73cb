"""API routes exposing month-level report aggregates."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ngo_reports.application.use_cases.dashboard import get_dashboard
from ngo_reports.domain.exceptions import StoreError
from ngo_reports.infrastructure.repositories import ReportRepository
from ngo_reports.interfaces.api.dependencies import get_report_repository
from ngo_reports.interfaces.api.schemas import DashboardRead

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardRead)
def read_dashboard(
    month: str = Query(..., description="Month in YYYY-MM format"),
    reports: ReportRepository = Depends(get_report_repository),
) -> DashboardRead:
    """Return totals of every report submitted for ``month``."""

    try:
        summary = get_dashboard(reports, month)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return DashboardRead.model_validate(summary)


__all__ = ["router"]
