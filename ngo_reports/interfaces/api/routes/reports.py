"""API routes for single report submission."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ngo_reports.application.use_cases.reports import submit_report as submit_report_uc
from ngo_reports.domain.exceptions import ReportValidationError, StoreError
from ngo_reports.infrastructure.repositories import ReportRepository
from ngo_reports.interfaces.api.dependencies import get_report_repository
from ngo_reports.interfaces.api.schemas import MessageResponse, ReportSubmission

router = APIRouter(tags=["reports"])
logger = logging.getLogger(__name__)


@router.post(
    "/report",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_report(
    payload: ReportSubmission,
    reports: ReportRepository = Depends(get_report_repository),
) -> MessageResponse:
    """Create or replace the report of one organization for one month."""

    try:
        submit_report_uc(reports, payload.model_dump())
    except ReportValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "errors": list(exc.errors)},
        ) from exc
    except StoreError as exc:
        logger.exception("Could not save report")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save report",
        ) from exc
    return MessageResponse(message="Report saved")


__all__ = ["router"]
