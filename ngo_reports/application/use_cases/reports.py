"""Use case for submitting a single monthly report."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ngo_reports.application.use_cases.ingestion import ReportStore
from ngo_reports.application.use_cases.report_rows import NormalizedRow, normalize_and_validate
from ngo_reports.domain.exceptions import ReportValidationError

logger = logging.getLogger(__name__)


def submit_report(store: ReportStore, payload: Mapping[str, Any]) -> NormalizedRow:
    """Validate ``payload`` like a CSV row and replace the stored report.

    Raises :class:`ReportValidationError` before anything is written when
    the payload is invalid. Store failures propagate as ``StoreError``.
    """

    row = normalize_and_validate(payload)
    if not row.is_valid:
        raise ReportValidationError(row.errors)

    store.upsert_report(
        row.organization_id,
        row.month,
        row.people_helped,
        row.events_conducted,
        row.funds_utilized,
    )
    logger.info("Saved report for %s (%s)", row.organization_id, row.month)
    return row


__all__ = ["submit_report"]
