from types import SimpleNamespace

import pytest

from ngo_reports.application.use_cases import get_dashboard, submit_report
from ngo_reports.domain.exceptions import ReportValidationError
from ngo_reports.infrastructure.repositories import ReportRepository


class StubSource:
    def __init__(self, reports) -> None:
        self._reports = reports
        self.requested = []

    def list_by_month(self, month):
        self.requested.append(month)
        return [report for report in self._reports if report.month == month]


def _report(organization_id, month, people=0, events=0, funds=0):
    return SimpleNamespace(
        organization_id=organization_id,
        month=month,
        people_helped=people,
        events_conducted=events,
        funds_utilized=funds,
    )


def test_dashboard_sums_reports_of_the_month():
    source = StubSource(
        [
            _report("NGO1", "2025-01", 10, 1, 100.5),
            _report("NGO2", "2025-01", 5, 2, 50),
            _report("NGO3", "2025-02", 99, 99, 99),
        ]
    )

    summary = get_dashboard(source, "2025-01")

    assert summary.organization_count == 2
    assert summary.total_people_helped == 15
    assert summary.total_events_conducted == 3
    assert summary.total_funds_utilized == 150.5


def test_dashboard_counts_organizations_once():
    source = StubSource([_report("NGO1", "2025-01", 1), _report("NGO1", "2025-01", 2)])

    assert get_dashboard(source, "2025-01").organization_count == 1


def test_missing_or_non_numeric_values_count_as_zero():
    source = StubSource(
        [_report("NGO1", "2025-01", None, "n/a", float("nan")), _report("NGO2", "2025-01", True, 2, 3)]
    )

    summary = get_dashboard(source, "2025-01")

    assert summary.total_people_helped == 0
    assert summary.total_events_conducted == 2
    assert summary.total_funds_utilized == 3


def test_month_without_reports_returns_zeros():
    summary = get_dashboard(StubSource([]), "2099-12")

    assert (
        summary.organization_count,
        summary.total_people_helped,
        summary.total_events_conducted,
        summary.total_funds_utilized,
    ) == (0, 0, 0, 0)


def test_month_is_trimmed_before_querying():
    source = StubSource([])

    get_dashboard(source, " 2025-01 ")

    assert source.requested == ["2025-01"]


@pytest.mark.parametrize("month", ["", "2025-1", "January", "2025/01"])
def test_malformed_month_is_rejected(month):
    source = StubSource([])

    with pytest.raises(ValueError):
        get_dashboard(source, month)
    assert source.requested == []


def test_submitted_reports_replace_each_other(session):
    reports = ReportRepository(session)

    submit_report(reports, {"organizationId": "NGO1", "month": "2025-01", "peopleHelped": 10})
    submit_report(reports, {"ngo_id": "NGO1", "month": "2025-01", "people_helped": 20})

    summary = get_dashboard(reports, "2025-01")
    assert summary.organization_count == 1
    assert summary.total_people_helped == 20


def test_invalid_submission_writes_nothing(session):
    reports = ReportRepository(session)

    with pytest.raises(ReportValidationError) as excinfo:
        submit_report(reports, {"ngo_id": "NGO1", "month": "2025-1", "people_helped": -4})

    assert excinfo.value.errors == (
        "Month must be YYYY-MM",
        "people_helped must be a non-negative number",
    )
    assert reports.list_by_month("2025-1") == []
