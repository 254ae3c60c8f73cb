import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from ngo_reports.domain.exceptions import StoreError
from ngo_reports.infrastructure.models import ReportModel
from ngo_reports.infrastructure.repositories import ReportRepository


@pytest.fixture()
def reports(session) -> ReportRepository:
    return ReportRepository(session)


def test_upsert_creates_report(reports):
    report = reports.upsert_report("NGO1", "2025-01", 10, 2, 300.5)

    assert report.organization_id == "NGO1"
    assert report.people_helped == 10
    assert reports.get("NGO1", "2025-01") == report


def test_upsert_replaces_every_field(reports, session):
    reports.upsert_report("NGO1", "2025-01", 10, 2, 300)
    reports.upsert_report("NGO1", "2025-01", 20, 0, 0)

    stored = reports.get("NGO1", "2025-01")
    count = session.scalar(select(func.count()).select_from(ReportModel))

    assert (stored.people_helped, stored.events_conducted, stored.funds_utilized) == (20, 0, 0)
    assert count == 1


def test_writes_from_two_sessions_keep_the_last_one(database):
    first, second = database.session(), database.session()
    try:
        ReportRepository(first).upsert_report("NGO1", "2025-03", 5, 0, 0)
        ReportRepository(second).upsert_report("NGO1", "2025-03", 7, 0, 0)
        stored = ReportRepository(first).get("NGO1", "2025-03")
    finally:
        first.close()
        second.close()

    assert stored.people_helped == 7


def test_list_by_month_filters_on_month(reports):
    reports.upsert_report("NGO1", "2025-01", 1, 0, 0)
    reports.upsert_report("NGO2", "2025-01", 2, 0, 0)
    reports.upsert_report("NGO1", "2025-02", 3, 0, 0)

    listed = reports.list_by_month("2025-01")

    assert [report.organization_id for report in listed] == ["NGO1", "NGO2"]
    assert reports.list_by_month("2099-12") == []


def test_store_failures_are_wrapped(reports, session, monkeypatch):
    def _fail_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "commit", _fail_commit)

    with pytest.raises(StoreError):
        reports.upsert_report("NGO1", "2025-01", 1, 0, 0)
