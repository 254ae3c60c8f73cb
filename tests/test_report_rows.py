import pytest

from ngo_reports.application.use_cases.report_rows import (
    INVALID_MONTH,
    MISSING_MONTH,
    MISSING_ORGANIZATION_ID,
    canonical_key,
    is_valid_month,
    normalize_and_validate,
    normalize_row,
)


@pytest.mark.parametrize(
    ("raw_key", "expected"),
    [
        ("NGO ID", "ngo_id"),
        ("ngoId", "ngoid"),
        ("Month ", "month"),
        ("People Helped ", "people_helped"),
        ("events-conducted", "events_conducted"),
        ("FUNDS_UTILIZED", "funds_utilized"),
    ],
)
def test_canonical_key_folds_case_and_separators(raw_key, expected):
    assert canonical_key(raw_key) == expected


def test_header_variants_resolve_to_canonical_fields():
    row = normalize_and_validate(
        {
            "NGO ID": "  NGO1 ",
            "Month ": " 2025-01 ",
            "People Helped ": "10",
            "Events_Conducted": "2",
            "fundsUtilized": "150.5",
        }
    )

    assert row.is_valid
    assert row.organization_id == "NGO1"
    assert row.month == "2025-01"
    assert row.people_helped == 10
    assert row.events_conducted == 2
    assert row.funds_utilized == 150.5


def test_first_non_empty_alias_wins():
    fields = normalize_row({"ngo_id": "  ", "ngoId": "B", "organization_id": "C"})
    assert fields.organization_id == "B"

    fields = normalize_row({"organization_id": "C", "ngo_id": "A"})
    assert fields.organization_id == "A"


def test_unknown_headers_are_ignored():
    fields = normalize_row({"comment": "hello", "ngo_id": "NGO1"})
    assert fields.organization_id == "NGO1"
    assert fields.month is None


def test_missing_organization_id_is_reported_alone():
    row = normalize_and_validate({"month": "2025-01", "people_helped": "4"})

    assert not row.is_valid
    assert row.errors == (MISSING_ORGANIZATION_ID,)


@pytest.mark.parametrize(
    ("month", "expected_errors"),
    [
        ("", (MISSING_MONTH, INVALID_MONTH)),
        ("2025-1", (INVALID_MONTH,)),
        ("25-01", (INVALID_MONTH,)),
        ("2025/01", (INVALID_MONTH,)),
        ("2025-13", ()),
    ],
)
def test_month_shape_is_checked_without_calendar_rules(month, expected_errors):
    row = normalize_and_validate({"ngo_id": "NGO1", "month": month})
    assert row.errors == expected_errors


def test_all_failures_are_collected():
    row = normalize_and_validate(
        {
            "month": "January",
            "people_helped": "-1",
            "events_conducted": "many",
            "funds_utilized": "inf",
        }
    )

    assert row.errors == (
        MISSING_ORGANIZATION_ID,
        INVALID_MONTH,
        "people_helped must be a non-negative number",
        "events_conducted must be a non-negative number",
        "funds_utilized must be a non-negative number",
    )


def test_absent_quantities_default_to_zero():
    row = normalize_and_validate({"ngo_id": "NGO1", "month": "2025-01", "people_helped": ""})

    assert row.is_valid
    assert (row.people_helped, row.events_conducted, row.funds_utilized) == (0, 0, 0)


def test_numeric_payload_values_are_accepted():
    row = normalize_and_validate({"ngoId": "NGO1", "month": "2025-01", "peopleHelped": 12})

    assert row.is_valid
    assert row.people_helped == 12


def test_normalization_is_deterministic():
    raw = {"NGO_ID": "NGO1", "MONTH": "2025-02", "People Helped": "3"}
    assert normalize_and_validate(raw) == normalize_and_validate(dict(raw))


@pytest.mark.parametrize(
    ("value", "expected"),
    [("2025-01", True), ("2025-1", False), ("", False), (None, False), (" 2025-01", False)],
)
def test_is_valid_month(value, expected):
    assert is_valid_month(value) is expected


def test_missing_month_also_fails_the_shape_check():
    row = normalize_and_validate({"ngo_id": "NGO1", "month": "   "})

    assert row.errors == (MISSING_MONTH, INVALID_MONTH)


@pytest.mark.parametrize("value", ["1_000", "1__0", "_5"])
def test_digit_separators_are_not_numbers(value):
    row = normalize_and_validate({"ngo_id": "NGO1", "month": "2025-01", "people_helped": value})

    assert row.errors == ("people_helped must be a non-negative number",)
