"""Normalization and validation of raw report records.

The same rules apply to a CSV row and to a single report submitted through
the API. Raw records come with unpredictable header spellings, so each
canonical field is resolved from an ordered alias table.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final

ORGANIZATION_ID: Final = "organization_id"
MONTH: Final = "month"
PEOPLE_HELPED: Final = "people_helped"
EVENTS_CONDUCTED: Final = "events_conducted"
FUNDS_UTILIZED: Final = "funds_utilized"

NUMERIC_FIELDS: Final[tuple[str, ...]] = (PEOPLE_HELPED, EVENTS_CONDUCTED, FUNDS_UTILIZED)

# Evaluated in order; the first alias with a non-empty value wins.
FIELD_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    ORGANIZATION_ID: ("ngo_id", "ngoid", "organization_id", "organizationid", "org_id"),
    MONTH: ("month", "report_month", "period"),
    PEOPLE_HELPED: ("people_helped", "peoplehelped"),
    EVENTS_CONDUCTED: ("events_conducted", "eventsconducted"),
    FUNDS_UTILIZED: ("funds_utilized", "fundsutilized"),
}

MISSING_ORGANIZATION_ID = "Missing NGO ID"
MISSING_MONTH = "Missing month"
INVALID_MONTH = "Month must be YYYY-MM"

_MONTH_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}")
_KEY_SEPARATORS = re.compile(r"[\s\-]+")


@dataclass(frozen=True)
class RawReportFields:
    """Values picked from a raw record, still untrimmed and unparsed."""

    organization_id: str | None = None
    month: str | None = None
    people_helped: str | None = None
    events_conducted: str | None = None
    funds_utilized: str | None = None


@dataclass(frozen=True)
class NormalizedRow:
    """Canonical shape of one record plus the validation outcome."""

    organization_id: str
    month: str
    people_helped: float
    events_conducted: float
    funds_utilized: float
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def canonical_key(key: Any) -> str:
    """Fold ``key`` so ``'People Helped '``, ``'people-helped'`` and ``'PEOPLE_HELPED'`` compare equal."""

    return _KEY_SEPARATORS.sub("_", str(key).strip().lower())


def _stringify(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return str(value)


def normalize_row(raw: Mapping[Any, Any]) -> RawReportFields:
    """Resolve every canonical field of ``raw`` through :data:`FIELD_ALIASES`."""

    keyed: list[tuple[str, str | None]] = [
        (canonical_key(key), _stringify(value)) for key, value in raw.items()
    ]
    resolved: dict[str, str | None] = {}
    for field_name, aliases in FIELD_ALIASES.items():
        resolved[field_name] = None
        for alias in aliases:
            match = next(
                (value for key, value in keyed if key == alias and value and value.strip()),
                None,
            )
            if match is not None:
                resolved[field_name] = match
                break
    return RawReportFields(**resolved)


def _parse_quantity(value: str | None) -> float | None:
    """Return the number in ``value``; ``None`` when it is not a finite number >= 0."""

    if value is None or not value.strip():
        return 0.0
    # float() also accepts digit separators such as "1_000".
    if "_" in value:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def validate_row(fields: RawReportFields) -> NormalizedRow:
    """Apply every business rule to ``fields`` and collect all failures."""

    errors: list[str] = []

    organization_id = (fields.organization_id or "").strip()
    if not organization_id:
        errors.append(MISSING_ORGANIZATION_ID)

    month = (fields.month or "").strip()
    if not month:
        errors.append(MISSING_MONTH)
    if not _MONTH_PATTERN.fullmatch(month):
        errors.append(INVALID_MONTH)

    quantities: dict[str, float] = {}
    for field_name in NUMERIC_FIELDS:
        number = _parse_quantity(getattr(fields, field_name))
        if number is None:
            errors.append(f"{field_name} must be a non-negative number")
            number = 0.0
        quantities[field_name] = number

    return NormalizedRow(
        organization_id=organization_id,
        month=month,
        errors=tuple(errors),
        **quantities,
    )


def normalize_and_validate(raw: Mapping[Any, Any]) -> NormalizedRow:
    return validate_row(normalize_row(raw))


def is_valid_month(value: str | None) -> bool:
    """Return ``True`` when ``value`` has the ``YYYY-MM`` shape."""

    return bool(value) and _MONTH_PATTERN.fullmatch(value) is not None


__all__ = [
    "FIELD_ALIASES",
    "NUMERIC_FIELDS",
    "MISSING_ORGANIZATION_ID",
    "MISSING_MONTH",
    "INVALID_MONTH",
    "NormalizedRow",
    "RawReportFields",
    "canonical_key",
    "is_valid_month",
    "normalize_and_validate",
    "normalize_row",
    "validate_row",
]
