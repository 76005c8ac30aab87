"""Raw spreadsheet row -> Applicant normalization.

Rows arrive as mappings of column name to scalar, in column order. Each
field is resolved from a fixed list of candidate columns (exact key match,
first truthy value wins) and falls back to a documented default. Only a
blank resolved name drops the row; nothing here raises.

Usage:
    from admissions.roster.normalizer import normalize_rows

    applicants = normalize_rows(rows, now=datetime.now())
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Any

import dateparser

from admissions.core.logging import get_logger
from admissions.roster.models import DEFAULT_STAGE, UNKNOWN_EMAIL, Applicant

logger = get_logger(__name__)

NAME_COLUMNS = ("personalinfo.fullname", "fullname", "Student Name")
EMAIL_COLUMNS = ("personalinfo.contact.email", "email")
DEADLINE_COLUMN = "programinfo.deadline"
STAGE_COLUMN = "application.status"
MISSING_DOCUMENTS_MARKER = "documents.missing"

DEFAULT_DEADLINE_DAYS = 10

# Day zero of the Excel 1900 date system (accounts for the 1900 leap-year bug)
_EXCEL_EPOCH = datetime(1899, 12, 30)


def _is_truthy(value: Any) -> bool:
    """Spreadsheet truthiness: None, NaN, empty strings and zero are falsy."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _first_present(row: Mapping[str, Any], columns: Iterable[str]) -> Any:
    for column in columns:
        value = row.get(column)
        if _is_truthy(value):
            return value
    return None


def parse_deadline(value: Any, now: datetime | None = None) -> datetime | None:
    """Parse a deadline cell into a naive local datetime.

    Accepts datetimes (including pandas Timestamps), dates, Excel serial
    day numbers and free-form date strings. Relative or partial strings
    ("in 2 days", "tomorrow") resolve against ``now`` when given.

    Returns:
        The parsed datetime, or None if the value is empty or unparseable
    """
    if not _is_truthy(value):
        return None

    parsed: datetime | None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = _EXCEL_EPOCH + timedelta(days=float(value))
        except OverflowError:
            return None
    else:
        try:
            settings = {"RELATIVE_BASE": now} if now is not None else None
            parsed = dateparser.parse(str(value).strip(), settings=settings)
        except (ValueError, TypeError, OverflowError):
            return None

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def extract_missing_documents(row: Mapping[str, Any]) -> list[str]:
    """Collect truthy values of every column whose key contains 'documents.missing'.

    Matching is a case-insensitive substring test on the key; order follows
    the row's column order.
    """
    documents: list[str] = []
    for key, value in row.items():
        if MISSING_DOCUMENTS_MARKER not in str(key).lower():
            continue
        if _is_truthy(value):
            documents.append(str(value).strip())
    return documents


def normalize_row(
    row: Mapping[str, Any],
    position: int,
    now: datetime,
    default_deadline_days: int = DEFAULT_DEADLINE_DAYS,
) -> Applicant | None:
    """Convert one raw row into an Applicant.

    Args:
        row: Column name -> cell value
        position: 0-based index of the row in the source; the applicant id
            is position + 1
        now: Reference time for the default deadline
        default_deadline_days: Days from now used when no deadline parses

    Returns:
        Applicant, or None when the resolved name is blank
    """
    raw_name = _first_present(row, NAME_COLUMNS)
    name = str(raw_name if raw_name is not None else f"Student {position + 1}").strip()
    if not name:
        return None

    raw_email = _first_present(row, EMAIL_COLUMNS)
    email = str(raw_email).strip() if raw_email is not None else UNKNOWN_EMAIL

    raw_stage = row.get(STAGE_COLUMN)
    stage = str(raw_stage).strip() if _is_truthy(raw_stage) else DEFAULT_STAGE

    deadline = parse_deadline(row.get(DEADLINE_COLUMN), now)
    if deadline is None:
        deadline = now + timedelta(days=default_deadline_days)

    return Applicant(
        id=position + 1,
        name=name,
        email=email,
        stage=stage,
        missing_documents=extract_missing_documents(row),
        deadline=deadline,
    )


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    now: datetime,
    default_deadline_days: int = DEFAULT_DEADLINE_DAYS,
) -> list[Applicant]:
    """Normalize a sequence of rows, dropping those without a usable name."""
    applicants: list[Applicant] = []
    dropped = 0
    for position, row in enumerate(rows):
        applicant = normalize_row(row, position, now, default_deadline_days)
        if applicant is None:
            dropped += 1
            continue
        applicants.append(applicant)

    if dropped:
        logger.info("roster_rows_dropped", dropped=dropped, reason="blank_name")
    return applicants
