"""
Date normalization and elapsed-day calculation for complaint records
"""
from datetime import date, datetime, timedelta
from typing import Any, Optional

from complaint_register.exceptions import InvalidDateRangeError

CANONICAL_FORMAT = "%d-%m-%Y"
INPUT_FORMAT = "%Y-%m-%d"

# Tried in order, the first one yielding a valid calendar date wins
TEXT_FORMATS = ("%d-%m-%Y", "%Y-%m-%d", "%m-%d-%Y")

# Day zero of spreadsheet serial dates. Using 1899-12-30 instead of 1900-01-01
# absorbs the phantom 29-02-1900 that the format counts.
SPREADSHEET_EPOCH = date(1899, 12, 30)

RANGE_POLICIES = ("allow", "clamp", "reject")


def _from_serial(serial: float) -> Optional[date]:
    try:
        return SPREADSHEET_EPOCH + timedelta(days=int(serial))
    except (OverflowError, ValueError):
        return None


def _from_text(text: str) -> Optional[date]:
    for fmt in TEXT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a heterogeneous date representation into a date

    Args:
        value: DD-MM-YYYY, YYYY-MM-DD or MM-DD-YYYY text, a date/datetime,
            or a numeric spreadsheet serial

    Returns:
        The parsed date, or None when the value is empty or unparseable
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return _from_serial(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        return _from_text(text)
    return None


def normalize_date(value: Any) -> Optional[str]:
    """Return the value re-expressed as canonical DD-MM-YYYY text, or None"""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return parsed.strftime(CANONICAL_FORMAT)


def to_input_date(value: Any) -> Optional[str]:
    """Reformat a stored date as YYYY-MM-DD for HTML date inputs"""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return parsed.strftime(INPUT_FORMAT)


def days_between(start: Any, end: Any, policy: str = "allow", field: str = "date") -> Optional[int]:
    """
    Compute the whole-day difference end - start

    Args:
        start: Earlier lifecycle date (any representation parse_date accepts)
        end: Later lifecycle date
        policy: What to do when end precedes start: allow, clamp or reject
        field: Name of the end date, used in the reject error

    Returns:
        Day count, or None if either date is absent

    Raises:
        InvalidDateRangeError: If the range is inverted and policy is reject
    """
    if policy not in RANGE_POLICIES:
        raise ValueError(f"Unknown inverted range policy '{policy}'")

    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return None

    days = (end_date - start_date).days
    if days < 0:
        if policy == "clamp":
            return 0
        if policy == "reject":
            raise InvalidDateRangeError(field, days)
    return days
