"""
Datetime normalization for date operators.

Single source of truth for date parsing in the matcher. Absolute dates are
read with a fixed set of ISO-8601 layouts; there is no fuzzy parsing.
Relative literals ("-7d", "2w", "1y") are measured back from now.
"""

import re
from datetime import date, datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta

# Tried in order; %z accepts "+01:00", "+0100" and "Z"
ABSOLUTE_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",   # Full ISO with fraction and offset
    "%Y-%m-%dT%H:%M:%S%z",      # Full ISO with offset
    "%Y-%m-%dT%H:%M:%S.%f",     # Full ISO with fraction
    "%Y-%m-%dT%H:%M:%S",        # Full ISO
    "%Y-%m-%dT%H:%M",           # ISO without seconds
    "%Y-%m-%d %H:%M:%S.%f%z",   # Space separator, fraction and offset
    "%Y-%m-%d %H:%M:%S %z",     # Space separator, spaced offset
    "%Y-%m-%d %H:%M:%S%z",      # Space separator with offset
    "%Y-%m-%d %H:%M:%S.%f",     # Space separator with fraction
    "%Y-%m-%d %H:%M:%S",        # Space separator with seconds
    "%Y-%m-%d %H:%M",           # Space separator without seconds
    "%Y-%m-%d",                 # Date only
)

RELATIVE_DATE_PATTERN = re.compile(r"^-?(?P<amount>\d+)(?P<unit>[hdwmy])$")

DEFAULT_MAX_RELATIVE_AMOUNT = 10_000


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware datetimes pass through."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_absolute_datetime(
    value: datetime | date | str | None,
    param_name: str = "date",
) -> tuple[datetime | None, str | None]:
    """
    Normalize an absolute date value to an aware datetime.

    Args:
        value: A datetime, date, or ISO-8601 string
        param_name: Parameter name for error messages

    Returns:
        Tuple of (normalized_datetime, error_message)
        - If successful: (datetime, None)
        - If failed: (None, error_string)
    """
    if value is None:
        return None, f"Missing {param_name}"

    if isinstance(value, datetime):
        return ensure_aware(value), None

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc), None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None, f"Empty {param_name}"

        for fmt in ABSOLUTE_DATE_FORMATS:
            try:
                return ensure_aware(datetime.strptime(text, fmt)), None
            except ValueError:
                continue

        return None, (
            f"Invalid {param_name} format: '{value}'. "
            "Use YYYY-MM-DD, YYYY-MM-DDTHH:MM:SS or YYYY-MM-DD HH:MM:SS with optional offset"
        )

    return None, f"Invalid {param_name} type: expected date or string, got {type(value).__name__}"


def parse_relative_datetime(
    value: str,
    now: datetime | None = None,
    max_amount: int = DEFAULT_MAX_RELATIVE_AMOUNT,
) -> datetime | None:
    """
    Resolve a relative date literal to an aware datetime in the past.

    "6h" and "-6h" both mean six hours before now. Units: h(ours), d(ays),
    w(eeks), m(onths), y(ears).

    Args:
        value: Relative literal
        now: Reference instant (defaults to current UTC time)
        max_amount: Amounts at or above this are rejected

    Returns:
        Datetime, or None if the literal is not a valid relative date
    """
    match = RELATIVE_DATE_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        return None

    amount = int(match.group("amount"))
    if amount >= max_amount:
        return None

    now = ensure_aware(now) if now is not None else datetime.now(timezone.utc)
    unit = match.group("unit")

    try:
        if unit == "h":
            return now - timedelta(hours=amount)
        elif unit == "d":
            return now - timedelta(days=amount)
        elif unit == "w":
            return now - timedelta(weeks=amount)
        elif unit == "m":
            return now - relativedelta(months=amount)
        else:  # y
            return now - relativedelta(years=amount)
    except (ValueError, OverflowError):
        # Result falls outside the datetime range
        return None
