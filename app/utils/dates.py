"""
Date parsing helpers for search parameters.
"""

from datetime import date, datetime
from typing import Union

from app.services.errors import InvalidDateError

# Formats clients send besides ISO 8601
_EXTRA_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def parse_date(value: Union[str, date, datetime]) -> date:
    """Parse a client-supplied date; raises InvalidDateError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise InvalidDateError(f"Invalid date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _EXTRA_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise InvalidDateError(f"Invalid date: {value!r}")


def format_date(value: Union[str, date, datetime]) -> str:
    """Normalize to YYYY-MM-DD."""
    return parse_date(value).strftime("%Y-%m-%d")


def count_nights(check_in: Union[str, date], check_out: Union[str, date]) -> int:
    """Nights between two dates, never less than one."""
    return max(1, (parse_date(check_out) - parse_date(check_in)).days)
