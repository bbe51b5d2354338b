"""
Date input helpers.

Text is parsed with dateutil, so ISO 8601 strings as well as looser forms
such as "June 1, 2018" are accepted.
"""

from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

from exrates.errors import InvalidArgumentTypeError, InvalidDateError


def parse_date(value: Any) -> date:
    """
    Convert a date input to a calendar date.

    Args:
        value: A ``date``, a ``datetime`` or a date string

    Returns:
        The calendar date (time of day is dropped)

    Raises:
        InvalidArgumentTypeError: If value is not text or a date object
        InvalidDateError: If the text cannot be parsed
    """
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidArgumentTypeError(
            f"Dates have to be strings or date objects, got {type(value).__name__}",
            details={"value": repr(value)}
        )

    # Missing components default to January 1st of the current year
    default = datetime(date.today().year, 1, 1)
    try:
        return date_parser.parse(value, default=default).date()
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(
            f"{value!r} is not a valid date",
            details={"value": value}
        ) from e


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.isoformat()


def untrailing_slash(value: str) -> str:
    """Remove trailing forward slashes."""
    return value.rstrip("/")
