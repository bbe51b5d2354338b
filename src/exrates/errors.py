"""
Exchange Rates Errors

Every failure raised by the client derives from ExchangeRatesError and
carries a machine-readable ``error_type`` plus optional ``details``.
"""

from typing import Any


class ExchangeRatesError(Exception):
    """Base exception for exchange rate client errors."""

    error_type: str = "UNKNOWN"

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        if error_type is not None:
            self.error_type = error_type
        self.details = details or {}


# === Configuration errors ===

class InvalidDateError(ExchangeRatesError):
    """A date input could not be parsed into a calendar date."""
    error_type = "INVALID_DATE"


class UnknownCurrencyError(ExchangeRatesError):
    """A currency code is not part of the supported catalog."""
    error_type = "UNKNOWN_CURRENCY"


class InvalidArgumentTypeError(ExchangeRatesError, TypeError):
    """A configuration call received a value of the wrong type."""
    error_type = "INVALID_ARGUMENT_TYPE"


class InvalidArgumentError(ExchangeRatesError, ValueError):
    """An argument has the right type but an unusable value."""
    error_type = "INVALID_ARGUMENT"


# === Validation errors ===

class InvalidRangeRequestError(ExchangeRatesError):
    """A date range was requested without an explicit start date."""
    error_type = "INVALID_RANGE_REQUEST"


class InvalidDateOrderError(ExchangeRatesError):
    """The start of a date range falls after its end."""
    error_type = "INVALID_DATE_ORDER"


class DateOutOfRangeError(ExchangeRatesError):
    """Historical rates were requested for a year the service does not cover."""
    error_type = "DATE_OUT_OF_RANGE"


# === Fetch errors ===

class ApiError(ExchangeRatesError):
    """The rates service answered with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str | None = None):
        super().__init__(
            f"API returned a bad response (HTTP {status_code})",
            error_type=f"HTTP_{status_code}",
            details={"url": url} if url else None
        )
        self.status_code = status_code


class FetchFailedError(ExchangeRatesError):
    """The request could not be completed or its body could not be read."""
    error_type = "FETCH_FAILED"
