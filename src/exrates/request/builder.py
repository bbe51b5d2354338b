"""
Request Configuration

Accumulates chained configuration calls into one of three request shapes:
latest rates, rates on a date, or a date-range history.
"""

from collections.abc import Iterable
from datetime import date
from typing import Any

from exrates.config import get_settings
from exrates.currencies import is_supported
from exrates.errors import (
    DateOutOfRangeError,
    InvalidArgumentError,
    InvalidArgumentTypeError,
    InvalidDateOrderError,
    InvalidRangeRequestError,
    UnknownCurrencyError,
)
from exrates.models import LATEST, FromDate
from exrates.request.dates import parse_date, untrailing_slash

# First year the service publishes rates for
MIN_YEAR = 1999


def _normalize_currency(currency: Any, kind: str) -> str:
    """Upper-case a currency code and check it against the catalog."""
    if not isinstance(currency, str):
        raise InvalidArgumentTypeError(
            f"{kind} currencies have to be strings",
            details={"value": repr(currency)}
        )

    code = currency.upper()
    if not is_supported(code):
        raise UnknownCurrencyError(
            f"{code} is not a valid currency",
            details={"currency": code}
        )
    return code


class RequestConfig:
    """
    Mutable request state built through chained calls.

    Every setter mutates the instance and returns it, so a request reads as
    one expression:

        RequestConfig().from_("2018-06-01").to("2018-06-21").base("usd")

    An instance belongs to a single request chain and is not meant to be
    shared between concurrent callers.
    """

    def __init__(self, api_base_url: str | None = None):
        self.api_base_url: str = untrailing_slash(
            api_base_url or get_settings().api_base_url
        )
        self.from_date: FromDate = LATEST
        self.to_date: date | None = None
        self.base_currency: str | None = None
        self.symbol_list: list[str] | None = None

    # === Chainable setters ===

    def set_api_base_url(self, url: str) -> "RequestConfig":
        """Point the request at another service root."""
        self.api_base_url = untrailing_slash(url)
        return self

    def latest(self) -> "RequestConfig":
        """Request the latest published rates."""
        self.from_date = LATEST
        return self

    def at(self, value: Any) -> "RequestConfig":
        """Request the historical rates of a single date."""
        self.from_date = parse_date(value)
        return self

    def from_(self, value: Any) -> "RequestConfig":
        """Set the first date of a date range."""
        self.from_date = parse_date(value)
        return self

    def to(self, value: Any) -> "RequestConfig":
        """Set the last date of a date range, turning this into a range request."""
        self.to_date = parse_date(value)
        return self

    def base(self, currency: Any) -> "RequestConfig":
        """
        Set the base currency.

        If never set, the service falls back to its own default (EUR).

        Raises:
            InvalidArgumentTypeError: If currency is not a string
            UnknownCurrencyError: If currency is not in the catalog
        """
        self.base_currency = _normalize_currency(currency, "Base")
        return self

    def symbols(self, currencies: Any) -> "RequestConfig":
        """
        Limit results to one or more currencies.

        Args:
            currencies: A currency code or a list of codes

        Raises:
            InvalidArgumentTypeError: If any element is not a string
            UnknownCurrencyError: If any element is not in the catalog
            InvalidArgumentError: If an empty list is given
        """
        if isinstance(currencies, str) or not isinstance(currencies, Iterable):
            currencies = [currencies]

        codes: list[str] = []
        for currency in currencies:
            code = _normalize_currency(currency, "Symbol")
            if code not in codes:
                codes.append(code)

        if not codes:
            raise InvalidArgumentError("At least one symbol currency is required")

        self.symbol_list = codes
        return self

    # === State queries ===

    @property
    def is_range_request(self) -> bool:
        """Whether this request targets the history endpoint."""
        return self.to_date is not None

    def validate(self) -> None:
        """
        Check the accumulated state before a URL is built.

        Raises:
            InvalidRangeRequestError: If a range starts at 'latest'
            InvalidDateOrderError: If the range start is after its end
            DateOutOfRangeError: If the start date is before 1999
        """
        if self.is_range_request:
            if self.from_date is LATEST:
                raise InvalidRangeRequestError(
                    "Cannot set the 'from' date to 'latest' when fetching a date range"
                )
            if self.from_date > self.to_date:
                raise InvalidDateOrderError(
                    "The 'from' date cannot be after the 'to' date",
                    details={
                        "from": self.from_date.isoformat(),
                        "to": self.to_date.isoformat(),
                    }
                )

        if self.from_date is not LATEST and self.from_date.year < MIN_YEAR:
            raise DateOutOfRangeError(
                f"Cannot get historical rates before {MIN_YEAR}",
                details={"from": self.from_date.isoformat()}
            )
