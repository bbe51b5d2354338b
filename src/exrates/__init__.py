"""
exrates - fluent client for a currency exchange rates web service.

    from exrates import exchange_rates, convert

    rates = await exchange_rates().latest().symbols(["USD", "GBP"]).fetch()
    amount = await convert(2000, "USD", "EUR", "2018-01-01")
"""

import logging

from exrates.currencies import CURRENCIES
from exrates.errors import (
    ApiError,
    DateOutOfRangeError,
    ExchangeRatesError,
    FetchFailedError,
    InvalidArgumentError,
    InvalidArgumentTypeError,
    InvalidDateError,
    InvalidDateOrderError,
    InvalidRangeRequestError,
    UnknownCurrencyError,
)
from exrates.models import LATEST
from exrates.providers import ExchangeRates, HttpTransport, convert, exchange_rates
from exrates.request import RequestConfig

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CURRENCIES",
    "LATEST",
    "ExchangeRates",
    "HttpTransport",
    "RequestConfig",
    "convert",
    "exchange_rates",
    "ApiError",
    "DateOutOfRangeError",
    "ExchangeRatesError",
    "FetchFailedError",
    "InvalidArgumentError",
    "InvalidArgumentTypeError",
    "InvalidDateError",
    "InvalidDateOrderError",
    "InvalidRangeRequestError",
    "UnknownCurrencyError",
]
