"""
Rates Service Providers Module

Transport and fetch orchestration for the exchange rates service.
"""

from exrates.providers.transport import HttpTransport, Transport
from exrates.providers.ratesapi import (
    ExchangeRates,
    average,
    convert,
    exchange_rates,
    fetch_one,
)

__all__ = [
    "HttpTransport",
    "Transport",
    "ExchangeRates",
    "average",
    "convert",
    "exchange_rates",
    "fetch_one",
]
