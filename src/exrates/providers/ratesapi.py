"""
Rates API Client

Fetch orchestration on top of RequestConfig: single fetches, date-range
averages, and one-off currency conversion.

Response format (single date): {"base": "EUR", "date": "2018-06-01", "rates": {"USD": 1.1675}}
Response format (history): {"base": "EUR", "rates": {"2018-06-01": {"USD": 1.1675}, ...}}
"""

import logging
import numbers
from datetime import date as date_type
from decimal import Decimal
from typing import Any

from exrates.computation.aggregator import average_rates, normalize
from exrates.errors import (
    ApiError,
    FetchFailedError,
    InvalidArgumentError,
    InvalidArgumentTypeError,
)
from exrates.models import LATEST, HistoryPayload, Rates, RatesPayload, RatesResponse
from exrates.providers.transport import HttpTransport, Transport
from exrates.request.builder import RequestConfig
from exrates.request.url_builder import build_url

logger = logging.getLogger(__name__)


def _fetch_failed(e: Exception) -> FetchFailedError:
    return FetchFailedError(f"Couldn't fetch the exchange rate, {e}")


async def _fetch_payload(
    config: RequestConfig,
    transport: Transport | None = None
) -> dict[str, Any]:
    """
    Fetch the raw ``rates`` mapping of a configuration, without collapsing.

    Returns code -> rate for single-date requests and date string ->
    (code -> rate) for range requests.
    """
    url = build_url(config)
    transport = transport or HttpTransport()

    logger.info(f"Requesting exchange rates: {url}")

    try:
        response = await transport(url)
    except Exception as e:
        raise _fetch_failed(e) from None

    if response.status_code != 200:
        raise ApiError(response.status_code, url=url)

    try:
        data = response.json()
        if config.is_range_request:
            return HistoryPayload.model_validate(data).rates
        return RatesPayload.model_validate(data).rates
    except ValueError as e:
        raise _fetch_failed(e) from None


async def fetch_one(
    config: RequestConfig,
    transport: Transport | None = None
) -> RatesResponse:
    """
    Fetch the rates described by a configuration.

    Args:
        config: Request configuration; validated before any I/O
        transport: Callable performing the GET, defaults to HttpTransport

    Returns:
        A rate, or code -> rate. For range requests, date string -> either
        of those.

    Raises:
        ExchangeRatesError: If the configuration is invalid
        ApiError: If the service answers with a non-200 status
        FetchFailedError: If the request fails or the body is malformed
    """
    rates = await _fetch_payload(config, transport)

    if config.is_range_request:
        return {day: normalize(day_rates) for day, day_rates in rates.items()}
    return normalize(rates)


async def average(
    config: RequestConfig,
    transport: Transport | None = None,
    decimal_places: int | None = None
) -> RatesResponse:
    """
    Average each rate over the configured date range.

    A single-date configuration has nothing to average over; its fetch
    result is returned as is.

    Args:
        config: Request configuration
        transport: Callable performing the GET, defaults to HttpTransport
        decimal_places: Round each average to this many decimal places

    Raises:
        InvalidArgumentError: If decimal_places is not a non-negative integer
    """
    if decimal_places is not None:
        if isinstance(decimal_places, bool) or not isinstance(decimal_places, int):
            raise InvalidArgumentError(
                "The decimal places parameter has to be an integer",
                details={"decimal_places": repr(decimal_places)}
            )
        if decimal_places < 0:
            raise InvalidArgumentError(
                "Decimal places cannot be negative",
                details={"decimal_places": decimal_places}
            )

    if not config.is_range_request:
        return await fetch_one(config, transport)

    # Per-date mappings keep their currency codes until after averaging
    per_date = await _fetch_payload(config, transport)
    symbol = config.symbol_list[0] if config.symbol_list and len(config.symbol_list) == 1 else None

    logger.debug(f"Averaging rates over {len(per_date)} dates")

    return average_rates(per_date, symbol=symbol, decimal_places=decimal_places)


class ExchangeRates(RequestConfig):
    """
    Fluent client for the rates service.

    Usage:
        rates = await exchange_rates().from_("2018-06-01").to("2018-06-21").symbols("USD").avg(4)
    """

    def __init__(
        self,
        transport: Transport | None = None,
        api_base_url: str | None = None
    ):
        super().__init__(api_base_url=api_base_url)
        self._transport = transport

    @property
    def url(self) -> str:
        """The validated URL this request would fetch."""
        return build_url(self)

    async def fetch(self) -> RatesResponse:
        """Fetch the configured rates."""
        return await fetch_one(self, self._transport)

    async def avg(self, decimal_places: int | None = None) -> RatesResponse:
        """Fetch the configured rates and average them over the date range."""
        return await average(self, self._transport, decimal_places)


def exchange_rates(transport: Transport | None = None) -> ExchangeRates:
    """Return a new ExchangeRates request chain."""
    return ExchangeRates(transport=transport)


async def convert(
    amount: Any,
    from_currency: str,
    to_currency: str,
    date: date_type | str = LATEST,
    *,
    transport: Transport | None = None
) -> float | Decimal:
    """
    Convert an amount between two currencies.

    Args:
        amount: The amount to convert
        from_currency: Currency to convert from
        to_currency: Currency to convert to (exactly one)
        date: Date of the rate to use, 'latest' by default
        transport: Callable performing the GET, defaults to HttpTransport

    Returns:
        The converted amount, as a Decimal when amount is a Decimal

    Raises:
        InvalidArgumentTypeError: If amount is not a number or several
            target currencies are given
    """
    if isinstance(amount, bool) or not isinstance(amount, (numbers.Real, Decimal)):
        raise InvalidArgumentTypeError("The 'amount' parameter has to be a number")

    if isinstance(to_currency, (list, tuple, set)):
        raise InvalidArgumentTypeError("Cannot convert to multiple currencies at the same time")

    config = RequestConfig()
    if date == LATEST:
        config.latest()
    else:
        config.at(date)
    config.base(from_currency).symbols(to_currency)

    rate: Rates = await fetch_one(config, transport)
    if isinstance(rate, dict):
        raise FetchFailedError(
            "Couldn't fetch the exchange rate, expected a single rate",
            details={"currencies": list(rate)}
        )

    if isinstance(amount, Decimal):
        return Decimal(str(rate)) * amount
    return rate * amount
