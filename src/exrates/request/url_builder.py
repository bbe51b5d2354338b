"""
URL Builder

Renders a validated RequestConfig into the endpoint URL of the rates
service.
"""

from exrates.models import LATEST
from exrates.request.builder import RequestConfig
from exrates.request.dates import format_date
from exrates.request.query_string import QueryStringBuilder


def build_url(config: RequestConfig) -> str:
    """
    Build the URL to request for a configuration.

    Endpoints: ``/history`` for ranges, ``/latest``, or ``/YYYY-MM-DD``.
    Query parameters follow in a fixed order: start_at, end_at, base,
    symbols.

    Raises:
        ExchangeRatesError: If the configuration does not validate
    """
    config.validate()

    qs = QueryStringBuilder()

    if config.is_range_request:
        endpoint = "history"
        qs.add_param("start_at", format_date(config.from_date))
        qs.add_param("end_at", format_date(config.to_date))
    elif config.from_date is LATEST:
        endpoint = "latest"
    else:
        endpoint = format_date(config.from_date)

    if config.base_currency:
        qs.add_param("base", config.base_currency)

    if config.symbol_list:
        # Commas separate codes and must stay literal
        qs.add_param("symbols", ",".join(config.symbol_list), encode=False)

    return f"{config.api_base_url}/{endpoint}{qs}"
