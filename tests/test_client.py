"""
Rates API Client Tests

Fetching, averaging and conversion against stubbed transports.
"""

from decimal import Decimal

import httpx
import pytest

from exrates import (
    ApiError,
    DateOutOfRangeError,
    FetchFailedError,
    InvalidArgumentError,
    InvalidArgumentTypeError,
    InvalidRangeRequestError,
    UnknownCurrencyError,
    convert,
    exchange_rates,
)
from exrates.config import Settings, get_settings
from exrates.providers import HttpTransport, average, fetch_one
from exrates.request import RequestConfig


LATEST_RESPONSE = {
    "base": "EUR",
    "date": "2018-06-22",
    "rates": {"USD": 1.1658, "GBP": 0.87725, "JPY": 128.4},
}

HISTORY_RESPONSE = {
    "base": "USD",
    "start_at": "2018-06-01",
    "end_at": "2018-06-02",
    "rates": {
        "2018-06-01": {"EUR": 0.80, "GBP": 0.70},
        "2018-06-02": {"EUR": 0.90, "GBP": 0.74},
    },
}


class StubTransport:
    """Transport returning a canned response and recording requested URLs."""

    def __init__(self, payload=None, status_code: int = 200, content: bytes | None = None):
        self.payload = payload
        self.status_code = status_code
        self.content = content
        self.calls: list[str] = []

    async def __call__(self, url: str) -> httpx.Response:
        self.calls.append(url)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)


class FailingTransport:
    """Transport whose request never completes."""

    def __init__(self):
        self.calls: list[str] = []

    async def __call__(self, url: str) -> httpx.Response:
        self.calls.append(url)
        raise httpx.ConnectError("connection refused")


class TestFetch:
    """Tests for fetch_one() and ExchangeRates.fetch()."""

    @pytest.mark.asyncio
    async def test_latest_requests_latest_endpoint(self):
        """latest() fetches /latest and returns the rates mapping."""
        transport = StubTransport(LATEST_RESPONSE)

        rates = await exchange_rates(transport).latest().fetch()

        assert transport.calls == ["https://api.ratesapi.io/latest"]
        assert rates == LATEST_RESPONSE["rates"]

    @pytest.mark.asyncio
    async def test_single_rate_collapses_to_number(self):
        """A response with one rate is returned as a number."""
        transport = StubTransport({"base": "USD", "rates": {"EUR": 0.8338}})

        rate = await exchange_rates(transport).at("2018-01-01").base("USD").symbols("EUR").fetch()

        assert rate == 0.8338
        assert transport.calls == ["https://api.ratesapi.io/2018-01-01?base=USD&symbols=EUR"]

    @pytest.mark.asyncio
    async def test_history_is_mapping_of_dates(self):
        """Range fetches return date -> rates."""
        transport = StubTransport(HISTORY_RESPONSE)

        rates = await exchange_rates(transport).from_("2018-06-01").to("2018-06-02").base("USD").fetch()

        assert rates == HISTORY_RESPONSE["rates"]
        assert transport.calls == [
            "https://api.ratesapi.io/history?start_at=2018-06-01&end_at=2018-06-02&base=USD"
        ]

    @pytest.mark.asyncio
    async def test_history_collapses_each_date(self):
        """Each date with a single rate collapses to a number."""
        transport = StubTransport({"rates": {
            "2018-06-01": {"EUR": 0.80},
            "2018-06-02": {"EUR": 0.90},
        }})

        rates = await exchange_rates(transport).from_("2018-06-01").to("2018-06-02").symbols("EUR").fetch()

        assert rates == {"2018-06-01": 0.80, "2018-06-02": 0.90}

    @pytest.mark.asyncio
    async def test_different_api_base_url(self):
        """Requests go to the configured base URL."""
        transport = StubTransport(LATEST_RESPONSE)

        await exchange_rates(transport).set_api_base_url("https://api.exchangerate.host/").latest().fetch()

        assert transport.calls == ["https://api.exchangerate.host/latest"]

    @pytest.mark.asyncio
    async def test_non_200_raises_api_error(self):
        """Any non-200 status raises ApiError with the status code."""
        transport = StubTransport(LATEST_RESPONSE, status_code=503)

        with pytest.raises(ApiError) as exc_info:
            await exchange_rates(transport).latest().fetch()

        assert exc_info.value.status_code == 503
        assert exc_info.value.error_type == "HTTP_503"

    @pytest.mark.asyncio
    async def test_transport_failure_is_wrapped(self):
        """Network errors surface as FetchFailedError carrying only the message."""
        with pytest.raises(FetchFailedError) as exc_info:
            await exchange_rates(FailingTransport()).latest().fetch()

        assert "connection refused" in str(exc_info.value)
        assert exc_info.value.__cause__ is None

    @pytest.mark.asyncio
    async def test_malformed_body_is_wrapped(self):
        """A body that is not JSON raises FetchFailedError."""
        transport = StubTransport(content=b"<html>not json</html>")

        with pytest.raises(FetchFailedError):
            await exchange_rates(transport).latest().fetch()

    @pytest.mark.asyncio
    async def test_missing_rates_field_is_wrapped(self):
        """A JSON body without 'rates' raises FetchFailedError."""
        transport = StubTransport({"error": "nope"})

        with pytest.raises(FetchFailedError):
            await exchange_rates(transport).latest().fetch()

    @pytest.mark.asyncio
    async def test_validation_fails_before_request(self):
        """Invalid configurations never reach the transport."""
        transport = StubTransport(HISTORY_RESPONSE)

        with pytest.raises(InvalidRangeRequestError):
            await exchange_rates(transport).to("2018-06-21").fetch()
        with pytest.raises(DateOutOfRangeError):
            await fetch_one(RequestConfig().from_("1998-06-01"), transport)

        assert transport.calls == []

    def test_url_property_validates(self):
        """The url property renders valid configs and rejects invalid ones."""
        rates = exchange_rates().from_("2018-06-01").to("2018-06-21")
        assert rates.url == "https://api.ratesapi.io/history?start_at=2018-06-01&end_at=2018-06-21"

        with pytest.raises(InvalidRangeRequestError):
            _ = exchange_rates().to("2018-06-21").url


class TestAverage:
    """Tests for average() and ExchangeRates.avg()."""

    @pytest.mark.asyncio
    async def test_average_over_range(self):
        """Each currency is averaged over the range with one request."""
        transport = StubTransport(HISTORY_RESPONSE)

        rates = await exchange_rates(transport).from_("2018-06-01").to("2018-06-02").avg()

        assert rates == {"EUR": 0.85, "GBP": 0.72}
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_average_single_symbol(self):
        """A single averaged currency is a number, optionally rounded."""
        transport = StubTransport({"rates": {
            "2018-06-01": {"EUR": 0.80},
            "2018-06-02": {"EUR": 0.90},
        }})
        config = RequestConfig().from_("2018-06-01").to("2018-06-02").symbols("EUR")

        assert await average(config, transport) == 0.85
        assert await average(config, transport, decimal_places=1) == 0.9

    @pytest.mark.asyncio
    async def test_average_keeps_codes_of_single_rate_days(self):
        """Days that return one currency still count toward that currency."""
        transport = StubTransport({"rates": {
            "2018-06-01": {"USD": 1.0, "ISK": 120.0},
            "2018-06-02": {"USD": 3.0},
        }})

        rates = await (
            exchange_rates(transport)
            .from_("2018-06-01")
            .to("2018-06-02")
            .symbols(["USD", "ISK"])
            .avg()
        )

        assert rates == {"USD": 2.0, "ISK": 120.0}

    @pytest.mark.asyncio
    async def test_average_without_symbols_keeps_codes(self):
        """Single-rate days keep their code when no symbols were requested."""
        transport = StubTransport({"rates": {
            "2018-06-01": {"GBP": 0.5},
            "2018-06-02": {"USD": 1.5, "GBP": 0.7},
        }})

        rates = await exchange_rates(transport).from_("2018-06-01").to("2018-06-02").avg()

        assert rates == {"GBP": 0.6, "USD": 1.5}
        assert None not in rates

    @pytest.mark.asyncio
    async def test_average_on_single_date_is_noop(self):
        """Averaging a single date returns the fetch result unchanged."""
        transport = StubTransport(LATEST_RESPONSE)

        rates = await exchange_rates(transport).latest().avg(2)

        assert rates == LATEST_RESPONSE["rates"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("decimal_places", [-1, 1.5, "2", True])
    async def test_bad_decimal_places(self, decimal_places):
        """Invalid decimal places fail before any request is made."""
        transport = StubTransport(HISTORY_RESPONSE)

        with pytest.raises(InvalidArgumentError):
            await exchange_rates(transport).from_("2018-06-01").to("2018-06-02").avg(decimal_places)

        assert transport.calls == []


class TestConvert:
    """Tests for convert()."""

    @pytest.mark.asyncio
    async def test_convert_on_date(self):
        """Converts with the rate of the given date."""
        transport = StubTransport({"base": "USD", "date": "2018-01-01", "rates": {"EUR": 0.8338}})

        amount = await convert(2000, "USD", "EUR", "2018-01-01", transport=transport)

        assert amount == 2000 * 0.8338
        assert transport.calls == ["https://api.ratesapi.io/2018-01-01?base=USD&symbols=EUR"]

    @pytest.mark.asyncio
    async def test_convert_latest_by_default(self):
        """Without a date the latest rate is used."""
        transport = StubTransport({"base": "GBP", "rates": {"USD": 1.25}})

        amount = await convert(10, "gbp", "usd", transport=transport)

        assert amount == 12.5
        assert transport.calls == ["https://api.ratesapi.io/latest?base=GBP&symbols=USD"]

    @pytest.mark.asyncio
    async def test_convert_decimal_amount(self):
        """Decimal amounts convert exactly and stay Decimal."""
        transport = StubTransport({"base": "USD", "rates": {"EUR": 0.8338}})

        amount = await convert(Decimal("2000.50"), "USD", "EUR", transport=transport)

        assert isinstance(amount, Decimal)
        assert amount == Decimal("1668.01690")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["2000", None, True, 1 + 2j])
    async def test_amount_must_be_numeric(self, amount):
        """Non-numeric amounts are a type error."""
        with pytest.raises(InvalidArgumentTypeError):
            await convert(amount, "USD", "EUR", transport=StubTransport())

    @pytest.mark.asyncio
    async def test_single_target_currency_only(self):
        """Converting to several currencies at once is a type error."""
        with pytest.raises(TypeError):
            await convert(1, "USD", ["EUR", "GBP"], transport=StubTransport())

    @pytest.mark.asyncio
    async def test_unknown_currency(self):
        """Unknown target currencies are rejected."""
        with pytest.raises(UnknownCurrencyError):
            await convert(1, "USD", "XYZ", transport=StubTransport())


class TestHttpTransport:
    """Tests for the default httpx transport."""

    @pytest.mark.asyncio
    async def test_uses_injected_client(self):
        """An injected httpx client performs the request."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json=LATEST_RESPONSE)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            rates = await exchange_rates(HttpTransport(client=client)).latest().fetch()

        assert seen == ["/latest"]
        assert rates == LATEST_RESPONSE["rates"]

    def test_timeout_defaults_to_settings(self):
        """The timeout comes from settings unless given explicitly."""
        assert HttpTransport().timeout == get_settings().request_timeout
        assert HttpTransport(timeout=2.5).timeout == 2.5


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Settings default to the public rates service."""
        monkeypatch.delenv("EXRATES_API_BASE_URL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.api_base_url == "https://api.ratesapi.io"
        assert settings.request_timeout == 10.0

    def test_env_override(self, monkeypatch):
        """EXRATES_API_BASE_URL changes the default base URL."""
        monkeypatch.setenv("EXRATES_API_BASE_URL", "https://rates.example.com/")
        get_settings.cache_clear()
        try:
            assert RequestConfig().api_base_url == "https://rates.example.com"
        finally:
            get_settings.cache_clear()
