"""
Exchange Rates Data Models

Request-side selectors and the response payload schemas returned by the
rates service.
"""

from datetime import date
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


# === Enums ===

class DateSelector(str, Enum):
    """Non-date values accepted as the start of a request."""
    LATEST = "latest"


LATEST = DateSelector.LATEST


# === Type aliases ===

# Start of a request: the latest rates or a specific calendar date
FromDate = Union[DateSelector, date]

# A single rate when one currency resolved, else code -> rate
Rates = Union[float, dict[str, float]]

# Single-date result, or date string -> per-date result for ranges
RatesResponse = Union[float, dict[str, float], dict[str, Rates]]


# === Wire payloads ===

class RatesPayload(BaseModel):
    """
    Body of a ``/latest`` or ``/{date}`` response.

    Response format: {"base": "EUR", "date": "2018-06-01", "rates": {"USD": 1.1675}}
    """
    rates: dict[str, float] = Field(
        description="Currency code -> rate against the base currency"
    )


class HistoryPayload(BaseModel):
    """
    Body of a ``/history`` response.

    Response format: {"base": "EUR", "start_at": "...", "end_at": "...",
    "rates": {"2018-06-01": {"USD": 1.1675}, ...}}
    """
    rates: dict[str, dict[str, float]] = Field(
        description="Date string -> (currency code -> rate)"
    )
