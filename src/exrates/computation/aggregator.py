"""
Rates Aggregator - Reshape and average fetched rates

A rates mapping with a single currency collapses to that one rate. The
same rule applies per date for history responses and again to averaged
results.

Averages are computed with decimal.Decimal built from the string form of
each rate, so means such as (0.80 + 0.90) / 2 come out as 0.85 and
rounding is half away from zero.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from exrates.models import Rates


def normalize(rates: Any) -> Any:
    """
    Collapse a single-entry rates mapping to its value.

    Anything that is not a one-key mapping is returned unchanged, so
    applying this twice gives the same result as applying it once.
    """
    if isinstance(rates, dict) and len(rates) == 1:
        return next(iter(rates.values()))
    return rates


def _to_decimal(value: float | int) -> Decimal:
    """Convert a JSON number to Decimal through its string form."""
    return Decimal(str(value))


def _mean(values: list[Decimal]) -> Decimal:
    return sum(values, Decimal("0")) / Decimal(len(values))


def average_rates(
    per_date: dict[str, Rates],
    symbol: str | None = None,
    decimal_places: int | None = None
) -> Rates:
    """
    Average each currency's rate over every date of a history result.

    Args:
        per_date: Date string -> rate or (code -> rate), as returned by a
            range fetch
        symbol: Currency a bare per-date rate belongs to (the single
            requested symbol)
        decimal_places: Round each mean to this many places if given

    Returns:
        The average rate if one currency is involved, else code -> average
    """
    merged: dict[Any, list[Decimal]] = {}

    for day_rates in per_date.values():
        if not isinstance(day_rates, dict):
            day_rates = {symbol: day_rates}
        for code, rate in day_rates.items():
            merged.setdefault(code, []).append(_to_decimal(rate))

    averages: dict[Any, float] = {}
    for code, values in merged.items():
        avg = _mean(values)
        if decimal_places is not None:
            with localcontext() as ctx:
                # Room for the integer digits plus the requested places
                ctx.prec = max(ctx.prec, avg.adjusted() + decimal_places + 2)
                avg = avg.quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_HALF_UP)
        averages[code] = float(avg)

    return normalize(averages)
