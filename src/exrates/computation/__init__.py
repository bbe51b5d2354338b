"""
Rates Computation Module

Shape collapsing and date-range averaging of fetched rates.
"""

from exrates.computation.aggregator import average_rates, normalize

__all__ = [
    "average_rates",
    "normalize",
]
