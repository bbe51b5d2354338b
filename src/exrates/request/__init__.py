"""
Request Configuration Module

Chained request state, its validation, and URL rendering.
"""

from exrates.request.builder import RequestConfig
from exrates.request.query_string import QueryStringBuilder
from exrates.request.url_builder import build_url

__all__ = [
    "RequestConfig",
    "QueryStringBuilder",
    "build_url",
]
