"""
Query String Builder

Assembles ``key=value`` pairs joined by ``&``. Keys and values are
percent-encoded unless the caller opts out for a single parameter.
"""

from typing import Any
from urllib.parse import quote


class QueryStringBuilder:
    """Chainable builder for a URL query string."""

    def __init__(self):
        self._params: dict[str, str] = {}

    def add_param(self, key: str, value: Any, encode: bool = True) -> "QueryStringBuilder":
        """
        Add a parameter to the query string.

        Nested values are not supported; ``value`` is rendered with ``str()``.

        Args:
            key: Parameter name
            value: Parameter value
            encode: Whether to percent-encode the key and value

        Returns:
            The builder itself, for chaining
        """
        text = str(value)
        if encode:
            key = quote(key, safe="")
            text = quote(text, safe="")

        self._params[key] = text
        return self

    @property
    def value(self) -> str:
        """The query string, prefixed with ``?``, or empty if no parameters were added."""
        qs = "&".join(f"{key}={val}" for key, val in self._params.items())
        return f"?{qs}" if qs else ""

    def __len__(self) -> int:
        return len(self._params)

    def __str__(self) -> str:
        return self.value
