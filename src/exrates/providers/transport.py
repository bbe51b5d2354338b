"""
HTTP transport for the rates service.

A transport is any awaitable callable taking a URL and returning an
``httpx.Response``. HttpTransport is the default one.
"""

import logging
from collections.abc import Awaitable, Callable

import httpx

from exrates.config import get_settings

logger = logging.getLogger(__name__)

Transport = Callable[[str], Awaitable[httpx.Response]]


class HttpTransport:
    """
    GET requests through httpx.

    With no client injected, every call opens a short-lived
    ``httpx.AsyncClient``; an injected client is reused and left open.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None
    ):
        self._client = client
        self.timeout = timeout if timeout is not None else get_settings().request_timeout

    async def __call__(self, url: str) -> httpx.Response:
        if self._client is not None:
            response = await self._client.get(url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url)

        logger.debug(f"GET {url} -> HTTP {response.status_code}")
        return response
