"""Rate-limited asynchronous HTTP layer for discovery fetches.

This module provides :class:`RequestQueue`, the only component that issues
outbound network calls on behalf of the generator. It wraps
:class:`httpx.AsyncClient` behind an :class:`asyncio.Semaphore` so that no
more than ``concurrency`` requests are ever in flight, however many
generation jobs are awaiting documents. Waiters are admitted in FIFO order;
completions may finish in any order.

There is no retry policy: a failed request surfaces as a
:class:`~discogen.exceptions.FetchError` to the caller, and timeouts are the
transport's responsibility.

See Also:
    :class:`~discogen.generator.fleet.FleetGenerator` for the outer queue
    that bounds whole per-API jobs.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from discogen.exceptions import FetchError
from discogen.output import debug
from discogen.parser.loader import parse_content


class RequestQueue:
    """Bounded-concurrency GET queue returning decoded JSON documents.

    Must be used as an async context manager so the underlying connection
    pool is opened and closed exactly once per run.

    Args:
        concurrency: Ceiling on simultaneous in-flight requests.
        timeout: Transport timeout in seconds.
        transport: Optional custom :class:`httpx.AsyncBaseTransport`
            (tests pass an :class:`httpx.MockTransport`).

    Example::

        async with RequestQueue(concurrency=50) as queue:
            data = await queue.request("https://www.googleapis.com/discovery/v1/apis")
    """

    def __init__(
        self,
        concurrency: int = 50,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._concurrency = concurrency
        self._timeout = timeout
        self._transport = transport
        self._semaphore = asyncio.Semaphore(concurrency)
        self._client: Optional[httpx.AsyncClient] = None
        self._in_flight = 0
        self._peak_in_flight = 0

    @property
    def concurrency(self) -> int:
        """The configured in-flight ceiling."""
        return self._concurrency

    @property
    def peak_in_flight(self) -> int:
        """Highest number of simultaneous requests observed so far."""
        return self._peak_in_flight

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> RequestQueue:
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request method
    # ------------------------------------------------------------------ #

    async def request(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Enqueue a GET for *url* and return the decoded JSON object.

        Args:
            url: Absolute URL to fetch.
            headers: Extra request headers, passed through untouched.

        Returns:
            The response body decoded as a JSON (or YAML) object.

        Raises:
            FetchError: On network errors or an HTTP status >= 400.
            DocumentParseError: If the body is not a JSON/YAML object.
        """
        assert self._client is not None, "RequestQueue not initialised -- use as async context manager"

        async with self._semaphore:
            self._in_flight += 1
            self._peak_in_flight = max(self._peak_in_flight, self._in_flight)
            try:
                debug(f"GET {url}")
                response = await self._client.get(url, headers=headers or {})
            except httpx.HTTPError as exc:
                raise FetchError(f"Failed to fetch {url}: {exc}") from exc
            finally:
                self._in_flight -= 1

        if response.status_code >= 400:
            raise FetchError(f"HTTP {response.status_code} fetching {url}")

        content_type = response.headers.get("content-type", "")
        hint = "yaml" if "yaml" in content_type else "json" if "json" in content_type else ""
        return parse_content(response.text, hint=hint)
