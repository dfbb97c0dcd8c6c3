"""HTTP retrieval of the NGINX stub-status page."""

import asyncio
from typing import List, Optional

import httpx

from ..errors import (
    BadStatusError,
    BodyReadError,
    ConnectionFailure,
    RequestTimeout,
)


def _http_timeout(timeout: float) -> httpx.Timeout:
    """
    Build the httpx timeout for a request.

    Args:
        timeout: Timeout in seconds, 0 for no timeout

    Returns:
        httpx.Timeout: Same limit for connect, write, read and pool phases
    """
    if timeout <= 0:
        return httpx.Timeout(None)
    return httpx.Timeout(timeout)


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


async def _read_body(response: httpx.Response, url: str, timeout: float) -> bytes:
    """
    Read a streamed response body.

    Raises:
        RequestTimeout: If a read times out
        BodyReadError: If the connection fails while reading
    """
    chunks: List[bytes] = []
    try:
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
    except httpx.TimeoutException as e:
        raise RequestTimeout(url, timeout, _describe(e)) from e
    except (httpx.TransportError, httpx.DecodingError, httpx.StreamError) as e:
        raise BodyReadError(_describe(e)) from e

    return b"".join(chunks)


async def _get(client: httpx.AsyncClient, url: str, timeout: float) -> bytes:
    try:
        async with client.stream(
            "GET",
            url,
            timeout=_http_timeout(timeout),
            follow_redirects=True
        ) as response:
            if response.status_code != 200:
                raise BadStatusError(response.status_code)
            return await _read_body(response, url, timeout)

    except httpx.TimeoutException as e:
        raise RequestTimeout(url, timeout, _describe(e)) from e

    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise ConnectionFailure(f"error requesting {url}: {_describe(e)}") from e


async def fetch_status_async(
    url: str,
    timeout: float,
    client: Optional[httpx.AsyncClient] = None
) -> bytes:
    """
    Fetch the status page with a single GET request.

    The whole exchange (connect, headers and body) runs under one deadline
    of ``timeout`` seconds; when it passes the request is cancelled
    wherever it is blocked. No retries are made.

    Args:
        url: Absolute status page URL
        timeout: Timeout in seconds for the whole request, 0 for no timeout
        client: Optional httpx async client to send the request with

    Returns:
        bytes: Response body

    Raises:
        ConnectionFailure: On DNS, connect or other transport errors
        RequestTimeout: If the request does not complete in time
        BadStatusError: If the response status is not 200
        BodyReadError: If the body cannot be read after the headers arrived
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(follow_redirects=True)

    try:
        if timeout > 0:
            return await asyncio.wait_for(_get(client, url, timeout), timeout)
        return await _get(client, url, timeout)

    except asyncio.TimeoutError as e:
        raise RequestTimeout(url, timeout, "deadline exceeded") from e

    finally:
        if owns_client:
            await client.aclose()


def fetch_status(
    url: str,
    timeout: float,
    client: Optional[httpx.AsyncClient] = None
) -> bytes:
    """
    Blocking wrapper around fetch_status_async for one-shot callers.

    Must not be called from a running event loop; await
    fetch_status_async there instead.
    """
    return asyncio.run(fetch_status_async(url, timeout, client=client))


class StatusFetcher:
    """Fetcher bound to a timeout and, optionally, an httpx async client."""

    def __init__(self, timeout: float, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize fetcher.

        Args:
            timeout: Timeout in seconds, 0 for no timeout
            client: Optional httpx async client for the request
        """
        self.timeout = timeout
        self.client = client

    def fetch(self, url: str) -> bytes:
        """Fetch the status page at url."""
        return fetch_status(url, self.timeout, client=self.client)
