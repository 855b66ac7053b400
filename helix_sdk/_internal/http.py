"""Transport capability and its httpx implementations."""

from collections.abc import Mapping
from typing import NamedTuple, Protocol

import httpx

from helix_sdk._version import __version__
from helix_sdk.exceptions import TransportError

DEFAULT_TIMEOUT = 30.0


class TransportResponse(NamedTuple):
    status_code: int
    headers: Mapping[str, str]
    body: bytes


class Transport(Protocol):
    """Performs one HTTP exchange.

    Implementations raise TransportError when no response was received.
    TLS, pooling and retries are their concern.
    """

    def send(
        self, method: str, uri: str, headers: Mapping[str, str], body: bytes | None
    ) -> TransportResponse: ...


class AsyncTransport(Protocol):
    async def send(
        self, method: str, uri: str, headers: Mapping[str, str], body: bytes | None
    ) -> TransportResponse: ...


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.Client:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"helix-sdk/{__version__}"},
    )


def create_async_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.AsyncClient:
    """Async counterpart of :func:`create_http_client`."""
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"helix-sdk/{__version__}"},
    )


class HttpxTransport:
    """Transport backed by a shared ``httpx.Client``."""

    def __init__(self, client: httpx.Client | None = None, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client = client or create_http_client(timeout=timeout)

    def send(
        self, method: str, uri: str, headers: Mapping[str, str], body: bytes | None
    ) -> TransportResponse:
        try:
            response = self._client.request(method, uri, headers=dict(headers), content=body)
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {uri} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {uri} failed: {e}") from e
        return TransportResponse(response.status_code, dict(response.headers), response.content)

    def close(self) -> None:
        self._client.close()


class AsyncHttpxTransport:
    """Transport backed by a shared ``httpx.AsyncClient``."""

    def __init__(
        self, client: httpx.AsyncClient | None = None, *, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self._client = client or create_async_http_client(timeout=timeout)

    async def send(
        self, method: str, uri: str, headers: Mapping[str, str], body: bytes | None
    ) -> TransportResponse:
        try:
            response = await self._client.request(
                method, uri, headers=dict(headers), content=body
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {uri} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {uri} failed: {e}") from e
        return TransportResponse(response.status_code, dict(response.headers), response.content)

    async def aclose(self) -> None:
        await self._client.aclose()
