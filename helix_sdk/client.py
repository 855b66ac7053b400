"""Helix API client: scope check, URI encoding, dispatch and paging."""

import json
import os
import sys
from collections.abc import AsyncIterator, Iterator
from enum import Enum
from typing import Any

from helix_sdk._internal.envelope import parse_response
from helix_sdk._internal.http import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
)
from helix_sdk._internal.query import build_uri, encode_body
from helix_sdk._internal.redaction import redact_headers, redact_payload
from helix_sdk.credentials import Credential
from helix_sdk.models.response import Response
from helix_sdk.request import Cursor, HelixRequest, Paginated
from helix_sdk.scopes import check_scopes

DEFAULT_BASE_URL = "https://api.twitch.tv/helix/"
DEFAULT_TIMEOUT_MS = 30000


class EmptyPagePolicy(str, Enum):
    """What to do with a page that has no items but still carries a cursor."""

    STOP = "stop"
    CONTINUE_ONCE = "continue_once"


class _PageGuard:
    """Decides whether a multi-page walk fetches another page."""

    def __init__(self, policy: EmptyPagePolicy) -> None:
        self._policy = policy
        self._empty_streak = 0

    def should_continue(self, sent_cursor: Cursor | None, response: Response[Any]) -> bool:
        if response.cursor is None:
            return False
        # Server echoed the cursor back; following it would loop forever.
        if response.cursor == sent_cursor:
            return False
        if _page_items(response):
            self._empty_streak = 0
            return True
        self._empty_streak += 1
        if self._policy is EmptyPagePolicy.STOP:
            return False
        return self._empty_streak < 2


def _page_items(response: Response[Any]) -> list[Any]:
    if isinstance(response.data, list):
        return response.data
    return [response.data]


class _BaseHelixClient:
    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        strict: bool = False,
        empty_page_policy: EmptyPagePolicy = EmptyPagePolicy.CONTINUE_ONCE,
        debug: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Helix API root; request paths are appended to it.
            timeout_ms: Timeout for the default transport, in milliseconds.
            strict: Reject unknown fields in response envelopes and items.
            empty_page_policy: How multi-page walks treat empty pages.
            debug: Enable debug logging to stderr.
        """
        self._base_url = base_url
        self._timeout_ms = timeout_ms
        self._strict = strict
        self._empty_page_policy = empty_page_policy
        self._debug = debug

    @classmethod
    def from_env(cls, **kwargs: Any) -> Any:
        """Create a client from environment variables.

        Optional environment variables:
            HELIX_BASE_URL: API root (default: https://api.twitch.tv/helix/).
            HELIX_TIMEOUT_MS: Request timeout in milliseconds.
            HELIX_STRICT: Set to "1" to reject unknown response fields.
            HELIX_DEBUG: Set to "1" to enable debug logging.

        Keyword arguments (e.g. ``transport``) are passed to the constructor.
        """
        base_url = os.environ.get("HELIX_BASE_URL") or DEFAULT_BASE_URL
        timeout_ms = int(os.environ.get("HELIX_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        strict = os.environ.get("HELIX_STRICT", "") == "1"
        debug = os.environ.get("HELIX_DEBUG", "") == "1"

        return cls(
            base_url=base_url,
            timeout_ms=timeout_ms,
            strict=strict,
            debug=debug,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def strict(self) -> bool:
        return self._strict

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[helix-sdk] {message}", file=sys.stderr)

    def build_uri(self, request: HelixRequest) -> str:
        """Full request URI, e.g. ``https://api.twitch.tv/helix/games?id=493057``."""
        return build_uri(self._base_url, request)

    def build_headers(self, credential: Credential, *, has_body: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {credential.bearer_token()}",
            "Client-Id": credential.client_id(),
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _prepare(
        self, request: HelixRequest, credential: Credential
    ) -> tuple[str, str, dict[str, str], bytes | None]:
        """Validate scopes and encode; everything that happens before the wire."""
        check_scopes(request.required_scopes(), credential.granted_scopes())
        uri = self.build_uri(request)
        body = encode_body(request)
        headers = self.build_headers(credential, has_body=body is not None)

        if self._debug:
            self._log_debug(f"{request.method()} {uri} headers={redact_headers(headers)}")
            if body is not None:
                self._log_debug(f"body={redact_payload(json.loads(body))}")
        return request.method(), uri, headers, body

    def _finish(
        self, request: HelixRequest, status_code: int, headers: Any, body: bytes
    ) -> Response[Any]:
        self._log_debug(f"{request.method()} {request.path()} -> {status_code} ({len(body)} bytes)")
        return parse_response(request, status_code, headers, body, strict=self._strict)

    def _start_walk(
        self, request: HelixRequest, credential: Credential
    ) -> tuple[HelixRequest, _PageGuard]:
        check_scopes(request.required_scopes(), credential.granted_scopes())
        return request.model_copy(deep=True), _PageGuard(self._empty_page_policy)


class HelixClient(_BaseHelixClient):
    """Synchronous Helix client.

    Holds no response cache and performs no retries: a failed exchange
    surfaces immediately as an exception. Retry policy belongs to the
    injected transport.

    Example:
        client = HelixClient()
        credential = StaticCredential(access_token="...", client="...")
        games = client.dispatch(GetGamesRequest(id=["493057"]), credential).data
    """

    def __init__(self, *, transport: Transport | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._transport = transport or HttpxTransport(timeout=self._timeout_ms / 1000)

    def __enter__(self) -> "HelixClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def dispatch(self, request: HelixRequest, credential: Credential) -> Response[Any]:
        """Perform one request and return its typed response.

        Raises:
            ScopeError: The credential lacks a required scope (no request is sent).
            EncodingError: A field could not be encoded (no request is sent).
            TransportError: The transport failed.
            HttpStatusError: The API answered with a non-2xx status.
            ParseError: The body did not match the expected shape.
        """
        method, uri, headers, body = self._prepare(request, credential)
        status_code, response_headers, response_body = self._transport.send(
            method, uri, headers, body
        )
        return self._finish(request, status_code, response_headers, response_body)

    def next_page(self, response: Response[Any], credential: Credential) -> Response[Any] | None:
        """Dispatch the page following ``response``, or return None if it was the last."""
        next_request = response.next_request()
        if next_request is None:
            return None
        return self.dispatch(next_request, credential)

    def dispatch_all_pages(self, request: HelixRequest, credential: Credential) -> Iterator[Any]:
        """Lazily yield every item across all pages, in API order.

        Scopes are checked immediately. Pages are fetched one at a time as
        the caller iterates; abandoning the iterator stops further requests.
        ``request`` itself is never mutated, so each call starts over.
        """
        page_request, guard = self._start_walk(request, credential)
        return self._walk_pages(page_request, credential, guard)

    def _walk_pages(
        self, page_request: HelixRequest, credential: Credential, guard: _PageGuard
    ) -> Iterator[Any]:
        sent_cursor: Cursor | None = None
        while True:
            response = self.dispatch(page_request, credential)
            yield from _page_items(response)

            if not isinstance(page_request, Paginated):
                return
            if not guard.should_continue(sent_cursor, response):
                return
            sent_cursor = response.cursor
            page_request.set_pagination(sent_cursor)


class AsyncHelixClient(_BaseHelixClient):
    """Asynchronous Helix client with the same contract as :class:`HelixClient`."""

    def __init__(self, *, transport: AsyncTransport | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._transport = transport or AsyncHttpxTransport(timeout=self._timeout_ms / 1000)

    async def __aenter__(self) -> "AsyncHelixClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def dispatch(self, request: HelixRequest, credential: Credential) -> Response[Any]:
        method, uri, headers, body = self._prepare(request, credential)
        status_code, response_headers, response_body = await self._transport.send(
            method, uri, headers, body
        )
        return self._finish(request, status_code, response_headers, response_body)

    async def next_page(
        self, response: Response[Any], credential: Credential
    ) -> Response[Any] | None:
        next_request = response.next_request()
        if next_request is None:
            return None
        return await self.dispatch(next_request, credential)

    def dispatch_all_pages(
        self, request: HelixRequest, credential: Credential
    ) -> AsyncIterator[Any]:
        """Async generator over every item across all pages; see HelixClient."""
        page_request, guard = self._start_walk(request, credential)
        return self._walk_pages(page_request, credential, guard)

    async def _walk_pages(
        self, page_request: HelixRequest, credential: Credential, guard: _PageGuard
    ) -> AsyncIterator[Any]:
        sent_cursor: Cursor | None = None
        while True:
            response = await self.dispatch(page_request, credential)
            for item in _page_items(response):
                yield item

            if not isinstance(page_request, Paginated):
                return
            if not guard.should_continue(sent_cursor, response):
                return
            sent_cursor = response.cursor
            page_request.set_pagination(sent_cursor)


def get_helix_client(**kwargs: Any) -> HelixClient:
    """Get a HelixClient configured from environment variables.

    Returns:
        A configured HelixClient instance.
    """
    return HelixClient.from_env(**kwargs)
