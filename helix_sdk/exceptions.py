"""Public exceptions for the Helix SDK."""

from enum import Enum


class HelixError(Exception):
    """Base exception for all Helix SDK errors."""


class HelixConfigError(HelixError):
    """Configuration error (missing env vars, invalid config)."""


class EncodingError(HelixError):
    """A request field could not be rendered into the query string or body."""


class ScopeError(HelixError):
    """The credential lacks scopes required by the request.

    Raised before any network activity.
    """

    def __init__(self, missing: frozenset) -> None:
        self.missing = frozenset(missing)
        names = ", ".join(sorted(str(getattr(s, "value", s)) for s in self.missing))
        super().__init__(f"missing required scopes: {names}")


class TransportError(HelixError):
    """The injected transport failed (timeout, connection refused, TLS)."""


class HttpErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    OTHER = "other"


class HttpStatusError(HelixError):
    """Non-2xx response from the Helix API."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        kind: HttpErrorKind = HttpErrorKind.OTHER,
        body: bytes = b"",
        retry_after: float | None = None,
        error: str | None = None,
        api_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.kind = kind
        self.body = body
        self.retry_after = retry_after
        self.error = error
        self.api_message = api_message


class ParseError(HelixError):
    """Response body could not be decoded into the expected envelope or items."""
