"""Helix SDK for Python.

A typed client core for the Twitch Helix API. Call sites describe the
endpoint they want as a request value; the client checks scopes, encodes
the URI, performs the exchange and decodes the response envelope.

Public API:
    HelixClient / AsyncHelixClient - Dispatchers
    StaticCredential - Already-issued token with its scopes
    HelixRequest - Base for endpoint request models
    Response - Typed result of one dispatch

Internal (not for direct use):
    _internal.query - Query and body encoding
    _internal.envelope - Envelope parsing and status classification
    _internal.http - Transport capability and httpx implementations
"""

from helix_sdk._internal.http import (
    AsyncHttpxTransport,
    HttpxTransport,
    TransportResponse,
)
from helix_sdk._version import __version__
from helix_sdk.client import (
    AsyncHelixClient,
    EmptyPagePolicy,
    HelixClient,
    get_helix_client,
)
from helix_sdk.credentials import Credential, StaticCredential
from helix_sdk.exceptions import (
    EncodingError,
    HelixConfigError,
    HelixError,
    HttpErrorKind,
    HttpStatusError,
    ParseError,
    ScopeError,
    TransportError,
)
from helix_sdk.models import Pagination, Response
from helix_sdk.request import (
    Absentable,
    Body,
    Cursor,
    HelixRequest,
    Paginated,
    Repeated,
    Request,
    Scalar,
)
from helix_sdk.scopes import Scope, check_scopes

__all__ = [
    "__version__",
    "AsyncHelixClient",
    "AsyncHttpxTransport",
    "EmptyPagePolicy",
    "HelixClient",
    "HttpxTransport",
    "TransportResponse",
    "get_helix_client",
    "Credential",
    "StaticCredential",
    "EncodingError",
    "HelixConfigError",
    "HelixError",
    "HttpErrorKind",
    "HttpStatusError",
    "ParseError",
    "ScopeError",
    "TransportError",
    "Pagination",
    "Response",
    "Absentable",
    "Body",
    "Cursor",
    "HelixRequest",
    "Paginated",
    "Repeated",
    "Request",
    "Scalar",
    "Scope",
    "check_scopes",
]
