"""Response envelope parsing and HTTP status classification.

A successful Helix body looks like::

    {"data": [...], "pagination": {"cursor": "..."}, "total": 12}

Items are validated one by one against the request's item model. Any
failure rejects the whole response; partial results are never returned.
"""

import json
import math
import time
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from types import UnionType
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationError

from helix_sdk.exceptions import HttpErrorKind, HttpStatusError, ParseError
from helix_sdk.models.response import Pagination, Response
from helix_sdk.request import Cursor, HelixRequest

ENVELOPE_FIELDS = frozenset({"data", "pagination", "total"})
_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


class Envelope(BaseModel):
    """Untyped envelope; ``data`` items are validated separately."""

    model_config = ConfigDict(extra="allow")

    data: list[Any]
    pagination: Pagination | None = None
    total: int | None = None


class StrictPagination(Pagination):
    model_config = ConfigDict(extra="forbid")


class StrictEnvelope(Envelope):
    """Envelope used in strict mode; unknown ``pagination`` keys fail validation."""

    pagination: StrictPagination | None = None  # type: ignore[assignment]


def _header(headers: Mapping[str, str], name: str) -> str | None:
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _finite_float(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_retry_after(headers: Mapping[str, str]) -> float | None:
    """Seconds to wait before retrying, if the server said so.

    Reads ``Retry-After`` (delta-seconds or HTTP-date) and falls back to
    the ``Ratelimit-Reset`` epoch timestamp sent by Helix. Non-finite
    numbers such as ``inf`` or ``nan`` are ignored.
    """
    retry_after = _header(headers, "Retry-After")
    if retry_after is not None:
        seconds = _finite_float(retry_after)
        if seconds is not None:
            return max(0.0, seconds)
        try:
            when = parsedate_to_datetime(retry_after)
        except (TypeError, ValueError):
            when = None
        if when is not None:
            if when.tzinfo is None:
                when = when.replace(tzinfo=UTC)
            return max(0.0, (when - datetime.now(UTC)).total_seconds())

    reset = _header(headers, "Ratelimit-Reset")
    if reset is not None:
        epoch = _finite_float(reset)
        if epoch is not None:
            return max(0.0, epoch - time.time())
    return None


def classify_status(
    status_code: int, headers: Mapping[str, str], body: bytes
) -> HttpStatusError | None:
    """Map a non-2xx status to an HttpStatusError; None for success."""
    if status_code >= 200 and status_code < 300:
        return None

    error: str | None = None
    api_message: str | None = None
    try:
        decoded = json.loads(body) if body else None
    except ValueError:
        decoded = None
    if isinstance(decoded, dict):
        error = decoded.get("error") if isinstance(decoded.get("error"), str) else None
        api_message = (
            decoded.get("message") if isinstance(decoded.get("message"), str) else None
        )

    if status_code == 429:
        kind = HttpErrorKind.RATE_LIMITED
    elif status_code in (401, 403):
        kind = HttpErrorKind.UNAUTHORIZED
    else:
        kind = HttpErrorKind.OTHER

    message = f"HTTP {status_code}"
    if error:
        message += f" {error}"
    if api_message:
        message += f": {api_message}"

    return HttpStatusError(
        message,
        status_code=status_code,
        kind=kind,
        body=body,
        retry_after=parse_retry_after(headers) if kind is HttpErrorKind.RATE_LIMITED else None,
        error=error,
        api_message=api_message,
    )


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _matches(annotation: Any, value: Any) -> bool:
    origin = get_origin(annotation)
    if _is_model(annotation) or origin is dict:
        return isinstance(value, dict)
    return origin in _SEQUENCE_ORIGINS and isinstance(value, list)


def _unknown_fields(value: Any, annotation: Any, path: str) -> list[str]:
    """Paths of keys in ``value`` that ``annotation`` does not declare, at any depth."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _unknown_fields(value, get_args(annotation)[0], path)

    if _is_model(annotation):
        if not isinstance(value, dict):
            return []
        fields: dict[str, Any] = {}
        for name, info in annotation.model_fields.items():
            fields[name] = info.annotation
            if info.alias:
                fields[info.alias] = info.annotation
        allow_extra = annotation.model_config.get("extra") == "allow"
        found: list[str] = []
        for key, item in value.items():
            if key in fields:
                found.extend(_unknown_fields(item, fields[key], f"{path}.{key}"))
            elif not allow_extra:
                found.append(f"{path}.{key}")
        return found

    args = get_args(annotation)
    if origin in _SEQUENCE_ORIGINS and isinstance(value, list):
        inner = args[0] if args else Any
        return [
            unknown
            for index, item in enumerate(value)
            for unknown in _unknown_fields(item, inner, f"{path}[{index}]")
        ]
    if origin is dict and isinstance(value, dict):
        inner = args[1] if len(args) == 2 else Any
        return [
            unknown
            for key, item in value.items()
            for unknown in _unknown_fields(item, inner, f"{path}.{key}")
        ]
    if origin in (Union, UnionType):
        for arg in args:
            if _matches(arg, value):
                return _unknown_fields(value, arg, path)
    return []


def parse_envelope(
    body: bytes, item_model: type[BaseModel], *, strict: bool = False
) -> tuple[list[BaseModel], Cursor | None, int | None, dict[str, Any]]:
    """Decode a success body into ``(items, cursor, total, other)``.

    Args:
        body: Raw response body.
        item_model: Model each element of ``data`` is validated against.
        strict: Reject unknown envelope and item fields.

    Raises:
        ParseError: If the body, the envelope or any single item is invalid.
    """
    if not body.strip():
        return [], None, None, {}

    try:
        envelope = (StrictEnvelope if strict else Envelope).model_validate_json(body)
    except ValidationError as e:
        raise ParseError(f"invalid response envelope: {e}") from e

    other = dict(envelope.model_extra or {})
    if strict and other:
        raise ParseError(f"envelope has unknown fields: {', '.join(sorted(other))}")

    items: list[BaseModel] = []
    for index, raw in enumerate(envelope.data):
        if strict:
            unknown = _unknown_fields(raw, item_model, f"data[{index}]")
            if unknown:
                raise ParseError(f"unknown fields: {', '.join(unknown)}")
        try:
            items.append(item_model.model_validate(raw))
        except ValidationError as e:
            raise ParseError(f"data[{index}] is not a valid {item_model.__name__}: {e}") from e

    cursor = envelope.pagination.cursor if envelope.pagination else None
    return items, cursor or None, envelope.total, other


def encode_envelope(
    items: list[BaseModel], cursor: Cursor | None = None, total: int | None = None
) -> bytes:
    """Inverse of :func:`parse_envelope`, producing the Helix wire shape."""
    payload: dict[str, Any] = {
        "data": [item.model_dump(mode="json", by_alias=True) for item in items],
        "pagination": {"cursor": cursor} if cursor else {},
    }
    if total is not None:
        payload["total"] = total
    return json.dumps(payload).encode("utf-8")


def parse_response(
    request: HelixRequest,
    status_code: int,
    headers: Mapping[str, str],
    body: bytes,
    *,
    strict: bool = False,
) -> Response[Any]:
    """Classify the status, then decode the body into a typed Response."""
    error = classify_status(status_code, headers, body)
    if error is not None:
        raise error

    items, cursor, total, other = parse_envelope(body, request.response_model(), strict=strict)

    data: Any = items
    if request.single_item():
        if len(items) != 1:
            raise ParseError(
                f"expected one {request.response_model().__name__}, got {len(items)}"
            )
        data = items[0]

    return Response(data=data, cursor=cursor, total=total, other=other, request=request)
