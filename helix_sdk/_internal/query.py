"""Query string and body encoding for request values."""

import json
import math
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from helix_sdk.exceptions import EncodingError
from helix_sdk.request import FieldKind, HelixRequest, field_descriptor


def render_value(value: Any) -> str:
    """Render a single scalar as a query-safe string (before percent-encoding)."""
    if isinstance(value, Enum):
        return render_value(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodingError(f"cannot encode non-finite float {value!r}")
        return repr(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingError(f"cannot encode {value!r} as UTF-8") from e
        return value
    raise EncodingError(f"cannot encode value of type {type(value).__name__}")


def query_pairs(request: BaseModel) -> list[tuple[str, str]]:
    """Flatten a request's fields into ordered ``(key, value)`` pairs.

    Pairs follow field declaration order. Absent optional fields and empty
    repeated fields contribute nothing.
    """
    pairs: list[tuple[str, str]] = []
    for field_name, info in type(request).model_fields.items():
        descriptor = field_descriptor(request, field_name)
        if descriptor.kind is FieldKind.BODY:
            continue

        key = descriptor.name or info.alias or field_name
        value = getattr(request, field_name)

        if descriptor.kind is FieldKind.REPEATED:
            for item in value or ():
                if item is None:
                    raise EncodingError(f"{key!r} contains a null element")
                pairs.append((key, render_value(item)))
        elif value is None:
            if descriptor.kind is FieldKind.SCALAR:
                raise EncodingError(f"required parameter {key!r} is missing")
        else:
            pairs.append((key, render_value(value)))
    return pairs


def encode_query(request: BaseModel) -> str:
    """Render the percent-encoded query string, without the leading ``?``."""
    return str(httpx.QueryParams(query_pairs(request)))


def build_uri(base_url: str, request: HelixRequest) -> str:
    """Build the full request URI.

    The ``?`` is always present, so a request with no parameters renders
    as ``<base>/<path>?``.
    """
    path = request.path().lstrip("/")
    return f"{base_url.rstrip('/')}/{path}?{encode_query(request)}"


def encode_body(request: BaseModel) -> bytes | None:
    """Serialize ``Body`` fields as a JSON object, or None if the request has none."""
    body_fields = {
        name
        for name in type(request).model_fields
        if field_descriptor(request, name).kind is FieldKind.BODY
    }
    if not body_fields:
        return None

    try:
        payload = request.model_dump(
            mode="json", include=body_fields, by_alias=True, exclude_none=True
        )
    except PydanticSerializationError as e:
        raise EncodingError(f"cannot serialize request body: {e}") from e
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")
