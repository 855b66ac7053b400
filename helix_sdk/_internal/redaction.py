"""Redaction of credentials before request details reach debug output."""

from collections.abc import Mapping
from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "access_token",
    "refresh_token",
    "client_secret",
    "token",
    "secret",
    "password",
})

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` with credential values replaced.

    Matching is case-insensitive; the original mapping is never mutated.
    """
    return {
        key: REDACTED_VALUE if key.lower() in REDACT_KEYS else value
        for key, value in headers.items()
    }


def redact_payload(payload: Any) -> Any:
    """Recursively redact sensitive keys in a decoded JSON body."""
    if isinstance(payload, dict):
        result = {}
        for key, value in payload.items():
            key_lower = key.lower() if isinstance(key, str) else key
            if key_lower in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = redact_payload(value)
        return result
    elif isinstance(payload, list):
        return [redact_payload(item) for item in payload]
    else:
        return payload
