"""Redaction of credentials in request descriptions and log output."""

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

REDACT_KEYS: frozenset[str] = frozenset({
    "accesstoken",
    "access_token",
    "password",
    "secret_key",
    "secretkey",
    "access_key",
    "spas-accesskey",
    "spas-signature",
    "authorization",
    "token",
})

REDACTED_VALUE = "[REDACTED]"


def redact_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Recursively redact sensitive keys from a payload.

    Creates a deep copy - the original payload is never mutated.

    Args:
        payload: The dictionary to redact sensitive values from (headers,
            query params, form bodies).

    Returns:
        A new dictionary with sensitive values replaced by "[REDACTED]".
    """
    return _redact_recursive(payload)


def redact_url(url: str) -> str:
    """Redact sensitive query parameters of a URL.

    Args:
        url: Absolute or relative URL, possibly with a query string.

    Returns:
        The URL with sensitive parameter values replaced by "[REDACTED]".
        URLs without a query string are returned unchanged.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url

    pairs = [
        (key, REDACTED_VALUE if key.lower() in REDACT_KEYS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(pairs, safe="[]")))


def _redact_recursive(obj: Any) -> Any:
    """Recursively redact sensitive keys."""
    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            key_lower = key.lower() if isinstance(key, str) else key
            if key_lower in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = _redact_recursive(value)
        return result
    elif isinstance(obj, list):
        return [_redact_recursive(item) for item in obj]
    else:
        return obj
