"""Endpoint validation and header redaction."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlparse

from .exceptions import LcmapValidationError

SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "x-authtoken",
}


def sanitize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, str] = {}
    for key, value in (headers or {}).items():
        if str(key).lower() in SENSITIVE_HEADERS and value:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def validate_endpoint(url: str) -> str:
    """Validate an API endpoint and return it unchanged."""
    if not url or "\x00" in url:
        raise LcmapValidationError("Invalid endpoint")
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise LcmapValidationError("endpoint must include scheme and host")
    if parsed.scheme not in {"http", "https"}:
        raise LcmapValidationError(f"Unsupported endpoint scheme: {parsed.scheme}")
    return url
