"""Client-specific exceptions."""

from __future__ import annotations

from typing import Mapping


class LcmapError(Exception):
    """Base exception for all LCMAP client failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: object = None,
        headers: Mapping[str, str] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.headers = dict(headers) if headers is not None else {}
        self.cause = cause

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        if self.status_code is None:
            return str(self.args[0])
        return f"{self.status_code}: {self.args[0]}"


class LcmapValidationError(LcmapError):
    """Raised when caller input cannot be turned into a request."""


class UnhandledReturnModeError(LcmapValidationError):
    """Raised when a return mode other than raw, body, result or errors is requested."""


class MissingLinkError(LcmapValidationError):
    """Raised when a result carries no ``result.link.href`` to follow."""


class LcmapTransportError(LcmapError):
    """Raised when the underlying HTTP transport reports a failure."""


class LcmapNetworkError(LcmapTransportError):
    """Raised for transport-level failures like DNS and TCP errors."""


class LcmapTimeoutError(LcmapTransportError):
    """Raised when a request exceeds configured timeout."""
