"""httpx-backed transports and the verb table."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, Protocol

import httpx

from .config import DEFAULT_TIMEOUT
from .exceptions import LcmapNetworkError, LcmapTimeoutError, LcmapTransportError, LcmapValidationError
from .security import sanitize_headers

logger = logging.getLogger(__name__)


class Verb(str, Enum):
    GET = "get"
    HEAD = "head"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    OPTIONS = "options"
    COPY = "copy"
    MOVE = "move"
    PATCH = "patch"

    @property
    def method(self) -> str:
        return self.value.upper()

    @classmethod
    def parse(cls, value: "Verb | str") -> "Verb":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise LcmapValidationError(f"Unsupported HTTP method: {value!r}") from None


class Transport(Protocol):
    """Sends one request; ``request`` is the fully merged request map."""

    def send(self, verb: Verb, url: str, request: Mapping[str, Any]) -> Any: ...


class AsyncTransport(Protocol):
    async def send(self, verb: Verb, url: str, request: Mapping[str, Any]) -> Any: ...


# request field -> httpx keyword
_HTTPX_FIELDS = {
    "headers": "headers",
    "params": "params",
    "query_params": "params",
    "json": "json",
    "content": "content",
    "body": "content",
    "data": "data",
    "form_params": "data",
    "files": "files",
    "cookies": "cookies",
    "timeout": "timeout",
    "follow_redirects": "follow_redirects",
    "extensions": "extensions",
}

# consumed by the transport itself
_CONTROL_FIELDS = frozenset({"debug", "coerce", "throw_exceptions", "connection_manager"})


def _httpx_kwargs(request: Mapping[str, Any]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    for key, value in request.items():
        target = _HTTPX_FIELDS.get(key)
        if target is None:
            if key not in _CONTROL_FIELDS:
                logger.debug("Ignoring request field unknown to httpx: %s", key)
            continue
        kwargs[target] = value
    return kwargs


def _log_request(verb: Verb, url: str, request: Mapping[str, Any], kwargs: Mapping[str, Any]) -> None:
    level = logging.INFO if request.get("debug") else logging.DEBUG
    if not logger.isEnabledFor(level):
        return
    logger.log(
        level,
        "%s %s headers=%s params=%s",
        verb.method,
        url,
        sanitize_headers(kwargs.get("headers")),
        kwargs.get("params"),
    )


def _check_response(verb: Verb, url: str, response: httpx.Response, request: Mapping[str, Any]) -> httpx.Response:
    logger.debug("%s %s -> %s", verb.method, url, response.status_code)
    if request.get("throw_exceptions") and response.is_error:
        raise LcmapTransportError(
            f"{verb.method} {url} failed with status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
            headers=response.headers,
        )
    return response


class HttpxTransport:
    """Synchronous transport.

    A pooled ``httpx.Client`` passed as ``connection_manager`` in the request
    is used in preference to the transport's own client.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        follow_redirects: bool = True,
        httpx_client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = httpx_client is None
        self._httpx = httpx_client or httpx.Client(
            timeout=timeout,
            follow_redirects=follow_redirects,
            trust_env=False,
        )

    def close(self) -> None:
        if self._owns_client:
            self._httpx.close()

    def send(self, verb: Verb, url: str, request: Mapping[str, Any]) -> httpx.Response:
        client = request.get("connection_manager") or self._httpx
        kwargs = _httpx_kwargs(request)
        _log_request(verb, url, request, kwargs)
        try:
            response = client.request(verb.method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise LcmapTimeoutError("Request timed out", cause=exc)
        except httpx.NetworkError as exc:
            raise LcmapNetworkError("Network error", cause=exc)
        return _check_response(verb, url, response, request)


class AsyncHttpxTransport:
    """Asynchronous transport over ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        follow_redirects: bool = True,
        httpx_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = httpx_client is None
        self._httpx = httpx_client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=follow_redirects,
            trust_env=False,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._httpx.aclose()

    async def send(self, verb: Verb, url: str, request: Mapping[str, Any]) -> httpx.Response:
        client = request.get("connection_manager") or self._httpx
        kwargs = _httpx_kwargs(request)
        _log_request(verb, url, request, kwargs)
        try:
            response = await client.request(verb.method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise LcmapTimeoutError("Request timed out", cause=exc)
        except httpx.NetworkError as exc:
            raise LcmapNetworkError("Network error", cause=exc)
        return _check_response(verb, url, response, request)
