"""Synchronous and asynchronous clients for the LCMAP REST API."""

from __future__ import annotations

import logging
from typing import Any, Mapping, NamedTuple

from pydantic import ValidationError

from .config import ClientConfig, load_config
from .context import ClientContext
from .exceptions import LcmapTransportError, LcmapValidationError, MissingLinkError
from .headers import get_base_headers
from .merge import combine_http_opts, deep_merge
from .models import LinkedResult
from .request_options import (
    RequestOptions,
    ReturnMode,
    coerce_return_mode,
    default_lcmap_opts,
    update_lcmap_opts,
)
from .response import TaggedResult, normalize, not_found_envelope
from .security import sanitize_headers, validate_endpoint
from .transport import AsyncHttpxTransport, AsyncTransport, HttpxTransport, Transport, Verb

logger = logging.getLogger(__name__)


def _normalize_headers(headers: Mapping[str, Any] | None) -> dict[str, str]:
    if not headers:
        return {}
    clean: dict[str, str] = {}
    for key, value in headers.items():
        clean[str(key).lower()] = str(value)
    return clean


def _extract_link(result: Any) -> str:
    try:
        linked = LinkedResult.model_validate(result)
    except ValidationError as exc:
        raise MissingLinkError("result carries no result.link.href to follow", body=result, cause=exc)
    return linked.result.link.href


class _PreparedCall(NamedTuple):
    verb: Verb
    url: str
    request: dict[str, Any]
    return_mode: ReturnMode
    args: dict[str, Any]


class _BaseLcmapClient:
    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        context: ClientContext | None = None,
    ) -> None:
        self.config = config or load_config()
        validate_endpoint(self.config.endpoint)
        self.context = context
        self.default_opts = default_lcmap_opts(self.config)

    @staticmethod
    def _path(path: str | None) -> str:
        if not isinstance(path, str):
            raise LcmapValidationError(f"Path must be a string, got {path!r}")
        if not path.startswith("/"):
            raise LcmapValidationError("Path must be absolute and start with '/'")
        if "\x00" in path:
            raise LcmapValidationError("Invalid path characters")
        return path

    def _prepare(
        self,
        method: Verb | str,
        path: str | None,
        *,
        lcmap_opts: Mapping[str, Any] | RequestOptions | None,
        http_opts: Mapping[str, Any] | None,
        request: Mapping[str, Any] | None,
        headers: Mapping[str, Any] | None,
        client: ClientContext | None,
        extra: Mapping[str, Any],
    ) -> _PreparedCall:
        verb = Verb.parse(method)
        path = self._path(path)
        opts = update_lcmap_opts(lcmap_opts, self.default_opts)
        return_mode = coerce_return_mode(opts.return_mode)
        context = client if client is not None else self.context

        token = (context.token if context is not None else None) or opts.token
        pool = context.pool if context is not None else None
        endpoint = validate_endpoint(opts.endpoint)

        base_headers = get_base_headers(opts.version, opts.content_type, token, config=self.config)
        final_request = deep_merge(
            combine_http_opts(
                http_opts,
                {"headers": deep_merge(base_headers, _normalize_headers(headers))},
                request,
                **extra,
            ),
            {
                "debug": opts.debug,
                "coerce": "always",
                "throw_exceptions": False,
                "connection_manager": pool,
            },
        )
        args = {
            "lcmap_opts": lcmap_opts,
            "http_opts": http_opts,
            "request": request,
            "headers": headers,
            "client": client,
            **extra,
        }
        return _PreparedCall(verb, endpoint + path, final_request, return_mode, args)

    def _not_found(self, exc: LcmapTransportError, call: _PreparedCall) -> TaggedResult:
        logger.error(
            "%s %s: resource not found (status %s, headers %s)",
            call.verb.method,
            call.url,
            exc.status_code,
            sanitize_headers(exc.headers),
        )
        return TaggedResult(not_found_envelope(exc, call.args), ReturnMode.RAW)


class LcmapClient(_BaseLcmapClient):
    """Synchronous client."""

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        context: ClientContext | None = None,
        transport: Transport | None = None,
    ) -> None:
        super().__init__(config=config, context=context)
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(timeout=self.config.timeout)

    def __enter__(self) -> "LcmapClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def http_call(
        self,
        method: Verb | str,
        path: str | None,
        *,
        lcmap_opts: Mapping[str, Any] | RequestOptions | None = None,
        http_opts: Mapping[str, Any] | None = None,
        request: Mapping[str, Any] | None = None,
        headers: Mapping[str, Any] | None = None,
        client: ClientContext | None = None,
        **extra: Any,
    ) -> TaggedResult:
        """Send one request and tag the raw response with its return mode.

        A transport failure with the configured not-found status comes back
        as an envelope tagged ``raw``; any other failure is raised.
        """
        call = self._prepare(
            method,
            path,
            lcmap_opts=lcmap_opts,
            http_opts=http_opts,
            request=request,
            headers=headers,
            client=client,
            extra=extra,
        )
        try:
            raw = self._transport.send(call.verb, call.url, call.request)
        except LcmapTransportError as exc:
            if exc.status_code != self.config.no_resource_status:
                raise
            return self._not_found(exc, call)
        return TaggedResult(raw, call.return_mode)

    def request(self, method: Verb | str, path: str | None, **args: Any) -> Any:
        tagged = self.http_call(method, path, **args)
        return normalize(tagged.raw, tagged.return_mode)

    def get(self, path: str | None, **args: Any) -> Any:
        return self.request(Verb.GET, path, **args)

    def head(self, path: str, **args: Any) -> Any:
        return self.request(Verb.HEAD, path, **args)

    def post(self, path: str, **args: Any) -> Any:
        return self.request(Verb.POST, path, **args)

    def put(self, path: str, **args: Any) -> Any:
        return self.request(Verb.PUT, path, **args)

    def delete(self, path: str, **args: Any) -> Any:
        return self.request(Verb.DELETE, path, **args)

    def options(self, path: str, **args: Any) -> Any:
        return self.request(Verb.OPTIONS, path, **args)

    def copy(self, path: str, **args: Any) -> Any:
        return self.request(Verb.COPY, path, **args)

    def move(self, path: str, **args: Any) -> Any:
        return self.request(Verb.MOVE, path, **args)

    def patch(self, path: str, **args: Any) -> Any:
        return self.request(Verb.PATCH, path, **args)

    def follow_link(
        self,
        client: ClientContext | None,
        result: Any,
        args: Mapping[str, Any] | None = None,
    ) -> Any:
        """GET the ``result.link.href`` of a previous result."""
        return self.get(_extract_link(result), lcmap_opts=args, client=client)


class AsyncLcmapClient(_BaseLcmapClient):
    """Asynchronous client."""

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        context: ClientContext | None = None,
        transport: AsyncTransport | None = None,
    ) -> None:
        super().__init__(config=config, context=context)
        self._owns_transport = transport is None
        self._transport = transport or AsyncHttpxTransport(timeout=self.config.timeout)

    async def __aenter__(self) -> "AsyncLcmapClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()

    async def http_call(
        self,
        method: Verb | str,
        path: str | None,
        *,
        lcmap_opts: Mapping[str, Any] | RequestOptions | None = None,
        http_opts: Mapping[str, Any] | None = None,
        request: Mapping[str, Any] | None = None,
        headers: Mapping[str, Any] | None = None,
        client: ClientContext | None = None,
        **extra: Any,
    ) -> TaggedResult:
        call = self._prepare(
            method,
            path,
            lcmap_opts=lcmap_opts,
            http_opts=http_opts,
            request=request,
            headers=headers,
            client=client,
            extra=extra,
        )
        try:
            raw = await self._transport.send(call.verb, call.url, call.request)
        except LcmapTransportError as exc:
            if exc.status_code != self.config.no_resource_status:
                raise
            return self._not_found(exc, call)
        return TaggedResult(raw, call.return_mode)

    async def request(self, method: Verb | str, path: str | None, **args: Any) -> Any:
        tagged = await self.http_call(method, path, **args)
        return normalize(tagged.raw, tagged.return_mode)

    async def get(self, path: str | None, **args: Any) -> Any:
        return await self.request(Verb.GET, path, **args)

    async def head(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.HEAD, path, **args)

    async def post(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.POST, path, **args)

    async def put(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.PUT, path, **args)

    async def delete(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.DELETE, path, **args)

    async def options(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.OPTIONS, path, **args)

    async def copy(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.COPY, path, **args)

    async def move(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.MOVE, path, **args)

    async def patch(self, path: str, **args: Any) -> Any:
        return await self.request(Verb.PATCH, path, **args)

    async def follow_link(
        self,
        client: ClientContext | None,
        result: Any,
        args: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self.get(_extract_link(result), lcmap_opts=args, client=client)
