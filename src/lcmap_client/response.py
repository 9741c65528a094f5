"""Turning raw transport responses into caller-facing values."""

from __future__ import annotations

import json
from typing import Any, Mapping, NamedTuple

from .exceptions import LcmapTransportError
from .models import NotFoundEnvelope
from .request_options import ReturnMode, coerce_return_mode


class TaggedResult(NamedTuple):
    raw: Any
    return_mode: ReturnMode


def _raw_body(raw: Any) -> str | bytes:
    if isinstance(raw, Mapping):
        return raw["body"]
    return raw.text


def parse_body(raw: Any) -> Any:
    """Decode the JSON document a response carries.

    Raises ``json.JSONDecodeError`` on malformed bodies.
    """
    return json.loads(_raw_body(raw))


def _field(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def normalize(raw: Any, return_mode: ReturnMode | str) -> Any:
    """Pick the requested piece out of a response.

    Missing keys come back as ``None``; only an undecodable body raises.
    """
    mode = coerce_return_mode(return_mode)
    if mode is ReturnMode.RAW:
        return raw
    body = _field(parse_body(raw), "body")
    if mode is ReturnMode.BODY:
        return body
    if mode is ReturnMode.RESULT:
        return _field(body, "result")
    return _field(body, "errors")


def not_found_envelope(exc: LcmapTransportError, args: Mapping[str, Any]) -> dict[str, Any]:
    envelope = NotFoundEnvelope(status=exc.status_code, result=None, headers=exc.headers).model_dump()
    envelope["args"] = dict(args)
    return envelope
