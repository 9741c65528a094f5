"""Per-request options for the LCMAP clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping

from .config import DEFAULT_ENDPOINT, ClientConfig
from .exceptions import UnhandledReturnModeError
from .merge import deep_merge, drop_none

logger = logging.getLogger(__name__)


class ReturnMode(str, Enum):
    """What a call hands back: the raw response or a piece of its JSON body."""

    RAW = "raw"
    BODY = "body"
    RESULT = "result"
    ERRORS = "errors"


_KEY_ALIASES = {
    "content-type": "content_type",
    "return": "return_mode",
}


@dataclass(frozen=True)
class RequestOptions:
    endpoint: str = DEFAULT_ENDPOINT
    version: str | None = None
    content_type: str | None = None
    return_mode: ReturnMode | str = ReturnMode.BODY
    debug: bool = False
    token: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        values = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        values.update(self.extra)
        return values

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "RequestOptions":
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs = {key: value for key, value in values.items() if key in known}
        extra = {key: value for key, value in values.items() if key not in known}
        return cls(extra=extra, **kwargs)


def _normalize_key(key: str) -> str:
    return _KEY_ALIASES.get(key, key.replace("-", "_"))


def coerce_return_mode(value: ReturnMode | str) -> ReturnMode:
    try:
        return ReturnMode(value)
    except ValueError:
        raise UnhandledReturnModeError(f"Unsupported return mode: {value!r}") from None


def default_lcmap_opts(config: ClientConfig | None = None) -> RequestOptions:
    config = config or ClientConfig()
    return RequestOptions(endpoint=config.endpoint, token=config.token)


def update_lcmap_opts(
    overrides: Mapping[str, Any] | RequestOptions | None = None,
    defaults: RequestOptions | None = None,
) -> RequestOptions:
    """Layer ``overrides`` onto ``defaults``.

    ``None`` values are dropped before merging, so they never clear a
    default. Keys are accepted in either ``content_type`` or ``content-type``
    form; ``return`` is an alias for ``return_mode``. Keys that are not
    option fields are kept in ``RequestOptions.extra``.
    """
    base = defaults or RequestOptions()
    if isinstance(overrides, RequestOptions):
        overrides = overrides.as_dict()
    cleaned = {_normalize_key(str(key)): value for key, value in drop_none(overrides).items()}
    merged = RequestOptions.from_dict(deep_merge(base.as_dict(), cleaned))
    logger.debug("lcmap options: %s", {**merged.as_dict(), "token": "[REDACTED]" if merged.token else None})
    return merged
