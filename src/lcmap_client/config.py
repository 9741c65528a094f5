"""Process-wide configuration for the LCMAP client."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ENDPOINT = "http://localhost:1077"
SERVER_VERSION = "0.5"
DEFAULT_CONTENT_TYPE = "json"
DEFAULT_TIMEOUT = 30.0
NO_RESOURCE_STATUS = 404


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


@dataclass(frozen=True)
class ClientConfig:
    """Settings read once at startup and handed to each client.

    ``version`` and ``content_type`` feed the vendor ``Accept`` header;
    ``no_resource_status`` is the status recovered into a not-found envelope
    instead of being raised.
    """

    endpoint: str = DEFAULT_ENDPOINT
    version: str = SERVER_VERSION
    content_type: str = DEFAULT_CONTENT_TYPE
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    no_resource_status: int = NO_RESOURCE_STATUS

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            endpoint=os.getenv("LCMAP_ENDPOINT", cls.endpoint),
            version=os.getenv("LCMAP_VERSION", cls.version),
            content_type=os.getenv("LCMAP_CONTENT_TYPE", cls.content_type),
            token=os.getenv("LCMAP_TOKEN") or None,
            timeout=_float_env("LCMAP_TIMEOUT", cls.timeout),
            no_resource_status=_int_env("LCMAP_NO_RESOURCE_STATUS", cls.no_resource_status),
        )


def load_config() -> ClientConfig:
    """Load client settings from environment with sensible defaults."""
    return ClientConfig.from_env()
