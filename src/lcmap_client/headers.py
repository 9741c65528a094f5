"""Base headers and vendor ``Accept`` media types."""

from __future__ import annotations

from .config import DEFAULT_CONTENT_TYPE, SERVER_VERSION, ClientConfig
from .version import __version__

VENDOR = "vnd.usgs.lcmap"
USER_AGENT = f"LCMAP REST Client/{__version__} (Python; httpx)"


def format_accept(vendor: str, version: str, content_type: str) -> str:
    """Build ``<media-type>/<vendor>.v<version>+<suffix>``.

    ``content_type`` is split once on its first ``/``; a bare value such as
    ``"json"`` becomes the media type and the suffix falls back to
    ``DEFAULT_CONTENT_TYPE``.
    """
    media_type, _, suffix = content_type.partition("/")
    return f"{media_type}/{vendor}.v{version}+{suffix or DEFAULT_CONTENT_TYPE}"


def get_base_headers(
    version: str | None = None,
    content_type: str | None = None,
    token: str | None = None,
    *,
    config: ClientConfig | None = None,
) -> dict[str, str]:
    version = version or (config.version if config else None) or SERVER_VERSION
    content_type = content_type or (config.content_type if config else None) or DEFAULT_CONTENT_TYPE
    return {
        "user-agent": USER_AGENT,
        "accept": format_accept(VENDOR, version, content_type),
        "x-authtoken": token or "",
    }
