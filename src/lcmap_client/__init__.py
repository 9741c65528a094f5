"""Python client for the LCMAP REST API."""

from .client import AsyncLcmapClient, LcmapClient
from .config import ClientConfig, load_config
from .context import ClientContext, ConnectionManager, CredentialManager, Credentials
from .exceptions import (
    LcmapError,
    LcmapNetworkError,
    LcmapTimeoutError,
    LcmapTransportError,
    LcmapValidationError,
    MissingLinkError,
    UnhandledReturnModeError,
)
from .headers import format_accept, get_base_headers
from .merge import combine_http_opts, deep_merge
from .models import ResponseEnvelope
from .request_options import RequestOptions, ReturnMode, update_lcmap_opts
from .response import TaggedResult, normalize
from .transport import AsyncHttpxTransport, HttpxTransport, Verb
from .version import __version__

__all__ = [
    "AsyncHttpxTransport",
    "AsyncLcmapClient",
    "ClientConfig",
    "ClientContext",
    "ConnectionManager",
    "CredentialManager",
    "Credentials",
    "HttpxTransport",
    "LcmapClient",
    "LcmapError",
    "LcmapNetworkError",
    "LcmapTimeoutError",
    "LcmapTransportError",
    "LcmapValidationError",
    "MissingLinkError",
    "RequestOptions",
    "ResponseEnvelope",
    "ReturnMode",
    "TaggedResult",
    "UnhandledReturnModeError",
    "Verb",
    "__version__",
    "combine_http_opts",
    "deep_merge",
    "format_accept",
    "get_base_headers",
    "load_config",
    "normalize",
    "update_lcmap_opts",
]
