"""Command-line access to the LCMAP REST API."""

from __future__ import annotations

import argparse
import dataclasses
import json
from typing import Any, Mapping, Sequence

from .client import LcmapClient
from .config import load_config
from .exceptions import LcmapError
from .log import setup_logging
from .request_options import ReturnMode
from .transport import Verb


def _key_values(pairs: Sequence[str], flag: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"{flag} expects KEY=VALUE, got {pair!r}")
        parsed[key] = value
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lcmap-client")
    parser.add_argument("method", choices=[verb.value for verb in Verb])
    parser.add_argument("path")
    parser.add_argument("--endpoint")
    parser.add_argument("--api-version", dest="version")
    parser.add_argument("--content-type")
    parser.add_argument("--token")
    parser.add_argument(
        "--return",
        dest="return_mode",
        choices=[mode.value for mode in ReturnMode],
    )
    parser.add_argument("--header", action="append", default=[])
    parser.add_argument("--query", action="append", default=[])
    parser.add_argument("--json", dest="json_body")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--log-level")
    return parser


def _render(value: Any) -> str:
    if hasattr(value, "status_code") and hasattr(value, "text"):
        return f"{value.status_code}\n{value.text}"
    return json.dumps(value, indent=2, default=str)


def _default_return_mode(method: str) -> str:
    # HEAD responses carry no body to decode
    if method == Verb.HEAD.value:
        return ReturnMode.RAW.value
    return ReturnMode.BODY.value


def _has_errors(value: Any) -> bool:
    return isinstance(value, Mapping) and bool(value.get("errors"))


def _main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        headers = _key_values(args.header, "--header")
        query = _key_values(args.query, "--query")
        body = json.loads(args.json_body) if args.json_body is not None else None
    except (argparse.ArgumentTypeError, json.JSONDecodeError) as exc:
        parser.error(str(exc))

    request: dict[str, Any] = {}
    if query:
        request["params"] = query
    if body is not None:
        request["json"] = body

    config = load_config()
    if args.endpoint:
        config = dataclasses.replace(config, endpoint=args.endpoint)

    lcmap_opts = {
        "endpoint": args.endpoint,
        "version": args.version,
        "content_type": args.content_type,
        "token": args.token,
        "return_mode": args.return_mode or _default_return_mode(args.method),
        "debug": args.debug,
    }
    try:
        with LcmapClient(config=config) as client:
            value = client.request(
                args.method,
                args.path,
                lcmap_opts=lcmap_opts,
                headers=headers,
                request=request,
            )
    except LcmapError as exc:
        print(f"Request failed: {exc}")
        return 1
    except json.JSONDecodeError as exc:
        print(f"Response is not valid JSON: {exc}")
        return 1

    print(_render(value))
    if _has_errors(value):
        return 2
    return 0


def main() -> None:
    raise SystemExit(_main())
