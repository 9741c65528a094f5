"""Deep-merge helpers for layering option maps."""

from __future__ import annotations

from typing import Any, Mapping


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(value, Mapping):
            nested = dict(current) if isinstance(current, Mapping) else {}
            _merge_into(nested, value)
            target[key] = nested
        else:
            target[key] = value


def deep_merge(*maps: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge mappings left to right into a new dict.

    Nested mappings are merged recursively; any other value replaces what
    was there. ``None`` arguments are skipped and no input is mutated.
    """
    merged: dict[str, Any] = {}
    for source in maps:
        if source is None:
            continue
        _merge_into(merged, source)
    return merged


def drop_none(values: Mapping[str, Any] | None) -> dict[str, Any]:
    if not values:
        return {}
    return {key: value for key, value in values.items() if value is not None}


def combine_http_opts(
    transport_opts: Mapping[str, Any] | None,
    headers: Mapping[str, Any] | None,
    request: Mapping[str, Any] | None,
    **extra: Any,
) -> dict[str, Any]:
    """Layer transport options, a header map, request fields and trailing fields."""
    return deep_merge(transport_opts, headers, request, extra)
