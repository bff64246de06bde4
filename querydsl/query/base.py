"""Shared pieces of the query builders."""

from __future__ import annotations

import json
from typing import Any, Protocol, TypeAlias, runtime_checkable

from querydsl.config import QuerySettings
from querydsl.errors import QueryTypeError

JSONValue: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None

# Used when no settings are passed: compact output in insertion order.
DEFAULT_SETTINGS = QuerySettings()


@runtime_checkable
class Query(Protocol):
    """Anything that can hand over its raw, JSON-compatible structure."""

    def extract_raw(self) -> JSONValue: ...


def extract(field: str, query: object) -> JSONValue:
    """Return the raw structure of ``query`` or fail with `QueryTypeError`."""
    if not isinstance(query, Query):
        raise QueryTypeError(field, query)
    return query.extract_raw()


def dumps(raw: JSONValue, settings: QuerySettings | None = None) -> str:
    resolved = settings or DEFAULT_SETTINGS
    indent = resolved.serialization.indent
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(
        raw,
        indent=indent,
        separators=separators,
        sort_keys=resolved.serialization.sort_keys,
    )


__all__ = ["DEFAULT_SETTINGS", "JSONValue", "Query", "dumps", "extract"]
