"""Adapter turning a literal query mapping into a composable query."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from querydsl.config import QuerySettings
from querydsl.errors import QueryTypeError
from querydsl.query.base import dumps


class RawQuery:
    """Wrap an already-built query body such as ``{"term": {"status": "active"}}``."""

    def __init__(self, body: Mapping[str, Any], *, settings: QuerySettings | None = None) -> None:
        if not isinstance(body, Mapping):
            raise QueryTypeError("body", body)
        self._query = dict(body)
        self._settings = settings

    def extract_raw(self) -> dict[str, Any]:
        return self._query

    get = extract_raw

    def to_text(self) -> str:
        return dumps(self._query, self._settings)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"RawQuery({self._query!r})"


__all__ = ["RawQuery"]
