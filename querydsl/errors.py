"""Exceptions raised by the query builders."""

from __future__ import annotations


class QueryError(Exception):
    """Base class for query construction errors."""


class QueryTypeError(QueryError, TypeError):
    """Raised when a value cannot be used as a sub-query."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(
            f"{field} expects a query exposing extract_raw(), got {type(value).__name__}"
        )
        self.field = field


class NegativeBoostRangeError(QueryError, ValueError):
    """Raised in strict mode when negative_boost falls outside (0, 1)."""

    def __init__(self, value: float) -> None:
        super().__init__(f"negative_boost must be between 0 and 1 (exclusive), got {value!r}")
        self.value = value


__all__ = [
    "NegativeBoostRangeError",
    "QueryError",
    "QueryTypeError",
]
