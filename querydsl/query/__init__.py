"""Composable query builders for the search DSL."""

from __future__ import annotations

from querydsl.query.base import JSONValue, Query
from querydsl.query.boosting import BoostingQuery
from querydsl.query.raw import RawQuery

__all__ = [
    "BoostingQuery",
    "JSONValue",
    "Query",
    "RawQuery",
]
