"""Builder for the ``boosting`` compound query.

A boosting query keeps every document matched by its ``positive`` query but
multiplies the score of those also matching ``negative`` by ``negative_boost``.
Unlike a ``must_not`` clause in a bool query, the unwanted documents stay in
the result set, only further down.
"""

from __future__ import annotations

import logging
from typing import Any, NotRequired, TypedDict, overload

from querydsl.config import QuerySettings
from querydsl.errors import NegativeBoostRangeError
from querydsl.query.base import DEFAULT_SETTINGS, JSONValue, Query, dumps, extract

logger = logging.getLogger(__name__)


class BoostingBody(TypedDict):
    positive: JSONValue
    negative: JSONValue
    negative_boost: float
    boost: NotRequired[float]


class BoostingClause(TypedDict):
    boosting: BoostingBody


class BoostingQuery:
    """Fluent builder for one boosting clause.

    Each field accessor is a getter when called without a value (or with
    ``None``) and a setter returning the builder otherwise, so calls chain::

        query = BoostingQuery(positive, negative, 0.2).boost(2.0)
    """

    def __init__(
        self,
        positive_query: Query,
        negative_query: Query,
        negative_boost: float,
        *,
        settings: QuerySettings | None = None,
    ) -> None:
        self._settings = settings
        self._check_negative_boost(negative_boost)
        self._query: BoostingClause = {
            "boosting": {
                "positive": extract("positive", positive_query),
                "negative": extract("negative", negative_query),
                "negative_boost": negative_boost,
            }
        }

    @property
    def settings(self) -> QuerySettings:
        return self._settings or DEFAULT_SETTINGS

    @overload
    def positive(self, query: None = None) -> JSONValue: ...

    @overload
    def positive(self, query: Query) -> BoostingQuery: ...

    def positive(self, query: Query | None = None) -> JSONValue | BoostingQuery:
        """Set the query that selects which documents are returned."""
        if query is None:
            return self._query["boosting"]["positive"]

        self._query["boosting"]["positive"] = extract("positive", query)
        logger.debug("boosting.positive replaced")
        return self

    @overload
    def negative(self, query: None = None) -> JSONValue: ...

    @overload
    def negative(self, query: Query) -> BoostingQuery: ...

    def negative(self, query: Query | None = None) -> JSONValue | BoostingQuery:
        """Set the query matching the documents within the positive results to demote."""
        if query is None:
            return self._query["boosting"]["negative"]

        self._query["boosting"]["negative"] = extract("negative", query)
        logger.debug("boosting.negative replaced")
        return self

    @overload
    def negative_boost(self, value: None = None) -> float: ...

    @overload
    def negative_boost(self, value: float) -> BoostingQuery: ...

    def negative_boost(self, value: float | None = None) -> float | BoostingQuery:
        """Set the factor applied to negative matches, expected to satisfy ``0 < n < 1``."""
        if value is None:
            return self._query["boosting"]["negative_boost"]

        self._check_negative_boost(value)
        self._query["boosting"]["negative_boost"] = value
        logger.debug("boosting.negative_boost set", extra={"negative_boost": value})
        return self

    @overload
    def boost(self, value: None = None) -> float | None: ...

    @overload
    def boost(self, value: float) -> BoostingQuery: ...

    def boost(self, value: float | None = None) -> float | None | BoostingQuery:
        """Set the overall boost of the clause. Unset boosts are left out of the output."""
        if value is None:
            return self._query["boosting"].get("boost")

        self._query["boosting"]["boost"] = value
        logger.debug("boosting.boost set", extra={"boost": value})
        return self

    def extract_raw(self) -> dict[str, Any]:
        """Return the live clause mapping for composition into a parent query.

        The mapping is shared, not copied: changes made through it show up in
        this builder and the other way round.
        """
        return self._query  # type: ignore[return-value]

    get = extract_raw

    def to_text(self) -> str:
        return dumps(self.extract_raw(), self.settings)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"BoostingQuery({self._query['boosting']!r})"

    def _check_negative_boost(self, value: float) -> None:
        if 0 < value < 1:
            return
        if self.settings.validation.strict_negative_boost:
            raise NegativeBoostRangeError(value)
        logger.warning(
            "negative_boost outside (0, 1)",
            extra={"negative_boost": value},
        )


__all__ = ["BoostingBody", "BoostingClause", "BoostingQuery"]
