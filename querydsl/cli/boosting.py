"""`querydsl-boosting` CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from typing import Any

from querydsl.cli import _common
from querydsl.errors import QueryError
from querydsl.query import BoostingQuery, RawQuery

PROG_NAME = "querydsl-boosting"
DESCRIPTION = "Build a boosting query clause and print it as JSON."

logger = logging.getLogger("querydsl.cli.boosting")


def build_parser() -> argparse.ArgumentParser:
    parser = _common.build_parser(prog=PROG_NAME, description=DESCRIPTION)
    parser.add_argument(
        "--positive",
        type=_json_object,
        required=True,
        help='Query selecting the documents to return, e.g. \'{"term": {"status": "active"}}\'.',
    )
    parser.add_argument(
        "--negative",
        type=_json_object,
        required=True,
        help="Query matching the documents to demote.",
    )
    parser.add_argument(
        "--negative-boost",
        type=float,
        required=True,
        help="Score multiplier for negative matches, between 0 and 1.",
    )
    parser.add_argument("--boost", type=float, help="Overall boost of the clause.")
    return parser


def run(args: argparse.Namespace) -> int:
    try:
        query = BoostingQuery(
            RawQuery(args.positive),
            RawQuery(args.negative),
            args.negative_boost,
            settings=args.settings,
        )
    except QueryError as exc:
        logger.error("Invalid boosting query", extra={"cli": "boosting", "error": str(exc)})
        return _common.EXIT_QUERY_ERROR

    if args.boost is not None:
        query.boost(args.boost)
    print(query.to_text())
    return _common.EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    return _common.run_cli(parser, argv, cli_name="boosting", runner=run)


def _json_object(value: str) -> dict[str, Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("expected a JSON object")
    return parsed


if __name__ == "__main__":  # pragma: no cover - manual execution guard
    raise SystemExit(main())


__all__ = ["build_parser", "main", "run"]
