"""Utilities shared by CLI entrypoints."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, cast

from querydsl.config import ConfigError, load_settings
from querydsl.logging import configure_logging

if TYPE_CHECKING:
    from querydsl.config import QuerySettings


EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_QUERY_ERROR = 3

_LOG_LEVEL_CHOICES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")
_LOG_FORMAT_CHOICES = ("text", "json")
_LOG_DESTINATION_CHOICES = ("auto", "stdout", "stderr")


CliRunner = Callable[[argparse.Namespace], int]


class CLIArgs(argparse.Namespace):
    log_level: str
    log_format: str
    log_destination: str
    config: Path | None
    env_file: Path | None
    settings: QuerySettings


def build_parser(*, prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML configuration file overriding defaults.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Optional .env file with QUERYDSL_* settings.",
    )
    parser.add_argument(
        "--log-level",
        type=_choice_type("log level", _LOG_LEVEL_CHOICES, str.upper),
        choices=_LOG_LEVEL_CHOICES,
        default="WARNING",
        help="Logging verbosity (case-insensitive).",
    )
    parser.add_argument(
        "--log-format",
        type=_choice_type("log format", _LOG_FORMAT_CHOICES, str.lower),
        choices=_LOG_FORMAT_CHOICES,
        default="text",
        help="Structured JSON or human-readable text logs.",
    )
    parser.add_argument(
        "--log-destination",
        type=_choice_type("log destination", _LOG_DESTINATION_CHOICES, str.lower),
        choices=_LOG_DESTINATION_CHOICES,
        default="stderr",
        help="Write logs to stdout, stderr, or split automatically by level.",
    )
    return parser


def run_cli(
    parser: argparse.ArgumentParser,
    argv: Sequence[str] | None,
    *,
    cli_name: str,
    runner: CliRunner,
) -> int:
    args = cast(CLIArgs, parser.parse_args(argv))
    configure_logging(
        level=args.log_level,
        fmt=args.log_format,
        destination=args.log_destination,
    )
    logger = logging.getLogger(f"querydsl.cli.{cli_name}")
    try:
        settings = load_settings(env_file=args.env_file, config_file=args.config)
    except ConfigError as exc:
        logger.error(
            "Configuration invalid",
            extra={"cli": cli_name, "error": str(exc)},
        )
        return EXIT_CONFIG_ERROR

    args.settings = settings
    logger.debug("Settings loaded", extra={"cli": cli_name})
    return runner(args)


def _choice_type(
    label: str, choices: Sequence[str], normalize: Callable[[str], str]
) -> Callable[[str], str]:
    def convert(value: str) -> str:
        normalized = normalize(value)
        if normalized not in choices:
            raise argparse.ArgumentTypeError(
                f"Invalid {label} '{value}'. Expected one of: {', '.join(choices)}"
            )
        return normalized

    return convert


__all__ = [
    "EXIT_CONFIG_ERROR",
    "EXIT_OK",
    "EXIT_QUERY_ERROR",
    "CliRunner",
    "build_parser",
    "run_cli",
]
