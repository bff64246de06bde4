from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import doctor, resolved_sources


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Configuration utilities for querydsl.")
    subparsers = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("doctor", "Validate configuration sources."),
        ("paths", "Show which .env and config.toml files are read."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--env-file", type=Path, help="Path to the .env file to read.")
        sub.add_argument(
            "--config-file", type=Path, help="Path to the user config file (config.toml)."
        )

    args = parser.parse_args(argv)
    if args.command == "doctor":
        success = doctor(env_file=args.env_file, config_file=args.config_file)
        return 0 if success else 1
    if args.command == "paths":
        env_path, config_path = resolved_sources(
            env_file=args.env_file, config_file=args.config_file
        )
        exists = {True: "found", False: "missing"}
        print(f"env file: {env_path} ({exists[env_path.is_file()]})")
        print(f"config file: {config_path} ({exists[config_path.is_file()]})")
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
