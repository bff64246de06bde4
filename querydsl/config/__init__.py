from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "querydsl" / "config.toml"
ENV_FILE_ENV_VAR = "QUERYDSL_ENV_FILE"
CONFIG_FILE_ENV_VAR = "QUERYDSL_CONFIG_FILE"

_PATH_TO_ENV_KEY: dict[tuple[str, str], str] = {
    ("serialization", "indent"): "QUERYDSL_JSON_INDENT",
    ("serialization", "sort_keys"): "QUERYDSL_JSON_SORT_KEYS",
    ("validation", "strict_negative_boost"): "QUERYDSL_STRICT_NEGATIVE_BOOST",
}
_ENV_KEY_TO_PATH = {env_name: path for path, env_name in _PATH_TO_ENV_KEY.items()}

_SECTION_FIELDS: dict[str, set[str]] = {}
for section, field_name in _PATH_TO_ENV_KEY:
    _SECTION_FIELDS.setdefault(section, set()).add(field_name)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be loaded."""


@dataclass(frozen=True)
class SerializationConfig:
    indent: int | None = None
    sort_keys: bool = False


@dataclass(frozen=True)
class ValidationConfig:
    strict_negative_boost: bool = False


@dataclass(frozen=True)
class QuerySettings:
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)


_SETTINGS_CACHE: QuerySettings | None = None


def get_settings() -> QuerySettings:
    """Return cached settings using the default sources."""
    global _SETTINGS_CACHE
    if _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = load_settings()
    return _SETTINGS_CACHE


def reset_settings_cache() -> None:
    global _SETTINGS_CACHE
    _SETTINGS_CACHE = None


def load_settings(
    *,
    env_file: Path | str | None = None,
    config_file: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> QuerySettings:
    """Load settings from `.env`, the personal config file, and environment variables."""
    env_path = _resolve_env_file(env_file)
    config_path = _resolve_config_file(config_file)

    merged: dict[str, Any] = {}
    _deep_merge(merged, _env_mapping_to_nested(_parse_env_file(env_path)))
    _deep_merge(merged, _filter_known_sections(_read_config_file(config_path)))
    runtime_values = environ if environ is not None else os.environ
    _deep_merge(merged, _env_mapping_to_nested(runtime_values))
    return _build_settings(merged)


def doctor(*, env_file: Path | str | None = None, config_file: Path | str | None = None) -> bool:
    """Validate configuration sources and print a diagnostic summary."""
    try:
        settings = load_settings(env_file=env_file, config_file=config_file)
    except ConfigError as exc:
        print("Configuration invalid:", file=sys.stderr)
        print(f"  {exc}", file=sys.stderr)
        return False

    indent = settings.serialization.indent
    print("Configuration looks good.", file=sys.stdout)
    print(f"  JSON indent: {'compact' if indent is None else indent}", file=sys.stdout)
    print(f"  JSON sort keys: {settings.serialization.sort_keys}", file=sys.stdout)
    print(
        f"  Strict negative_boost: {settings.validation.strict_negative_boost}",
        file=sys.stdout,
    )
    return True


def resolved_sources(
    *, env_file: Path | str | None = None, config_file: Path | str | None = None
) -> tuple[Path, Path]:
    """Return the `.env` and TOML paths `load_settings` would read."""
    return _resolve_env_file(env_file), _resolve_config_file(config_file)


def _build_settings(data: Mapping[str, Any]) -> QuerySettings:
    serialization = _section(data, "serialization")
    validation = _section(data, "validation")
    return QuerySettings(
        serialization=SerializationConfig(
            indent=_parse_indent(serialization.get("indent")),
            sort_keys=_parse_bool(serialization.get("sort_keys"), "QUERYDSL_JSON_SORT_KEYS"),
        ),
        validation=ValidationConfig(
            strict_negative_boost=_parse_bool(
                validation.get("strict_negative_boost"), "QUERYDSL_STRICT_NEGATIVE_BOOST"
            ),
        ),
    )


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name)
    return section if isinstance(section, Mapping) else {}


def _parse_indent(raw_value: Any) -> int | None:
    if raw_value is None or str(raw_value).strip() == "":
        return None
    try:
        indent = int(str(raw_value).strip())
    except ValueError as exc:
        raise ConfigError(f"QUERYDSL_JSON_INDENT must be an integer, got {raw_value!r}") from exc
    if indent < 0:
        raise ConfigError(f"QUERYDSL_JSON_INDENT must not be negative, got {indent}")
    return indent


def _parse_bool(raw_value: Any, env_name: str) -> bool:
    if raw_value is None:
        return False
    if isinstance(raw_value, bool):
        return raw_value
    normalized = str(raw_value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"{env_name} must be a boolean, got {raw_value!r}")


def _resolve_env_file(explicit: Path | str | None) -> Path:
    if explicit is not None:
        return Path(explicit)
    override = os.environ.get(ENV_FILE_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_ENV_FILE


def _resolve_config_file(explicit: Path | str | None) -> Path:
    if explicit is not None:
        return Path(explicit)
    override = os.environ.get(CONFIG_FILE_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_CONFIG_FILE


def _parse_env_file(path: Path) -> dict[str, str]:
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        raise ConfigError(f"Failed to read env file {path}: {exc}") from exc

    values: dict[str, str] = {}
    for raw_line in contents.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :]
        if "=" not in line:
            continue
        key, raw_value = line.split("=", 1)
        values[key.strip()] = _strip_quotes(raw_value.strip())
    return values


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and ((value[0] == value[-1]) and value.startswith(("'", '"'))):
        return value[1:-1]
    return value


def _read_config_file(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc


def _filter_known_sections(raw: Mapping[str, Any]) -> dict[str, Any]:
    filtered: dict[str, Any] = {}
    for section, allowed_fields in _SECTION_FIELDS.items():
        raw_section = raw.get(section)
        if isinstance(raw_section, Mapping):
            filtered_section = {
                name: raw_section[name] for name in allowed_fields if name in raw_section
            }
            if filtered_section:
                filtered[section] = filtered_section
    return filtered


def _env_mapping_to_nested(mapping: Mapping[str, Any]) -> dict[str, Any]:
    nested: dict[str, Any] = {}
    for key, value in mapping.items():
        path = _ENV_KEY_TO_PATH.get(key)
        if not path:
            continue
        _assign_path(nested, path, value)
    return nested


def _assign_path(target: MutableMapping[str, Any], path: tuple[str, ...], value: Any) -> None:
    current: MutableMapping[str, Any] = target
    for component in path[:-1]:
        next_value = current.get(component)
        if not isinstance(next_value, MutableMapping):
            next_value = {}
            current[component] = next_value
        current = next_value
    current[path[-1]] = value


def _deep_merge(target: MutableMapping[str, Any], data: Mapping[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, Mapping):
            child = target.get(key)
            if not isinstance(child, MutableMapping):
                child = {}
                target[key] = child
            _deep_merge(child, value)
        elif value is not None:
            target[key] = value


__all__ = [
    "ConfigError",
    "QuerySettings",
    "SerializationConfig",
    "ValidationConfig",
    "doctor",
    "get_settings",
    "load_settings",
    "reset_settings_cache",
    "resolved_sources",
]
