from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

import querydsl.config as querydsl_config
from querydsl.query import RawQuery

SETTINGS_ENV_KEYS = (
    "QUERYDSL_JSON_INDENT",
    "QUERYDSL_JSON_SORT_KEYS",
    "QUERYDSL_STRICT_NEGATIVE_BOOST",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for key in SETTINGS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv(querydsl_config.ENV_FILE_ENV_VAR, str(tmp_path / "missing.env"))
    monkeypatch.setenv(querydsl_config.CONFIG_FILE_ENV_VAR, str(tmp_path / "missing.toml"))
    querydsl_config.reset_settings_cache()
    try:
        yield
    finally:
        querydsl_config.reset_settings_cache()


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


@pytest.fixture()
def active_query() -> RawQuery:
    return RawQuery({"term": {"status": "active"}})


@pytest.fixture()
def spam_query() -> RawQuery:
    return RawQuery({"term": {"flag": "spam"}})
