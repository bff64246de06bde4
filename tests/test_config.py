from __future__ import annotations

from pathlib import Path

import pytest

from querydsl.config import (
    ConfigError,
    QuerySettings,
    get_settings,
    load_settings,
    reset_settings_cache,
)


def write_env_file(path: Path, values: dict[str, str]) -> Path:
    env_file = path / ".env"
    lines = (f"{key}={value}" for key, value in values.items())
    env_file.write_text("\n".join(lines), encoding="utf-8")
    return env_file


def write_config_file(path: Path, body: str) -> Path:
    config_path = path / "config.toml"
    config_path.write_text(body, encoding="utf-8")
    return config_path


def test_defaults_when_no_sources_exist(tmp_path: Path) -> None:
    settings = load_settings(
        env_file=tmp_path / "absent.env",
        config_file=tmp_path / "absent.toml",
        environ={},
    )

    assert settings == QuerySettings()
    assert settings.serialization.indent is None
    assert settings.serialization.sort_keys is False
    assert settings.validation.strict_negative_boost is False


def test_loads_values_from_env_file(tmp_path: Path) -> None:
    env_file = write_env_file(
        tmp_path,
        {
            "QUERYDSL_JSON_INDENT": "4",
            "export QUERYDSL_STRICT_NEGATIVE_BOOST": '"yes"',
            "UNRELATED": "ignored",
        },
    )

    settings = load_settings(env_file=env_file, config_file=tmp_path / "absent.toml", environ={})

    assert settings.serialization.indent == 4
    assert settings.validation.strict_negative_boost is True


def test_config_file_overrides_env_file(tmp_path: Path) -> None:
    env_file = write_env_file(tmp_path, {"QUERYDSL_JSON_INDENT": "4"})
    config_file = write_config_file(
        tmp_path,
        "\n".join(
            [
                "[serialization]",
                "indent = 2",
                "sort_keys = true",
                "unknown = 'dropped'",
                "[validation]",
                "strict_negative_boost = false",
            ]
        ),
    )

    settings = load_settings(env_file=env_file, config_file=config_file, environ={})

    assert settings.serialization.indent == 2
    assert settings.serialization.sort_keys is True
    assert settings.validation.strict_negative_boost is False


def test_environment_overrides_files(tmp_path: Path) -> None:
    config_file = write_config_file(tmp_path, "[serialization]\nindent = 2\n")

    settings = load_settings(
        env_file=tmp_path / "absent.env",
        config_file=config_file,
        environ={"QUERYDSL_JSON_INDENT": "", "QUERYDSL_JSON_SORT_KEYS": "1"},
    )

    assert settings.serialization.indent is None
    assert settings.serialization.sort_keys is True


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({"QUERYDSL_JSON_INDENT": "wide"}, "QUERYDSL_JSON_INDENT"),
        ({"QUERYDSL_JSON_INDENT": "-1"}, "must not be negative"),
        ({"QUERYDSL_STRICT_NEGATIVE_BOOST": "maybe"}, "QUERYDSL_STRICT_NEGATIVE_BOOST"),
    ],
)
def test_invalid_values_raise_config_error(
    tmp_path: Path, environ: dict[str, str], message: str
) -> None:
    with pytest.raises(ConfigError, match=message):
        load_settings(
            env_file=tmp_path / "absent.env",
            config_file=tmp_path / "absent.toml",
            environ=environ,
        )


def test_malformed_toml_raises_config_error(tmp_path: Path) -> None:
    config_file = write_config_file(tmp_path, "[serialization\nindent = ")

    with pytest.raises(ConfigError, match="not valid TOML"):
        load_settings(env_file=tmp_path / "absent.env", config_file=config_file, environ={})


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("QUERYDSL_JSON_SORT_KEYS", "true")

    assert get_settings() is first

    reset_settings_cache()
    assert get_settings().serialization.sort_keys is True


def test_doctor_reports_settings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    from querydsl.config import doctor

    env_file = write_env_file(tmp_path, {"QUERYDSL_JSON_INDENT": "2"})

    assert doctor(env_file=env_file, config_file=tmp_path / "absent.toml") is True
    captured = capsys.readouterr()
    assert "Configuration looks good." in captured.out
    assert "JSON indent: 2" in captured.out


def test_doctor_reports_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    from querydsl.config.__main__ import main

    env_file = write_env_file(tmp_path, {"QUERYDSL_JSON_SORT_KEYS": "sometimes"})

    exit_code = main(["doctor", "--env-file", str(env_file)])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert "Configuration invalid" in captured.err


def test_paths_command_lists_sources(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    from querydsl.config.__main__ import main

    env_file = write_env_file(tmp_path, {})

    exit_code = main(["paths", "--env-file", str(env_file)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert f"env file: {env_file} (found)" in out
    assert "missing.toml (missing)" in out
