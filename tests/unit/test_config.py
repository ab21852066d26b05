"""Tests for RedisConfig validation and config loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from upstash_rest.config import (
    TOKEN_ENV,
    URL_ENV,
    RedisConfig,
    config_from_env,
    load_config,
    strip_scheme,
)
from upstash_rest.core.errors import ConfigError


class TestStripScheme:
    """Tests for hostname normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("db.example.io", "db.example.io"),
            ("https://db.example.io", "db.example.io"),
            ("http://db.example.io", "db.example.io"),
            ("HTTPS://db.example.io/", "db.example.io"),
        ],
    )
    def test_strip(self, raw, expected):
        assert strip_scheme(raw) == expected


class TestRedisConfig:
    """Tests for the RedisConfig model."""

    def test_defaults(self):
        config = RedisConfig(hostname="https://db.example.io", token="t")

        assert config.hostname == "db.example.io"
        assert config.base_url == "https://db.example.io"
        assert config.request_timeout is None
        assert config.verify_ssl is True
        assert config.extra_headers == {}

    def test_frozen(self):
        config = RedisConfig(hostname="db.example.io", token="t")

        with pytest.raises(ValidationError):
            config.token = "other"  # type: ignore[misc]

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            RedisConfig(hostname="db.example.io", token="t", retries=3)  # type: ignore[call-arg]

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            RedisConfig(hostname="db.example.io", token="t", request_timeout=0)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "redis.json"
        path.write_text(
            json.dumps({"hostname": "https://db.example.io", "token": "t", "request_timeout": 5}),
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.hostname == "db.example.io"
        assert config.request_timeout == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")

        assert "Config file not found" in exc_info.value.message

    @pytest.mark.parametrize("content", ["", "  \n\t"])
    def test_empty_file_is_an_error(self, tmp_path: Path, content: str) -> None:
        """An empty file cannot supply hostname and token."""
        path = tmp_path / "redis.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "empty" in exc_info.value.message

    @pytest.mark.parametrize("content", ['{"hostname": "unclosed', '["db.example.io", "t"]'])
    def test_malformed_document(self, tmp_path: Path, content: str) -> None:
        """Broken JSON and non-object documents fail validation."""
        path = tmp_path / "redis.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "Config validation failed" in exc_info.value.message
        assert str(path) in exc_info.value.message

    def test_utf8_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "redis.json"
        path.write_bytes(b'\xef\xbb\xbf{"hostname": "db.example.io", "token": "t"}')

        assert load_config(path).hostname == "db.example.io"

    def test_validation_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "redis.json"
        path.write_text('{"hostname": "db.example.io"}', encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "Config validation failed" in exc_info.value.message


class TestConfigFromEnv:
    """Tests for config_from_env()."""

    def test_reads_environment(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv(URL_ENV, "https://db.example.io")
        monkeypatch.setenv(TOKEN_ENV, "t")

        config = config_from_env(dotenv_path=tmp_path / "absent.env")

        assert config.hostname == "db.example.io"
        assert config.token == "t"

    def test_reads_dotenv_file(self, monkeypatch, tmp_path: Path) -> None:
        # Set then delete so teardown removes whatever load_dotenv writes.
        for name in (URL_ENV, TOKEN_ENV):
            monkeypatch.setenv(name, "placeholder")
            monkeypatch.delenv(name)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{URL_ENV}=https://dot.example.io\n{TOKEN_ENV}=dot\n", encoding="utf-8")

        config = config_from_env(dotenv_path=env_file)

        assert config.hostname == "dot.example.io"
        assert config.token == "dot"

    def test_environment_wins_over_dotenv(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv(URL_ENV, "https://env.example.io")
        monkeypatch.setenv(TOKEN_ENV, "env")
        env_file = tmp_path / ".env"
        env_file.write_text(f"{URL_ENV}=https://dot.example.io\n", encoding="utf-8")

        config = config_from_env(dotenv_path=env_file)

        assert config.hostname == "env.example.io"

    def test_missing_variables(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.delenv(URL_ENV, raising=False)
        monkeypatch.delenv(TOKEN_ENV, raising=False)

        with pytest.raises(ConfigError) as exc_info:
            config_from_env(dotenv_path=tmp_path / "absent.env")

        assert URL_ENV in exc_info.value.message
        assert TOKEN_ENV in exc_info.value.message
