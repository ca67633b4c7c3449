"""Tests for configuration loading and environment overrides."""

import json
import logging
import sys

import pytest

from trufflehog_mcp.core.config import (
    CONFIG_PATH_ENV,
    LoggingConfig,
    TruffleHogMCPConfig,
    configure_logging,
    load_config,
)

_ENV_VARS = (
    CONFIG_PATH_ENV,
    "TRUFFLEHOG_API_URL",
    "TRUFFLEHOG_API_KEY",
    "TRUFFLEHOG_SCANNER_GROUP",
    "TRUFFLEHOG_WEBHOOK_URL",
    "TRUFFLEHOG_WEBHOOK_TOKEN",
    "THOG_MCP_BINARY",
    "THOG_MCP_CACHE_TTL",
    "THOG_MCP_TEMP_PREFIX",
    "THOG_MCP_TEMP_DIR",
    "THOG_MCP_LOGGING_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.scanner.binary == "trufflehog"
    assert config.scanner.cache_ttl_seconds == 60.0
    assert config.scanner.temp_prefix == "trufflehog-verify-"
    assert config.scanner.temp_dir is None
    assert config.enterprise.api_url == ""
    assert config.webhook.url == ""
    assert config.logging.level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TRUFFLEHOG_API_URL", "https://acme.trufflehog.org")
    monkeypatch.setenv("TRUFFLEHOG_API_KEY", "key")
    monkeypatch.setenv("TRUFFLEHOG_SCANNER_GROUP", "ci")
    monkeypatch.setenv("TRUFFLEHOG_WEBHOOK_URL", "https://hooks.example.com")
    monkeypatch.setenv("TRUFFLEHOG_WEBHOOK_TOKEN", "hook-token")
    monkeypatch.setenv("THOG_MCP_BINARY", "/opt/bin/trufflehog")
    monkeypatch.setenv("THOG_MCP_CACHE_TTL", "5")

    config = load_config()

    assert config.enterprise.api_url == "https://acme.trufflehog.org"
    assert config.enterprise.api_key == "key"
    assert config.enterprise.scanner_group == "ci"
    assert config.webhook.url == "https://hooks.example.com"
    assert config.webhook.token == "hook-token"
    assert config.scanner.binary == "/opt/bin/trufflehog"
    assert config.scanner.cache_ttl_seconds == 5.0


def test_invalid_env_value_is_ignored(monkeypatch, caplog):
    monkeypatch.setenv("THOG_MCP_CACHE_TTL", "soon")
    with caplog.at_level(logging.WARNING):
        config = load_config()
    assert config.scanner.cache_ttl_seconds == 60.0
    assert "THOG_MCP_CACHE_TTL" in caplog.text


def test_apply_env_can_be_disabled(monkeypatch):
    monkeypatch.setenv("TRUFFLEHOG_API_KEY", "key")
    assert load_config(apply_env=False).enterprise.api_key == ""


def test_from_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "scanner:\n  binary: th\n  cache_ttl_seconds: 10\n"
        "enterprise:\n  api_url: https://x\n"
        "logging:\n  level: DEBUG\n",
        encoding="utf-8",
    )
    config = TruffleHogMCPConfig.from_file(path)
    assert config.scanner.binary == "th"
    assert config.scanner.cache_ttl_seconds == 10
    assert config.enterprise.api_url == "https://x"
    assert config.logging.level == "DEBUG"


def test_from_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"webhook": {"url": "https://h", "token": "t"}}), encoding="utf-8")
    config = TruffleHogMCPConfig.from_file(path)
    assert config.webhook.url == "https://h"
    assert config.webhook.token == "t"


def test_empty_yaml_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("", encoding="utf-8")
    assert TruffleHogMCPConfig.from_file(path).scanner.binary == "trufflehog"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        TruffleHogMCPConfig.from_file(tmp_path / "absent.yaml")


def test_unsupported_format_raises(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported config file format"):
        TruffleHogMCPConfig.from_file(path)


def test_config_path_from_env(monkeypatch, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("enterprise:\n  scanner_group: from-file\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    assert load_config().enterprise.scanner_group == "from-file"


def test_env_overrides_file(monkeypatch, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("enterprise:\n  scanner_group: from-file\n", encoding="utf-8")
    monkeypatch.setenv("TRUFFLEHOG_SCANNER_GROUP", "from-env")
    assert load_config(path).enterprise.scanner_group == "from-env"


def test_configure_logging_unknown_level_falls_back(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging(LoggingConfig(level="chatty"))
    assert calls["level"] == logging.INFO
    assert calls["stream"] is sys.stderr


def test_empty_temp_dir_env_means_default(monkeypatch):
    monkeypatch.setenv("THOG_MCP_TEMP_DIR", "")
    assert load_config().scanner.temp_dir is None


def test_temp_dir_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("THOG_MCP_TEMP_DIR", str(tmp_path))
    assert load_config().scanner.temp_dir == str(tmp_path)
