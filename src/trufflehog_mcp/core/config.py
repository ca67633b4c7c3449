"""
Configuration module for the TruffleHog MCP server.

Supports loading from YAML/JSON files with environment variable overrides.
The TRUFFLEHOG_* variables configure TruffleHog Enterprise integration;
THOG_MCP_* variables tune the server itself.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

# Environment variable naming an optional configuration file
CONFIG_PATH_ENV = "THOG_MCP_CONFIG"


@dataclass
class ScannerConfig:
    """Configuration for invoking the trufflehog binary."""

    binary: str = "trufflehog"
    cache_ttl_seconds: float = 60.0
    temp_prefix: str = "trufflehog-verify-"
    temp_dir: Optional[str] = None


@dataclass
class EnterpriseConfig:
    """TruffleHog Enterprise scanner settings."""

    api_url: str = ""
    api_key: str = ""
    scanner_group: str = ""


@dataclass
class WebhookConfig:
    """Webhook notifier settings used by generated scanner configs."""

    url: str = ""
    token: str = ""


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class TruffleHogMCPConfig:
    """Main configuration class for the TruffleHog MCP server."""

    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    enterprise: EnterpriseConfig = field(default_factory=EnterpriseConfig)
    webhook: WebhookConfig = field(default_factory=WebhookConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "TruffleHogMCPConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            TruffleHogMCPConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "TruffleHogMCPConfig":
        """Create TruffleHogMCPConfig from a dictionary."""
        config = cls()

        if "scanner" in data:
            config.scanner = ScannerConfig(**data["scanner"])
        if "enterprise" in data:
            config.enterprise = EnterpriseConfig(**data["enterprise"])
        if "webhook" in data:
            config.webhook = WebhookConfig(**data["webhook"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "TruffleHogMCPConfig":
        """
        Apply environment variable overrides to the configuration.

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Enterprise integration
            "TRUFFLEHOG_API_URL": ("enterprise", "api_url", str),
            "TRUFFLEHOG_API_KEY": ("enterprise", "api_key", str),
            "TRUFFLEHOG_SCANNER_GROUP": ("enterprise", "scanner_group", str),
            "TRUFFLEHOG_WEBHOOK_URL": ("webhook", "url", str),
            "TRUFFLEHOG_WEBHOOK_TOKEN": ("webhook", "token", str),
            # Server tuning
            "THOG_MCP_BINARY": ("scanner", "binary", str),
            "THOG_MCP_CACHE_TTL": ("scanner", "cache_ttl_seconds", float),
            "THOG_MCP_TEMP_PREFIX": ("scanner", "temp_prefix", str),
            "THOG_MCP_TEMP_DIR": ("scanner", "temp_dir", lambda v: v or None),
            "THOG_MCP_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                try:
                    setattr(section_obj, key, converter(value))
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {value!r}")

        return self


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> TruffleHogMCPConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. Falls back to the file named
            by THOG_MCP_CONFIG, then to defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        TruffleHogMCPConfig instance
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_PATH_ENV) or None

    if config_path:
        config = TruffleHogMCPConfig.from_file(config_path)
    else:
        config = TruffleHogMCPConfig()

    if apply_env:
        config.apply_env_overrides()

    return config


def configure_logging(config: LoggingConfig) -> None:
    """Send log records to stderr; stdout is reserved for the MCP transport."""
    level = getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.format, stream=sys.stderr)
