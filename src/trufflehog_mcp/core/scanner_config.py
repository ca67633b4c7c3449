"""
TruffleHog Enterprise scanner configuration generation.

Builds the config document consumed by `trufflehog scan --config=...` from
the server's enterprise settings plus caller-supplied sources and webhook
notifier, and optionally writes it to a validated path.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional

import yaml

from trufflehog_mcp.core.config import TruffleHogMCPConfig
from trufflehog_mcp.core.errors import ValidationError
from trufflehog_mcp.core.path_utils import validate_path

logger = logging.getLogger(__name__)

SOURCE_TYPES = (
    "github",
    "gitlab",
    "bitbucket",
    "s3",
    "gcs",
    "slack",
    "jira",
    "confluence",
    "filesystem",
)


def build_scanner_config(
    config: TruffleHogMCPConfig,
    sources: Optional[Sequence[Mapping[str, Any]]] = None,
    webhook_url: Optional[str] = None,
) -> dict[str, Any]:
    """
    Assemble the scanner configuration document.

    Args:
        config: Server configuration supplying address, token and group.
        sources: Source entries ({"type": ..., "config": {...}}).
        webhook_url: When set, adds a webhook notifier using the configured
            webhook token.

    Returns:
        The configuration as a plain dictionary.

    Raises:
        ValidationError: If a source entry is malformed.
    """
    content: dict[str, Any] = {}

    if config.enterprise.api_url:
        content["trufflehogAddress"] = config.enterprise.api_url
    if config.enterprise.api_key:
        content["trufflehogScannerToken"] = config.enterprise.api_key
    if config.enterprise.scanner_group:
        content["trufflehogScannerGroup"] = config.enterprise.scanner_group

    if sources:
        content["sources"] = [_validate_source(s) for s in sources]

    if webhook_url:
        notifier_config: dict[str, Any] = {"url": webhook_url}
        if config.webhook.token:
            notifier_config["token"] = config.webhook.token
        content["notifiers"] = [{"type": "webhook", "config": notifier_config}]

    return content


def _validate_source(source: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(source, Mapping):
        raise ValidationError("Each source must be an object with 'type' and 'config'")
    source_type = source.get("type")
    if source_type not in SOURCE_TYPES:
        raise ValidationError(
            f"Invalid source type: {source_type}. Valid types: {', '.join(SOURCE_TYPES)}"
        )
    source_config = source.get("config") or {}
    if not isinstance(source_config, Mapping):
        raise ValidationError(f"Source '{source_type}' config must be an object")
    return {"type": source_type, "config": dict(source_config)}


def render_scanner_config(content: Mapping[str, Any], fmt: str = "json") -> str:
    """Serialize the config document as JSON or YAML."""
    if fmt in ("yaml", "yml"):
        return yaml.safe_dump(dict(content), default_flow_style=False, sort_keys=False)
    return json.dumps(content, indent=2)


def save_scanner_config(output_path: str, content: Mapping[str, Any]) -> tuple[str, str]:
    """
    Write the config document to a validated path.

    YAML is written for .yaml/.yml paths, JSON otherwise.

    Returns:
        Tuple of (resolved path, rendered text).

    Raises:
        ValidationError: If the path fails validation.
        OSError: If the file cannot be written.
    """
    resolved = validate_path(output_path)
    suffix = Path(resolved).suffix.lower().lstrip(".")
    rendered = render_scanner_config(content, fmt=suffix if suffix in ("yaml", "yml") else "json")
    Path(resolved).write_text(rendered, encoding="utf-8")
    logger.info(f"Saved scanner configuration to {resolved}")
    return resolved, rendered
