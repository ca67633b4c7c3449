"""
Core Layer - configuration, request models, argument building, and findings.
"""

from trufflehog_mcp.core.arguments import (
    CommandInvocation,
    build_arguments,
    build_verify_arguments,
)
from trufflehog_mcp.core.config import (
    EnterpriseConfig,
    LoggingConfig,
    ScannerConfig,
    TruffleHogMCPConfig,
    WebhookConfig,
    load_config,
)
from trufflehog_mcp.core.errors import (
    EngineUnavailableError,
    ExecutionFailureError,
    ScannerError,
    ToolExecutionError,
    ValidationError,
)
from trufflehog_mcp.core.findings import (
    NO_FINDINGS_MESSAGE,
    Finding,
    format_findings,
    format_verification,
    parse_findings,
)
from trufflehog_mcp.core.path_utils import validate_path
from trufflehog_mcp.core.scan_request import (
    DockerImageScanRequest,
    FilesystemScanRequest,
    GithubOrgScanRequest,
    GitlabScanRequest,
    GitScanRequest,
    S3ScanRequest,
    ScanMode,
    ScanRequest,
    VerifySecretRequest,
    request_from_arguments,
)

__all__ = [
    # Configuration
    "TruffleHogMCPConfig",
    "ScannerConfig",
    "EnterpriseConfig",
    "WebhookConfig",
    "LoggingConfig",
    "load_config",
    # Errors
    "ScannerError",
    "ValidationError",
    "EngineUnavailableError",
    "ExecutionFailureError",
    "ToolExecutionError",
    # Requests
    "ScanMode",
    "ScanRequest",
    "GitScanRequest",
    "GithubOrgScanRequest",
    "GitlabScanRequest",
    "FilesystemScanRequest",
    "S3ScanRequest",
    "DockerImageScanRequest",
    "VerifySecretRequest",
    "request_from_arguments",
    # Arguments
    "CommandInvocation",
    "build_arguments",
    "build_verify_arguments",
    "validate_path",
    # Findings
    "Finding",
    "NO_FINDINGS_MESSAGE",
    "parse_findings",
    "format_findings",
    "format_verification",
]
