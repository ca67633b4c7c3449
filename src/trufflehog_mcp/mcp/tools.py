"""
MCP tool definitions for the TruffleHog server.

Defines the available tools and their schemas for the MCP interface.
"""

from mcp.types import Tool

from trufflehog_mcp.core.scanner_config import SOURCE_TYPES

_ONLY_VERIFIED = {
    "type": "boolean",
    "description": "Only return verified secrets (default: false)",
}


def _string_list(description: str) -> dict:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def list_tools() -> list[Tool]:
    """List available MCP tools."""
    return [
        Tool(
            name="trufflehog_status",
            description="Check TruffleHog installation status and configuration. Returns whether TruffleHog CLI is installed and the current configuration.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="scan_git_repo",
            description="Scan a Git repository for secrets using TruffleHog. Supports local paths and remote URLs. Can scan entire history or specific branches.",
            inputSchema={
                "type": "object",
                "properties": {
                    "target": {
                        "type": "string",
                        "description": "Git repository URL or local path to scan",
                    },
                    "branch": {
                        "type": "string",
                        "description": "Specific branch to scan (optional, scans all by default)",
                    },
                    "maxDepth": {
                        "type": "integer",
                        "description": "Maximum commit depth to scan (optional)",
                        "minimum": 1,
                    },
                    "onlyVerified": _ONLY_VERIFIED,
                    "sinceCommit": {
                        "type": "string",
                        "description": "Only scan commits since this commit hash (optional)",
                    },
                    "includeDetectors": _string_list("List of detector types to include (optional)"),
                    "excludeDetectors": _string_list("List of detector types to exclude (optional)"),
                },
                "required": ["target"],
            },
        ),
        Tool(
            name="scan_github_org",
            description="Scan an entire GitHub organization for secrets. Requires a GitHub token for authentication.",
            inputSchema={
                "type": "object",
                "properties": {
                    "org": {"type": "string", "description": "GitHub organization name to scan"},
                    "token": {
                        "type": "string",
                        "description": "GitHub personal access token for authentication",
                    },
                    "includeRepos": _string_list("Specific repositories to include (optional)"),
                    "excludeRepos": _string_list("Repositories to exclude from scan (optional)"),
                    "onlyVerified": _ONLY_VERIFIED,
                },
                "required": ["org"],
            },
        ),
        Tool(
            name="scan_gitlab",
            description="Scan GitLab projects or groups for secrets. Supports GitLab.com and self-hosted instances.",
            inputSchema={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "GitLab URL (e.g., https://gitlab.com for GitLab.com or your self-hosted URL)",
                    },
                    "token": {
                        "type": "string",
                        "description": "GitLab personal access token for authentication",
                    },
                    "group": {
                        "type": "string",
                        "description": "GitLab group to scan (optional, scans all accessible if not specified)",
                    },
                    "project": {"type": "string", "description": "Specific project to scan (optional)"},
                    "onlyVerified": _ONLY_VERIFIED,
                },
                "required": ["url", "token"],
            },
        ),
        Tool(
            name="scan_filesystem",
            description="Scan a local filesystem directory for secrets. Useful for scanning codebases, config files, and other local files.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {"type": "string", "description": "Local directory path to scan"},
                    "excludePaths": _string_list("Paths to exclude from scan (optional)"),
                    "onlyVerified": _ONLY_VERIFIED,
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="scan_s3_bucket",
            description="Scan an AWS S3 bucket for secrets. Requires AWS credentials to be configured.",
            inputSchema={
                "type": "object",
                "properties": {
                    "bucket": {"type": "string", "description": "S3 bucket name to scan"},
                    "prefix": {
                        "type": "string",
                        "description": "S3 key prefix to filter objects (optional)",
                    },
                    "onlyVerified": _ONLY_VERIFIED,
                },
                "required": ["bucket"],
            },
        ),
        Tool(
            name="scan_docker_image",
            description="Scan a Docker image for secrets. Searches through image layers and filesystem.",
            inputSchema={
                "type": "object",
                "properties": {
                    "image": {
                        "type": "string",
                        "description": "Docker image name and tag to scan (e.g., 'nginx:latest')",
                    },
                    "onlyVerified": _ONLY_VERIFIED,
                },
                "required": ["image"],
            },
        ),
        Tool(
            name="list_detectors",
            description="List common secret detectors supported by TruffleHog. Shows detector names and descriptions.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="verify_secret",
            description="Verify if a specific secret is still active/valid. TruffleHog will check against the service's API.",
            inputSchema={
                "type": "object",
                "properties": {
                    "secret": {"type": "string", "description": "The secret value to verify"},
                    "detectorType": {
                        "type": "string",
                        "description": "Type of detector to use for verification (e.g., 'github', 'aws', 'slack')",
                    },
                },
                "required": ["secret", "detectorType"],
            },
        ),
        Tool(
            name="generate_config",
            description="Generate a TruffleHog Enterprise scanner configuration file. This config can be used with the TruffleHog scanner binary.",
            inputSchema={
                "type": "object",
                "properties": {
                    "outputPath": {
                        "type": "string",
                        "description": "Path where to save the configuration file (optional; .yaml/.yml saves YAML, anything else JSON)",
                    },
                    "sources": {
                        "type": "array",
                        "description": "List of sources to configure for scanning",
                        "items": {
                            "type": "object",
                            "properties": {
                                "type": {"type": "string", "enum": list(SOURCE_TYPES)},
                                "config": {
                                    "type": "object",
                                    "description": "Source-specific configuration",
                                },
                            },
                        },
                    },
                    "enableWebhook": {
                        "type": "boolean",
                        "description": "Enable webhook notifications for findings",
                    },
                    "webhookUrl": {
                        "type": "string",
                        "description": "Webhook URL for notifications (defaults to TRUFFLEHOG_WEBHOOK_URL)",
                    },
                },
            },
        ),
        Tool(
            name="analyze_finding",
            description="Analyze a secret finding to understand its impact, permissions, and associated resources. Provides remediation guidance.",
            inputSchema={
                "type": "object",
                "properties": {
                    "detectorType": {
                        "type": "string",
                        "description": "Type of secret detected (e.g., 'AWS', 'GitHub', 'Slack')",
                    },
                    "verified": {
                        "type": "boolean",
                        "description": "Whether the secret was verified as active",
                    },
                    "sourceType": {
                        "type": "string",
                        "description": "Where the secret was found (e.g., 'git', 'filesystem')",
                    },
                    "extraData": {
                        "type": "object",
                        "description": "Additional context about the finding",
                    },
                },
                "required": ["detectorType"],
            },
        ),
    ]
