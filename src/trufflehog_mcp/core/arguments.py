"""
Argument builder for trufflehog invocations.

Turns a scan request into the argument vector for one engine run. The
result is a tuple of tokens and is only ever passed to exec-style process
creation, never joined into a shell command line.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from trufflehog_mcp.core.errors import ValidationError
from trufflehog_mcp.core.path_utils import validate_path
from trufflehog_mcp.core.scan_request import (
    DockerImageScanRequest,
    FilesystemScanRequest,
    GithubOrgScanRequest,
    GitlabScanRequest,
    GitScanRequest,
    S3ScanRequest,
    ScanRequest,
    VerifySecretRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_BINARY = "trufflehog"

# Flags whose following token is a credential
SENSITIVE_FLAGS = frozenset({"--token"})

# gitlab.com is the engine's default endpoint, so --url is only sent for other hosts
_GITLAB_DOTCOM = "gitlab.com"


@dataclass(frozen=True)
class CommandInvocation:
    """
    An engine invocation: binary name plus literal argument tokens.

    Attributes:
        binary: Executable name, resolved on PATH when spawned.
        tokens: Arguments passed verbatim as the process argv tail.
    """

    binary: str
    tokens: tuple[str, ...]

    def redacted(self) -> str:
        """Render for logs, masking credential values."""
        parts = [self.binary]
        mask_next = False
        for token in self.tokens:
            parts.append("***" if mask_next else token)
            mask_next = token in SENSITIVE_FLAGS
        return " ".join(parts)


class _Tokens:
    """Accumulates argument tokens, skipping unset optional values."""

    def __init__(self, *initial: str):
        self._tokens: list[str] = list(initial)

    def option(self, flag: str, value: Optional[Any]) -> "_Tokens":
        if value is not None and value != "":
            self._tokens.extend((flag, str(value)))
        return self

    def joined(self, flag: str, values: tuple[str, ...]) -> "_Tokens":
        """Append a list filter as a single comma-separated token."""
        items = [v for v in values if v]
        if items:
            self._tokens.extend((flag, ",".join(items)))
        return self

    def switch(self, flag: str, enabled: bool) -> "_Tokens":
        if enabled:
            self._tokens.append(flag)
        return self

    def build(self, binary: str) -> CommandInvocation:
        for token in self._tokens:
            if "\0" in token:
                raise ValidationError("Invalid argument: contains null bytes")
        return CommandInvocation(binary=binary, tokens=tuple(self._tokens))


def _require(value: str, name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"'{name}' must not be empty")
    return value


def _is_remote_git_target(target: str) -> bool:
    # URL schemes (https://, ssh://, file://) and scp-like user@host:path
    if "://" in target:
        return True
    head, sep, _ = target.partition(":")
    return bool(sep) and "@" in head and "/" not in head


_BUILDERS: dict[type, Callable[[Any], _Tokens]] = {}


def _register(request_type: type):
    def decorator(fn):
        _BUILDERS[request_type] = fn
        return fn
    return decorator


@_register(GitScanRequest)
def _git_tokens(request: GitScanRequest) -> _Tokens:
    target = _require(request.target, "target")
    if not _is_remote_git_target(target):
        target = f"file://{validate_path(target)}"

    if request.max_depth is not None and request.max_depth < 1:
        raise ValidationError("'maxDepth' must be a positive integer")

    return (
        _Tokens("git", target, "--json")
        .option("--branch", request.branch)
        .option("--max-depth", request.max_depth)
        .switch("--only-verified", request.only_verified)
        .option("--since-commit", request.since_commit)
        .joined("--include-detectors", request.include_detectors)
        .joined("--exclude-detectors", request.exclude_detectors)
    )


@_register(GithubOrgScanRequest)
def _github_org_tokens(request: GithubOrgScanRequest) -> _Tokens:
    return (
        _Tokens("github", "--org", _require(request.org, "org"), "--json")
        .option("--token", request.token)
        .joined("--include-repos", request.include_repos)
        .joined("--exclude-repos", request.exclude_repos)
        .switch("--only-verified", request.only_verified)
    )


@_register(GitlabScanRequest)
def _gitlab_tokens(request: GitlabScanRequest) -> _Tokens:
    url = _require(request.url, "url")
    tokens = _Tokens("gitlab", "--token", _require(request.token, "token"), "--json")
    if _GITLAB_DOTCOM not in url:
        tokens.option("--url", url)
    return (
        tokens.option("--group", request.group)
        .option("--project", request.project)
        .switch("--only-verified", request.only_verified)
    )


@_register(FilesystemScanRequest)
def _filesystem_tokens(request: FilesystemScanRequest) -> _Tokens:
    scan_path = validate_path(request.path)
    excluded = tuple(validate_path(p) for p in request.exclude_paths)
    return (
        _Tokens("filesystem", scan_path, "--json")
        .joined("--exclude-paths", excluded)
        .switch("--only-verified", request.only_verified)
    )


@_register(S3ScanRequest)
def _s3_tokens(request: S3ScanRequest) -> _Tokens:
    return (
        _Tokens("s3", "--bucket", _require(request.bucket, "bucket"), "--json")
        .option("--key", request.prefix)
        .switch("--only-verified", request.only_verified)
    )


@_register(DockerImageScanRequest)
def _docker_tokens(request: DockerImageScanRequest) -> _Tokens:
    return (
        _Tokens("docker", "--image", _require(request.image, "image"), "--json")
        .switch("--only-verified", request.only_verified)
    )


def build_arguments(request: ScanRequest, binary: str = DEFAULT_BINARY) -> CommandInvocation:
    """
    Build the engine invocation for a scan request.

    Args:
        request: A scan request other than VerifySecretRequest.
        binary: Engine executable name.

    Returns:
        The CommandInvocation for the request.

    Raises:
        ValidationError: If a required field is empty or a value is malformed.
    """
    builder = _BUILDERS.get(type(request))
    if builder is None:
        raise ValidationError(f"No argument builder for {type(request).__name__}")
    invocation = builder(request).build(binary)
    logger.debug(f"Built invocation: {invocation.redacted()}")
    return invocation


def build_verify_arguments(
    request: VerifySecretRequest, secret_path: str, binary: str = DEFAULT_BINARY
) -> CommandInvocation:
    """
    Build the invocation that scans a temporary file holding a secret.

    Args:
        request: The verification request (its secret is not included).
        secret_path: Path of the temporary file containing the secret.
        binary: Engine executable name.
    """
    detector = _require(request.detector_type, "detectorType")
    return _Tokens(
        "filesystem", validate_path(secret_path), "--json", "--include-detectors", detector
    ).build(binary)
