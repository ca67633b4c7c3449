"""
Scan request models.

Each scan mode has its own immutable request type. Requests are built from
MCP tool arguments by request_from_arguments(), which performs the type
checks the JSON schemas describe; value-level validation (empty targets,
path sanitization) belongs to the argument builder.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from trufflehog_mcp.core.errors import ValidationError


class ScanMode(str, Enum):
    """Category of target a request scans."""

    GIT = "git"
    GITHUB_ORG = "github-org"
    GITLAB = "gitlab"
    FILESYSTEM = "filesystem"
    S3 = "s3"
    DOCKER_IMAGE = "docker-image"
    VERIFY = "verify"


@dataclass(frozen=True)
class GitScanRequest:
    """Scan a git repository's history (local path or remote URL)."""

    mode: ClassVar[ScanMode] = ScanMode.GIT

    target: str
    branch: Optional[str] = None
    max_depth: Optional[int] = None
    since_commit: Optional[str] = None
    include_detectors: tuple[str, ...] = ()
    exclude_detectors: tuple[str, ...] = ()
    only_verified: bool = False


@dataclass(frozen=True)
class GithubOrgScanRequest:
    """Scan every repository of a GitHub organization."""

    mode: ClassVar[ScanMode] = ScanMode.GITHUB_ORG

    org: str
    token: Optional[str] = None
    include_repos: tuple[str, ...] = ()
    exclude_repos: tuple[str, ...] = ()
    only_verified: bool = False


@dataclass(frozen=True)
class GitlabScanRequest:
    """Scan GitLab projects on gitlab.com or a self-hosted instance."""

    mode: ClassVar[ScanMode] = ScanMode.GITLAB

    url: str
    token: str
    group: Optional[str] = None
    project: Optional[str] = None
    only_verified: bool = False


@dataclass(frozen=True)
class FilesystemScanRequest:
    """Scan a local directory tree."""

    mode: ClassVar[ScanMode] = ScanMode.FILESYSTEM

    path: str
    exclude_paths: tuple[str, ...] = ()
    only_verified: bool = False


@dataclass(frozen=True)
class S3ScanRequest:
    """Scan objects in an S3 bucket using ambient AWS credentials."""

    mode: ClassVar[ScanMode] = ScanMode.S3

    bucket: str
    prefix: Optional[str] = None
    only_verified: bool = False


@dataclass(frozen=True)
class DockerImageScanRequest:
    """Scan the layers of a container image."""

    mode: ClassVar[ScanMode] = ScanMode.DOCKER_IMAGE

    image: str
    only_verified: bool = False


@dataclass(frozen=True)
class VerifySecretRequest:
    """Check whether a literal secret is live, using one detector.

    The secret is handed to the engine through a temporary file, so the
    request itself carries no path.
    """

    mode: ClassVar[ScanMode] = ScanMode.VERIFY

    secret: str
    detector_type: str

    def __repr__(self) -> str:
        return f"VerifySecretRequest(secret='***', detector_type={self.detector_type!r})"


ScanRequest = Union[
    GitScanRequest,
    GithubOrgScanRequest,
    GitlabScanRequest,
    FilesystemScanRequest,
    S3ScanRequest,
    DockerImageScanRequest,
    VerifySecretRequest,
]


def _require_str(arguments: Mapping[str, Any], key: str) -> str:
    value = arguments.get(key)
    if value is None:
        raise ValidationError(f"Missing required argument: {key}")
    if not isinstance(value, str):
        raise ValidationError(f"Argument '{key}' must be a string")
    return value


def _optional_str(arguments: Mapping[str, Any], key: str) -> Optional[str]:
    value = arguments.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Argument '{key}' must be a string")
    return value


def _optional_int(arguments: Mapping[str, Any], key: str) -> Optional[int]:
    value = arguments.get(key)
    if value is None:
        return None
    # JSON numbers may arrive as floats; bool is an int subclass and is rejected
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Argument '{key}' must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"Argument '{key}' must be an integer")
        value = int(value)
    return value


def _string_list(arguments: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = arguments.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"Argument '{key}' must be a list of strings")
    return tuple(value)


def _flag(arguments: Mapping[str, Any], key: str) -> bool:
    value = arguments.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"Argument '{key}' must be a boolean")
    return value


def request_from_arguments(mode: ScanMode | str, arguments: Mapping[str, Any]) -> ScanRequest:
    """
    Build a scan request from MCP tool arguments.

    Args:
        mode: Scan mode selecting the request type.
        arguments: Tool arguments keyed as in the tool input schemas.

    Returns:
        The request for that mode.

    Raises:
        ValidationError: If a required argument is missing or has the wrong type.
    """
    try:
        mode = ScanMode(mode)
    except ValueError as e:
        raise ValidationError(f"Unknown scan mode: {mode}") from e

    if mode is ScanMode.GIT:
        return GitScanRequest(
            target=_require_str(arguments, "target"),
            branch=_optional_str(arguments, "branch"),
            max_depth=_optional_int(arguments, "maxDepth"),
            since_commit=_optional_str(arguments, "sinceCommit"),
            include_detectors=_string_list(arguments, "includeDetectors"),
            exclude_detectors=_string_list(arguments, "excludeDetectors"),
            only_verified=_flag(arguments, "onlyVerified"),
        )
    if mode is ScanMode.GITHUB_ORG:
        return GithubOrgScanRequest(
            org=_require_str(arguments, "org"),
            token=_optional_str(arguments, "token"),
            include_repos=_string_list(arguments, "includeRepos"),
            exclude_repos=_string_list(arguments, "excludeRepos"),
            only_verified=_flag(arguments, "onlyVerified"),
        )
    if mode is ScanMode.GITLAB:
        return GitlabScanRequest(
            url=_require_str(arguments, "url"),
            token=_require_str(arguments, "token"),
            group=_optional_str(arguments, "group"),
            project=_optional_str(arguments, "project"),
            only_verified=_flag(arguments, "onlyVerified"),
        )
    if mode is ScanMode.FILESYSTEM:
        return FilesystemScanRequest(
            path=_require_str(arguments, "path"),
            exclude_paths=_string_list(arguments, "excludePaths"),
            only_verified=_flag(arguments, "onlyVerified"),
        )
    if mode is ScanMode.S3:
        return S3ScanRequest(
            bucket=_require_str(arguments, "bucket"),
            prefix=_optional_str(arguments, "prefix"),
            only_verified=_flag(arguments, "onlyVerified"),
        )
    if mode is ScanMode.DOCKER_IMAGE:
        return DockerImageScanRequest(
            image=_require_str(arguments, "image"),
            only_verified=_flag(arguments, "onlyVerified"),
        )
    return VerifySecretRequest(
        secret=_require_str(arguments, "secret"),
        detector_type=_require_str(arguments, "detectorType"),
    )
