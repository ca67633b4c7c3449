"""
Scan service: runs one scan operation end to end.

Each operation is strictly sequential: installation check, argument
building, execution, failure check, parsing, formatting. Verification adds
a temporary secret file around the execute/parse steps. Expected failures
are turned into report text here; anything else propagates to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from trufflehog_mcp.core.arguments import (
    DEFAULT_BINARY,
    build_arguments,
    build_verify_arguments,
)
from trufflehog_mcp.core.errors import (
    EngineUnavailableError,
    ExecutionFailureError,
    ScannerError,
    ValidationError,
)
from trufflehog_mcp.core.findings import (
    Finding,
    format_findings,
    format_verification,
    parse_findings,
)
from trufflehog_mcp.core.scan_request import ScanMode, ScanRequest, VerifySecretRequest
from trufflehog_mcp.infrastructure.installation_cache import InstallationStatusCache
from trufflehog_mcp.infrastructure.process_executor import (
    ExecutionResult,
    ProcessExecutorInterface,
)
from trufflehog_mcp.infrastructure.temp_secret_file import DEFAULT_PREFIX, temp_secret_file

logger = logging.getLogger(__name__)

# Target labels used in "Error scanning <label>: <stderr>" messages
_TARGET_LABELS = {
    ScanMode.GIT: "repository",
    ScanMode.GITHUB_ORG: "GitHub organization",
    ScanMode.GITLAB: "GitLab",
    ScanMode.FILESYSTEM: "filesystem",
    ScanMode.S3: "S3 bucket",
    ScanMode.DOCKER_IMAGE: "Docker image",
}


@dataclass
class ScanReport:
    """
    Outcome of one scan operation.

    Attributes:
        findings: Parsed findings (empty on error).
        text: Human-readable result for the tool response.
        error: Error text when the operation failed in an expected way.
    """

    findings: list[Finding] = field(default_factory=list)
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_error(cls, message: str) -> "ScanReport":
        text = f"Error: {message}" if not message.startswith("Error") else message
        return cls(findings=[], text=text, error=text)


class ScanService:
    """
    Coordinates the argument builder, executor, parser, and formatter.

    Holds no per-operation state; concurrent operations interleave freely
    and share only the installation cache.
    """

    def __init__(
        self,
        executor: ProcessExecutorInterface,
        installation_cache: InstallationStatusCache,
        binary: str = DEFAULT_BINARY,
        temp_dir: Optional[str] = None,
        temp_prefix: str = DEFAULT_PREFIX,
    ):
        """
        Initialize the scan service.

        Args:
            executor: Runs engine invocations.
            installation_cache: Shared installation status cache.
            binary: Engine executable name recorded in invocations.
            temp_dir: Directory for verification temp files (platform default if None).
            temp_prefix: Filename prefix for verification temp files.
        """
        self._executor = executor
        self._installation_cache = installation_cache
        self._binary = binary
        self._temp_dir = temp_dir
        self._temp_prefix = temp_prefix

    @property
    def installation_cache(self) -> InstallationStatusCache:
        return self._installation_cache

    async def _ensure_installed(self) -> None:
        if not await self._installation_cache.check_installed():
            raise EngineUnavailableError()

    @staticmethod
    def _check_result(result: ExecutionResult, mode: ScanMode) -> None:
        if result.failed:
            label = _TARGET_LABELS.get(mode, mode.value)
            raise ExecutionFailureError(
                f"Error scanning {label}: {result.stderr}",
                stderr=result.stderr,
                exit_code=result.exit_code,
            )

    async def scan(self, request: ScanRequest) -> ScanReport:
        """
        Run a scan and render its findings.

        Args:
            request: Any scan request except VerifySecretRequest.

        Returns:
            ScanReport with findings and Markdown text, or an error message.
        """
        if isinstance(request, VerifySecretRequest):
            return await self.verify_secret(request)

        try:
            await self._ensure_installed()
            invocation = build_arguments(request, binary=self._binary)
            logger.info(f"Running {request.mode.value} scan: {invocation.redacted()}")

            result = await self._executor.execute(invocation.tokens)
            self._check_result(result, request.mode)
        except ScannerError as e:
            logger.info(f"{request.mode.value} scan failed: {e}")
            return ScanReport.from_error(str(e))

        if result.exit_code != 0:
            logger.warning(
                f"{request.mode.value} scan exited with {result.exit_code}; parsing partial output"
            )

        findings = parse_findings(result.stdout)
        logger.info(f"{request.mode.value} scan found {len(findings)} finding(s)")
        return ScanReport(findings=findings, text=format_findings(findings))

    async def verify_secret(self, request: VerifySecretRequest) -> ScanReport:
        """
        Check whether a literal secret is live using one detector.

        The secret is written to a private temporary file that is removed
        before this method returns, on every path.
        """
        try:
            await self._ensure_installed()
            if not request.secret:
                raise ValidationError("'secret' must not be empty")
            if not request.detector_type or not request.detector_type.strip():
                raise ValidationError("'detectorType' must not be empty")

            async with temp_secret_file(
                request.secret, prefix=self._temp_prefix, directory=self._temp_dir
            ) as secret_file:
                invocation = build_verify_arguments(
                    request, secret_file.path, binary=self._binary
                )
                logger.info(f"Verifying secret with detector {request.detector_type}")
                result = await self._executor.execute(invocation.tokens)
                findings = parse_findings(result.stdout)
        except ScannerError as e:
            return ScanReport.from_error(str(e))
        except OSError as e:
            logger.warning(f"Secret verification failed: {e}")
            return ScanReport.from_error(f"Error verifying secret: {e}")

        return ScanReport(
            findings=findings,
            text=format_verification(findings, request.detector_type),
        )
