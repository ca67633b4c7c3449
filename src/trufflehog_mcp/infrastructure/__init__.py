"""
Infrastructure Layer - process execution, installation cache, and temp files.
"""

from trufflehog_mcp.infrastructure.fakes import FakeClock, FakeProcessExecutor
from trufflehog_mcp.infrastructure.installation_cache import (
    InstallationStatusCache,
    InstallationStatusEntry,
    ProbeError,
    executor_probe,
)
from trufflehog_mcp.infrastructure.process_executor import (
    ExecutionResult,
    ProcessExecutor,
    ProcessExecutorInterface,
)
from trufflehog_mcp.infrastructure.temp_secret_file import TempSecretFile, temp_secret_file

__all__ = [
    # Process execution
    "ExecutionResult",
    "ProcessExecutor",
    "ProcessExecutorInterface",
    # Installation status
    "InstallationStatusCache",
    "InstallationStatusEntry",
    "ProbeError",
    "executor_probe",
    # Temporary secret files
    "TempSecretFile",
    "temp_secret_file",
    # Fakes
    "FakeClock",
    "FakeProcessExecutor",
]
