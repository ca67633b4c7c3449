"""
MCP Context module for dependency injection.

Provides MCPContext dataclass that encapsulates everything the tool handlers
need, so handlers never reach for module-level state.
"""

from dataclasses import dataclass
from typing import Optional

from trufflehog_mcp.core.config import TruffleHogMCPConfig, load_config
from trufflehog_mcp.infrastructure.installation_cache import (
    InstallationStatusCache,
    executor_probe,
)
from trufflehog_mcp.infrastructure.process_executor import (
    ProcessExecutor,
    ProcessExecutorInterface,
)
from trufflehog_mcp.services.scan_service import ScanService


@dataclass
class MCPContext:
    """
    Container for all services needed by MCP handlers.

    Created once at server startup and passed to every handler call.

    Attributes:
        config: Application configuration
        executor: Runs trufflehog processes
        installation_cache: Shared installation status cache
        scan_service: Runs scan and verification operations
    """

    config: TruffleHogMCPConfig
    executor: ProcessExecutorInterface
    installation_cache: InstallationStatusCache
    scan_service: ScanService


def create_mcp_context(
    config: Optional[TruffleHogMCPConfig] = None,
    executor: Optional[ProcessExecutorInterface] = None,
    installation_cache: Optional[InstallationStatusCache] = None,
) -> MCPContext:
    """
    Create MCPContext with all services initialized.

    Args:
        config: Configuration; loaded from file/environment when None.
        executor: Process executor; a real ProcessExecutor when None.
        installation_cache: Cache; probes through the executor when None.

    Returns:
        MCPContext ready for use by handlers.
    """
    config = config or load_config()
    executor = executor or ProcessExecutor(binary=config.scanner.binary)
    installation_cache = installation_cache or InstallationStatusCache(
        probe=executor_probe(executor),
        ttl_seconds=config.scanner.cache_ttl_seconds,
    )
    scan_service = ScanService(
        executor=executor,
        installation_cache=installation_cache,
        binary=config.scanner.binary,
        temp_dir=config.scanner.temp_dir,
        temp_prefix=config.scanner.temp_prefix,
    )
    return MCPContext(
        config=config,
        executor=executor,
        installation_cache=installation_cache,
        scan_service=scan_service,
    )
