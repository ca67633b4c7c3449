"""
Installation status cache for the trufflehog binary.

Answers "is the engine installed, and which version" from a single cached
entry that is refreshed at most once per TTL window. A probe failure is
cached like a success, so a missing binary is not re-probed on every call.
"""

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Optional

from trufflehog_mcp.infrastructure.process_executor import ProcessExecutorInterface

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60.0
NOT_INSTALLED_VERSION = "Not installed"

VersionProbe = Callable[[], Awaitable[str]]


class ProbeError(Exception):
    """The version probe did not produce a version."""

    pass


@dataclass(frozen=True)
class InstallationStatusEntry:
    """
    Snapshot of the engine's installation state.

    Attributes:
        installed: Whether the version probe succeeded.
        version: Reported version, or NOT_INSTALLED_VERSION.
        checked_at: Clock reading when the probe finished.
    """

    installed: bool
    version: str
    checked_at: float


def executor_probe(executor: ProcessExecutorInterface) -> VersionProbe:
    """
    Build a probe that runs `<binary> --version` through an executor.

    The engine prints its version on stdout or stderr depending on release,
    so whichever is non-empty is used.
    """

    async def probe() -> str:
        result = await executor.execute(["--version"])
        if result.exit_code != 0:
            raise ProbeError(result.stderr.strip() or f"exit code {result.exit_code}")
        version = result.stdout.strip() or result.stderr.strip()
        if not version:
            raise ProbeError("empty version output")
        return version

    return probe


class InstallationStatusCache:
    """
    Time-bounded cache of the engine's installation status.

    There is no lock: callers that see an expired entry at the same time
    each probe, and the last refresh to finish wins. Both probes observe the
    same fact, so the race only costs an extra process spawn.
    """

    def __init__(
        self,
        probe: VersionProbe,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            probe: Async callable returning the version, raising on failure.
            ttl_seconds: Validity window of a cached entry.
            clock: Monotonic time source, injectable for tests.
        """
        self._probe = probe
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[InstallationStatusEntry] = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self) -> Optional[InstallationStatusEntry]:
        """Return the cached entry if it is still fresh, else None."""
        entry = self._entry
        if entry is None:
            return None
        if self._clock() - entry.checked_at >= self._ttl_seconds:
            return None
        return entry

    async def refresh(self) -> InstallationStatusEntry:
        """Probe the engine and replace the cached entry. Never raises."""
        try:
            version = await self._probe()
            entry = InstallationStatusEntry(installed=True, version=version, checked_at=self._clock())
            logger.debug(f"TruffleHog detected: {version}")
        except Exception as e:
            entry = InstallationStatusEntry(
                installed=False, version=NOT_INSTALLED_VERSION, checked_at=self._clock()
            )
            logger.debug(f"TruffleHog probe failed: {e}")
        self._entry = entry
        return entry

    async def status(self) -> InstallationStatusEntry:
        """Return the fresh cached entry, refreshing it if expired."""
        entry = self.get()
        if entry is not None:
            return entry
        return await self.refresh()

    async def check_installed(self) -> bool:
        return (await self.status()).installed

    async def get_version(self) -> str:
        return (await self.status()).version

    def invalidate(self) -> None:
        """Drop the cached entry so the next read probes again."""
        self._entry = None
