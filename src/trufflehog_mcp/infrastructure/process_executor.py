"""
Process executor for the trufflehog binary.

Spawns the engine with a literal argument vector (never through a shell),
drains stdout and stderr concurrently, and folds every failure mode into
the returned ExecutionResult.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Read size per chunk; buffers themselves are unbounded
_CHUNK_SIZE = 64 * 1024

# Exit code reported when the process could not be started at all
LAUNCH_FAILURE_EXIT_CODE = 1


@dataclass(frozen=True)
class ExecutionResult:
    """
    Captured outcome of one engine run.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error, or a launch error description.
        exit_code: Process exit code. Negative values mean the process was
            killed by that signal number.
    """

    stdout: str
    stderr: str
    exit_code: int

    @property
    def failed(self) -> bool:
        """Non-zero exit with diagnostics and no output at all."""
        return self.exit_code != 0 and bool(self.stderr) and not self.stdout


class ProcessExecutorInterface(ABC):
    """Abstract interface for running the engine."""

    @abstractmethod
    async def execute(self, tokens: Sequence[str]) -> ExecutionResult:
        """
        Run the engine with the given arguments until it exits.

        Args:
            tokens: Argument vector (without the binary name).

        Returns:
            ExecutionResult; launch and process failures are encoded in it.
        """
        pass


def normalize_exit_code(returncode: Optional[int]) -> int:
    """Map a missing return code to 0.

    asyncio reports a return code once wait() completes, so None only
    shows up for process handles that never finished; callers should not
    read 0 as success when stderr has content.
    """
    return 0 if returncode is None else returncode


async def _drain(stream: Optional[asyncio.StreamReader], chunks: list[bytes]) -> None:
    if stream is None:
        return
    while True:
        chunk = await stream.read(_CHUNK_SIZE)
        if not chunk:
            return
        chunks.append(chunk)


def _decode(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


class ProcessExecutor(ProcessExecutorInterface):
    """
    Runs the engine as a child process via asyncio.

    Holds no state between calls; each execute() owns exactly one process.
    There is no timeout: a scan runs until the engine exits.
    """

    def __init__(self, binary: str = "trufflehog"):
        """
        Initialize the executor.

        Args:
            binary: Executable name, resolved on PATH at spawn time.
        """
        self._binary = binary

    @property
    def binary(self) -> str:
        return self._binary

    async def execute(self, tokens: Sequence[str]) -> ExecutionResult:
        """Spawn the engine, stream its output to completion, and return it."""
        stdout_chunks: list[bytes] = []
        stderr_chunks: list[bytes] = []

        try:
            proc = await asyncio.create_subprocess_exec(
                self._binary,
                *tokens,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to launch {self._binary}: {e}")
            return ExecutionResult(
                stdout="",
                stderr=f"Error executing {self._binary}: {e}",
                exit_code=LAUNCH_FAILURE_EXIT_CODE,
            )

        logger.debug(f"Started {self._binary} (pid {proc.pid})")

        await asyncio.gather(
            _drain(proc.stdout, stdout_chunks),
            _drain(proc.stderr, stderr_chunks),
        )
        returncode = await proc.wait()

        result = ExecutionResult(
            stdout=_decode(stdout_chunks),
            stderr=_decode(stderr_chunks),
            exit_code=normalize_exit_code(returncode),
        )
        if result.exit_code < 0:
            logger.warning(f"{self._binary} terminated by signal {-result.exit_code}")
        else:
            logger.debug(
                f"{self._binary} exited with {result.exit_code} "
                f"(stdout={len(result.stdout)} chars, stderr={len(result.stderr)} chars)"
            )
        return result
