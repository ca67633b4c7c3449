"""
Fake implementations for testing.

Provides in-memory stand-ins for the process executor and the clock so the
scan pipeline can be exercised without a trufflehog binary.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from trufflehog_mcp.infrastructure.process_executor import (
    ExecutionResult,
    ProcessExecutorInterface,
)


class FakeProcessExecutor(ProcessExecutorInterface):
    """
    Executor that returns canned results and records every call.

    A `--version` call is answered from `version` (or fails when version is
    None); any other call gets the next queued result, or `default_result`.
    """

    def __init__(
        self,
        results: Sequence[ExecutionResult] = (),
        version: str | None = "trufflehog 3.88.0",
        default_result: ExecutionResult | None = None,
        on_execute: Callable[[list[str]], None] | None = None,
    ):
        self._results = list(results)
        self._version = version
        self._default = default_result or ExecutionResult(stdout="", stderr="", exit_code=0)
        self._on_execute = on_execute
        self.calls: list[list[str]] = []

    @property
    def scan_calls(self) -> list[list[str]]:
        """Recorded calls other than version probes."""
        return [c for c in self.calls if c != ["--version"]]

    @property
    def probe_calls(self) -> int:
        return sum(1 for c in self.calls if c == ["--version"])

    async def execute(self, tokens: Sequence[str]) -> ExecutionResult:
        call = list(tokens)
        self.calls.append(call)
        if call == ["--version"]:
            if self._version is None:
                return ExecutionResult(
                    stdout="",
                    stderr="Error executing trufflehog: [Errno 2] No such file or directory",
                    exit_code=1,
                )
            return ExecutionResult(stdout=self._version + "\n", stderr="", exit_code=0)
        if self._on_execute is not None:
            self._on_execute(call)
        if self._results:
            return self._results.pop(0)
        return self._default


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
