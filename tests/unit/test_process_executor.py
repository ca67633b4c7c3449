"""Tests for the process executor, using the Python interpreter as the child."""

import sys

import pytest

from trufflehog_mcp.infrastructure.process_executor import (
    LAUNCH_FAILURE_EXIT_CODE,
    ExecutionResult,
    ProcessExecutor,
    normalize_exit_code,
)


@pytest.fixture
def executor() -> ProcessExecutor:
    return ProcessExecutor(binary=sys.executable)


@pytest.mark.asyncio
async def test_captures_stdout_stderr_and_exit_code(executor):
    script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"

    result = await executor.execute(["-c", script])

    assert result.stdout == "out\n"
    assert result.stderr == "err\n"
    assert result.exit_code == 3


@pytest.mark.asyncio
async def test_arguments_are_not_shell_interpreted(executor):
    script = "import sys; print(sys.argv[1])"
    payload = "$(echo pwned); `id` | cat > /dev/null && echo injected"

    result = await executor.execute(["-c", script, payload])

    assert result.stdout.strip() == payload
    assert result.exit_code == 0


@pytest.mark.asyncio
async def test_large_interleaved_output_is_fully_captured(executor):
    # Enough output on both pipes to fill OS buffers if they were read one at a time
    script = (
        "import sys\n"
        "for i in range(20000):\n"
        "    sys.stdout.write('o' * 20 + '\\n')\n"
        "    sys.stderr.write('e' * 20 + '\\n')\n"
    )

    result = await executor.execute(["-c", script])

    assert result.exit_code == 0
    assert result.stdout.count("\n") == 20000
    assert result.stderr.count("\n") == 20000


@pytest.mark.asyncio
async def test_missing_binary_resolves_with_launch_error():
    executor = ProcessExecutor(binary="trufflehog-definitely-not-installed-xyz")

    result = await executor.execute(["--version"])

    assert result.exit_code == LAUNCH_FAILURE_EXIT_CODE
    assert result.stdout == ""
    assert result.stderr.startswith("Error executing trufflehog-definitely-not-installed-xyz:")


@pytest.mark.asyncio
async def test_invalid_utf8_is_replaced(executor):
    script = "import sys; sys.stdout.buffer.write(b'ok \\xff\\n')"
    result = await executor.execute(["-c", script])
    assert result.stdout == "ok \ufffd\n"


@pytest.mark.asyncio
@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
async def test_signal_termination_reports_negative_exit_code(executor):
    script = "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"
    result = await executor.execute(["-c", script])
    assert result.exit_code < 0


def test_missing_exit_code_is_normalized_to_zero():
    # A None code does not prove success; callers still look at stderr.
    assert normalize_exit_code(None) == 0
    assert normalize_exit_code(2) == 2
    assert normalize_exit_code(-9) == -9


def test_failed_requires_stderr_and_empty_stdout():
    assert ExecutionResult(stdout="", stderr="boom", exit_code=1).failed
    assert not ExecutionResult(stdout="{}", stderr="boom", exit_code=1).failed
    assert not ExecutionResult(stdout="", stderr="", exit_code=1).failed
    assert not ExecutionResult(stdout="", stderr="warning", exit_code=0).failed
