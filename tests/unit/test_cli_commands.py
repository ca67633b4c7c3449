"""
Integration tests for CLI commands.

The scan pipeline runs against a fake executor patched into the CLI module.
"""

import pytest
from typer.testing import CliRunner

import trufflehog_mcp.cli as cli_module
from tests.support import finding_record, ndjson
from trufflehog_mcp.cli import app
from trufflehog_mcp.infrastructure.fakes import FakeClock, FakeProcessExecutor
from trufflehog_mcp.infrastructure.installation_cache import (
    InstallationStatusCache,
    executor_probe,
)
from trufflehog_mcp.infrastructure.process_executor import ExecutionResult
from trufflehog_mcp.mcp.context import create_mcp_context

runner = CliRunner()


@pytest.fixture
def use_executor(monkeypatch):
    def install(executor: FakeProcessExecutor) -> FakeProcessExecutor:
        def factory(config=None):
            cache = InstallationStatusCache(executor_probe(executor), clock=FakeClock())
            return create_mcp_context(config, executor=executor, installation_cache=cache)

        monkeypatch.setattr(cli_module, "create_mcp_context", factory)
        return executor

    return install


class TestCLIHelp:
    def test_main_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("status", "detectors", "scan-filesystem", "scan-git", "serve"):
            assert command in result.stdout

    def test_scan_filesystem_help(self):
        result = runner.invoke(app, ["scan-filesystem", "--help"])

        assert result.exit_code == 0
        assert "--exclude" in result.stdout


class TestStatusCommand:
    def test_installed(self, use_executor):
        use_executor(FakeProcessExecutor())
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "trufflehog 3.88.0" in result.stdout

    def test_not_installed_exits_1(self, use_executor):
        use_executor(FakeProcessExecutor(version=None))
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "Not installed" in result.stdout


def test_detectors_lists_catalog():
    result = runner.invoke(app, ["detectors"])

    assert result.exit_code == 0
    assert "AWS" in result.stdout
    assert "Salesforce" in result.stdout


class TestScanCommands:
    def test_scan_filesystem_clean(self, use_executor, tmp_path):
        executor = use_executor(FakeProcessExecutor())
        result = runner.invoke(app, ["scan-filesystem", str(tmp_path)])

        assert result.exit_code == 0
        assert "No secrets found." in result.stdout
        assert executor.scan_calls[0][0] == "filesystem"

    def test_scan_filesystem_findings_exit_2(self, use_executor, tmp_path):
        use_executor(
            FakeProcessExecutor(results=[ExecutionResult(ndjson(finding_record(detector="AWS")), "", 0)])
        )
        result = runner.invoke(app, ["scan-filesystem", str(tmp_path), "--only-verified"])

        assert result.exit_code == 2
        assert "Found 1 secret(s)" in result.stdout

    def test_scan_git_error_exits_1(self, use_executor):
        use_executor(FakeProcessExecutor(results=[ExecutionResult("", "repository not found", 1)]))
        result = runner.invoke(app, ["scan-git", "https://example.com/missing.git", "--max-depth", "3"])

        assert result.exit_code == 1
        assert "repository not found" in result.stdout
