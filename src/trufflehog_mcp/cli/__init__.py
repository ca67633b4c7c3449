"""
CLI for the TruffleHog MCP server.

Runs the same scan pipeline the MCP tools use, from a terminal.
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from trufflehog_mcp.core.config import load_config
from trufflehog_mcp.core.remediation import COMMON_DETECTORS
from trufflehog_mcp.core.scan_request import FilesystemScanRequest, GitScanRequest, ScanRequest
from trufflehog_mcp.mcp.context import create_mcp_context

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="trufflehog-mcp-cli",
    help="TruffleHog MCP server - secret scanning for AI agents",
    add_completion=False,
)


def _print_report(request: ScanRequest, config_path: Optional[Path]) -> None:
    ctx = create_mcp_context(load_config(config_path))
    report = asyncio.run(ctx.scan_service.scan(request))
    if not report.ok:
        console.print(f"[bold red]{report.error}[/bold red]")
        raise typer.Exit(1)
    console.print(Markdown(report.text))
    if report.findings:
        raise typer.Exit(2)


@app.command()
def status(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
):
    """Show TruffleHog installation status and configuration."""
    cfg = load_config(config_path)
    ctx = create_mcp_context(cfg)
    entry = asyncio.run(ctx.installation_cache.status())

    grid = Table.grid(padding=1)
    grid.add_column(style="bold")
    grid.add_column()

    if entry.installed:
        grid.add_row("TruffleHog:", f"[green]✓[/green] {entry.version}")
    else:
        grid.add_row("TruffleHog:", "[red]✗[/red] Not installed")
    grid.add_row("Binary:", cfg.scanner.binary)
    grid.add_row("API URL:", cfg.enterprise.api_url or "[dim]Not configured[/dim]")
    grid.add_row(
        "API Key:", "Configured (hidden)" if cfg.enterprise.api_key else "[dim]Not configured[/dim]"
    )
    grid.add_row("Scanner Group:", cfg.enterprise.scanner_group or "[dim]Not configured[/dim]")
    grid.add_row("Webhook URL:", cfg.webhook.url or "[dim]Not configured[/dim]")

    console.print(Panel(grid, title="TruffleHog Status", border_style="blue", expand=False))
    if not entry.installed:
        raise typer.Exit(1)


@app.command()
def detectors():
    """List common secret detectors."""
    table = Table(title="TruffleHog Detectors")
    table.add_column("Detector", style="cyan")
    table.add_column("Description")
    for name, description in COMMON_DETECTORS:
        table.add_row(name, description)
    console.print(table)


@app.command("scan-filesystem")
def scan_filesystem(
    path: Path = typer.Argument(..., help="Directory to scan"),
    exclude: Optional[list[str]] = typer.Option(None, "--exclude", "-e", help="Path to exclude"),
    only_verified: bool = typer.Option(False, "--only-verified", help="Only report verified secrets"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
):
    """Scan a local directory for secrets. Exits 2 when secrets are found."""
    request = FilesystemScanRequest(
        path=str(path),
        exclude_paths=tuple(exclude or ()),
        only_verified=only_verified,
    )
    _print_report(request, config_path)


@app.command("scan-git")
def scan_git(
    target: str = typer.Argument(..., help="Repository URL or local path"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to scan"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Maximum commit depth"),
    since_commit: Optional[str] = typer.Option(None, "--since-commit", help="Scan commits since this one"),
    only_verified: bool = typer.Option(False, "--only-verified", help="Only report verified secrets"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
):
    """Scan a git repository's history for secrets. Exits 2 when secrets are found."""
    request = GitScanRequest(
        target=target,
        branch=branch,
        max_depth=max_depth,
        since_commit=since_commit,
        only_verified=only_verified,
    )
    _print_report(request, config_path)


@app.command()
def serve():
    """Start the MCP server on stdio."""
    from trufflehog_mcp.mcp_server import main

    main()


if __name__ == "__main__":
    app()
