"""
MCP Server for TruffleHog.

Entry point for the stdio MCP server. The implementation is split across
submodules:
- mcp/context.py: MCPContext dataclass and factory
- mcp/tools.py: Tool definitions and schemas
- mcp/handlers.py: Tool handler implementations
"""

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env before reading configuration: CWD first, then the project root
if not load_dotenv():
    _env_file = Path(__file__).parent.parent.parent / ".env"
    if _env_file.exists():
        load_dotenv(_env_file)

from mcp.server import Server
from mcp.server.stdio import stdio_server

from trufflehog_mcp.core.config import configure_logging, load_config
from trufflehog_mcp.mcp.context import MCPContext, create_mcp_context
from trufflehog_mcp.mcp.handlers import call_tool
from trufflehog_mcp.mcp.tools import list_tools

__all__ = ["app", "list_tools", "call_tool", "main"]

logger = logging.getLogger(__name__)

app = Server("trufflehog-mcp")

# Module-level context, created at startup
_ctx: MCPContext | None = None


@app.list_tools()
async def _list_tools():
    """List available MCP tools."""
    return list_tools()


@app.call_tool()
async def _call_tool(name: str, arguments):
    """Handle tool calls from MCP clients."""
    return await call_tool(name, arguments, _ctx)


async def _report_installation(ctx: MCPContext) -> None:
    entry = await ctx.installation_cache.status()
    if entry.installed:
        logger.info(f"TruffleHog CLI detected: {entry.version}")
    else:
        logger.warning("TruffleHog CLI is not installed. Some features will be unavailable.")
        logger.warning(
            "Install with: brew install trufflehog (macOS) or download from "
            "https://github.com/trufflesecurity/trufflehog/releases"
        )


async def _run_server():
    """Run the MCP server (async implementation)."""
    global _ctx

    config = load_config()
    configure_logging(config.logging)

    _ctx = create_mcp_context(config)
    await _report_installation(_ctx)

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("TruffleHog MCP Server started")
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        _ctx = None


def main():
    """Entry point for the MCP server."""
    asyncio.run(_run_server())


if __name__ == "__main__":
    main()
