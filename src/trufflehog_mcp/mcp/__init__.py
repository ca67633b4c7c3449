"""
MCP (Model Context Protocol) server package for TruffleHog.

This package provides the MCP interface to the scan service.
"""

from trufflehog_mcp.mcp.context import MCPContext, create_mcp_context
from trufflehog_mcp.mcp.handlers import call_tool
from trufflehog_mcp.mcp.tools import list_tools

__all__ = [
    "MCPContext",
    "create_mcp_context",
    "list_tools",
    "call_tool",
]
