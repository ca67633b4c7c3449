"""
TruffleHog MCP server.

Exposes the TruffleHog secret scanner CLI as Model Context Protocol tools.
"""

__version__ = "1.1.0"
