"""
MCP Server module for OutlineLens.

This module provides the Model Context Protocol server implementation
exposing framework-aware symbol outlines.

Exports:
    - mcp: FastMCP server instance
    - main: Entry point for running the MCP server
    - get_state: Get MCP session state
    - reset_state: Reset MCP session state (for testing)
    - MCPSessionState: Session state dataclass
"""

from outline_lens.mcp.server import mcp, main
from outline_lens.mcp.state import get_state, reset_state, MCPSessionState

__all__ = [
    "mcp",
    "main",
    "get_state",
    "reset_state",
    "MCPSessionState",
]
