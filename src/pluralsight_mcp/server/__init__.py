"""Pluralsight MCP Server — Raw protocol implementation."""

from pluralsight_mcp.server.server import MCPServer
from pluralsight_mcp.server.router import Router

__all__ = ["MCPServer", "Router"]
