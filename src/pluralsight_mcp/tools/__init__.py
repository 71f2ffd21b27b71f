"""
Pluralsight MCP Tools

Modules:
  catalog_tools  — 5 catalog lookup tools backed by CatalogClient
"""

from pluralsight_mcp.tools.catalog_tools import TOOLS, TOOL_NAMES, CatalogTools

__all__ = ["TOOLS", "TOOL_NAMES", "CatalogTools"]
