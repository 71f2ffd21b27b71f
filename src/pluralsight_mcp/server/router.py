"""
Method Router — Dispatch MCP methods to handlers

Routes:
  initialize       -> server capabilities handshake
  initialized      -> notification (no response)
  tools/list       -> registered tool definitions
  tools/call       -> tool handler dispatch
  ping             -> pong
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional

from pluralsight_mcp.config import Config
from pluralsight_mcp.server.logger import get_logger
from pluralsight_mcp.server.protocol import (
    initialize_result,
    tools_list_result,
    error_result,
    ProtocolError,
    METHOD_NOT_FOUND,
)

log = get_logger("router")

ToolHandler = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]


class Router:
    """MCP method dispatcher."""

    def __init__(self):
        self._tools: List[Dict[str, Any]] = []
        self._tool_handlers: Dict[str, ToolHandler] = {}
        self._initialized = False

    def register_tools_module(self, tools_list: List[Dict], handler: ToolHandler):
        """Register a tools module."""
        self._tools.extend(tools_list)
        for tool in tools_list:
            self._tool_handlers[tool["name"]] = handler
        log.info(f"Registered {len(tools_list)} tools: {[t['name'] for t in tools_list]}")

    async def route(self, msg_type: str, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Route a validated message to the appropriate handler.
        Returns the result payload or None for notifications.
        """
        method = msg.get("method", "")
        params = msg.get("params") or {}

        if method == "initialize":
            return self._handle_initialize(params)

        if method in ("initialized", "notifications/initialized"):
            self._initialized = True
            return None

        if method == "notifications/cancelled":
            return None

        if method == "ping":
            return {}

        if method == "tools/list":
            return tools_list_result(self._tools)

        if method == "tools/call":
            return await self._handle_tools_call(params)

        if msg_type == "notification":
            log.debug(f"Ignoring notification: {method}")
            return None

        raise ProtocolError(METHOD_NOT_FOUND, f"Unknown method: {method}")

    def _handle_initialize(self, params: Dict) -> Dict[str, Any]:
        log.info(
            f"Client initialize: {params.get('clientInfo', {}).get('name', '?')} "
            f"protocol={params.get('protocolVersion', '?')}"
        )
        return initialize_result(
            server_name=Config.SERVER_NAME,
            server_version=Config.SERVER_VERSION,
            protocol_version=Config.PROTOCOL_VERSION,
        )

    async def _handle_tools_call(self, params: Dict) -> Dict[str, Any]:
        name = params.get("name", "")
        args = params.get("arguments") or {}

        # Tool-level failures are reported in the result, never as JSON-RPC errors
        handler = self._tool_handlers.get(name) if isinstance(name, str) else None
        if handler is None:
            log.warning(f"Unknown tool requested: {name!r}")
            return error_result(f"Unknown tool: {name}")

        try:
            return await handler(name, args)
        except Exception as exc:
            log.error(f"Tool {name} error: {exc}", exc_info=True)
            return error_result(str(exc))

    @property
    def tool_count(self) -> int:
        return len(self._tools)

    @property
    def initialized(self) -> bool:
        return self._initialized
