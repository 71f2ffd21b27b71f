"""
MCP Server — Main Orchestrator

Ties together:
  Transport -> Protocol -> Router -> Tools -> CatalogClient

Flow:
  1. Transport reads one line from stdin and parses it
  2. Protocol validates JSON-RPC 2.0
  3. Router dispatches to the correct handler
  4. Transport writes the response to stdout (requests only)
"""

import asyncio
import signal
from typing import Any, Dict, List, Optional

from pluralsight_mcp.config import Config
from pluralsight_mcp.server.logger import get_logger
from pluralsight_mcp.server.transport import StdioTransport, is_eof
from pluralsight_mcp.server.protocol import (
    validate_message,
    make_response,
    make_error,
    ProtocolError,
    INTERNAL_ERROR,
)
from pluralsight_mcp.server.router import Router, ToolHandler

log = get_logger("server")


class MCPServer:
    """
    Main server orchestrator.

    Usage:
        server = MCPServer()
        server.register_tools(TOOLS, tools.handle_tool)
        server.on_shutdown(client.aclose)
        await server.run()
    """

    def __init__(self, transport: Optional[StdioTransport] = None):
        Config.ensure_dirs()

        self._transport = transport or StdioTransport()
        self._router = Router()
        self._closers: List = []
        self._running = False
        self._shutdown_task: Optional[asyncio.Task] = None

    # -- registration (call before run) --

    def register_tools(self, tools_list: List[Dict], handler: ToolHandler):
        """Register a tools module with the router."""
        self._router.register_tools_module(tools_list, handler)

    def on_shutdown(self, closer):
        """Register an async callable to run when the server stops."""
        self._closers.append(closer)

    @property
    def router(self) -> Router:
        return self._router

    # -- main loop --

    async def run(self):
        """Start the server and process messages until EOF or signal."""
        log.info(f"Starting {Config.SERVER_NAME} v{Config.SERVER_VERSION}")

        await self._transport.start()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self._on_signal)
            except NotImplementedError:
                pass

        self._running = True
        log.info(f"Server ready — tools={self._router.tool_count}")

        try:
            while self._running:
                msg = await self._transport.read_message()
                if is_eof(msg):
                    log.info("EOF on stdin — shutting down")
                    break
                if msg is None:
                    continue

                response = await self.handle_message(msg)
                if response is not None:
                    await self._transport.write_message(response)

        except asyncio.CancelledError:
            log.info("Server cancelled")
        except Exception as exc:
            log.error(f"Server error: {exc}", exc_info=True)
        finally:
            await self.shutdown()
            if self._shutdown_task is not None:
                await self._shutdown_task

    def _on_signal(self):
        # Closing the transport wakes the pending read, which ends run()
        if self._shutdown_task is None:
            self._shutdown_task = asyncio.create_task(self.shutdown())

    async def handle_message(self, msg: Any) -> Optional[Dict[str, Any]]:
        """Process one JSON-RPC message; returns the response, or None for notifications."""
        request_id = msg.get("id") if isinstance(msg, dict) else None

        try:
            msg_type = validate_message(msg)
            result = await self._router.route(msg_type, msg)

            if msg_type == "notification" or result is None:
                return None

            return make_response(request_id, result)

        except ProtocolError as exc:
            log.warning(f"Protocol error: {exc.message} (code={exc.code})")
            if isinstance(msg, dict) and "id" not in msg and "method" in msg:
                return None
            return make_error(request_id, exc.code, exc.message, exc.data)

        except Exception as exc:
            log.error(f"Unhandled error: {exc}", exc_info=True)
            if request_id is None:
                return None
            return make_error(request_id, INTERNAL_ERROR, str(exc))

    async def shutdown(self):
        """Graceful shutdown — close the transport and release HTTP handles."""
        if not self._running:
            return
        self._running = False

        log.info("Shutting down")
        await self._transport.close()
        for closer in self._closers:
            try:
                await closer()
            except Exception as exc:
                log.error(f"Shutdown hook failed: {exc}")

        log.info("Server stopped")
