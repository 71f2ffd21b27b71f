"""Tests for Router and MCPServer message handling."""

import pytest

from pluralsight_mcp.server.protocol import METHOD_NOT_FOUND, INVALID_REQUEST, INTERNAL_ERROR
from pluralsight_mcp.server.server import MCPServer
from pluralsight_mcp.tools.catalog_tools import TOOLS, CatalogTools


def _request(request_id, method, params=None):
    msg = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        msg["params"] = params
    return msg


@pytest.fixture
def server(tmp_data_dir, offline_client):
    srv = MCPServer()
    srv.register_tools(TOOLS, CatalogTools(offline_client).handle_tool)
    return srv


class TestHandshake:
    async def test_initialize(self, server):
        resp = await server.handle_message(_request(1, "initialize", {
            "protocolVersion": "2024-11-05",
            "capabilities": {},
            "clientInfo": {"name": "test-client", "version": "1.0"},
        }))
        assert resp["id"] == 1
        assert resp["result"]["serverInfo"]["name"] == "pluralsight-mcp-server"
        assert resp["result"]["protocolVersion"] == "2024-11-05"

    async def test_initialized_notification(self, server):
        resp = await server.handle_message({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert resp is None
        assert server.router.initialized

    async def test_ping(self, server):
        assert (await server.handle_message(_request(7, "ping")))["result"] == {}


class TestTools:
    async def test_tools_list(self, server):
        resp = await server.handle_message(_request(2, "tools/list"))
        names = [t["name"] for t in resp["result"]["tools"]]
        assert len(names) == 5
        assert "search_courses" in names
        assert server.router.tool_count == 5

    async def test_tools_call(self, server):
        resp = await server.handle_message(_request(3, "tools/call", {
            "name": "get_course", "arguments": {"courseId": "react-fundamentals"},
        }))
        content = resp["result"]["content"]
        assert len(content) == 1
        assert '"title": "React Fundamentals"' in content[0]["text"]

    async def test_unknown_tool_is_not_a_protocol_error(self, server):
        resp = await server.handle_message(_request(4, "tools/call", {
            "name": "no_such_tool", "arguments": {},
        }))
        assert "error" not in resp
        text = resp["result"]["content"][0]["text"]
        assert text.startswith("Error:")
        assert "no_such_tool" in text

    @pytest.mark.parametrize("name", [["get_course"], {"tool": "get_course"}, 7, None])
    async def test_non_string_tool_name(self, server, name):
        resp = await server.handle_message(_request(11, "tools/call", {
            "name": name, "arguments": {"courseId": "react-fundamentals"},
        }))
        assert "error" not in resp
        content = resp["result"]["content"]
        assert len(content) == 1
        assert content[0]["text"].startswith("Error: Unknown tool:")

    async def test_missing_arguments_object(self, server):
        resp = await server.handle_message(_request(5, "tools/call", {"name": "get_learning_paths"}))
        assert "frontend-developer" in resp["result"]["content"][0]["text"]

    async def test_handler_exception_is_error_text(self, tmp_data_dir):
        async def explode(name, args):
            raise RuntimeError("handler blew up")

        srv = MCPServer()
        srv.register_tools([{"name": "boom", "description": "", "inputSchema": {"type": "object"}}], explode)
        resp = await srv.handle_message(_request(6, "tools/call", {"name": "boom", "arguments": {}}))
        assert resp["result"]["content"][0]["text"] == "Error: handler blew up"


class TestErrors:
    async def test_unknown_method(self, server):
        resp = await server.handle_message(_request(8, "resources/list"))
        assert resp["error"]["code"] == METHOD_NOT_FOUND

    async def test_unknown_notification_is_silent(self, server):
        assert await server.handle_message({"jsonrpc": "2.0", "method": "notifications/progress"}) is None

    async def test_invalid_envelope(self, server):
        resp = await server.handle_message({"jsonrpc": "1.0", "id": 9, "method": "ping"})
        assert resp["error"]["code"] == INVALID_REQUEST
        assert resp["id"] == 9

    async def test_internal_error(self, server, monkeypatch):
        async def broken(msg_type, msg):
            raise RuntimeError("router down")

        monkeypatch.setattr(server.router, "route", broken)
        resp = await server.handle_message(_request(10, "ping"))
        assert resp["error"]["code"] == INTERNAL_ERROR


class TestShutdown:
    async def test_closers_run_once(self, tmp_data_dir):
        calls = []

        async def closer():
            calls.append("closed")

        srv = MCPServer()
        srv.on_shutdown(closer)
        srv._running = True
        await srv.shutdown()
        await srv.shutdown()
        assert calls == ["closed"]
