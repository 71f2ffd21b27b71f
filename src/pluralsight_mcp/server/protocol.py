"""
JSON-RPC 2.0 Protocol — MCP message construction and validation

Handles:
- Request/response/error construction
- Message classification (request vs notification)
- MCP result builders for initialize, tools/list and tools/call
"""

from typing import Any, Dict, List, Optional, Union

JSONRPC_VERSION = "2.0"


class ProtocolError(Exception):
    """JSON-RPC protocol error"""
    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)


# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def validate_message(msg: Dict[str, Any]) -> str:
    """
    Validate an inbound JSON-RPC 2.0 message.
    Returns 'request' or 'notification', or raises ProtocolError.

    A server only ever receives calls, so responses arriving on stdin
    are rejected as invalid requests.
    """
    if not isinstance(msg, dict):
        raise ProtocolError(INVALID_REQUEST, "Message must be a JSON object")

    if msg.get("jsonrpc") != JSONRPC_VERSION:
        raise ProtocolError(INVALID_REQUEST, f"Expected jsonrpc={JSONRPC_VERSION}")

    method = msg.get("method")
    if not isinstance(method, str) or not method:
        raise ProtocolError(INVALID_REQUEST, "Missing method")

    params = msg.get("params")
    if params is not None and not isinstance(params, dict):
        raise ProtocolError(INVALID_PARAMS, "params must be an object")

    return "request" if "id" in msg else "notification"


def make_response(request_id: Union[int, str], result: Any) -> Dict[str, Any]:
    """Build a JSON-RPC success response."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "result": result,
    }


def make_error(
    request_id: Optional[Union[int, str]],
    code: int,
    message: str,
    data: Any = None,
) -> Dict[str, Any]:
    """Build a JSON-RPC error response."""
    error = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": error,
    }


# --- MCP-specific message builders ---

def initialize_result(
    server_name: str,
    server_version: str,
    protocol_version: str,
) -> Dict[str, Any]:
    """Build the MCP initialize result. Only tools are advertised."""
    return {
        "protocolVersion": protocol_version,
        "capabilities": {"tools": {"listChanged": False}},
        "serverInfo": {
            "name": server_name,
            "version": server_version,
        },
    }


def tools_list_result(tools: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"tools": tools}


def text_content(text: str) -> Dict[str, Any]:
    """Build a text content block."""
    return {"type": "text", "text": text}


def tool_result_content(
    content: List[Dict[str, Any]],
    is_error: bool = False,
) -> Dict[str, Any]:
    """Build the MCP tools/call result."""
    result = {"content": content}
    if is_error:
        result["isError"] = True
    return result


def text_result(text: str) -> Dict[str, Any]:
    """A tools/call result holding a single text item."""
    return tool_result_content([text_content(text)])


def error_result(message: str) -> Dict[str, Any]:
    """An error-shaped tools/call result: still a successful JSON-RPC reply."""
    return tool_result_content([text_content(f"Error: {message}")], is_error=True)
