"""
STDIO Transport — newline-delimited JSON-RPC over stdin/stdout

Reads from stdin, writes to stdout.
NEVER pollutes stdout with logs.
"""

import sys
import json
import asyncio
from typing import Optional, Dict, Any

from pluralsight_mcp.server.logger import get_logger

log = get_logger("transport")

_EOF = object()


class StdioTransport:
    """Line-framed STDIO transport."""

    def __init__(self):
        self.running = False
        self._reader: Optional[asyncio.StreamReader] = None
        self._stdout = None

    async def start(self):
        """Initialize async stdin reader and direct stdout writer."""
        loop = asyncio.get_running_loop()

        self._reader = asyncio.StreamReader(limit=2**20)
        protocol = asyncio.StreamReaderProtocol(self._reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)

        self._stdout = sys.stdout.buffer
        self.running = True
        log.info("Transport initialized")

    async def read_message(self):
        """
        Read one JSON-RPC message from stdin.
        Returns the parsed message, None for a line that could not be
        parsed, or _EOF when stdin is closed.
        """
        if not self._reader:
            raise RuntimeError("Transport not started")

        try:
            raw_bytes = await self._reader.readline()
        except asyncio.CancelledError:
            raise
        except ValueError as exc:
            # Oversized line: the reader has already discarded it
            log.error(f"Skipping unreadable line: {exc}")
            return None
        except ConnectionError as exc:
            log.error(f"Read error: {exc}")
            return _EOF

        if not raw_bytes:
            return _EOF
        if not raw_bytes.strip():
            return None

        try:
            return json.loads(raw_bytes)
        except json.JSONDecodeError as exc:
            log.error(f"JSON parse error: {exc}")
            return None

    async def write_message(self, message: Dict[str, Any]):
        """Write a JSON-RPC message to stdout."""
        if self._stdout is None:
            raise RuntimeError("Transport not started")

        raw_text = json.dumps(message, separators=(",", ":"), ensure_ascii=False) + "\n"
        self._stdout.write(raw_text.encode("utf-8"))
        self._stdout.flush()

    async def close(self):
        """Stop reading: a pending read_message() returns EOF."""
        self.running = False
        if self._reader is not None:
            self._reader.feed_eof()
        log.info("Transport closed")


def is_eof(message) -> bool:
    return message is _EOF
