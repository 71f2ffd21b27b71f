"""Shared fixtures for Pluralsight MCP tests."""

import os
import tempfile

import pytest

# Keep log files out of the real home directory; must happen before any
# pluralsight_mcp import reads the environment.
os.environ.setdefault("PLURALSIGHT_MCP_DATA_DIR", tempfile.mkdtemp(prefix="pluralsight-mcp-"))

import httpx  # noqa: E402

from pluralsight_mcp.catalog.client import CatalogClient  # noqa: E402
from pluralsight_mcp.config import ClientConfig  # noqa: E402

BASE_URL = "https://catalog.test/api"


@pytest.fixture
def tmp_data_dir(tmp_path):
    """Point Config at a temp data directory for isolated tests."""
    from pluralsight_mcp import config

    data_dir = tmp_path / ".pluralsight-mcp"
    data_dir.mkdir()
    (data_dir / "logs").mkdir()

    saved = (config.Config.DATA_DIR, config.Config.LOG_DIR)
    config.Config.DATA_DIR = data_dir
    config.Config.LOG_DIR = data_dir / "logs"

    yield data_dir

    config.Config.DATA_DIR, config.Config.LOG_DIR = saved


@pytest.fixture
def client_config():
    return ClientConfig(api_key="test-key", base_url=BASE_URL)


@pytest.fixture
async def make_client(client_config):
    """Build CatalogClients whose HTTP traffic goes to a request handler."""
    clients = []

    def _make(handler):
        client = CatalogClient(client_config, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
async def offline_client(client_config):
    """A client whose every remote call fails to connect."""
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = CatalogClient(client_config, transport=httpx.MockTransport(unreachable))
    yield client
    await client.aclose()
