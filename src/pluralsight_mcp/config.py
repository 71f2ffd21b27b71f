"""
Pluralsight MCP Configuration — Server settings and client credentials

Load order: env vars > ./.env > ~/.pluralsight-mcp/config.env > defaults
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_URL = "https://app.pluralsight.com/api"


def _default_data_dir() -> Path:
    return Path(os.environ.get("PLURALSIGHT_MCP_DATA_DIR", str(Path.home() / ".pluralsight-mcp")))


def load_env_file(path: Path):
    """Load key=value pairs from an env file, never overriding set variables."""
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


# Working-directory .env wins over the data dir config.env
load_env_file(Path.cwd() / ".env")
load_env_file(_default_data_dir() / "config.env")


class Config:
    # Server identity
    SERVER_NAME = "pluralsight-mcp-server"
    SERVER_VERSION = "1.0.0"
    PROTOCOL_VERSION = "2024-11-05"

    # Paths
    DATA_DIR = _default_data_dir()
    LOG_DIR = DATA_DIR / "logs"

    # Logging (NEVER to stdout — would corrupt MCP protocol)
    LOG_LEVEL = os.environ.get("PLURALSIGHT_MCP_LOG_LEVEL", "INFO")
    LOG_FILE = LOG_DIR / "pluralsight-mcp.log"
    ERROR_LOG = LOG_DIR / "pluralsight-mcp-errors.log"

    @classmethod
    def ensure_dirs(cls):
        """Create required directories."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the remote catalog API."""

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            api_key=os.environ.get("PLURALSIGHT_API_KEY", ""),
            base_url=os.environ.get("PLURALSIGHT_BASE_URL") or DEFAULT_BASE_URL,
        )

    @property
    def headers(self):
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
