"""
File-only logger — NEVER writes to stdout (would corrupt MCP protocol)
"""

import logging

from pluralsight_mcp.config import Config

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Get a logger that writes to file only."""
    Config.ensure_dirs()

    logger = logging.getLogger(f"pluralsight_mcp.{name}")
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

    fh = logging.FileHandler(Config.LOG_FILE, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(fh)

    eh = logging.FileHandler(Config.ERROR_LOG, encoding="utf-8")
    eh.setLevel(logging.ERROR)
    eh.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(eh)

    logger.propagate = False
    return logger
