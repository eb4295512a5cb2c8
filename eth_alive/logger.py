"""Logging helpers for eth_alive
"""
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# HTTP client libraries log every request; one poll cycle makes several
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def setup_logging(level_name: str | None = None) -> None:
    """Configure the root logger once for the daemon.

    The level comes from `level_name` or the LOG_LEVEL environment variable
    (default INFO); unknown names fall back to INFO.
    """
    name = (level_name or os.environ.get("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(level)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))


__all__ = ["setup_logging", "LOG_FORMAT"]
