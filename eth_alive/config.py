"""Central configuration for eth_alive."""

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass
from urllib.parse import urlparse

from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_LAG_THRESHOLD = 3
DEFAULT_ALERT_COOLDOWN_MINUTES = 15
DEFAULT_POLL_INTERVAL_SECONDS = 60
DEFAULT_RPC_TIMEOUT_SECONDS = 5.0

_BOOL_TRUE = {"1", "true", "yes", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


def _require_url(name: str) -> str:
    """Read a required http(s) URL from the environment.

    Args:
        name: Environment variable name (e.g. "LOCAL_RPC_URL")

    Returns:
        The stripped URL string.

    Raises:
        ConfigurationError: If the variable is missing, empty or not a URL.
    """
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        raise ConfigurationError(f"Required environment variable '{name}' not set")
    parsed = urlparse(raw)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(f"{name} must be an http(s) URL, got {raw!r}")
    return raw


def _read_int(name: str, default: int, minimum: int) -> int:
    """Parse an integer environment variable with a lower bound.

    Example:
        >>> os.environ["LAG_THRESHOLD"] = "5"
        >>> _read_int("LAG_THRESHOLD", 3, 0)
        5
    """
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _read_bool(name: str, default: bool) -> bool:
    raw = (os.environ.get(name) or "").strip().lower()
    if not raw:
        return default
    if raw in _BOOL_TRUE:
        return True
    if raw in _BOOL_FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Configuration settings for eth_alive.

    All settings are loaded from environment variables once at startup.
    """

    LOCAL_RPC_URL: str
    REMOTE_RPC_URL: str
    DISCORD_WEBHOOK_URL: str
    LAG_THRESHOLD: int = DEFAULT_LAG_THRESHOLD
    ALERT_COOLDOWN_MINUTES: int = DEFAULT_ALERT_COOLDOWN_MINUTES
    POLL_INTERVAL_SECONDS: int = DEFAULT_POLL_INTERVAL_SECONDS
    RPC_TIMEOUT_SECONDS: float = DEFAULT_RPC_TIMEOUT_SECONDS
    NOTIFY_ON_RECOVERY: bool = True
    NODE_NAME: str = "eth-node"

    @property
    def cooldown_s(self) -> int:
        return self.ALERT_COOLDOWN_MINUTES * 60


def _read_settings() -> Settings:
    """Read all configuration from environment variables.

    Returns:
        Settings object with all configuration values.

    Raises:
        ConfigurationError: On the first missing or invalid value.

    Note:
        RPC_TIMEOUT_SECONDS defaults to 5s, capped at half the poll interval,
        and must always stay strictly below POLL_INTERVAL_SECONDS.
    """
    local_rpc = _require_url("LOCAL_RPC_URL")
    remote_rpc = _require_url("REMOTE_RPC_URL")
    webhook = _require_url("DISCORD_WEBHOOK_URL")

    lag_threshold = _read_int("LAG_THRESHOLD", DEFAULT_LAG_THRESHOLD, 0)
    cooldown_min = _read_int(
        "ALERT_COOLDOWN_MINUTES", DEFAULT_ALERT_COOLDOWN_MINUTES, 1
    )
    poll_interval = _read_int(
        "POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS, 1
    )

    timeout_raw = (os.environ.get("RPC_TIMEOUT_SECONDS") or "").strip()
    if timeout_raw:
        try:
            rpc_timeout = float(timeout_raw)
        except ValueError:
            raise ConfigurationError(
                f"RPC_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}"
            ) from None
        if rpc_timeout <= 0:
            raise ConfigurationError("RPC_TIMEOUT_SECONDS must be > 0")
    else:
        rpc_timeout = min(DEFAULT_RPC_TIMEOUT_SECONDS, poll_interval / 2)
    if rpc_timeout >= poll_interval:
        raise ConfigurationError(
            f"RPC_TIMEOUT_SECONDS ({rpc_timeout:g}) must be less than "
            f"POLL_INTERVAL_SECONDS ({poll_interval})"
        )

    notify_on_recovery = _read_bool("NOTIFY_ON_RECOVERY", True)
    node_name = (os.environ.get("NODE_NAME") or "").strip() or (
        platform.node() or "eth-node"
    )

    return Settings(
        LOCAL_RPC_URL=local_rpc,
        REMOTE_RPC_URL=remote_rpc,
        DISCORD_WEBHOOK_URL=webhook,
        LAG_THRESHOLD=lag_threshold,
        ALERT_COOLDOWN_MINUTES=cooldown_min,
        POLL_INTERVAL_SECONDS=poll_interval,
        RPC_TIMEOUT_SECONDS=rpc_timeout,
        NOTIFY_ON_RECOVERY=notify_on_recovery,
        NODE_NAME=node_name,
    )


def load_settings() -> Settings:
    """Load `.env` (if present) and read settings from the environment.

    Variables already present in the process environment take precedence
    over the `.env` file.
    """
    if load_dotenv(override=False):
        logger.debug("Loaded environment from .env")
    return _read_settings()


def describe_settings(settings: Settings) -> list[str]:
    """Human-readable settings summary with the webhook redacted."""
    return [
        f"Node:      {settings.NODE_NAME}",
        f"Local:     {settings.LOCAL_RPC_URL}",
        f"Remote:    {settings.REMOTE_RPC_URL}",
        f"Threshold: {settings.LAG_THRESHOLD} blocks",
        f"Cooldown:  {settings.ALERT_COOLDOWN_MINUTES}m",
        f"Interval:  {settings.POLL_INTERVAL_SECONDS}s "
        f"(rpc timeout {settings.RPC_TIMEOUT_SECONDS:g}s)",
        f"Recovery:  {'on' if settings.NOTIFY_ON_RECOVERY else 'off'}",
        "Webhook:   [REDACTED]",
    ]
