"""Exception types raised across eth_alive."""

from __future__ import annotations


class EthAliveError(Exception):
    """Base class for eth_alive errors."""


class ConfigurationError(EthAliveError):
    """Invalid or missing configuration; fatal at startup."""


class RpcError(EthAliveError):
    """A single JSON-RPC query failed."""

    reason = "rpc_error"

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"{url}: {detail}")
        self.url = url
        self.detail = detail


class RpcUnreachable(RpcError):
    """Connection refused, DNS failure or timeout."""

    reason = "unreachable"


class RpcProtocolError(RpcError):
    """Non-2xx status or a response that is not a usable block number."""

    reason = "protocol_error"


class NotificationDeliveryError(EthAliveError):
    """A webhook post was not accepted."""
