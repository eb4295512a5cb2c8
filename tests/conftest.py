"""Shared test fixtures and dummy classes."""

from __future__ import annotations

import json
from typing import Callable

import httpx

from eth_alive.config import Settings
from eth_alive.models.heights import HeightResult

LOCAL_URL = "http://local-node:8545"
REMOTE_URL = "https://remote.example/rpc"
WEBHOOK_URL = "https://discord.example/api/webhooks/1/token"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "LOCAL_RPC_URL": LOCAL_URL,
        "REMOTE_RPC_URL": REMOTE_URL,
        "DISCORD_WEBHOOK_URL": WEBHOOK_URL,
        "LAG_THRESHOLD": 3,
        "ALERT_COOLDOWN_MINUTES": 15,
        "POLL_INTERVAL_SECONDS": 60,
        "RPC_TIMEOUT_SECONDS": 5.0,
        "NOTIFY_ON_RECOVERY": True,
        "NODE_NAME": "test-node",
    }
    values.update(overrides)
    return Settings(**values)


def rpc_response(result: object, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json={"jsonrpc": "2.0", "id": 1, "result": result})


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)


class DummyRpc:
    """Scripted RPC client: a queue of HeightResults per URL."""

    def __init__(self, results: dict[str, list[HeightResult]]) -> None:
        self.results = {url: list(items) for url, items in results.items()}
        self.calls: list[str] = []

    async def query_height(self, url: str) -> HeightResult:
        self.calls.append(url)
        queue = self.results[url]
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]


class DummyNotifier:
    """Records messages instead of posting them."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.sent: list[str] = []

    async def send(self, message: str) -> bool:
        self.sent.append(message)
        return self.succeed


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
