"""Per-cycle snapshot collection."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from .models.heights import Snapshot
from .rpc import RpcHeightClient

logger = logging.getLogger(__name__)


async def collect_snapshot(
    rpc: RpcHeightClient,
    local_url: str,
    remote_url: str,
    clock: Callable[[], float] = time.time,
) -> Snapshot:
    """Query both endpoints concurrently and pair the results.

    Both queries always finish (or time out) before the snapshot is built;
    a failed endpoint shows up as a failed HeightResult, never as an error.
    """
    local, remote = await asyncio.gather(
        rpc.query_height(local_url), rpc.query_height(remote_url)
    )
    return Snapshot(local=local, remote=remote, observed_at=clock())


class SnapshotCollector:
    def __init__(
        self,
        rpc: RpcHeightClient,
        local_url: str,
        remote_url: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.rpc = rpc
        self.local_url = local_url
        self.remote_url = remote_url
        self.clock = clock

    async def collect(self) -> Snapshot:
        return await collect_snapshot(
            self.rpc, self.local_url, self.remote_url, clock=self.clock
        )
