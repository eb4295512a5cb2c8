"""Watchdog loop: collect, evaluate, decide, notify."""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable

from .alerting import AlertStateMachine
from .collector import SnapshotCollector
from .config import Settings
from .evaluator import evaluate
from .models.alerts import AlertDecision
from .models.heights import Snapshot
from .models.verdict import Verdict
from .notifier import WebhookNotifier, format_alert_message, format_recovery_message
from .rpc import RpcHeightClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleOutcome:
    snapshot: Snapshot
    verdict: Verdict
    decision: AlertDecision
    # None when nothing was sent
    delivered: bool | None = None


def _log_verdict(verdict: Verdict) -> None:
    if verdict.kind == "healthy":
        logger.info(
            "Synced! [Lag: %s] | Local: %s | Remote: %s",
            verdict.blocks_behind,
            verdict.local_height,
            verdict.remote_height,
        )
    elif verdict.kind == "lagging":
        logger.warning(
            "Node lagging! [Lag: %s] | Local: %s | Remote: %s",
            verdict.blocks_behind,
            verdict.local_height,
            verdict.remote_height,
        )
    elif verdict.kind == "local_unreachable":
        logger.error("LOCAL NODE DOWN: %s", verdict.detail)
    else:
        logger.error("FAILED to fetch Remote RPC: %s", verdict.detail)


class Watchdog:
    """Runs polling cycles at a fixed interval, one at a time."""

    def __init__(
        self,
        settings: Settings,
        rpc: RpcHeightClient,
        notifier: WebhookNotifier,
        machine: AlertStateMachine | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings
        self.notifier = notifier
        self.collector = SnapshotCollector(
            rpc, settings.LOCAL_RPC_URL, settings.REMOTE_RPC_URL, clock=clock
        )
        self.machine = machine or AlertStateMachine(
            settings.cooldown_s, notify_on_recovery=settings.NOTIFY_ON_RECOVERY
        )
        self.interval_s = float(settings.POLL_INTERVAL_SECONDS)

    def _build_message(
        self, verdict: Verdict, decision: AlertDecision, ts: float
    ) -> str:
        if decision.recovered:
            return format_recovery_message(
                decision.previous_kind, verdict, self.settings.NODE_NAME, ts
            )
        return format_alert_message(verdict, self.settings.NODE_NAME, ts)

    async def run_cycle(self) -> CycleOutcome:
        snapshot = await self.collector.collect()
        verdict = evaluate(snapshot, self.settings.LAG_THRESHOLD)
        _log_verdict(verdict)

        decision = self.machine.step(verdict, snapshot.observed_at)
        delivered: bool | None = None
        if decision.notify:
            message = self._build_message(verdict, decision, snapshot.observed_at)
            delivered = await self.notifier.send(message)
            if not delivered:
                logger.warning(
                    "Alert for %s not delivered; will retry on the next eligible cycle",
                    verdict.kind,
                )
        return CycleOutcome(
            snapshot=snapshot, verdict=verdict, decision=decision, delivered=delivered
        )

    async def run_forever(self) -> None:
        logger.info("Starting watchdog loop (interval=%ss)", self.interval_s)
        while True:
            start = time.monotonic()
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Watchdog cycle error")
            elapsed = time.monotonic() - start
            await asyncio.sleep(max(0.0, self.interval_s - elapsed))
