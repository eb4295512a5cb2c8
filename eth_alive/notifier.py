"""Webhook notifications (Discord-compatible)."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

import httpx

from .errors import NotificationDeliveryError
from .models.verdict import VERDICT_LABELS, Verdict

logger = logging.getLogger(__name__)

# Discord rejects message content longer than this
MAX_CONTENT_LENGTH = 2000


def format_timestamp(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime(
        "%Y-%m-%d %H:%M:%S UTC"
    )


def _fmt_height(value: int | None) -> str:
    return "n/a" if value is None else str(value)


def _truncate(text: str, limit: int = MAX_CONTENT_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def format_alert_message(verdict: Verdict, node_name: str, observed_at: float) -> str:
    heights = (
        f"Local: `{_fmt_height(verdict.local_height)}` | "
        f"Remote: `{_fmt_height(verdict.remote_height)}`"
    )
    if verdict.kind == "lagging":
        headline = (
            f"**ALERT** `{node_name}` is lagging by "
            f"**{verdict.blocks_behind}** blocks"
        )
    elif verdict.kind == "local_unreachable":
        headline = f"**ALERT** `{node_name}`: local node is unreachable"
    elif verdict.kind == "remote_unreachable":
        headline = (
            f"**ALERT** `{node_name}`: remote reference node is unreachable, "
            "cannot verify sync"
        )
    else:
        headline = f"**{verdict.label}** `{node_name}`"
    lines = [headline, heights]
    if verdict.detail:
        lines.append(f"Reason: {verdict.detail}")
    lines.append(f"Observed: {format_timestamp(observed_at)}")
    return _truncate("\n".join(lines))


def format_recovery_message(
    previous_kind: str | None,
    verdict: Verdict,
    node_name: str,
    observed_at: float,
) -> str:
    previous = VERDICT_LABELS.get(previous_kind or "", previous_kind or "alert")
    lines = [
        f"**RECOVERED** `{node_name}` is healthy again (was: {previous})",
        f"Local: `{_fmt_height(verdict.local_height)}` | "
        f"Remote: `{_fmt_height(verdict.remote_height)}` | "
        f"Lag: {verdict.blocks_behind}",
        f"Observed: {format_timestamp(observed_at)}",
    ]
    return _truncate("\n".join(lines))


class WebhookNotifier:
    """Posts messages to a webhook; one attempt per call, no retries."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = client

    async def _post(self, payload: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.webhook_url, json=payload)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.webhook_url, json=payload)

    async def deliver(self, message: str) -> None:
        """Send one message, raising NotificationDeliveryError on failure."""
        payload = {"content": _truncate(message)}
        try:
            resp = await asyncio.wait_for(self._post(payload), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise NotificationDeliveryError(
                f"webhook timed out after {self.timeout:g}s"
            ) from None
        except httpx.HTTPError as exc:
            raise NotificationDeliveryError(f"webhook request failed: {exc!r}") from exc
        if not resp.is_success:
            snippet = resp.text[:200].replace("\n", " ")
            raise NotificationDeliveryError(
                f"webhook HTTP {resp.status_code}: {snippet}"
            )

    async def send(self, message: str) -> bool:
        try:
            await self.deliver(message)
        except NotificationDeliveryError as exc:
            logger.error("Notification delivery failed: %s", exc)
            return False
        logger.info("Notification delivered")
        return True
