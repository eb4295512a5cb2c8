"""Entrypoint for running the eth_alive daemon.

This module loads configuration, wires the watchdog together and runs it
until SIGTERM/SIGINT.
"""

from __future__ import annotations

import asyncio
import logging
import signal

import httpx

from .background import Watchdog
from .config import Settings, describe_settings, load_settings
from .errors import ConfigurationError
from .logger import setup_logging
from .notifier import WebhookNotifier
from .rpc import RpcHeightClient

logger = logging.getLogger(__name__)


def build_watchdog(settings: Settings, client: httpx.AsyncClient) -> Watchdog:
    rpc = RpcHeightClient(settings.RPC_TIMEOUT_SECONDS, client=client)
    notifier = WebhookNotifier(
        settings.DISCORD_WEBHOOK_URL,
        timeout=settings.RPC_TIMEOUT_SECONDS,
        client=client,
    )
    return Watchdog(settings, rpc, notifier)


async def serve(settings: Settings) -> None:
    """Run the watchdog until a termination signal cancels it."""
    timeout = httpx.Timeout(settings.RPC_TIMEOUT_SECONDS)
    async with httpx.AsyncClient(timeout=timeout) as client:
        watchdog = build_watchdog(settings, client)
        task = asyncio.create_task(watchdog.run_forever())

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(sig, task.cancel)
            except NotImplementedError:
                logger.debug("Signal handlers not supported on this platform")

        try:
            await task
        except asyncio.CancelledError:
            logger.info("Shutdown requested, stopping watchdog")
        finally:
            for sig in (signal.SIGTERM, signal.SIGINT):
                try:
                    loop.remove_signal_handler(sig)
                except NotImplementedError:
                    pass


def run() -> None:
    setup_logging()
    logger.info("eth-alive daemon starting up...")
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(1) from None

    logger.info("Configuration loaded. Starting watchdog loop...")
    for line in describe_settings(settings):
        logger.info("  %s", line)

    asyncio.run(serve(settings))
    logger.info("eth-alive stopped")


if __name__ == "__main__":
    run()
