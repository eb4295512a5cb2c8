"""Health verdicts derived from a snapshot."""

from __future__ import annotations

import logging

from .models.heights import Snapshot
from .models.verdict import Verdict

logger = logging.getLogger(__name__)


def evaluate(snapshot: Snapshot, lag_threshold: int) -> Verdict:
    """Classify one snapshot.

    A local failure wins over a remote failure. A lag equal to the threshold
    is still healthy; a local node ahead of the remote counts as zero lag.
    """
    local, remote = snapshot.local, snapshot.remote
    if not local.ok:
        return Verdict(
            kind="local_unreachable",
            remote_height=remote.height if remote.ok else None,
            detail=local.detail,
        )
    if not remote.ok:
        return Verdict(
            kind="remote_unreachable",
            local_height=local.height,
            detail=remote.detail,
        )

    lag = remote.height - local.height
    if lag < 0:
        logger.info(
            "Local is ahead (or remote is behind) | Local: %s | Remote: %s",
            local.height,
            remote.height,
        )
        lag = 0
    if lag > lag_threshold:
        return Verdict(
            kind="lagging",
            blocks_behind=lag,
            local_height=local.height,
            remote_height=remote.height,
        )
    return Verdict(
        kind="healthy",
        blocks_behind=lag,
        local_height=local.height,
        remote_height=remote.height,
    )
