"""Alert state/decision dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

AlertKind = Literal["lagging", "local_unreachable", "remote_unreachable"]


@dataclass
class AlertState:
    # kind is None while healthy
    kind: AlertKind | None = None
    since: float | None = None
    last_notified_at: float | None = None

    @property
    def in_alert(self) -> bool:
        return self.kind is not None


@dataclass(frozen=True)
class AlertDecision:
    notify: bool
    recovered: bool = False
    previous_kind: AlertKind | None = None
