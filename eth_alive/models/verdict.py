"""Verdict dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

VerdictKind = Literal[
    "healthy",
    "lagging",
    "local_unreachable",
    "remote_unreachable",
]

VERDICT_LABELS: dict[str, str] = {
    "healthy": "Healthy",
    "lagging": "Lagging",
    "local_unreachable": "Local node unreachable",
    "remote_unreachable": "Remote node unreachable",
}


@dataclass(frozen=True)
class Verdict:
    kind: VerdictKind
    blocks_behind: int = 0
    local_height: int | None = None
    remote_height: int | None = None
    detail: str = ""

    @property
    def is_healthy(self) -> bool:
        return self.kind == "healthy"

    @property
    def label(self) -> str:
        return VERDICT_LABELS.get(self.kind, self.kind)
