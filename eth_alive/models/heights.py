"""Height query results and per-cycle snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FailureReason = Literal["unreachable", "protocol_error"]


@dataclass(frozen=True)
class HeightResult:
    """Outcome of one block height query: a height or a failure reason."""

    height: int | None = None
    failure: FailureReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None and self.height is not None

    @classmethod
    def success(cls, height: int) -> "HeightResult":
        return cls(height=height)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str = "") -> "HeightResult":
        return cls(failure=reason, detail=detail)


@dataclass(frozen=True)
class Snapshot:
    local: HeightResult
    remote: HeightResult
    observed_at: float
