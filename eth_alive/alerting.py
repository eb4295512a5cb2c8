"""Alert state machine: decides when a verdict turns into a notification."""

from __future__ import annotations

import logging
from dataclasses import replace

from .models.alerts import AlertDecision, AlertState
from .models.verdict import Verdict

logger = logging.getLogger(__name__)


def _cooldown_elapsed(state: AlertState, now: float, cooldown_s: float) -> bool:
    if state.last_notified_at is None:
        return True
    return (now - state.last_notified_at) >= cooldown_s


def transition(
    state: AlertState,
    verdict: Verdict,
    now: float,
    cooldown_s: float,
    notify_on_recovery: bool = True,
) -> tuple[AlertState, AlertDecision]:
    """Compute the next alert state and whether to notify.

    Args:
        state: Current state (not modified).
        verdict: Verdict of the current cycle.
        now: Epoch timestamp of the cycle.
        cooldown_s: Minimum seconds between two alerts of an ongoing problem.
        notify_on_recovery: Whether returning to healthy sends a notice.

    Returns:
        Tuple of (next_state, decision).

    Note:
        Changing alert kind while already alerting does not bypass the
        cooldown. Recovery is never cooled and clears last_notified_at.
    """
    if verdict.is_healthy:
        if not state.in_alert:
            return state, AlertDecision(notify=False)
        return AlertState(), AlertDecision(
            notify=notify_on_recovery,
            recovered=True,
            previous_kind=state.kind,
        )

    kind = verdict.kind
    if not state.in_alert:
        next_state = AlertState(kind=kind, since=now, last_notified_at=now)
        return next_state, AlertDecision(notify=True)

    since = state.since if state.kind == kind else now
    if _cooldown_elapsed(state, now, cooldown_s):
        next_state = AlertState(kind=kind, since=since, last_notified_at=now)
        return next_state, AlertDecision(notify=True, previous_kind=state.kind)
    next_state = replace(state, kind=kind, since=since)
    return next_state, AlertDecision(notify=False, previous_kind=state.kind)


class AlertStateMachine:
    """Single owner of the process-wide AlertState."""

    def __init__(self, cooldown_s: float, notify_on_recovery: bool = True) -> None:
        self.cooldown_s = cooldown_s
        self.notify_on_recovery = notify_on_recovery
        self._state = AlertState()

    @property
    def state(self) -> AlertState:
        return replace(self._state)

    def step(self, verdict: Verdict, now: float) -> AlertDecision:
        next_state, decision = transition(
            self._state,
            verdict,
            now,
            self.cooldown_s,
            notify_on_recovery=self.notify_on_recovery,
        )
        if next_state.kind != self._state.kind:
            logger.info(
                "Alert state %s -> %s",
                self._state.kind or "healthy",
                next_state.kind or "healthy",
            )
        elif next_state.in_alert and not decision.notify:
            logger.debug(
                "Alert %s suppressed by cooldown (last notified at %s)",
                next_state.kind,
                next_state.last_notified_at,
            )
        self._state = next_state
        return decision
