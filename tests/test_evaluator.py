import pytest

from eth_alive.evaluator import evaluate
from eth_alive.models.heights import HeightResult, Snapshot


def _snap(local: HeightResult, remote: HeightResult) -> Snapshot:
    return Snapshot(local=local, remote=remote, observed_at=0.0)


def _heights(local: int, remote: int) -> Snapshot:
    return _snap(HeightResult.success(local), HeightResult.success(remote))


@pytest.mark.parametrize("lag", [0, 1, 2, 3])
def test_lag_within_threshold_is_healthy(lag) -> None:
    verdict = evaluate(_heights(100, 100 + lag), lag_threshold=3)
    assert verdict.kind == "healthy"
    assert verdict.is_healthy


def test_exact_threshold_is_healthy_and_one_more_lags() -> None:
    assert evaluate(_heights(100, 103), lag_threshold=3).kind == "healthy"
    verdict = evaluate(_heights(100, 104), lag_threshold=3)
    assert verdict.kind == "lagging"
    assert verdict.blocks_behind == 4
    assert verdict.local_height == 100
    assert verdict.remote_height == 104


def test_zero_threshold_lags_on_one_block() -> None:
    assert evaluate(_heights(100, 100), lag_threshold=0).kind == "healthy"
    assert evaluate(_heights(100, 101), lag_threshold=0).blocks_behind == 1


def test_local_ahead_is_healthy() -> None:
    verdict = evaluate(_heights(150, 100), lag_threshold=3)
    assert verdict.kind == "healthy"
    assert verdict.blocks_behind == 0


@pytest.mark.parametrize(
    "remote",
    [HeightResult.success(200), HeightResult.failed("unreachable", "down")],
)
def test_local_failure_wins(remote) -> None:
    local = HeightResult.failed("protocol_error", "HTTP 502")
    verdict = evaluate(_snap(local, remote), lag_threshold=3)
    assert verdict.kind == "local_unreachable"
    assert verdict.detail == "HTTP 502"


def test_remote_failure() -> None:
    snapshot = _snap(HeightResult.success(100), HeightResult.failed("unreachable", "dns"))
    verdict = evaluate(snapshot, lag_threshold=3)
    assert verdict.kind == "remote_unreachable"
    assert verdict.local_height == 100
