"""Tests for win-rate metrics."""

import math

import pytest

from dicegame.metrics import SimulationResult, summarize


def test_summarize_basic():
    result = summarize(50, 100)

    assert set(result) == {"win_rate", "std_error", "ci_lower", "ci_upper"}
    assert result["win_rate"] == 0.5
    assert result["std_error"] == pytest.approx(0.05)
    assert result["ci_lower"] == pytest.approx(0.5 - 1.959964 * 0.05, rel=1e-5)
    assert result["ci_upper"] == pytest.approx(0.5 + 1.959964 * 0.05, rel=1e-5)


def test_summarize_custom_confidence():
    wide = summarize(30, 100, confidence=0.99)
    narrow = summarize(30, 100, confidence=0.80)

    assert wide["ci_lower"] < narrow["ci_lower"] < 0.3 < narrow["ci_upper"] < wide["ci_upper"]


def test_summarize_extremes_clipped():
    """All-loss and all-win runs have zero error and bounds in [0, 1]."""
    assert summarize(0, 10) == {"win_rate": 0.0, "std_error": 0.0, "ci_lower": 0.0, "ci_upper": 0.0}
    assert summarize(10, 10)["ci_upper"] == 1.0

    near_zero = summarize(1, 10)
    assert near_zero["ci_lower"] == 0.0


@pytest.mark.parametrize(
    "wins, n_trials, confidence",
    [(1, 0, 0.95), (-1, 10, 0.95), (11, 10, 0.95), (5, 10, 1.0), (5, 10, 0.0)],
)
def test_summarize_invalid(wins, n_trials, confidence):
    with pytest.raises(ValueError):
        summarize(wins, n_trials, confidence)


class TestSimulationResult:
    """Test SimulationResult container."""

    def test_rates(self):
        result = SimulationResult(wins=2500, n_trials=10000, elapsed_seconds=2.0)

        assert result.win_rate == 0.25
        assert result.win_rate_percent == 25.0
        assert result.trials_per_second == 5000.0

    def test_zero_elapsed(self):
        assert math.isinf(SimulationResult(wins=1, n_trials=1).trials_per_second)

    def test_to_dict(self):
        data = SimulationResult(wins=40, n_trials=100, elapsed_seconds=0.5).to_dict()

        assert data["wins"] == 40
        assert data["n_trials"] == 100
        assert data["elapsed_seconds"] == 0.5
        assert data["win_rate"] == 0.4
        assert data["std_error"] == pytest.approx(math.sqrt(0.4 * 0.6 / 100))
