"""Win-rate statistics for simulation results."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import NormalDist

import numpy as np


@dataclass(frozen=True)
class SimulationResult:
    """Aggregate outcome of a simulation run."""

    wins: int
    n_trials: int
    elapsed_seconds: float = 0.0

    @property
    def win_rate(self) -> float:
        return self.wins / self.n_trials if self.n_trials else 0.0

    @property
    def win_rate_percent(self) -> float:
        return self.win_rate * 100.0

    @property
    def trials_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return float("inf")
        return self.n_trials / self.elapsed_seconds

    def to_dict(self) -> dict[str, float]:
        return {
            "wins": self.wins,
            "n_trials": self.n_trials,
            "elapsed_seconds": self.elapsed_seconds,
            **summarize(self.wins, self.n_trials),
        }


def summarize(wins: int, n_trials: int, confidence: float = 0.95) -> dict[str, float]:
    """Compute summary statistics for a win count.

    Args:
        wins: Number of winning rounds
        n_trials: Number of rounds played
        confidence: Two-sided confidence level for the interval

    Returns:
        Dictionary containing:
        - win_rate: wins / n_trials
        - std_error: binomial standard error of the win rate
        - ci_lower, ci_upper: normal-approximation confidence bounds in [0, 1]

    Raises:
        ValueError: If the arguments are out of range
    """
    if n_trials < 1:
        raise ValueError(f"n_trials must be at least 1, got {n_trials}")
    if not 0 <= wins <= n_trials:
        raise ValueError(f"wins must be in [0, {n_trials}], got {wins}")
    if not 0 < confidence < 1:
        raise ValueError(f"confidence must be in (0, 1), got {confidence}")

    p = wins / n_trials
    std_error = float(np.sqrt(p * (1.0 - p) / n_trials))
    z = NormalDist().inv_cdf(0.5 + confidence / 2)
    lower, upper = np.clip([p - z * std_error, p + z * std_error], 0.0, 1.0)

    return {
        "win_rate": p,
        "std_error": std_error,
        "ci_lower": float(lower),
        "ci_upper": float(upper),
    }
