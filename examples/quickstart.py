#!/usr/bin/env python3
"""Quickstart example for dicegame.

This script plays a few rounds with full detail, then estimates the win rate
of the default game and serves as a smoke test in CI.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from dicegame import Game, MonteCarloSimulator, SimulationConfig, parse_dice, summarize


def main() -> None:
    """Show a few rounds, then run a seeded simulation."""
    print("dicegame Quickstart Example")
    print("=" * 40)

    config = SimulationConfig(
        n_trials=20000,  # Small number for quick execution
        base_seed=42,
        show_progress=False,  # Disabled for CI
    )
    game = Game(parse_dice(config.dice), config.target)

    print(f"Dice: {game.dice}")
    print(f"Target: {game.target}")
    print()

    rng = np.random.default_rng(config.base_seed)
    for round_no in range(1, 4):
        result = game.resolve(rng)
        print(f"Round {round_no}")
        print(f"  first roll : {', '.join(map(str, result.first_rolls))}")
        print(f"  eliminated : {', '.join(str(game.dice[i]) for i in result.eliminated)}")
        print(f"  final roll : {', '.join(map(str, result.final_rolls)) or '-'}")
        print(f"  total      : {result.total} ({'win' if result.won else 'loss'})")
    print()

    result = MonteCarloSimulator(config).run(game)
    stats = summarize(result.wins, result.n_trials)

    print(f"Win Rate: {result.win_rate_percent:.2f}% across {result.n_trials} iterations")
    print(f"95% CI: [{stats['ci_lower'] * 100:.2f}%, {stats['ci_upper'] * 100:.2f}%]")
    print(f"Throughput: {result.trials_per_second:,.0f} iterations/s")

    assert 0.0 < result.win_rate < 1.0, "Default game should be neither certain nor impossible"
    print("✓ Quickstart example completed successfully!")


if __name__ == "__main__":
    main()
