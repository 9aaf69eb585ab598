"""Command Line Interface for dicegame."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import DEFAULT_DICE, DEFAULT_N_TRIALS, DEFAULT_TARGET, SimulationConfig
from .game import Game
from .metrics import summarize
from .monte_carlo import MonteCarloSimulator
from .parsing import parse_dice


def setup_logging(verbosity: int = 0) -> None:
    """Setup logging configuration.

    Args:
        verbosity: 0 for warnings only, 1 for debug output, 2 or more to also
            log every round
    """
    level = logging.DEBUG if verbosity > 0 else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    # Per-round detail is only wanted at -vv
    round_level = logging.DEBUG if verbosity > 1 else logging.INFO
    logging.getLogger("dicegame.game").setLevel(round_level)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="dicegame",
        description="Estimate the win rate of the dice elimination game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default dice, target 19, 100000 rounds
  dicegame

  # Custom dice and target on all CPUs
  dicegame "3d6,d20" --target 15 --n-jobs -1

  # Reproducible run from a config file
  dicegame --config dicegame.toml --seed 123

  # Generate sample config
  dicegame --generate-config dicegame.toml
        """
    )

    parser.add_argument(
        "dice",
        nargs="?",
        help=f'Dice to roll (default: "{DEFAULT_DICE}")'
    )
    parser.add_argument(
        "--target", "-t",
        type=int,
        help=f"Target number to roll (default: {DEFAULT_TARGET})"
    )
    parser.add_argument(
        "--iterations", "-n",
        type=int,
        help=f"Number of rounds to simulate (default: {DEFAULT_N_TRIALS})"
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file (TOML or YAML)"
    )
    parser.add_argument(
        "--n-jobs", "-j",
        type=int,
        help="Number of parallel worker processes (-1 for all CPUs)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        default=None,
        help="Show a progress bar (sequential runs only)"
    )

    parser.add_argument(
        "--generate-config",
        type=Path,
        help="Generate sample configuration file and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for diagnostics, -vv for every round)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def generate_sample_config(config_path: Path) -> None:
    """Generate a sample configuration file.

    Args:
        config_path: Path to save the configuration file
    """
    config_content = f"""# dicegame configuration file

[simulation]
dice = "{DEFAULT_DICE}"   # Comma-separated dice, e.g. "d4,2d10"
target = {DEFAULT_TARGET}                      # Round-2 total needed to win
n_trials = {DEFAULT_N_TRIALS}                # Number of rounds to simulate
# n_jobs = 1                     # Worker processes (default: DICEGAME_N_JOBS env var, else 1)
# base_seed = 42                 # Uncomment for reproducible runs
batch_size = 10000               # Rounds per independently seeded batch
show_progress = false
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(config_content)

    print(f"Sample configuration generated: {config_path}")


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Merge the config file (if any) with command line overrides."""
    overrides = {
        "dice": args.dice,
        "target": args.target,
        "n_trials": args.iterations,
        "n_jobs": args.n_jobs,
        "base_seed": args.seed,
        "show_progress": args.progress,
    }
    if args.config:
        return SimulationConfig.from_file(args.config, **overrides)
    return SimulationConfig(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if args.generate_config:
        generate_sample_config(args.generate_config)
        return 0

    if args.config and not args.config.exists():
        parser.error(f"Config file does not exist: {args.config}")

    try:
        config = build_config(args)
        dice = parse_dice(config.dice)
    except ValueError as e:
        parser.error(str(e))

    game = Game(dice, config.target)
    logger.debug("Rolling dice: %s", dice)
    logger.debug("Target: %d", config.target)
    logger.debug("Iterations: %d", config.n_trials)
    logger.debug("Simulation configuration: %s", config)

    try:
        result = MonteCarloSimulator(config).run(game)
    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Simulation failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    if args.verbose:
        stats = summarize(result.wins, result.n_trials)
        logger.debug("Wins: %d", result.wins)
        logger.debug("Standard error: %.4f%%", stats["std_error"] * 100)
        logger.debug(
            "95%% confidence interval: [%.2f%%, %.2f%%]",
            stats["ci_lower"] * 100, stats["ci_upper"] * 100,
        )
        logger.debug("Throughput: %.0f iterations/s", result.trials_per_second)

    print(f"Win Rate: {result.win_rate_percent:.2f}% across {result.n_trials} iterations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
