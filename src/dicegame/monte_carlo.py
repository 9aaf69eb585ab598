"""Monte Carlo driver with parallel execution and deterministic seeding."""

import logging
import multiprocessing as mp
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List

import numpy as np
from tqdm import tqdm

from .config import SimulationConfig
from .game import Game
from .metrics import SimulationResult

logger = logging.getLogger(__name__)


def _run_batch(game: Game, n_rounds: int, seed_seq: np.random.SeedSequence) -> int:
    """Play ``n_rounds`` rounds with one generator and count the wins.

    This function must be at module level to be picklable for the spawn context.
    """
    rng = np.random.Generator(np.random.PCG64(seed_seq))
    wins = 0
    for _ in range(n_rounds):
        if game.play(rng):
            wins += 1
    return wins


class MonteCarloSimulator:
    """Estimate a game's win rate by repeated play."""

    def __init__(self, config: SimulationConfig):
        """Initialize the simulator.

        Args:
            config: Configuration for the simulation
        """
        self.config = config

    def run(self, game: Game) -> SimulationResult:
        """Play ``config.n_trials`` rounds of ``game``.

        Results for a given ``base_seed`` do not depend on ``n_jobs``: every
        batch owns its own seed regardless of which worker runs it.

        Args:
            game: Game to play

        Returns:
            SimulationResult with the win count and elapsed time
        """
        batch_sizes = self._calculate_batch_sizes()
        seed_seqs = self._generate_batch_seeds(len(batch_sizes))

        logger.debug(
            "Running %d trials in %d batches on %d worker(s)",
            self.config.n_trials, len(batch_sizes), self.config.n_jobs,
        )

        start_time = time.perf_counter()
        if self.config.n_jobs == 1:
            wins = self._run_sequential(game, batch_sizes, seed_seqs)
        else:
            wins = self._run_parallel(game, batch_sizes, seed_seqs)
        elapsed = time.perf_counter() - start_time

        result = SimulationResult(
            wins=wins, n_trials=self.config.n_trials, elapsed_seconds=elapsed
        )
        logger.debug(
            "Completed %d trials in %.3fs (%.0f iterations/s)",
            result.n_trials, elapsed, result.trials_per_second,
        )
        return result

    def _run_sequential(
        self,
        game: Game,
        batch_sizes: List[int],
        seed_seqs: List[np.random.SeedSequence],
    ) -> int:
        """Run batches one after another in this process."""
        iterator = zip(batch_sizes, seed_seqs)

        if self.config.show_progress:
            iterator = tqdm(iterator, total=len(batch_sizes), desc="Simulating", unit="batch")

        return sum(_run_batch(game, size, seq) for size, seq in iterator)

    def _run_parallel(
        self,
        game: Game,
        batch_sizes: List[int],
        seed_seqs: List[np.random.SeedSequence],
    ) -> int:
        """Run batches on a process pool and sum the win counts."""
        # Use spawn method on all platforms for consistency
        ctx = mp.get_context('spawn')
        max_workers = min(self.config.n_jobs, len(batch_sizes))

        wins = 0
        with ProcessPoolExecutor(max_workers=max_workers, mp_context=ctx) as executor:
            futures = [
                executor.submit(_run_batch, game, size, seq)
                for size, seq in zip(batch_sizes, seed_seqs)
            ]
            # Completion order is irrelevant for a sum
            for future in as_completed(futures):
                wins += future.result()

        return wins

    def _generate_batch_seeds(self, n_batches: int) -> List[np.random.SeedSequence]:
        """Spawn one independent seed sequence per batch."""
        if self.config.base_seed is not None:
            seed_seq = np.random.SeedSequence(self.config.base_seed)
        else:
            seed_seq = np.random.SeedSequence()
        return seed_seq.spawn(n_batches)

    def _calculate_batch_sizes(self) -> List[int]:
        """Split the trials into batches of ``batch_size``; the last may be short."""
        full, remainder = divmod(self.config.n_trials, self.config.batch_size)
        batch_sizes = [self.config.batch_size] * full
        if remainder:
            batch_sizes.append(remainder)
        return batch_sizes
