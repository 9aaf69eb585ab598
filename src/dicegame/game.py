"""Single-round resolution of the dice elimination game."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from .dice import Dice, Die

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Roll:
    """Outcome of rolling one die, keyed by its position in the collection."""

    index: int
    die: Die
    value: int

    def __str__(self) -> str:
        return f"{self.die}={self.value}"


@dataclass
class RoundResult:
    """Everything that happened during one round.

    Attributes:
        first_rolls: Round-1 roll of every die, in collection order
        groups: Rolled value mapped to the indices that showed it
        eliminated: Indices removed after round 1, ascending
        survivors: Indices re-rolled in round 2, ascending
        final_rolls: Round-2 roll of every survivor
        total: Sum of the round-2 values
        target: Target the total was compared against
    """

    first_rolls: list[Roll]
    groups: dict[int, list[int]]
    eliminated: list[int]
    survivors: list[int]
    final_rolls: list[Roll] = field(default_factory=list)
    total: int = 0
    target: int = 0

    @property
    def won(self) -> bool:
        return self.total >= self.target


def select_eliminations(
    sides: Sequence[int], values: Sequence[int]
) -> tuple[dict[int, list[int]], list[int]]:
    """Group round-1 values and pick one die to eliminate from every group.

    A group with several members loses its die with the fewest faces (the
    lowest index wins ties). A group with a single member loses that member.

    Args:
        sides: Face count of each die
        values: Round-1 value of each die, aligned with ``sides``

    Returns:
        Tuple of (groups, eliminated indices sorted ascending)
    """
    groups: dict[int, list[int]] = {}
    for idx, value in enumerate(values):
        groups.setdefault(value, []).append(idx)

    eliminated = [min(indices, key=lambda i: sides[i]) for indices in groups.values()]
    eliminated.sort()
    return groups, eliminated


class Game:
    """The elimination game for a fixed dice collection and target."""

    def __init__(self, dice: Dice | Sequence[Die], target: int) -> None:
        self.dice = dice if isinstance(dice, Dice) else Dice(dice)
        self.target = target

    def resolve(self, rng: np.random.Generator | None = None) -> RoundResult:
        """Play one round and return all intermediate state.

        Args:
            rng: Random generator for both rolls. A fresh default generator is
                used when omitted.
        """
        if rng is None:
            rng = np.random.default_rng()

        dice = self.dice
        first_values = dice.roll(rng)
        first_rolls = [
            Roll(idx, dice[idx], value) for idx, value in enumerate(first_values)
        ]

        groups, eliminated = select_eliminations(dice.sides, first_values)
        removed = set(eliminated)
        survivors = [idx for idx in range(len(dice)) if idx not in removed]

        final_values = dice.roll(rng, survivors)
        final_rolls = [
            Roll(idx, dice[idx], value) for idx, value in zip(survivors, final_values)
        ]
        result = RoundResult(
            first_rolls=first_rolls,
            groups=groups,
            eliminated=eliminated,
            survivors=survivors,
            final_rolls=final_rolls,
            total=sum(final_values),
            target=self.target,
        )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Initial rolls: %s", ", ".join(map(str, first_rolls)))
            for value, indices in groups.items():
                logger.debug(
                    "Value %d: %s", value, ", ".join(str(dice[i]) for i in indices)
                )
            logger.debug("Eliminated: %s", ", ".join(str(dice[i]) for i in eliminated))
            logger.debug("Final rolls: %s", ", ".join(map(str, final_rolls)))
            logger.debug("Sum: %d, Target: %d", result.total, self.target)

        return result

    def play(self, rng: np.random.Generator | None = None) -> bool:
        """Play one round and report whether the total reached the target."""
        return self.resolve(rng).won

    def __repr__(self) -> str:
        return f"Game(dice=[{self.dice}], target={self.target})"
