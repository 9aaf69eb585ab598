"""Die and dice collection model."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

VALID_SIDES: tuple[int, ...] = (4, 6, 8, 10, 12, 20)


@dataclass(frozen=True)
class Die:
    """A single die with a fixed number of faces."""

    sides: int

    def __post_init__(self) -> None:
        if self.sides not in VALID_SIDES:
            raise ValueError(
                f"Invalid die type: d{self.sides}. "
                f"Valid types are {', '.join(f'd{s}' for s in VALID_SIDES)}"
            )

    def roll(self, rng: np.random.Generator | None = None) -> int:
        """Roll the die once.

        Args:
            rng: Random generator to draw from. A fresh default generator is
                used when omitted.

        Returns:
            Integer uniformly distributed in [1, sides]
        """
        if rng is None:
            rng = np.random.default_rng()
        return int(rng.integers(1, self.sides, endpoint=True))

    def __str__(self) -> str:
        return f"d{self.sides}"

    __repr__ = __str__


class Dice(Sequence):
    """Ordered, read-only collection of dice."""

    def __init__(self, dice: Iterable[Die] = ()) -> None:
        self._dice: tuple[Die, ...] = tuple(dice)
        self._sides = np.array([die.sides for die in self._dice], dtype=np.int64)

    @property
    def sides(self) -> tuple[int, ...]:
        """Face counts in collection order."""
        return tuple(die.sides for die in self._dice)

    def roll(
        self,
        rng: np.random.Generator | None = None,
        indices: Sequence[int] | None = None,
    ) -> list[int]:
        """Roll every die, or only the dice at ``indices``, in one draw.

        Returns one value per rolled die, in the order rolled.
        """
        if rng is None:
            rng = np.random.default_rng()
        highs = self._sides if indices is None else self._sides[list(indices)]
        if len(highs) == 0:
            return []
        return rng.integers(1, highs, endpoint=True).tolist()

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Dice(self._dice[index])
        return self._dice[index]

    def __len__(self) -> int:
        return len(self._dice)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Dice):
            return self._dice == other._dice
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._dice)

    def __str__(self) -> str:
        return ", ".join(str(die) for die in self._dice)

    def __repr__(self) -> str:
        return f"Dice([{self}])"
