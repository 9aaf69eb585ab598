"""Parsing of dice specification strings such as ``"d4,d6,2d10"``."""

from __future__ import annotations

from .dice import VALID_SIDES, Dice, Die


class DiceSpecError(ValueError):
    """Raised when a dice specification string cannot be parsed."""


def parse_die_term(term: str) -> list[Die]:
    """Parse a single term like ``"d6"`` or ``"2d10"``.

    Args:
        term: Dice term; the count before ``d`` is optional and defaults to 1

    Returns:
        List of ``count`` dice with the given number of sides

    Raises:
        DiceSpecError: If the term is malformed or names an unsupported die
    """
    term = term.strip()
    count_str, sep, sides_str = term.partition("d")
    if not sep:
        raise DiceSpecError(
            f"Invalid dice format: {term!r}. Expected format like 'd6' or '2d10'"
        )

    if count_str:
        if not count_str.isdecimal():
            raise DiceSpecError(f"Invalid dice count: {count_str!r} in term {term!r}")
        count = int(count_str)
    else:
        count = 1

    if not sides_str.isdecimal():
        raise DiceSpecError(f"Invalid dice sides: {sides_str!r} in term {term!r}")
    sides = int(sides_str)

    if sides not in VALID_SIDES:
        raise DiceSpecError(
            f"Invalid die type: d{sides} in term {term!r}. "
            f"Valid types are {', '.join(f'd{s}' for s in VALID_SIDES)}"
        )

    return [Die(sides) for _ in range(count)]


def parse_dice(spec: str) -> Dice:
    """Parse a comma-separated dice specification into a ``Dice`` collection."""
    dice: list[Die] = []
    for term in spec.split(","):
        dice.extend(parse_die_term(term))
    return Dice(dice)
