"""dicegame - Monte Carlo win-rate estimation for the dice elimination game."""

__version__ = "0.1.0"

from .config import SimulationConfig
from .dice import VALID_SIDES, Dice, Die
from .game import Game, Roll, RoundResult, select_eliminations
from .metrics import SimulationResult, summarize
from .monte_carlo import MonteCarloSimulator
from .parsing import DiceSpecError, parse_dice, parse_die_term

__all__ = [
    "VALID_SIDES",
    "Dice",
    "DiceSpecError",
    "Die",
    "Game",
    "MonteCarloSimulator",
    "Roll",
    "RoundResult",
    "SimulationConfig",
    "SimulationResult",
    "parse_dice",
    "parse_die_term",
    "select_eliminations",
    "summarize",
]
