"""Configuration handling for dicegame simulations."""

import os
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

DEFAULT_DICE = "d4,d6,d8,2d10,d12,d20"
DEFAULT_TARGET = 19
DEFAULT_N_TRIALS = 100_000
DEFAULT_BATCH_SIZE = 10_000

N_JOBS_ENV_VAR = "DICEGAME_N_JOBS"


@dataclass
class SimulationConfig:
    """Configuration for a win-rate simulation.

    Attributes:
        dice: Dice specification string, e.g. "d4,d6,2d10"
        target: Minimum round-2 total that counts as a win
        n_trials: Number of rounds to play
        n_jobs: Number of worker processes (default: DICEGAME_N_JOBS env var, else 1). Set to -1 to use all CPUs.
        base_seed: Base random seed for reproducible results (optional)
        show_progress: Whether to show a progress bar (auto-disabled when n_jobs > 1)
        batch_size: Rounds per independently seeded batch
    """
    dice: str = DEFAULT_DICE
    target: int = DEFAULT_TARGET
    n_trials: int = DEFAULT_N_TRIALS
    n_jobs: Optional[int] = None
    base_seed: Optional[int] = None
    show_progress: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self):
        """Validate values and resolve the worker count."""
        if not isinstance(self.dice, str):
            raise ValueError(f"dice must be a string, got {self.dice!r}")
        for name in ("target", "n_trials", "batch_size", "n_jobs", "base_seed"):
            value = getattr(self, name)
            if value is None and name in ("n_jobs", "base_seed"):
                continue
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.show_progress, bool):
            raise ValueError(f"show_progress must be a boolean, got {self.show_progress!r}")

        if self.target < 0:
            raise ValueError(f"target must be non-negative, got {self.target}")
        if self.n_trials < 1:
            raise ValueError(f"n_trials must be at least 1, got {self.n_trials}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.base_seed is not None and self.base_seed < 0:
            raise ValueError(f"base_seed must be non-negative, got {self.base_seed}")

        # The environment only fills in an unset worker count
        if self.n_jobs is None:
            self.n_jobs = 1
            env_n_jobs = os.environ.get(N_JOBS_ENV_VAR)
            if env_n_jobs is not None:
                try:
                    self.n_jobs = int(env_n_jobs)
                except ValueError:
                    pass

        max_cpus = os.cpu_count() or 1
        if self.n_jobs == -1:
            self.n_jobs = max_cpus
        self.n_jobs = max(1, min(self.n_jobs, max_cpus))

        # Parallel workers would interleave progress output
        if self.n_jobs != 1:
            self.show_progress = False

    @classmethod
    def from_file(cls, config_path: Union[str, Path], **overrides) -> "SimulationConfig":
        """Load configuration from a TOML or YAML file.

        Args:
            config_path: Path to configuration file
            **overrides: Values that take precedence over the file's

        Returns:
            SimulationConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If unsupported file format or invalid configuration
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == ".toml":
            with open(config_path, "rb") as f:
                config_data = tomllib.load(f)
        elif config_path.suffix.lower() in [".yaml", ".yml"]:
            if not YAML_AVAILABLE:
                raise ValueError(
                    "YAML support not available. Install with: pip install dicegame[yaml]"
                )
            with open(config_path, "r") as f:
                try:
                    config_data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        else:
            raise ValueError(
                f"Unsupported configuration file format: {config_path.suffix}. "
                "Supported formats: .toml, .yaml, .yml"
            )

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration in {config_path} must be a mapping of options")
        simulation_section = config_data.pop("simulation", {})
        if not isinstance(simulation_section, dict):
            raise ValueError("The 'simulation' section must be a mapping of options")
        config_data.update(simulation_section)
        config_data.update({k: v for k, v in overrides.items() if v is not None})

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "SimulationConfig":
        """Create configuration from dictionary.

        Raises:
            ValueError: If the dictionary contains unknown keys
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(map(str, set(config_dict) - known))
        if unknown:
            raise ValueError(f"Unknown configuration options: {unknown}")
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
