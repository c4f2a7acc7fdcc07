# splendor_solver/config.py

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .annealing import AnnealingSchedule
from .constants import (
    ANNEAL_RUNS_PER_TRIAL,
    ANNEAL_SEED,
    ANNEAL_STEPS,
    BACKLOG_FILL_SIZE,
    FINAL_TEMPERATURE,
    MAX_BACKLOG_SIZE,
    NUM_TRIALS,
    RANDOM_BOARD_BASELINE,
    SETUP_SEED,
    START_TEMPERATURE,
    TURN_LIMIT,
    WINNING_SCORE,
)

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "configs", "solver_config.yaml")


@dataclass(frozen=True)
class SolverConfig:
    setup_seed: int = SETUP_SEED
    anneal_seed: int = ANNEAL_SEED
    trials: int = NUM_TRIALS
    anneal_runs: int = ANNEAL_RUNS_PER_TRIAL
    backlog_size: int = BACKLOG_FILL_SIZE
    start_temp: float = START_TEMPERATURE
    final_temp: float = FINAL_TEMPERATURE
    anneal_steps: int = ANNEAL_STEPS
    target_score: int = WINNING_SCORE
    turn_limit: int = TURN_LIMIT
    random_board_baseline: float = RANDOM_BOARD_BASELINE

    def __post_init__(self):
        if self.trials < 1:
            raise ValueError(f"trials must be positive, got {self.trials}")
        if self.anneal_runs < 1:
            raise ValueError(f"anneal_runs must be positive, got {self.anneal_runs}")
        if not 0 <= self.backlog_size <= MAX_BACKLOG_SIZE:
            raise ValueError(f"backlog_size must be between 0 and {MAX_BACKLOG_SIZE}, got {self.backlog_size}")
        if self.random_board_baseline <= 0:
            raise ValueError("random_board_baseline must be positive")
        # Raises on bad temperatures or step count.
        AnnealingSchedule(self.start_temp, self.final_temp, self.anneal_steps)

    @property
    def schedule(self) -> AnnealingSchedule:
        return AnnealingSchedule(self.start_temp, self.final_temp, self.anneal_steps)

    def with_overrides(self, **overrides: Any) -> "SolverConfig":
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SolverConfig":
        data = data or {}
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Optional[str] = None) -> SolverConfig:
    """
    Read a YAML config. Without a path the bundled default is used when it
    exists, otherwise the built-in defaults.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return SolverConfig()
        path = DEFAULT_CONFIG_PATH
    elif not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)
    return SolverConfig.from_dict(config)
