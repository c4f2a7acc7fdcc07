# splendor_solver/annealing.py

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .constants import (
    ANNEAL_STEPS,
    FINAL_TEMPERATURE,
    START_TEMPERATURE,
    TURN_LIMIT,
    WINNING_SCORE,
)
from .deck import Deck
from .state import PlayoutState
from .twister import Twister

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnealingSchedule:
    start_temp: float = START_TEMPERATURE
    final_temp: float = FINAL_TEMPERATURE
    steps: int = ANNEAL_STEPS

    def __post_init__(self):
        if not 0 < self.final_temp < self.start_temp:
            raise ValueError("temperatures must satisfy 0 < final_temp < start_temp")
        if self.steps < 1:
            raise ValueError(f"steps must be positive, got {self.steps}")

    @property
    def cooldown(self) -> float:
        return (self.final_temp / self.start_temp) ** (1.0 / self.steps)


@dataclass
class TrialContext:
    """
    Best playout seen during one trial. ``on_target`` is called for every
    improvement that reaches ``target_score``.
    """
    target_score: int = WINNING_SCORE
    on_target: Optional[Callable[[PlayoutState], None]] = None
    best: PlayoutState = field(default_factory=PlayoutState)

    def reset(self) -> None:
        self.best = PlayoutState()

    def offer(self, state: PlayoutState) -> bool:
        if state.points <= self.best.points:
            return False
        if state.points >= self.target_score and self.on_target is not None:
            self.on_target(state)
        self.best = state
        return True

    @property
    def reached_target(self) -> bool:
        return self.best.points >= self.target_score


def acceptance_probability(candidate_points: int, anchor_points: int, temp: float) -> float:
    delta = candidate_points - anchor_points
    if delta >= 0:
        return 1.0
    return math.exp(delta / temp)


def anneal(decks: Sequence[Deck], rng: Twister, context: TrialContext,
           schedule: AnnealingSchedule = AnnealingSchedule(),
           turn_limit: int = TURN_LIMIT) -> PlayoutState:
    """
    One simulated-annealing restart from an empty move sequence. Returns
    the final anchor; the best playout is tracked in ``context``.
    """
    anchor = PlayoutState()
    temp = schedule.start_temp
    cooldown = schedule.cooldown
    steps = 0

    while temp > schedule.final_temp:
        candidate = anchor.moves.copy()
        candidate.mutate_until_applied(rng)

        refined = PlayoutState.play_out(decks, candidate, turn_limit)
        context.offer(refined)

        if acceptance_probability(refined.points, anchor.points, temp) > rng.next_float():
            anchor = refined
        temp *= cooldown
        steps += 1

    logger.debug("Anneal run finished after %d steps: anchor %d points, best %d points",
                 steps, anchor.points, context.best.points)
    return anchor
