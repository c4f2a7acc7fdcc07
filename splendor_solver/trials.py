# splendor_solver/trials.py

"""
Trial drivers. A trial deals the unknown part of tiers 1 and 2 at random,
then runs several independent anneal restarts against that one board and
records whether any of them reached the target score.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from .annealing import AnnealingSchedule, TrialContext, anneal
from .card import CanonicalDeck
from .config import SolverConfig
from .deck import Deck
from .twister import Twister

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialResult:
    trial: int
    best_points: int
    best_rounds: int
    best_tokens_cost: int
    best_total_turns: int
    reached_target: bool


@dataclass
class SolvabilityEstimate:
    baseline: float
    trials: int = 0
    hits: int = 0
    max_points: int = 0

    def record(self, result: TrialResult) -> None:
        self.trials += 1
        if result.reached_target:
            self.hits += 1
        self.max_points = max(self.max_points, result.best_points)

    @property
    def likelihood(self) -> float:
        """Percentage of trials that reached the target score."""
        if self.trials == 0:
            return 0.0
        return 100.0 * self.hits / self.trials

    @property
    def lift(self) -> float:
        return self.likelihood / self.baseline


def randomize_decks(decks: Sequence[Deck], canonical: CanonicalDeck, setup_rng: Twister,
                    backlog_size: int) -> Tuple[Deck, Deck, Deck]:
    """
    Copies of the three decks with tiers 1 and 2 topped up from the cards not
    yet seen. Tier 3 is fully known and left as it is.
    """
    d1, d2, d3 = (deck.copy() for deck in decks)
    remaining1 = canonical.remaining(1, d1.cards())
    remaining2 = canonical.remaining(2, d2.cards())

    d1.fill_randomly(backlog_size, remaining1, setup_rng)
    d2.fill_randomly(backlog_size, remaining2, setup_rng)
    return d1, d2, d3


def play_single_setting(decks: Sequence[Deck], anneal_rng: Twister, context: TrialContext,
                        runs: int, schedule: AnnealingSchedule, turn_limit: int) -> None:
    d1, d2, d3 = (deck.copy() for deck in decks)
    # Backlogs are stored in deal order but drawn from the end.
    d1.reverse_backlog()
    d2.reverse_backlog()

    for run in range(runs):
        anneal((d1, d2, d3), anneal_rng, context, schedule, turn_limit)
        logger.debug("Run %d/%d: best so far %d points", run + 1, runs, context.best.points)


def play_randomized_deck(decks: Sequence[Deck], canonical: CanonicalDeck, setup_rng: Twister,
                         anneal_rng: Twister, context: TrialContext, config: SolverConfig,
                         trial: int = 0) -> TrialResult:
    board = randomize_decks(decks, canonical, setup_rng, config.backlog_size)
    context.reset()
    play_single_setting(board, anneal_rng, context, config.anneal_runs,
                        config.schedule, config.turn_limit)

    best = context.best
    return TrialResult(
        trial=trial,
        best_points=best.points,
        best_rounds=best.rounds,
        best_tokens_cost=best.tokens_cost,
        best_total_turns=best.total_turns,
        reached_target=context.reached_target,
    )


def estimate_solvability(decks: Sequence[Deck], canonical: CanonicalDeck, config: SolverConfig,
                         context: Optional[TrialContext] = None,
                         estimate: Optional[SolvabilityEstimate] = None) -> Iterator[TrialResult]:
    """
    Run ``config.trials`` trials, yielding each result once ``estimate`` has
    been updated with it.
    """
    setup_rng = Twister(config.setup_seed)
    anneal_rng = Twister(config.anneal_seed)
    if context is None:
        context = TrialContext(target_score=config.target_score)
    if estimate is None:
        estimate = SolvabilityEstimate(baseline=config.random_board_baseline)

    for i in range(config.trials):
        result = play_randomized_deck(decks, canonical, setup_rng, anneal_rng, context, config, trial=i + 1)
        estimate.record(result)
        logger.info("Trial %d: best %d points in %d turns%s", result.trial, result.best_points,
                    result.best_total_turns, " (target reached)" if result.reached_target else "")
        yield result
