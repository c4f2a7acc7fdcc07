# splendor_solver/__init__.py

"""
Splendor Solver Package
=======================

Estimates, by repeated randomized simulation, how likely a partially known
Koh-i-noor Splendor board is to reach the target score within the turn
budget.

Modules:
- constants.py: Colors, game limits and the canonical card table.
- twister.py: Deterministic Mersenne twister used for every random choice.
- card.py: Card model, affordability, card-line parsing, canonical set.
- deck.py: Face-up slots plus hidden backlog of one tier.
- state.py: Move sequences, mutations and replay against the decks.
- annealing.py: Simulated annealing over move sequences.
- trials.py: Random dealing of unknown cards and the trial loop.
- config.py: Settings, loadable from YAML.
- report.py: Logging and console output.
"""

from .constants import GemColor, WINNING_SCORE, TURN_LIMIT
from .card import Card, CanonicalDeck, read_cards
from .deck import Deck, PlayoutTally, build_decks
from .state import MoveSequence, MutationOutcome, PlayoutState
from .twister import Twister
from .annealing import AnnealingSchedule, TrialContext, anneal
from .config import SolverConfig, load_config
from .trials import SolvabilityEstimate, TrialResult, estimate_solvability

__all__ = [
    'GemColor',
    'WINNING_SCORE',
    'TURN_LIMIT',
    'Card',
    'CanonicalDeck',
    'read_cards',
    'Deck',
    'PlayoutTally',
    'build_decks',
    'MoveSequence',
    'MutationOutcome',
    'PlayoutState',
    'Twister',
    'AnnealingSchedule',
    'TrialContext',
    'anneal',
    'SolverConfig',
    'load_config',
    'SolvabilityEstimate',
    'TrialResult',
    'estimate_solvability',
]
