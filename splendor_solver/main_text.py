# splendor_solver/main_text.py

"""
Estimate how likely a Koh-i-noor board is to reach the target score.

Reads the known cards (one per line, e.g. ``6 0 6 8 6 red 10``) from a file
or stdin: the face-up cards of each tier first, then any cards known to come
up later in the order they appear.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from tqdm import tqdm

from .annealing import TrialContext
from .card import CanonicalDeck, read_cards
from .config import load_config
from .deck import build_decks
from .errors import FatalInputError
from .report import board_lines, format_progress, format_solution, setup_logging, summary_table
from .trials import SolvabilityEstimate, estimate_solvability

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Estimate the solvability of a Koh-i-noor Splendor board")
    parser.add_argument("board", nargs="?", default="-", help="File with the known cards, '-' for stdin")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--deck-file", type=str, default=None, help="Alternative canonical card table")
    parser.add_argument("--trials", type=int, default=None, help="Number of randomized boards (Overrides config)")
    parser.add_argument("--runs", type=int, default=None, help="Anneal restarts per board (Overrides config)")
    parser.add_argument("--steps", type=int, default=None, help="Cooling steps per anneal run (Overrides config)")
    parser.add_argument("--setup-seed", type=int, default=None, help="Seed for dealing unknown cards")
    parser.add_argument("--anneal-seed", type=int, default=None, help="Seed for annealing decisions")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    return parser.parse_args(argv)


def load_board(path: str, canonical: CanonicalDeck):
    if path == "-":
        return build_decks(read_cards(sys.stdin, canonical))
    with open(path, "r", encoding="utf-8") as f:
        return build_decks(read_cards(f, canonical))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    console = Console()

    try:
        config = load_config(args.config).with_overrides(
            trials=args.trials,
            anneal_runs=args.runs,
            anneal_steps=args.steps,
            setup_seed=args.setup_seed,
            anneal_seed=args.anneal_seed,
        )
        canonical = CanonicalDeck.from_file(args.deck_file) if args.deck_file else CanonicalDeck.default()
        decks = load_board(args.board, canonical)
    except FatalInputError as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in board_lines(decks):
        logger.info(line)

    context = TrialContext(
        target_score=config.target_score,
        on_target=lambda state: tqdm.write(format_solution(state), file=sys.stdout),
    )
    estimate = SolvabilityEstimate(baseline=config.random_board_baseline)

    with tqdm(total=config.trials, file=sys.stdout, disable=args.no_progress) as progress:
        for _ in estimate_solvability(decks, canonical, config, context=context, estimate=estimate):
            if args.no_progress:
                print(format_progress(estimate))
            progress.set_description_str(format_progress(estimate))
            progress.update(1)

    console.print(summary_table(estimate, config.target_score))
    return 0


if __name__ == "__main__":
    sys.exit(main())
