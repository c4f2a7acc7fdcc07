# splendor_solver/report.py

"""Console output: logging setup, solution traces, progress and summaries."""

import logging
from typing import Iterable, List

import numpy as np
import pandas as pd
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .state import PlayoutState
from .trials import SolvabilityEstimate, TrialResult


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def format_solution(state: PlayoutState) -> str:
    return "\n" + "\n".join(state.trace_lines()) + "\n\n"


def format_progress(estimate: SolvabilityEstimate) -> str:
    return (f"Iter {estimate.trials}, Maximum: {estimate.max_points}, "
            f"Solvability likelihood: {estimate.likelihood:.2f} %, "
            f"lift vs random board {estimate.lift:.2f}")


def results_frame(results: Iterable[TrialResult]) -> pd.DataFrame:
    """One row per trial plus the running likelihood after that trial."""
    df = pd.DataFrame([_row(r) for r in results], columns=_COLUMNS)
    hits = df["reached_target"].astype(int).cumsum()
    df["running_likelihood"] = 100.0 * hits / np.arange(1, len(df) + 1)
    return df


_COLUMNS = ["trial", "best_points", "best_rounds", "best_tokens_cost", "best_total_turns", "reached_target"]


def _row(result: TrialResult) -> dict:
    return {name: getattr(result, name) for name in _COLUMNS}


def summary_table(estimate: SolvabilityEstimate, target_score: int) -> Table:
    table = Table(title="Solvability estimate")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="magenta")
    table.add_row("Trials", str(estimate.trials))
    table.add_row(f"Trials reaching {target_score}", str(estimate.hits))
    table.add_row("Maximum points", str(estimate.max_points))
    table.add_row("Solvability likelihood", f"{estimate.likelihood:.2f} %")
    table.add_row("Lift vs random board", f"{estimate.lift:.2f}")
    return table


def board_lines(decks) -> List[str]:
    lines = []
    for deck in sorted(decks, key=lambda d: d.level, reverse=True):
        lines.extend(repr(deck).rstrip("\n").split("\n"))
    return lines
