import unittest
from unittest import mock

from splendor_solver import trials
from splendor_solver.annealing import AnnealingSchedule, TrialContext
from splendor_solver.card import Card, CanonicalDeck
from splendor_solver.config import SolverConfig
from splendor_solver.deck import build_decks
from splendor_solver.report import format_progress, format_solution, results_frame, summary_table
from splendor_solver.state import PlayoutState
from splendor_solver.trials import (
    SolvabilityEstimate,
    TrialResult,
    estimate_solvability,
    play_randomized_deck,
    play_single_setting,
    randomize_decks,
)
from splendor_solver.twister import Twister

SAMPLE_BOARD = [
    "0 2 0 2 0 green 0",
    "0 0 3 0 0 black 0",
    "1 0 1 1 1 red 0",
    "0 0 0 1 2 green 0",
    "0 6 0 0 0 red 3",
    "6 0 0 0 0 black 3",
    "0 2 4 1 0 black 2",
    "3 2 0 3 0 red 1",
    "6 0 6 8 6 red 10",
    "6 8 6 6 0 white 10",
]

SMALL_CONFIG = SolverConfig(trials=3, anneal_runs=2, anneal_steps=300)


def sample_decks():
    return build_decks(Card.from_line(line) for line in SAMPLE_BOARD)


def result(trial, points, reached):
    return TrialResult(trial=trial, best_points=points, best_rounds=5, best_tokens_cost=12,
                       best_total_turns=8, reached_target=reached)


class RandomizeDecksTestCase(unittest.TestCase):
    def test_unknown_cards_are_dealt_without_duplicates(self):
        decks = sample_decks()
        d1, d2, d3 = randomize_decks(decks, CanonicalDeck.default(), Twister(23590421), 25)

        self.assertEqual(decks[0].slots, d1.slots)
        self.assertEqual(decks[1].slots, d2.slots)
        self.assertEqual(25, len(d1.backlog))
        self.assertEqual(25, len(d2.backlog))
        self.assertEqual(29, len(d1.cards()))
        self.assertEqual(29, len(d2.cards()))
        self.assertTrue(all(c.value == 0 for c in d1.backlog))
        self.assertTrue(all(c.value not in (0, 10) for c in d2.backlog))

    def test_tier_three_and_inputs_are_untouched(self):
        decks = sample_decks()
        _, _, d3 = randomize_decks(decks, CanonicalDeck.default(), Twister(1), 25)
        self.assertEqual(decks[2].slots, d3.slots)
        self.assertEqual([], d3.backlog)
        self.assertEqual([], decks[0].backlog)
        self.assertEqual([], decks[1].backlog)

    def test_known_backlog_cards_stay_in_front(self):
        lines = SAMPLE_BOARD[:4] + ["0 0 0 0 3 red 0"] + SAMPLE_BOARD[4:]
        decks = build_decks(Card.from_line(line) for line in lines)
        d1, _, _ = randomize_decks(decks, CanonicalDeck.default(), Twister(2), 25)
        self.assertEqual(Card.from_line("0 0 0 0 3 red 0"), d1.backlog[0])
        self.assertEqual(25, len(d1.backlog))

    def test_same_seed_deals_same_board(self):
        a = randomize_decks(sample_decks(), CanonicalDeck.default(), Twister(9), 25)
        b = randomize_decks(sample_decks(), CanonicalDeck.default(), Twister(9), 25)
        self.assertEqual([d.backlog for d in a], [d.backlog for d in b])


class TrialLoopTestCase(unittest.TestCase):
    def test_play_randomized_deck_resets_best(self):
        context = TrialContext()
        stale = PlayoutState()
        stale.points = 99
        context.best = stale

        trial = play_randomized_deck(sample_decks(), CanonicalDeck.default(), Twister(1), Twister(2),
                                     context, SMALL_CONFIG, trial=1)
        self.assertLess(trial.best_points, 99)
        self.assertEqual(context.best.points, trial.best_points)
        self.assertEqual(context.best.total_turns, trial.best_total_turns)

    def test_estimate_solvability_yields_one_result_per_trial(self):
        estimate = SolvabilityEstimate(baseline=3.7)
        results = list(estimate_solvability(sample_decks(), CanonicalDeck.default(), SMALL_CONFIG,
                                            estimate=estimate))
        self.assertEqual([1, 2, 3], [r.trial for r in results])
        self.assertEqual(3, estimate.trials)
        self.assertEqual(max(r.best_points for r in results), estimate.max_points)
        self.assertEqual(sum(r.reached_target for r in results), estimate.hits)

    def test_estimate_is_reproducible(self):
        first = list(estimate_solvability(sample_decks(), CanonicalDeck.default(), SMALL_CONFIG))
        second = list(estimate_solvability(sample_decks(), CanonicalDeck.default(), SMALL_CONFIG))
        self.assertEqual(first, second)

    def test_target_callback_receives_winning_playouts(self):
        seen = []
        context = TrialContext(target_score=1, on_target=seen.append)
        list(estimate_solvability(sample_decks(), CanonicalDeck.default(), SMALL_CONFIG, context=context))
        self.assertTrue(seen)
        self.assertTrue(all(s.points >= 1 for s in seen))


class PlaySingleSettingTestCase(unittest.TestCase):
    def setUp(self):
        self.tier1_slots = [Card.from_line(line) for line in SAMPLE_BOARD[:4]]
        self.dealt_first = Card.from_line("0 0 0 0 3 red 0")
        self.dealt_second = Card.from_line("3 0 0 0 0 blue 0")
        self.decks = sample_decks()
        self.decks[0].add_card(self.dealt_first)
        self.decks[0].add_card(self.dealt_second)
        self.decks[1].add_card(Card.from_line("0 0 0 5 0 green 2"))
        self.decks[1].add_card(Card.from_line("5 0 0 0 0 red 2"))

    def played_decks(self, runs=2):
        with mock.patch.object(trials, "anneal") as fake_anneal:
            play_single_setting(self.decks, Twister(1), TrialContext(), runs, AnnealingSchedule(steps=10), 28)
        self.assertEqual(runs, fake_anneal.call_count)
        return [call.args[0] for call in fake_anneal.call_args_list]

    def test_backlogs_are_drawn_in_deal_order(self):
        d1, d2, _ = self.played_decks()[0]
        self.assertEqual(self.tier1_slots[0], d1.pop_card(0))
        self.assertEqual(self.dealt_first, d1.slots[0])
        d1.pop_card(0)
        self.assertEqual(self.dealt_second, d1.slots[0])
        d2.pop_card(0)
        self.assertEqual(Card.from_line("0 0 0 5 0 green 2"), d2.slots[0])

    def test_tier_three_and_inputs_are_untouched(self):
        _, _, d3 = self.played_decks()[0]
        self.assertEqual(self.decks[2].slots, d3.slots)
        self.assertEqual(self.decks[2].backlog, d3.backlog)
        self.assertEqual([self.dealt_first, self.dealt_second], self.decks[0].backlog)

    def test_every_run_sees_the_same_board(self):
        boards = self.played_decks(runs=3)
        for board in boards[1:]:
            self.assertEqual([d.backlog for d in boards[0]], [d.backlog for d in board])


class DealingIndependenceTestCase(unittest.TestCase):
    def dealt_backlogs(self, runs):
        dealt = []

        def record(*args, **kwargs):
            board = randomize_decks(*args, **kwargs)
            dealt.append([list(d.backlog) for d in board])
            return board

        config = SolverConfig(trials=3, anneal_runs=runs, anneal_steps=50)
        with mock.patch.object(trials, "randomize_decks", side_effect=record):
            list(estimate_solvability(sample_decks(), CanonicalDeck.default(), config))
        return dealt

    def test_restart_count_does_not_change_the_deal(self):
        single = self.dealt_backlogs(1)
        triple = self.dealt_backlogs(3)
        self.assertEqual(3, len(single))
        self.assertEqual(single, triple)


class SolvabilityEstimateTestCase(unittest.TestCase):
    def test_likelihood_and_lift(self):
        estimate = SolvabilityEstimate(baseline=3.7)
        self.assertEqual(0.0, estimate.likelihood)
        estimate.record(result(1, 31, True))
        estimate.record(result(2, 25, False))
        estimate.record(result(3, 28, False))
        estimate.record(result(4, 33, True))
        self.assertEqual(4, estimate.trials)
        self.assertEqual(2, estimate.hits)
        self.assertEqual(33, estimate.max_points)
        self.assertAlmostEqual(50.0, estimate.likelihood)
        self.assertAlmostEqual(50.0 / 3.7, estimate.lift)


class ReportTestCase(unittest.TestCase):
    def test_format_progress(self):
        estimate = SolvabilityEstimate(baseline=3.7)
        estimate.record(result(1, 31, True))
        estimate.record(result(2, 20, False))
        self.assertEqual(
            "Iter 2, Maximum: 31, Solvability likelihood: 50.00 %, lift vs random board 13.51",
            format_progress(estimate))

    def test_format_solution(self):
        decks = sample_decks()
        state = PlayoutState.play_out(decks, [6])
        text = format_solution(state)
        self.assertIn("points: 2, rounds: 1, tokens_cost: 7, cc 3", text)
        self.assertIn("6: black (2) red 2, green 4, blue 1, ", text)

    def test_results_frame_running_likelihood(self):
        df = results_frame([result(1, 31, True), result(2, 20, False), result(3, 32, True), result(4, 1, False)])
        for expected, actual in zip([100.0, 50.0, 200.0 / 3, 50.0], df["running_likelihood"]):
            self.assertAlmostEqual(expected, actual)
        self.assertEqual(4, len(df))
        self.assertEqual([31, 20, 32, 1], df["best_points"].tolist())

    def test_results_frame_empty(self):
        df = results_frame([])
        self.assertTrue(df.empty)
        self.assertIn("running_likelihood", df.columns)

    def test_summary_table(self):
        estimate = SolvabilityEstimate(baseline=3.7)
        estimate.record(result(1, 31, True))
        table = summary_table(estimate, 31)
        self.assertEqual(5, table.row_count)


if __name__ == "__main__":
    unittest.main()
