#!/usr/bin/env python3
"""
MONTYHALL: Engine & Batch Test Suite

Run: python tests.py
     python tests.py -v             # verbose
     python tests.py TestHostReveal # run specific class

Test categories:
  TestGameBoard       - shuffled board always holds one car
  TestContestantPick  - first pick covers all three doors
  TestHostReveal      - host never opens the car or the pick
  TestFinalDecision   - stay keeps the pick, switch takes the last door
  TestOutcome         - win iff the final door hides the car
  TestPlayGame        - paired rounds, exactly one strategy wins
  TestPlayNGames      - row counts, empty batches, seeding, threading
  TestValidator       - measured vs theoretical win rates
"""

import json
import random
import sys
import unittest
from pathlib import Path

# ── Ensure project root is on sys.path ──
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from sim_engine.montyhall import (
    DOORS, Prize, Strategy, Outcome, RoundResult,
    InvalidArgumentError, InvalidInputError, MontyHallError,
    create_game, select_door, open_goat_door, change_door, determine_winner,
    play_game, play_n_games, summarize, round_rng,
)
from tools.montyhall_validator import THEORETICAL_WIN_RATE, validate_batch

CAR, GOAT = Prize.CAR, Prize.GOAT

ALL_BOARDS = [
    (CAR, GOAT, GOAT),
    (GOAT, CAR, GOAT),
    (GOAT, GOAT, CAR),
]


# ============================================================
# Round Engine Tests
# ============================================================

class TestGameBoard(unittest.TestCase):

    def test_exactly_one_car(self):
        rng = random.Random(1)
        for _ in range(500):
            board = create_game(rng)
            self.assertEqual(len(board), 3)
            self.assertEqual(board.count(CAR), 1)
            self.assertEqual(board.count(GOAT), 2)

    def test_car_lands_behind_every_door(self):
        """Over many shuffles the car shows up at all three positions."""
        rng = random.Random(2)
        positions = {create_game(rng).index(CAR) for _ in range(300)}
        self.assertEqual(positions, {0, 1, 2})

    def test_board_is_immutable(self):
        board = create_game(random.Random(3))
        with self.assertRaises(TypeError):
            board[0] = CAR


class TestContestantPick(unittest.TestCase):

    def test_pick_in_range_and_covers_all_doors(self):
        rng = random.Random(4)
        picks = [select_door(rng) for _ in range(300)]
        self.assertTrue(all(p in DOORS for p in picks))
        self.assertEqual(set(picks), set(DOORS))


class TestHostReveal(unittest.TestCase):

    def test_never_opens_pick_or_car(self):
        rng = random.Random(5)
        for board in ALL_BOARDS:
            for pick in DOORS:
                for _ in range(50):
                    opened = open_goat_door(board, pick, rng)
                    self.assertNotEqual(opened, pick)
                    self.assertEqual(board[opened - 1], GOAT)

    def test_pick_on_car_opens_either_goat(self):
        """board=[CAR,GOAT,GOAT], pick=1: host opens 2 or 3, and both happen."""
        rng = random.Random(6)
        opened = {open_goat_door((CAR, GOAT, GOAT), 1, rng) for _ in range(200)}
        self.assertEqual(opened, {2, 3})

    def test_pick_on_goat_is_deterministic(self):
        """board=[GOAT,CAR,GOAT], pick=1: host must open 3."""
        for seed in range(50):
            self.assertEqual(open_goat_door((GOAT, CAR, GOAT), 1, random.Random(seed)), 3)
        self.assertEqual(open_goat_door((GOAT, GOAT, CAR), 2, random.Random(0)), 1)

    def test_accepts_plain_string_labels(self):
        self.assertEqual(open_goat_door(["goat", "car", "goat"], 3, random.Random(0)), 1)

    def test_rejects_out_of_range_pick(self):
        for pick in (0, 4, -1, 1.0, True, "1"):
            with self.assertRaises(InvalidInputError):
                open_goat_door((CAR, GOAT, GOAT), pick, random.Random(0))

    def test_rejects_bad_board(self):
        boards = [
            (CAR, CAR, GOAT), (GOAT, GOAT, GOAT), (CAR, GOAT), (CAR, GOAT, GOAT, GOAT),
            (CAR, "donkey", "llama"), ("donkey", CAR, GOAT), None, 3,
        ]
        for board in boards:
            with self.assertRaises(InvalidInputError):
                open_goat_door(board, 1, random.Random(0))

    def test_errors_are_value_errors(self):
        with self.assertRaises(ValueError):
            open_goat_door((CAR, CAR, CAR), 1, random.Random(0))


class TestFinalDecision(unittest.TestCase):

    def test_stay_keeps_pick(self):
        for pick in DOORS:
            for opened in DOORS:
                if opened != pick:
                    self.assertEqual(change_door(Strategy.STAY, opened, pick), pick)

    def test_switch_takes_remaining_door(self):
        for pick in DOORS:
            for opened in DOORS:
                if opened == pick:
                    continue
                final = change_door(Strategy.SWITCH, opened, pick)
                self.assertEqual({final, opened, pick}, set(DOORS))

    def test_bool_and_string_strategies(self):
        self.assertEqual(change_door(True, 2, 1), 1)
        self.assertEqual(change_door(False, 2, 1), 3)
        self.assertEqual(change_door("switch", 3, 1), 2)
        self.assertEqual(change_door("stay", 3, 1), 1)

    def test_rejects_unknown_strategy(self):
        with self.assertRaises(InvalidInputError):
            change_door("maybe", 2, 1)

    def test_rejects_opened_equal_to_pick(self):
        with self.assertRaises(InvalidInputError):
            change_door(Strategy.SWITCH, 1, 1)

    def test_rejects_out_of_range_doors(self):
        with self.assertRaises(InvalidInputError):
            change_door(Strategy.SWITCH, 4, 1)
        with self.assertRaises(InvalidInputError):
            change_door(Strategy.STAY, 2, 0)


class TestOutcome(unittest.TestCase):

    def test_win_iff_car(self):
        for board in ALL_BOARDS:
            for door in DOORS:
                expected = Outcome.WIN if board[door - 1] == CAR else Outcome.LOSE
                self.assertEqual(determine_winner(door, board), expected)

    def test_rejects_invalid_input(self):
        with self.assertRaises(InvalidInputError):
            determine_winner(5, (CAR, GOAT, GOAT))
        with self.assertRaises(InvalidInputError):
            determine_winner(1, (GOAT, GOAT, GOAT))
        with self.assertRaises(InvalidInputError):
            determine_winner(2, (CAR, "donkey", GOAT))
        with self.assertRaises(InvalidInputError):
            determine_winner(1, None)


class TestPlayGame(unittest.TestCase):

    def test_two_rows_stay_then_switch(self):
        rows = play_game(random.Random(7))
        self.assertEqual(len(rows), 2)
        self.assertIsInstance(rows[0], RoundResult)
        self.assertEqual([r.strategy for r in rows], [Strategy.STAY, Strategy.SWITCH])

    def test_exactly_one_strategy_wins(self):
        rng = random.Random(8)
        for _ in range(1000):
            stay, switch = play_game(rng)
            self.assertNotEqual(stay.outcome, switch.outcome)
            self.assertIn(Outcome.WIN, (stay.outcome, switch.outcome))

    def test_same_rng_state_same_round(self):
        self.assertEqual(play_game(random.Random(9)), play_game(random.Random(9)))


# ============================================================
# Batch Simulator Tests
# ============================================================

class TestPlayNGames(unittest.TestCase):

    def test_row_count_is_twice_n(self):
        for n in (1, 2, 17, 100):
            result = play_n_games(n, seed="rows")
            self.assertEqual(len(result.rows), 2 * n)
            self.assertEqual(result.rounds, n)

    def test_rows_alternate_stay_switch(self):
        result = play_n_games(25, seed="order")
        self.assertEqual([r.strategy for r in result.rows[0::2]], [Strategy.STAY] * 25)
        self.assertEqual([r.strategy for r in result.rows[1::2]], [Strategy.SWITCH] * 25)

    def test_default_is_100_games(self):
        self.assertEqual(len(play_n_games(seed="default").rows), 200)

    def test_zero_games_is_empty(self):
        result = play_n_games(0)
        self.assertEqual(result.rows, [])
        for strategy in Strategy:
            self.assertEqual(result.summary[strategy], {Outcome.WIN: 0.0, Outcome.LOSE: 0.0})
            self.assertEqual(result.win_rate(strategy), 0.0)

    def test_negative_games_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            play_n_games(-1)

    def test_non_integer_games_rejected(self):
        for bad in (2.5, "10", None, True):
            with self.assertRaises(InvalidArgumentError):
                play_n_games(bad)

    def test_bad_workers_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            play_n_games(10, workers=0)
        self.assertTrue(issubclass(InvalidArgumentError, MontyHallError))

    def test_seeded_win_rates(self):
        """Law of large numbers: switch ~2/3, stay ~1/3."""
        result = play_n_games(1000, seed=7)
        self.assertAlmostEqual(result.summary[Strategy.SWITCH][Outcome.WIN], 0.66, delta=0.05)
        self.assertAlmostEqual(result.summary[Strategy.STAY][Outcome.WIN], 0.33, delta=0.05)

    def test_summary_rows_are_proportions(self):
        result = play_n_games(300, seed="props")
        for strategy in Strategy:
            row = result.summary[strategy]
            self.assertAlmostEqual(row[Outcome.WIN] + row[Outcome.LOSE], 1.0, delta=0.011)
            self.assertEqual(sum(result.counts[strategy].values()), 300)

    def test_stay_wins_plus_switch_wins_is_n(self):
        result = play_n_games(400, seed="pairs")
        wins = result.counts[Strategy.STAY][Outcome.WIN] + result.counts[Strategy.SWITCH][Outcome.WIN]
        self.assertEqual(wins, 400)

    def test_same_seed_same_rows(self):
        a = play_n_games(200, seed="repeat")
        b = play_n_games(200, seed="repeat")
        self.assertEqual(a.rows, b.rows)
        self.assertEqual(a.summary, b.summary)

    def test_threads_do_not_change_rows(self):
        serial = play_n_games(300, seed="threads", workers=1)
        threaded = play_n_games(300, seed="threads", workers=4)
        self.assertEqual(serial.rows, threaded.rows)

    def test_generated_seed_is_recorded_and_replays(self):
        result = play_n_games(50)
        self.assertTrue(result.seed)
        self.assertEqual(play_n_games(50, seed=result.seed).rows, result.rows)

    def test_round_rng_depends_on_seed_and_nonce(self):
        self.assertEqual(round_rng("s", 3).random(), round_rng("s", 3).random())
        self.assertNotEqual(round_rng("s", 3).random(), round_rng("s", 4).random())
        self.assertNotEqual(round_rng("s", 3).random(), round_rng("t", 3).random())

    def test_summarize_rounds_to_two_places(self):
        rows = [
            RoundResult(Strategy.STAY, Outcome.WIN),
            RoundResult(Strategy.SWITCH, Outcome.LOSE),
            RoundResult(Strategy.STAY, Outcome.LOSE),
            RoundResult(Strategy.SWITCH, Outcome.WIN),
            RoundResult(Strategy.STAY, Outcome.LOSE),
            RoundResult(Strategy.SWITCH, Outcome.WIN),
        ]
        counts, summary = summarize(rows)
        self.assertEqual(counts[Strategy.STAY], {Outcome.WIN: 1, Outcome.LOSE: 2})
        self.assertEqual(summary[Strategy.STAY], {Outcome.WIN: 0.33, Outcome.LOSE: 0.67})
        self.assertEqual(summary[Strategy.SWITCH], {Outcome.WIN: 0.67, Outcome.LOSE: 0.33})

    def test_to_json(self):
        result = play_n_games(3, seed="json")
        data = json.loads(result.to_json())
        self.assertEqual(data["rounds"], 3)
        self.assertEqual(data["seed"], "json")
        self.assertEqual(len(data["rows"]), 6)
        self.assertEqual(set(data["summary"]), {"stay", "switch"})
        self.assertEqual(set(data["summary"]["stay"]), {"WIN", "LOSE"})
        self.assertIn(data["rows"][0]["outcome"], ("WIN", "LOSE"))


# ============================================================
# Validator Tests
# ============================================================

class TestValidator(unittest.TestCase):

    def test_large_batch_passes(self):
        report = validate_batch(play_n_games(5000, seed="validate"))
        self.assertTrue(report.overall_pass, report.summary())
        for check in report.checks:
            self.assertAlmostEqual(check.measured, THEORETICAL_WIN_RATE[check.strategy], delta=0.05)
            lo, hi = check.confidence_95
            self.assertLess(lo, check.measured)
            self.assertGreater(hi, check.measured)

    def test_empty_batch_fails(self):
        report = validate_batch(play_n_games(0, seed="empty"))
        self.assertFalse(report.overall_pass)
        self.assertTrue(all(c.n_rounds == 0 for c in report.checks))
        self.assertTrue(all(c.delta == 0.0 and c.measured == 0.0 for c in report.checks))

    def test_rigged_counts_fail(self):
        result = play_n_games(0, seed="rigged")
        result.counts = {
            Strategy.STAY: {Outcome.WIN: 900, Outcome.LOSE: 100},
            Strategy.SWITCH: {Outcome.WIN: 100, Outcome.LOSE: 900},
        }
        report = validate_batch(result)
        self.assertFalse(report.overall_pass)
        self.assertIn("OUT OF RANGE", report.summary())

    def test_report_to_dict(self):
        data = validate_batch(play_n_games(100, seed="dict")).to_dict()
        self.assertEqual(data["seed"], "dict")
        self.assertEqual([c["strategy"] for c in data["checks"]], ["stay", "switch"])


if __name__ == "__main__":
    unittest.main()
