#!/usr/bin/env python3
"""MONTYHALL: Settings & CLI tests

Tests for:
  A) SimulationSettings env parsing and validation
  B) tools.montyhall_cli table / JSON output and exit codes
"""
import io
import json
import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).parent
sys.path.insert(0, str(ROOT))

from pydantic import ValidationError
from rich.console import Console

from config.settings import DEFAULT_ROUNDS, SimulationSettings
from tools import montyhall_cli

CLEAN_ENV = {k: v for k, v in os.environ.items() if not k.startswith("MONTYHALL_")}


def run_cli(*argv):
    buf = io.StringIO()
    console = Console(file=buf, width=120, force_terminal=False, color_system=None)
    code = montyhall_cli.main(list(argv), console=console)
    return code, buf.getvalue()


# ════════════════════════════════════════════════════════════════
# A) Settings
# ════════════════════════════════════════════════════════════════

class TestSettings(unittest.TestCase):

    @patch.dict(os.environ, CLEAN_ENV, clear=True)
    def test_defaults(self):
        s = SimulationSettings.from_env()
        self.assertEqual(s.rounds, DEFAULT_ROUNDS)
        self.assertIsNone(s.seed)
        self.assertEqual(s.workers, 1)
        self.assertEqual(s.log_level, "INFO")

    @patch.dict(os.environ, {**CLEAN_ENV, "MONTYHALL_ROUNDS": "250", "MONTYHALL_SEED": "abc",
                             "MONTYHALL_WORKERS": "3", "MONTYHALL_LOG_LEVEL": "debug"}, clear=True)
    def test_reads_environment(self):
        s = SimulationSettings.from_env()
        self.assertEqual((s.rounds, s.seed, s.workers, s.log_level), (250, "abc", 3, "DEBUG"))

    @patch.dict(os.environ, {**CLEAN_ENV, "MONTYHALL_ROUNDS": "250"}, clear=True)
    def test_overrides_beat_environment(self):
        self.assertEqual(SimulationSettings.from_env(rounds=10).rounds, 10)
        self.assertEqual(SimulationSettings.from_env(rounds=None).rounds, 250)

    @patch.dict(os.environ, {**CLEAN_ENV, "MONTYHALL_ROUNDS": "lots"}, clear=True)
    def test_garbage_integer_falls_back(self):
        self.assertEqual(SimulationSettings.from_env().rounds, DEFAULT_ROUNDS)

    @patch.dict(os.environ, {**CLEAN_ENV, "MONTYHALL_SEED": "   "}, clear=True)
    def test_blank_seed_is_none(self):
        self.assertIsNone(SimulationSettings.from_env().seed)

    def test_default_rounds_shared_with_engine(self):
        from sim_engine.montyhall import DEFAULT_ROUNDS as ENGINE_DEFAULT
        self.assertIs(DEFAULT_ROUNDS, ENGINE_DEFAULT)
        self.assertEqual(SimulationSettings().rounds, ENGINE_DEFAULT)

    def test_rejects_negative_rounds_and_zero_workers(self):
        with self.assertRaises(ValidationError):
            SimulationSettings(rounds=-1)
        with self.assertRaises(ValidationError):
            SimulationSettings(workers=0)
        with self.assertRaises(ValidationError):
            SimulationSettings(log_level="LOUD")


# ════════════════════════════════════════════════════════════════
# B) CLI
# ════════════════════════════════════════════════════════════════

@patch.dict(os.environ, CLEAN_ENV, clear=True)
class TestCLI(unittest.TestCase):

    def test_prints_table(self):
        code, out = run_cli("-n", "200", "--seed", "cli")
        self.assertEqual(code, 0)
        for word in ("stay", "switch", "WIN", "LOSE", "200 games", "seed=cli"):
            self.assertIn(word, out)

    def test_json_output(self):
        code, out = run_cli("-n", "5", "--seed", "cli-json", "--json")
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["rounds"], 5)
        self.assertEqual(len(data["rows"]), 10)
        self.assertEqual(data["seed"], "cli-json")

    def test_validate_panel(self):
        code, out = run_cli("-n", "3000", "--seed", "cli-validate", "--validate")
        self.assertEqual(code, 0)
        self.assertIn("Monty Hall validation", out)

    def test_zero_games(self):
        code, out = run_cli("-n", "0")
        self.assertEqual(code, 0)
        self.assertIn("0.00", out)

    def test_negative_games_exit_2(self):
        with self.assertLogs("montyhall.cli", level="ERROR"):
            code, out = run_cli("-n", "-1")
        self.assertEqual(code, 2)
        self.assertEqual(out, "")

    def test_zero_workers_exit_2(self):
        with self.assertLogs("montyhall.cli", level="ERROR"):
            code, _ = run_cli("-n", "10", "--workers", "0")
        self.assertEqual(code, 2)

    def test_build_table_shape(self):
        from sim_engine.montyhall import play_n_games
        table = montyhall_cli.build_table(play_n_games(10, seed="shape"))
        self.assertEqual(len(table.columns), 3)
        self.assertEqual(table.row_count, 2)


if __name__ == "__main__":
    unittest.main()
