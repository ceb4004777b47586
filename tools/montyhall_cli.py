#!/usr/bin/env python3
"""
MONTYHALL: Simulation CLI

Usage:
    python -m tools.montyhall_cli
    python -m tools.montyhall_cli -n 10000 --seed demo
    python -m tools.montyhall_cli -n 10000 --workers 4 --validate
    python -m tools.montyhall_cli -n 50 --json
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import LOG_DATEFMT, LOG_FORMAT, SimulationSettings
from sim_engine.montyhall import (
    MontyHallError, OUTCOMES, STRATEGIES, BatchResult, play_n_games,
)
from tools.montyhall_validator import validate_batch

logger = logging.getLogger("montyhall.cli")


def setup_logging(level: str = "INFO"):
    root = logging.getLogger("montyhall")
    if not root.handlers:
        _h = logging.StreamHandler()
        _h.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(_h)
    root.setLevel(level)


def build_table(result: BatchResult) -> Table:
    """Strategy x outcome proportion table, one row per strategy."""
    table = Table(title=f"Monty Hall: {result.rounds:,} games")
    table.add_column("strategy", style="bold")
    for outcome in OUTCOMES:
        table.add_column(outcome.value, justify="right")
    for strategy in STRATEGIES:
        row = result.summary.get(strategy, {})
        table.add_row(strategy.value, *(f"{row.get(o, 0.0):.2f}" for o in OUTCOMES))
    return table


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simulate the Monty Hall problem")
    parser.add_argument("-n", "--games", type=int, default=None,
                        help="Number of games (default: MONTYHALL_ROUNDS or 100)")
    parser.add_argument("--seed", type=str, default=None, help="Batch seed")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--validate", action="store_true",
                        help="Compare win rates with the theoretical 1/3 and 2/3")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None, console: Console = None) -> int:
    args = parse_args(argv)
    console = console or Console()

    try:
        settings = SimulationSettings.from_env(
            rounds=args.games, seed=args.seed, workers=args.workers,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValidationError as e:
        setup_logging()
        for err in e.errors():
            logger.error("Invalid %s: %s", ".".join(str(p) for p in err["loc"]), err["msg"])
        return 2

    setup_logging(settings.log_level)

    try:
        result = play_n_games(settings.rounds, seed=settings.seed, workers=settings.workers)
    except MontyHallError as e:
        logger.error("%s", e)
        return 2

    if args.json:
        console.out(result.to_json(), highlight=False)
    else:
        console.print(build_table(result))
        console.print(f"[dim]seed={result.seed}[/dim]")

    if args.validate:
        report = validate_batch(result)
        style = "green" if report.overall_pass else "red"
        console.print(Panel(report.summary(), border_style=style))

    return 0


if __name__ == "__main__":
    sys.exit(main())
