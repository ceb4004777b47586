"""
MONTYHALL: Batch simulator

Runs N independent rounds and builds the strategy x outcome proportion table.

Each round gets its own generator derived from (seed, round index) with
HMAC-SHA256, so a seeded batch yields the same rows whether it runs on one
thread or many.
"""

import hashlib
import hmac
import logging
import os
import random
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from sim_engine.montyhall.base import (
    STRATEGIES, OUTCOMES, BatchResult, InvalidArgumentError,
)
from sim_engine.montyhall.game import play_game

logger = logging.getLogger("montyhall.batch")

DEFAULT_ROUNDS = 100


def new_seed() -> str:
    return os.urandom(16).hex()


def round_rng(seed: str, nonce: int) -> random.Random:
    """Generator for round ``nonce`` of a batch seeded with ``seed``."""
    digest = hmac.new(
        str(seed).encode(),
        f"round:{nonce}".encode(),
        hashlib.sha256,
    ).hexdigest()
    return random.Random(int(digest[:16], 16))


def _validate(n, workers):
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(f"Number of games must be an integer, got {n!r}")
    if n < 0:
        raise InvalidArgumentError(f"Number of games must be >= 0, got {n}")
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise InvalidArgumentError(f"workers must be a positive integer, got {workers!r}")


def summarize(rows) -> tuple:
    """Count outcomes per strategy and turn them into row proportions.

    Returns ``(counts, summary)``. Proportions are rounded to 2 dp; a strategy
    with no rows gets 0.0 for every outcome.
    """
    counts = {s: {o: 0 for o in OUTCOMES} for s in STRATEGIES}
    for row in rows:
        counts[row.strategy][row.outcome] += 1

    summary = {}
    for strategy, by_outcome in counts.items():
        total = sum(by_outcome.values())
        summary[strategy] = {
            o: round(c / total, 2) if total else 0.0
            for o, c in by_outcome.items()
        }
    return counts, summary


def play_n_games(n: int = DEFAULT_ROUNDS, seed: Optional[str] = None,
                 workers: int = 1) -> BatchResult:
    """Play ``n`` rounds and tabulate win/lose proportions per strategy.

    Args:
        n: number of rounds; 0 gives an empty result, negative is an error.
        seed: batch seed. Generated (and recorded on the result) when omitted.
        workers: threads to spread rounds over. Rows stay in round order.
    """
    _validate(n, workers)
    seed = new_seed() if seed is None else str(seed)

    logger.info("Playing %d games (seed=%s, workers=%d)", n, seed, workers)
    start = time.time()

    def _play(i):
        return play_game(round_rng(seed, i))

    if workers == 1 or n < 2:
        games = [_play(i) for i in range(n)]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            games = list(pool.map(_play, range(n)))

    rows = [row for game in games for row in game]
    counts, summary = summarize(rows)

    logger.info("Finished %d games in %.2fs", n, time.time() - start)
    for strategy in STRATEGIES:
        logger.debug("%s: %s", strategy.value,
                     {o.value: p for o, p in summary[strategy].items()})

    return BatchResult(rounds=n, rows=rows, summary=summary, counts=counts, seed=seed)
