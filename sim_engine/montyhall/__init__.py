"""
MONTYHALL: Monty Hall simulation engine

Three doors, one car, two goats. Every round scores both the stay and the switch
strategy against the same board and first pick, so exactly one of them wins.

Usage:
    import random
    from sim_engine.montyhall import play_game, play_n_games

    play_game(random.Random(7))          # [RoundResult(stay, ...), RoundResult(switch, ...)]
    result = play_n_games(1000, seed="demo")
    result.summary[Strategy.SWITCH][Outcome.WIN]   # ~0.67
"""

from sim_engine.montyhall.base import (
    DOORS, Prize, Strategy, Outcome, STRATEGIES, OUTCOMES,
    RoundResult, BatchResult,
    MontyHallError, InvalidArgumentError, InvalidInputError,
)
from sim_engine.montyhall.game import (
    create_game, select_door, open_goat_door, change_door, determine_winner, play_game,
)
from sim_engine.montyhall.batch import (
    DEFAULT_ROUNDS, play_n_games, summarize, round_rng, new_seed,
)

__all__ = [
    "DOORS", "Prize", "Strategy", "Outcome", "STRATEGIES", "OUTCOMES",
    "RoundResult", "BatchResult",
    "MontyHallError", "InvalidArgumentError", "InvalidInputError",
    "create_game", "select_door", "open_goat_door", "change_door",
    "determine_winner", "play_game",
    "DEFAULT_ROUNDS", "play_n_games", "summarize", "round_rng", "new_seed",
]
