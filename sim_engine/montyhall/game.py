"""
MONTYHALL: Round engine

One round of "Let's Make a Deal": a car and two goats are shuffled behind three
doors, the contestant picks a door, the host opens a goat door the contestant
did not pick, and the contestant either stays or switches to the last closed door.

Every function that needs randomness takes the generator explicitly so callers
(and tests) control seeding.
"""

import logging

from sim_engine.montyhall.base import (
    DOORS, Prize, Strategy, Outcome, RoundResult, InvalidInputError,
)

logger = logging.getLogger("montyhall.engine")


def _check_door(door, name: str = "door"):
    if not isinstance(door, int) or isinstance(door, bool) or door not in DOORS:
        raise InvalidInputError(f"{name} must be one of {DOORS}, got {door!r}")


def _check_board(board):
    try:
        size = len(board)
    except TypeError:
        raise InvalidInputError(f"Board must be a sequence of doors, got {board!r}") from None
    if size != len(DOORS):
        raise InvalidInputError(f"Board must have {len(DOORS)} doors, got {size}")
    cars = sum(1 for prize in board if prize == Prize.CAR)
    goats = sum(1 for prize in board if prize == Prize.GOAT)
    if cars != 1 or goats != 2:
        raise InvalidInputError(f"Board must hold one car and two goats, got {board!r}")


def create_game(rng) -> tuple:
    """Shuffle two goats and one car behind doors 1-3."""
    prizes = [Prize.GOAT, Prize.GOAT, Prize.CAR]
    rng.shuffle(prizes)
    return tuple(prizes)


def select_door(rng) -> int:
    """Contestant's first pick, uniform over the three doors."""
    return rng.choice(DOORS)


def open_goat_door(board, pick: int, rng) -> int:
    """Door the host opens: never the car, never the contestant's pick.

    If the contestant is standing on the car, both other doors hide goats and
    the host picks one at random. Otherwise exactly one door is left that is
    neither the pick nor the car, and the host has to open it.
    """
    _check_board(board)
    _check_door(pick, "pick")

    if board[pick - 1] == Prize.CAR:
        goat_doors = [d for d in DOORS if board[d - 1] == Prize.GOAT]
        return rng.choice(goat_doors)

    return next(d for d in DOORS if d != pick and board[d - 1] == Prize.GOAT)


def change_door(strategy, opened_door: int, pick: int) -> int:
    """Final door for a strategy.

    ``strategy`` is a Strategy, its string value, or a bool where True means stay.
    """
    if isinstance(strategy, bool):
        strategy = Strategy.STAY if strategy else Strategy.SWITCH
    else:
        try:
            strategy = Strategy(strategy)
        except ValueError:
            raise InvalidInputError(f"Unknown strategy: {strategy!r}") from None

    _check_door(opened_door, "opened_door")
    _check_door(pick, "pick")
    if opened_door == pick:
        raise InvalidInputError(f"Host cannot open the picked door ({pick})")

    if strategy is Strategy.STAY:
        return pick
    return next(d for d in DOORS if d != opened_door and d != pick)


def determine_winner(final_pick: int, board) -> Outcome:
    _check_board(board)
    _check_door(final_pick, "final_pick")
    return Outcome.WIN if board[final_pick - 1] == Prize.CAR else Outcome.LOSE


def play_game(rng) -> list:
    """Play one round and score both strategies against the same board and pick.

    Returns ``[RoundResult(STAY, ...), RoundResult(SWITCH, ...)]``. Exactly one
    of the two is a win.
    """
    board = create_game(rng)
    first_pick = select_door(rng)
    opened_door = open_goat_door(board, first_pick, rng)

    final_pick_stay = change_door(Strategy.STAY, opened_door, first_pick)
    final_pick_switch = change_door(Strategy.SWITCH, opened_door, first_pick)

    outcome_stay = determine_winner(final_pick_stay, board)
    outcome_switch = determine_winner(final_pick_switch, board)

    logger.debug("board=%s pick=%d opened=%d stay=%s switch=%s",
                 [p.value for p in board], first_pick, opened_door,
                 outcome_stay.value, outcome_switch.value)

    return [
        RoundResult(Strategy.STAY, outcome_stay),
        RoundResult(Strategy.SWITCH, outcome_switch),
    ]
