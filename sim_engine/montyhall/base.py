"""
MONTYHALL: Base types

Enums, error types and result containers shared by the round engine and the
batch simulator.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


DOORS = (1, 2, 3)


# ═══════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════

class Prize(str, Enum):
    GOAT = "goat"
    CAR  = "car"


class Strategy(str, Enum):
    STAY   = "stay"
    SWITCH = "switch"


class Outcome(str, Enum):
    WIN  = "WIN"
    LOSE = "LOSE"


STRATEGIES = (Strategy.STAY, Strategy.SWITCH)
OUTCOMES = (Outcome.WIN, Outcome.LOSE)


# ═══════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════

class MontyHallError(Exception):
    """Base class for simulator errors."""


class InvalidArgumentError(MontyHallError, ValueError):
    """Bad batch parameter (negative round count, zero workers)."""


class InvalidInputError(MontyHallError, ValueError):
    """Door index or board that breaks the three-door game rules."""


# ═══════════════════════════════════════════════════════════════
# Results
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RoundResult:
    """One (strategy, outcome) row."""
    strategy: Strategy
    outcome: Outcome

    def to_dict(self) -> dict:
        return {"strategy": self.strategy.value, "outcome": self.outcome.value}


@dataclass
class BatchResult:
    """Raw rows plus the strategy x outcome proportion table for a batch."""
    rounds: int
    rows: list = field(default_factory=list)
    summary: dict = field(default_factory=dict)
    counts: dict = field(default_factory=dict)   # {Strategy: {Outcome: int}}
    seed: Optional[str] = None

    def win_rate(self, strategy: Strategy) -> float:
        """Rounded WIN proportion for a strategy (0.0 on an empty batch)."""
        return self.summary.get(strategy, {}).get(Outcome.WIN, 0.0)

    def to_dict(self) -> dict:
        return {
            "rounds": self.rounds,
            "seed": self.seed,
            "summary": {
                s.value: {o.value: p for o, p in row.items()}
                for s, row in self.summary.items()
            },
            "counts": {
                s.value: {o.value: c for o, c in row.items()}
                for s, row in self.counts.items()
            },
            "rows": [r.to_dict() for r in self.rows],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
