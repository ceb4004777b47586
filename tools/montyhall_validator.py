"""
MONTYHALL: Batch validator

Checks a batch's measured win rates against the textbook answer: staying wins
1/3 of the time, switching 2/3.

Usage:
    from sim_engine.montyhall import play_n_games
    from tools.montyhall_validator import validate_batch

    report = validate_batch(play_n_games(10_000, seed="check"))
    print(report.summary())
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from sim_engine.montyhall import BatchResult, Outcome, Strategy, STRATEGIES

THEORETICAL_WIN_RATE = {
    Strategy.STAY: 1 / 3,
    Strategy.SWITCH: 2 / 3,
}

Z_95 = 1.96


@dataclass
class StrategyCheck:
    strategy: Strategy
    n_rounds: int
    theoretical: float
    measured: float
    std_err: float
    confidence_95: tuple
    delta: float
    passed: bool

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy.value,
            "n_rounds": self.n_rounds,
            "theoretical": round(self.theoretical, 4),
            "measured": round(self.measured, 4),
            "std_err": round(self.std_err, 6),
            "confidence_95": [round(x, 4) for x in self.confidence_95],
            "delta": round(self.delta, 4),
            "pass": self.passed,
        }


@dataclass
class ValidationReport:
    seed: str = ""
    tolerance: float = 0.01
    checks: list[StrategyCheck] = field(default_factory=list)

    @property
    def overall_pass(self) -> bool:
        return bool(self.checks) and all(c.passed for c in self.checks)

    def summary(self) -> str:
        status = "PASS" if self.overall_pass else "FAIL"
        lines = [f"Monty Hall validation ({status}, seed={self.seed})"]
        for c in self.checks:
            lo, hi = c.confidence_95
            lines.append(
                f"  {c.strategy.value:<6} measured={c.measured:.4f} "
                f"theory={c.theoretical:.4f} 95% CI=[{lo:.4f}, {hi:.4f}] "
                f"{'ok' if c.passed else 'OUT OF RANGE'}"
            )
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "tolerance": self.tolerance,
            "overall_pass": self.overall_pass,
            "checks": [c.to_dict() for c in self.checks],
        }


def check_strategy(result: BatchResult, strategy: Strategy,
                   tolerance: float = 0.01) -> StrategyCheck:
    counts = result.counts.get(strategy, {})
    n = sum(counts.values())
    theory = THEORETICAL_WIN_RATE[strategy]

    if n == 0:
        return StrategyCheck(strategy, 0, theory, 0.0, 0.0, (0.0, 0.0), 0.0, False)

    # Unrounded rate from counts; the summary table is rounded to 2 dp
    p = counts.get(Outcome.WIN, 0) / n
    std_err = math.sqrt(p * (1 - p) / n)
    ci = (p - Z_95 * std_err, p + Z_95 * std_err)
    passed = ci[0] - tolerance <= theory <= ci[1] + tolerance
    return StrategyCheck(strategy, n, theory, p, std_err, ci, abs(p - theory), passed)


def validate_batch(result: BatchResult, tolerance: float = 0.01) -> ValidationReport:
    report = ValidationReport(seed=result.seed or "", tolerance=tolerance)
    for strategy in STRATEGIES:
        report.checks.append(check_strategy(result, strategy, tolerance))
    return report
