"""
Fairness adjustment for weighted draws.

A fair draw biases the next outcome toward whatever is overdue. For each
outcome with base weight w the effective weight is

    w * clamp(adjustment_fn(since_last, expected_interval)) * balance

where expected_interval = total_weight / w is how often the outcome recurs
under independent sampling.

The recency factor alone shapes WHEN outcomes occur but cannot pin HOW
OFTEN they occur: with one draw per step a common outcome is nearly always
"just seen" and stays at the minimum factor, which inflates rare outcomes.
The balance term removes that drift. It is the exponential bias

    balance = exp(-beta * (excess - baseline))

where excess = occurrences - draw_count * w / total_weight is how far the
outcome is ahead of its nominal share, and baseline is the smallest excess
in the table. Only excess above the baseline is penalised, so the largest
balance is always exactly 1. With beta > 0 excess is mean-reverting and the
empirical frequency of every outcome converges to w / total_weight.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .errors import UnknownOutcomeError
from .history import HistoryTracker
from .outcome_table import Outcome, OutcomeTable
from .sampler import RandomSource, draw

AdjustmentFn = Callable[[int, float], float]

DEFAULT_MIN_FACTOR = 0.25
DEFAULT_MAX_FACTOR = 4.0
DEFAULT_BETA = 1.0


# ------------------------------------------------------------
# Adjustment strategies
# ------------------------------------------------------------

def linear_ratio(since_last: int, expected_interval: float) -> float:
    """Draws since last occurrence as a fraction of the expected interval."""
    return since_last / expected_interval


def sqrt_ratio(since_last: int, expected_interval: float) -> float:
    """Like linear_ratio, but grows more slowly once an outcome is overdue."""
    return math.sqrt(since_last / expected_interval)


def no_recency(since_last: int, expected_interval: float) -> float:
    """Ignore recency; only the balance term adjusts weights."""
    return 1.0


@dataclass(frozen=True)
class FairnessConfig:
    """
    Tunables for fair draws.

    min_factor / max_factor bound the recency multiplier only. The balance
    term is applied after the clamp, so the final ratio of effective weight
    to base weight can fall outside [min_factor, max_factor]. beta is the
    strength of the long-run balance term; beta = 0 disables it and leaves
    pure recency weighting, which no longer guarantees convergence to the
    base weights.
    """
    min_factor: float = DEFAULT_MIN_FACTOR
    max_factor: float = DEFAULT_MAX_FACTOR
    adjustment_fn: AdjustmentFn = linear_ratio
    beta: float = DEFAULT_BETA

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min_factor) and math.isfinite(self.max_factor)):
            raise ValueError("min_factor and max_factor must be finite")
        if self.min_factor < 0:
            raise ValueError("min_factor must be >= 0")
        if self.max_factor < self.min_factor:
            raise ValueError("max_factor must be >= min_factor")
        if not math.isfinite(self.beta) or self.beta < 0:
            raise ValueError("beta must be >= 0")
        if not callable(self.adjustment_fn):
            raise ValueError("adjustment_fn must be callable")

    def factor(self, since_last: int, expected_interval: float) -> float:
        """Recency multiplier for one outcome, clamped to the configured range."""
        f = self.adjustment_fn(since_last, expected_interval)
        if math.isnan(f):
            raise ValueError(
                f"adjustment_fn returned NaN for since_last={since_last}, "
                f"expected_interval={expected_interval}"
            )
        return min(max(f, self.min_factor), self.max_factor)


DEFAULT_CONFIG = FairnessConfig()


# ------------------------------------------------------------
# Effective weights
# ------------------------------------------------------------

def effective_weights(
    table: OutcomeTable,
    tracker: HistoryTracker,
    config: Optional[FairnessConfig] = None,
) -> Dict[Outcome, float]:
    """
    Compute the effective weight of every outcome for the next fair draw,
    in table order.

    Outcomes that never occurred count as overdue: their since_last is the
    larger of draw_count and their expected interval (rounded up), so
    linear_ratio gives them a factor of at least 1 even on a fresh tracker.
    Zero-weight outcomes stay at zero.

    Raises UnknownOutcomeError if the tracker has history for an outcome the
    table does not contain.
    """
    if config is None:
        config = DEFAULT_CONFIG

    for outcome in tracker.tracked():
        if outcome not in table:
            raise UnknownOutcomeError(outcome)

    total = table.total_weight()
    draws = tracker.draw_count()

    excess: Dict[Outcome, float] = {}
    for outcome, base in table.items():
        if base > 0.0:
            excess[outcome] = tracker.occurrences(outcome) - draws * base / total
    baseline = min(excess.values())

    weights: Dict[Outcome, float] = {}
    for outcome, base in table.items():
        if base == 0.0:
            weights[outcome] = 0.0
            continue

        interval = total / base
        since = tracker.since_last(outcome)
        if since is None:
            since = max(draws, math.ceil(interval))

        factor = config.factor(since, interval)
        balance = math.exp(-config.beta * (excess[outcome] - baseline))
        weights[outcome] = base * factor * balance

    return weights


def effective_weight(
    table: OutcomeTable,
    tracker: HistoryTracker,
    config: Optional[FairnessConfig],
    outcome: Outcome,
) -> float:
    if outcome not in table:
        raise UnknownOutcomeError(outcome)
    return effective_weights(table, tracker, config)[outcome]


# ------------------------------------------------------------
# Fair draw
# ------------------------------------------------------------

def draw_fair(
    table: OutcomeTable,
    tracker: HistoryTracker,
    config: Optional[FairnessConfig],
    random_source: RandomSource,
) -> Outcome:
    """
    Draw one outcome using effective weights, then record it in tracker.

    Errors from the weight computation or the sampler propagate unchanged
    and leave the tracker untouched.
    """
    weights = effective_weights(table, tracker, config)
    result = draw(table, weights.__getitem__, random_source)
    tracker.record(result)
    return result
