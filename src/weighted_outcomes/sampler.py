"""
Weighted sampling over an OutcomeTable.

The sampler is stateless: every call receives the table, a weight function
and the random source to draw from. The same cumulative walk serves both
pure random draws (base weights) and fair draws (effective weights).
"""

from __future__ import annotations

import math
from typing import Callable, List, Protocol

from .errors import NoSelectableOutcomeError
from .outcome_table import Outcome, OutcomeTable

WeightFn = Callable[[Outcome], float]


class RandomSource(Protocol):
    """Anything with a random() method returning a float in [0, 1)."""

    def random(self) -> float:
        ...


def draw(table: OutcomeTable, weight_fn: WeightFn, random_source: RandomSource) -> Outcome:
    """
    Draw one outcome with probability proportional to weight_fn(outcome).

    The draw range is the actual sum of weight_fn over the table, which may
    differ from table.total_weight() when weights have been adjusted. A value
    u in [0, total) is taken from random_source and outcomes are walked in
    table order until the running sum exceeds u.

    Raises NoSelectableOutcomeError if the weights sum to zero, and
    ValueError if weight_fn yields a negative or non-finite weight or the
    random source yields a value outside [0, 1).
    """
    outcomes = table.outcomes()
    weights: List[float] = []
    for outcome in outcomes:
        w = weight_fn(outcome)
        if not math.isfinite(w) or w < 0.0:
            raise ValueError(f"invalid effective weight {w!r} for {outcome!r}")
        weights.append(w)

    total = sum(weights)
    if total <= 0.0:
        raise NoSelectableOutcomeError("total effective weight is zero")

    r = random_source.random()
    if not 0.0 <= r < 1.0:
        raise ValueError(f"random source returned {r!r}, expected [0, 1)")
    u = r * total

    cumulative = 0.0
    for outcome, w in zip(outcomes, weights):
        cumulative += w
        if cumulative > u:
            return outcome

    # Numerical fallback: rounding let u reach the running sum
    for outcome, w in zip(reversed(outcomes), reversed(weights)):
        if w > 0.0:
            return outcome
    raise NoSelectableOutcomeError("total effective weight is zero")


def draw_random(table: OutcomeTable, random_source: RandomSource) -> Outcome:
    """Draw one outcome proportional to the table's base weights."""
    return draw(table, table.weight_of, random_source)
