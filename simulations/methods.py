# simulations/methods.py

from __future__ import annotations

import random
from typing import Callable, Dict, Optional

from .common import ExperimentSpec, ExperimentResult, Timer

from weighted_outcomes import FairnessConfig, HistoryTracker, draw_fair, draw_random


SimFn = Callable[[ExperimentSpec, int], ExperimentResult]


def simulate_random(spec: ExperimentSpec, seed: int) -> ExperimentResult:
    """
    Independent weighted draws: every draw uses the base weights.
    """
    rng = random.Random(seed)
    table = spec.table()
    sequence = []

    with Timer() as t:
        for _ in range(spec.draws):
            sequence.append(draw_random(table, rng))

    return ExperimentResult(
        method="random",
        spec=spec,
        sequence=sequence,
        runtime_s=t.elapsed_s,
        meta={},
    )


def simulate_fair(
    spec: ExperimentSpec,
    seed: int,
    config: Optional[FairnessConfig] = None,
) -> ExperimentResult:
    """
    Fairness-adjusted draws with a single history tracker.

    Uses the same seed as simulate_random so that paired runs consume the
    same stream of uniform values.
    """
    rng = random.Random(seed)
    table = spec.table()
    tracker = HistoryTracker()
    if config is None:
        config = FairnessConfig()
    sequence = []

    with Timer() as t:
        for _ in range(spec.draws):
            sequence.append(draw_fair(table, tracker, config, rng))

    return ExperimentResult(
        method="fair",
        spec=spec,
        sequence=sequence,
        runtime_s=t.elapsed_s,
        meta={
            "min_factor": config.min_factor,
            "max_factor": config.max_factor,
            "beta": config.beta,
            "adjustment_fn": getattr(config.adjustment_fn, "__name__", repr(config.adjustment_fn)),
        },
    )


# --- Registry / dispatch -----------------------------------------------------

def get_method(name: str) -> Callable[..., ExperimentResult]:
    name = name.strip().lower()
    if name not in METHODS:
        raise ValueError(f"unknown method '{name}'. Available: {sorted(METHODS.keys())}")
    return METHODS[name]


# METHODS maps method name -> function.
# Note: simulate_fair takes an extra config parameter; callers can pass it.
METHODS: Dict[str, Callable[..., ExperimentResult]] = {
    "random": simulate_random,
    "fair": simulate_fair,
}
