# simulations/common.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple
import math
import time

from weighted_outcomes import OutcomeTable


@dataclass(frozen=True)
class ExperimentSpec:
    """
    Common experiment parameters shared across all simulations.
    """
    weights: Tuple[Tuple[Hashable, float], ...]
    draws: int

    def __post_init__(self) -> None:
        if not self.weights:
            raise ValueError("weights must be non-empty")
        if self.draws < 0:
            raise ValueError("draws must be >= 0")

    def table(self) -> OutcomeTable:
        return OutcomeTable.build(self.weights)


@dataclass(frozen=True)
class SummaryStats:
    """
    Basic summary stats for a list of numbers.
    """
    min: float
    max: float
    mean: float
    std: float  # population stddev


def summarize(values: Sequence[float]) -> SummaryStats:
    """
    Compute min/max/mean/std over numbers (population stddev).
    Stddev computed via a two-pass method for clarity.
    """
    if not values:
        raise ValueError("values must be non-empty")

    mn = min(values)
    mx = max(values)

    n = len(values)
    total = 0
    for v in values:
        total += v
    mean = total / n

    # population variance
    var_acc = 0.0
    for v in values:
        d = v - mean
        var_acc += d * d
    var = var_acc / n
    std = math.sqrt(var)

    return SummaryStats(min=mn, max=mx, mean=mean, std=std)


def occurrence_gaps(sequence: Sequence[Hashable], outcome: Hashable) -> List[int]:
    """
    Distances between successive occurrences of outcome (1 = back to back).
    The stretch before the first occurrence is not a gap.
    """
    gaps: List[int] = []
    last: Optional[int] = None
    for i, o in enumerate(sequence):
        if o == outcome:
            if last is not None:
                gaps.append(i - last)
            last = i
    return gaps


def longest_streak(sequence: Sequence[Hashable]) -> Tuple[Optional[Hashable], int]:
    """
    Longest run of the same outcome in a row, as (outcome, length).
    Returns (None, 0) for an empty sequence.
    """
    best: Tuple[Optional[Hashable], int] = (None, 0)
    current: Optional[Hashable] = None
    run = 0
    for o in sequence:
        if run and o == current:
            run += 1
        else:
            current = o
            run = 1
        if run > best[1]:
            best = (o, run)
    return best


@dataclass
class ExperimentResult:
    """
    Common return type for all simulations.
    """
    method: str
    spec: ExperimentSpec
    sequence: List[Hashable]

    counts: Dict[Hashable, int] = field(init=False)
    gaps: Dict[Hashable, List[int]] = field(init=False)
    runtime_s: Optional[float] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        outcomes = [o for o, _ in self.spec.weights]
        self.counts = {o: 0 for o in outcomes}
        for o in self.sequence:
            self.counts[o] += 1
        self.gaps = {o: occurrence_gaps(self.sequence, o) for o in outcomes}

        # Sanity: counts should sum to draws
        expected = self.spec.draws
        actual = 0
        for c in self.counts.values():
            actual += c
        if actual != expected:
            raise ValueError(
                f"counts sum mismatch: expected {expected}, got {actual}"
            )

    def frequencies(self) -> Dict[Hashable, float]:
        if not self.sequence:
            return {o: 0.0 for o in self.counts}
        n = len(self.sequence)
        return {o: c / n for o, c in self.counts.items()}

    def gap_stats(self, outcome: Hashable) -> Optional[SummaryStats]:
        """Stats of the gaps for outcome, or None if it occurred fewer than twice."""
        gaps = self.gaps[outcome]
        if not gaps:
            return None
        return summarize(gaps)

    def longest_streak(self) -> Tuple[Optional[Hashable], int]:
        return longest_streak(self.sequence)


class Timer:
    """
    Tiny timing helper for simulations.
    Usage:
        with Timer() as t:
            ...
        elapsed = t.elapsed_s
    """
    def __init__(self) -> None:
        self._start: Optional[float] = None
        self.elapsed_s: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.time()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_s = time.time() - self._start


def least_likely(spec: ExperimentSpec) -> Hashable:
    """
    The outcome with the smallest positive weight (first one on ties).
    """
    candidates = [(w, i, o) for i, (o, w) in enumerate(spec.weights) if w > 0]
    if not candidates:
        raise ValueError("no outcome has positive weight")
    return min(candidates)[2]


def common_x_range(results: List[ExperimentResult], outcome: Hashable) -> Tuple[int, int]:
    """
    Compute a shared (xmin, xmax) of gap lengths for outcome across multiple
    results for 'same x-axis' histogram comparisons.
    """
    if not results:
        raise ValueError("results must be non-empty")

    all_gaps = [g for r in results for g in r.gaps[outcome]]
    if not all_gaps:
        return 1, 2
    return min(all_gaps), max(all_gaps)


def format_stats_line(r: ExperimentResult, outcome: Hashable) -> str:
    """
    Human-friendly one-liner for printing in compare tools.
    """
    freqs = r.frequencies()
    freq_part = ", ".join(f"{o}={f:.4f}" for o, f in freqs.items())
    s = r.gap_stats(outcome)
    gap_part = (
        f"gaps[{outcome}]: min={s.min}, max={s.max}, mean={s.mean:.3f}, std={s.std:.3f}"
        if s is not None
        else f"gaps[{outcome}]: n/a"
    )
    streak_outcome, streak = r.longest_streak()
    return (
        f"{r.method}: {freq_part}; {gap_part}; longest streak={streak} ({streak_outcome})"
        + (f", runtime={r.runtime_s:.3f}s" if r.runtime_s is not None else "")
    )
