"""
Test helpers for the weighted-outcomes test suite.
"""

from typing import Iterable, List


class SequenceSource:
    """
    Deterministic random source that replays a fixed list of uniform
    values, cycling when exhausted.
    """

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        if not self.values:
            raise ValueError("values must be non-empty")
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value
