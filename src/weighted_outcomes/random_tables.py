import logging
import random
from typing import Dict, Optional

from .fairness import FairnessConfig, draw_fair, effective_weights
from .history import HistoryTracker
from .outcome_table import Outcome, OutcomeTable
from .sampler import RandomSource, draw_random

logger = logging.getLogger(__name__)


def _make_rng(seed: Optional[int], rng: Optional[RandomSource]) -> RandomSource:
    if rng is not None and seed is not None:
        raise ValueError("pass either seed or rng, not both")
    if rng is not None:
        return rng
    return random.Random(seed)


class RandomTable:
    """
    RandomTable

    Binds an OutcomeTable to its own random source. Each call to next() is an
    independent trial: the odds of an outcome are always its weight divided
    by the total weight, so an outcome with 50% odds can come up many times
    in a row.

    The random source is owned by this object (seeded random.Random unless
    one is injected); nothing touches the global random module.
    """

    def __init__(
        self,
        table: OutcomeTable,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
    ):
        self._table = table
        self._rng = _make_rng(seed, rng)

    def next(self) -> Outcome:
        return draw_random(self._table, self._rng)

    @property
    def table(self) -> OutcomeTable:
        return self._table

    def __len__(self) -> int:
        return len(self._table)


class FairRandomTable:
    """
    FairRandomTable

    Produces results closer to what a person would write down when asked
    for a "random" sequence from a weighted table. Every draw that misses an
    outcome makes that outcome more likely on the next draw, in proportion to
    its base odds; drawing it makes it much less likely for a while. Repeats
    of even unlikely outcomes remain possible, just rarer.

    Over a long run each outcome still occurs in proportion to its base
    weight. Only the spacing between occurrences changes: gaps are more
    regular than with RandomTable.

    This class is single-threaded and not thread-safe.
    """

    def __init__(
        self,
        table: OutcomeTable,
        config: Optional[FairnessConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
    ):
        self._table = table
        self._config = config if config is not None else FairnessConfig()
        self._rng = _make_rng(seed, rng)
        self._tracker = HistoryTracker()

    # ------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------

    def next(self) -> Outcome:
        """
        Draw the next outcome from the fairness-adjusted distribution and
        update the history.
        """
        return draw_fair(self._table, self._tracker, self._config, self._rng)

    def pure_random(self) -> Outcome:
        """
        Draw as though this were a RandomTable. The history is not updated,
        so later fair draws do not account for this trial.
        """
        return draw_random(self._table, self._rng)

    def reset(self) -> None:
        self._tracker.reset()

    def rebuild(self, table: OutcomeTable) -> None:
        """
        Switch to a new table. History refers to the old table, so it is
        discarded.
        """
        logger.debug("Rebuilding fair table: %d -> %d outcomes", len(self._table), len(table))
        self._table = table
        self._tracker.reset()

    # ------------------------------------------------------------
    # Introspection (read-only)
    # ------------------------------------------------------------

    @property
    def table(self) -> OutcomeTable:
        return self._table

    @property
    def tracker(self) -> HistoryTracker:
        return self._tracker

    @property
    def config(self) -> FairnessConfig:
        return self._config

    def current_weights(self) -> Dict[Outcome, float]:
        """Effective weights the next call to next() would use."""
        return effective_weights(self._table, self._tracker, self._config)

    def snapshot_counts(self) -> Dict[Outcome, int]:
        return self._tracker.snapshot_counts()

    def __len__(self) -> int:
        return len(self._table)
