"""
Per-table draw history used by the fairness adjustment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .outcome_table import Outcome

logger = logging.getLogger(__name__)


@dataclass
class HistoryEntry:
    """
    History of a single outcome.

    last_seen is the index (0-based) of the draw that most recently produced
    the outcome; occurrences is how many draws produced it in total.
    """
    last_seen: int
    occurrences: int


class HistoryTracker:
    """
    HistoryTracker

    Records which outcome each fair draw produced. It keeps a global draw
    counter plus one HistoryEntry per outcome that has occurred at least once.

    Draws-since-last-occurrence is derived from a virtual clock (the draw
    counter) instead of being incremented on every entry, so record() is O(1):

        since_last(o) = draw_count - entries[o].last_seen - 1

    Invariant: the occurrence counts of all entries sum to draw_count().

    This class is single-threaded and not thread-safe. A fair draw reads the
    tracker and then records into it; callers sharing a tracker must
    serialize those two steps.
    """

    def __init__(self) -> None:
        self._entries: Dict[Outcome, HistoryEntry] = {}
        self._draws: int = 0

    # ------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------

    def record(self, outcome: Outcome) -> None:
        """
        Record that the latest draw produced outcome. Its draws-since-last
        becomes 0 and every other tracked outcome's grows by one.
        """
        entry = self._entries.get(outcome)
        if entry is None:
            self._entries[outcome] = HistoryEntry(last_seen=self._draws, occurrences=1)
        else:
            entry.last_seen = self._draws
            entry.occurrences += 1
        self._draws += 1

    def since_last(self, outcome: Outcome) -> Optional[int]:
        """
        Number of draws since outcome last occurred, or None if it has never
        occurred since the tracker was created or reset.
        """
        entry = self._entries.get(outcome)
        if entry is None:
            return None
        return self._draws - entry.last_seen - 1

    def reset(self) -> None:
        """Forget all history and restart the draw counter at zero."""
        logger.debug(
            "Resetting history: %d draws over %d outcomes",
            self._draws,
            len(self._entries),
        )
        self._entries.clear()
        self._draws = 0

    # ------------------------------------------------------------
    # Introspection (read-only)
    # ------------------------------------------------------------

    def draw_count(self) -> int:
        return self._draws

    def occurrences(self, outcome: Outcome) -> int:
        entry = self._entries.get(outcome)
        return 0 if entry is None else entry.occurrences

    def entry(self, outcome: Outcome) -> Optional[HistoryEntry]:
        """Return a copy of the outcome's entry, or None if it never occurred."""
        entry = self._entries.get(outcome)
        return None if entry is None else replace(entry)

    def tracked(self) -> List[Outcome]:
        """Outcomes with history, in the order they first occurred."""
        return list(self._entries)

    def snapshot_counts(self) -> Dict[Outcome, int]:
        """
        Return a copy of the occurrence counts for inspection/debugging.
        """
        return {o: e.occurrences for o, e in self._entries.items()}

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HistoryTracker(draws={self._draws}, tracked={len(self._entries)})"
