from __future__ import annotations

import math
from numbers import Real
from typing import Dict, Hashable, Iterable, Iterator, Mapping, Tuple, Union

from .errors import InvalidTableError, UnknownOutcomeError

Outcome = Hashable
Pairs = Union[Mapping[Outcome, float], Iterable[Tuple[Outcome, float]]]


class OutcomeTable:
    """
    OutcomeTable

    An ordered, immutable list of (outcome, weight) pairs. The odds of an
    outcome are its weight divided by the total weight of the table, so
    weights behave like the parts of a recipe rather than percentages:

        2 parts A, 5 parts B, 1 part C

    Construct tables with OutcomeTable.build() (or a TableBuilder). Tables
    are never mutated after construction; updated() and without() return new,
    re-validated tables.

    Iteration order is the order the pairs were given in. The sampler walks
    outcomes in that order, so it decides which outcome a given random value
    lands on.
    """

    __slots__ = ("_order", "_weights", "_total")

    def __init__(self, pairs: Pairs):
        order, weights = _validate(pairs)
        self._order: Tuple[Outcome, ...] = order
        self._weights: Dict[Outcome, float] = weights
        # Summed left to right in table order. Re-summing weight_of() over
        # outcomes() yields exactly this value.
        self._total: float = sum(weights[o] for o in order)
        if not math.isfinite(self._total):
            raise InvalidTableError("total weight must be finite")

    @classmethod
    def build(cls, pairs: Pairs) -> "OutcomeTable":
        """
        Build a table from a sequence of (outcome, weight) pairs or from a
        mapping of outcome -> weight.

        Raises InvalidTableError if the table is empty, any weight is
        negative, non-finite or not a real number, the weights sum to zero,
        or an outcome repeats.
        """
        return cls(pairs)

    # ------------------------------------------------------------
    # Introspection (read-only)
    # ------------------------------------------------------------

    def weight_of(self, outcome: Outcome) -> float:
        try:
            return self._weights[outcome]
        except (KeyError, TypeError):
            raise UnknownOutcomeError(outcome) from None

    def total_weight(self) -> float:
        return self._total

    def outcomes(self) -> Tuple[Outcome, ...]:
        """
        Return every outcome in table order.

        The returned tuple can be iterated any number of times and is the
        same object on every call.
        """
        return self._order

    def items(self) -> Iterator[Tuple[Outcome, float]]:
        for outcome in self._order:
            yield outcome, self._weights[outcome]

    def probability_of(self, outcome: Outcome) -> float:
        """Nominal probability of outcome under independent sampling."""
        return self.weight_of(outcome) / self._total

    def expected_interval(self, outcome: Outcome) -> float:
        """
        Number of draws after which outcome is expected to recur under
        independent sampling. Infinite for zero-weight outcomes.
        """
        weight = self.weight_of(outcome)
        if weight == 0.0:
            return math.inf
        return self._total / weight

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, outcome: object) -> bool:
        try:
            return outcome in self._weights
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self._order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutcomeTable):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __hash__(self) -> int:
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        body = ", ".join(f"{o!r}: {w:g}" for o, w in self.items())
        return f"OutcomeTable({{{body}}})"

    # ------------------------------------------------------------
    # Rebuilding (returns new tables)
    # ------------------------------------------------------------

    def updated(self, pairs: Pairs) -> "OutcomeTable":
        """
        Return a new table with the given weights applied.

        Outcomes already in the table keep their position and take the new
        weight; unseen outcomes are appended in the order given. The result
        is validated like any freshly built table.
        """
        changes = _as_pairs(pairs)
        merged: Dict[Outcome, object] = dict(self.items())
        seen = set()
        for outcome, weight in changes:
            try:
                if outcome in seen:
                    raise InvalidTableError(f"duplicate outcome {outcome!r}")
                seen.add(outcome)
            except TypeError:
                raise InvalidTableError(
                    f"outcome {outcome!r} is not hashable"
                ) from None
            merged[outcome] = weight
        return OutcomeTable(list(merged.items()))

    def without(self, outcome: Outcome) -> "OutcomeTable":
        """
        Return a new table with outcome removed.

        Raises UnknownOutcomeError if outcome is absent and InvalidTableError
        if no selectable outcome would remain.
        """
        if outcome not in self:
            raise UnknownOutcomeError(outcome)
        return OutcomeTable([(o, w) for o, w in self.items() if o != outcome])


class TableBuilder:
    """
    Chainable helper for writing tables inline:

        table = (
            TableBuilder()
            .push("common", 12)
            .push("uncommon", 5)
            .push("rare", 1)
            .build()
        )

    Validation happens in build(), exactly as for OutcomeTable.build().
    """

    def __init__(self) -> None:
        self._pairs = []

    def push(self, outcome: Outcome, weight: float) -> "TableBuilder":
        self._pairs.append((outcome, weight))
        return self

    def count(self) -> int:
        return len(self._pairs)

    def build(self) -> OutcomeTable:
        return OutcomeTable.build(self._pairs)


# ------------------------------------------------------------
# Validation helpers
# ------------------------------------------------------------

def _as_pairs(pairs: Pairs):
    if isinstance(pairs, Mapping):
        return list(pairs.items())
    result = []
    for pair in pairs:
        try:
            outcome, weight = pair
        except (TypeError, ValueError):
            raise InvalidTableError(
                f"expected (outcome, weight) pair, got {pair!r}"
            ) from None
        result.append((outcome, weight))
    return result


def _validate(pairs: Pairs) -> Tuple[Tuple[Outcome, ...], Dict[Outcome, float]]:
    items = _as_pairs(pairs)
    if not items:
        raise InvalidTableError("table must contain at least one outcome")

    order = []
    weights: Dict[Outcome, float] = {}
    for outcome, raw in items:
        # bool is a Real subclass but never a meaningful weight
        if isinstance(raw, bool) or not isinstance(raw, Real):
            raise InvalidTableError(
                f"weight for {outcome!r} must be a real number, got {raw!r}"
            )
        weight = float(raw)
        if not math.isfinite(weight):
            raise InvalidTableError(f"weight for {outcome!r} must be finite")
        if weight < 0.0:
            raise InvalidTableError(
                f"weight for {outcome!r} must be >= 0, got {weight!r}"
            )
        try:
            duplicate = outcome in weights
        except TypeError:
            raise InvalidTableError(f"outcome {outcome!r} is not hashable") from None
        if duplicate:
            raise InvalidTableError(f"duplicate outcome {outcome!r}")
        order.append(outcome)
        weights[outcome] = weight

    if not any(w > 0.0 for w in weights.values()):
        raise InvalidTableError("at least one weight must be > 0")

    return tuple(order), weights
