"""
Unit tests for the weighted sampler.
"""

import random
from collections import Counter

import pytest

from weighted_outcomes import NoSelectableOutcomeError, OutcomeTable, draw, draw_random
from tests.helpers import SequenceSource


class TestDrawRandom:
    """Pure random draws over base weights."""

    def test_fixed_uniforms_give_fixed_outcomes(self, ab_table):
        # u = r * 4: 0.4 -> A, 1.0 -> B (A's bucket is [0, 1)), 0.8 -> A,
        # 3.6 -> B, 0.0 -> A, 3.996 -> B
        source = SequenceSource([0.1, 0.25, 0.2, 0.9, 0.0, 0.999])
        drawn = [draw_random(ab_table, source) for _ in range(6)]
        assert drawn == ["A", "B", "A", "B", "A", "B"]

    def test_reproducible_with_same_seed(self, loot_table):
        rng_a = random.Random(1234)
        rng_b = random.Random(1234)
        seq_a = [draw_random(loot_table, rng_a) for _ in range(500)]
        seq_b = [draw_random(loot_table, rng_b) for _ in range(500)]
        assert seq_a == seq_b

    def test_one_uniform_per_draw(self, ab_table):
        source = SequenceSource([0.5])
        for _ in range(7):
            draw_random(ab_table, source)
        assert source.calls == 7

    def test_zero_weight_never_selected(self):
        table = OutcomeTable.build([("Z", 0), ("A", 1), ("Y", 0)])
        source = SequenceSource([0.0, 0.5, 0.999999])
        assert [draw_random(table, source) for _ in range(3)] == ["A", "A", "A"]

    def test_distribution_matches_weights(self, ab_table, seeded_rng):
        n = 100_000
        counts = Counter(draw_random(ab_table, seeded_rng) for _ in range(n))
        assert counts["A"] + counts["B"] == n
        assert counts["A"] / n == pytest.approx(0.25, abs=0.01)
        assert counts["B"] / n == pytest.approx(0.75, abs=0.01)

    def test_all_outcomes_reachable(self, loot_table, seeded_rng):
        seen = {draw_random(loot_table, seeded_rng) for _ in range(5000)}
        assert seen == set(loot_table.outcomes())


class TestDrawWithWeightFn:
    """The shared walk used by both draw modes."""

    def test_uses_actual_sum_of_weight_fn(self, ab_table):
        # weight_fn doubles everything: total 8, u = 0.3 * 8 = 2.4 -> B.
        # Scaling by the cached base total (4) would give u = 1.2 -> A.
        doubled = {"A": 2.0, "B": 6.0}
        assert draw(ab_table, doubled.__getitem__, SequenceSource([0.3])) == "B"

    def test_weight_fn_can_make_zero_weight_selectable(self):
        table = OutcomeTable.build([("Z", 0), ("A", 1)])
        assert draw(table, lambda o: 1.0, SequenceSource([0.1])) == "Z"

    def test_zero_total_effective_weight(self, ab_table):
        source = SequenceSource([0.5])
        with pytest.raises(NoSelectableOutcomeError):
            draw(ab_table, lambda o: 0.0, source)
        assert source.calls == 0

    @pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf")])
    def test_invalid_effective_weight(self, ab_table, bad):
        with pytest.raises(ValueError):
            draw(ab_table, lambda o: bad, SequenceSource([0.5]))

    @pytest.mark.parametrize("value", [1.0, -0.1, 1.5])
    def test_random_source_out_of_range(self, ab_table, value):
        with pytest.raises(ValueError):
            draw_random(ab_table, SequenceSource([value]))

    def test_uniform_near_one_returns_last_positive(self):
        # u may round up to the full total; the trailing zero weight is skipped
        table = OutcomeTable.build([("A", 0.1), ("B", 0.2), ("Z", 0)])
        weights = {"A": 0.1, "B": 0.2, "Z": 0.0}
        r = 1.0 - 2 ** -53
        assert draw(table, weights.__getitem__, SequenceSource([r])) == "B"
