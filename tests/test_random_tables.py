"""
Unit tests for the RandomTable / FairRandomTable convenience objects.
"""

import random

import pytest

from weighted_outcomes import (
    FairnessConfig,
    FairRandomTable,
    OutcomeTable,
    RandomTable,
    UnknownOutcomeError,
)
from tests.helpers import SequenceSource


class TestRandomTable:

    def test_seeded_tables_repeat(self, loot_table):
        a = RandomTable(loot_table, seed=8)
        b = RandomTable(loot_table, seed=8)
        assert [a.next() for _ in range(200)] == [b.next() for _ in range(200)]

    def test_injected_source(self, ab_table):
        table = RandomTable(ab_table, rng=SequenceSource([0.1, 0.9]))
        assert [table.next() for _ in range(4)] == ["A", "B", "A", "B"]

    def test_seed_and_rng_are_exclusive(self, ab_table):
        with pytest.raises(ValueError):
            RandomTable(ab_table, seed=1, rng=random.Random(1))

    def test_introspection(self, ab_table):
        table = RandomTable(ab_table)
        assert table.table is ab_table
        assert len(table) == 2


class TestFairRandomTable:

    def test_next_updates_history(self, ab_table):
        table = FairRandomTable(ab_table, seed=1)
        for _ in range(10):
            table.next()
        assert table.tracker.draw_count() == 10
        assert sum(table.snapshot_counts().values()) == 10

    def test_pure_random_leaves_history_alone(self, ab_table):
        table = FairRandomTable(ab_table, seed=1)
        table.next()
        before = table.snapshot_counts()
        for _ in range(5):
            assert table.pure_random() in ab_table
        assert table.snapshot_counts() == before
        assert table.tracker.draw_count() == 1

    def test_reset(self, ab_table):
        table = FairRandomTable(ab_table, seed=2)
        for _ in range(4):
            table.next()
        table.reset()
        assert table.tracker.draw_count() == 0
        assert table.tracker.since_last("A") is None
        weights = table.current_weights()
        assert weights["A"] == 1.0
        assert weights["B"] == pytest.approx(4.5)

    def test_zero_min_factor_survives_reset_and_rebuild(self, ab_table):
        table = FairRandomTable(ab_table, config=FairnessConfig(min_factor=0.0), seed=4)
        assert table.next() in ab_table
        table.reset()
        assert table.next() in ab_table

        smaller = OutcomeTable.build([("C", 1), ("D", 2)])
        table.rebuild(smaller)
        assert table.next() in smaller
        assert table.tracker.draw_count() == 1

    def test_rebuild_discards_history(self, ab_table):
        table = FairRandomTable(ab_table, seed=3)
        for _ in range(6):
            table.next()

        smaller = OutcomeTable.build([("C", 1), ("D", 1)])
        table.rebuild(smaller)

        assert table.table is smaller
        assert table.tracker.draw_count() == 0
        assert table.next() in smaller

    def test_stale_history_after_manual_swap_is_rejected(self, ab_table):
        table = FairRandomTable(ab_table, seed=3)
        table.next()
        # recording an outcome the table does not know
        table.tracker.record("C")
        with pytest.raises(UnknownOutcomeError):
            table.next()

    def test_config_is_used(self, ab_table):
        config = FairnessConfig(min_factor=1.0, max_factor=1.0, beta=0.0)
        table = FairRandomTable(ab_table, config=config, rng=SequenceSource([0.1]))
        assert table.config is config
        # flat factors and no balance: effective weights equal base weights
        table.next()
        assert table.current_weights() == {"A": 1.0, "B": 3.0}

    def test_default_config(self, ab_table):
        assert FairRandomTable(ab_table).config == FairnessConfig()

    def test_seeded_tables_repeat(self, loot_table):
        a = FairRandomTable(loot_table, seed=21)
        b = FairRandomTable(loot_table, seed=21)
        assert [a.next() for _ in range(200)] == [b.next() for _ in range(200)]
        assert len(a) == 4
