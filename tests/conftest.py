"""
Pytest fixtures for the weighted-outcomes test suite.
"""

import os

# Headless plotting for the compare CLI tests
os.environ.setdefault("MPLBACKEND", "Agg")

import random

import pytest

from weighted_outcomes import FairnessConfig, HistoryTracker, OutcomeTable


# =============================================================================
# TABLE FIXTURES
# =============================================================================


@pytest.fixture
def ab_table():
    """A (weight 1) and B (weight 3): nominal odds 0.25 / 0.75."""
    return OutcomeTable.build([("A", 1), ("B", 3)])


@pytest.fixture
def loot_table():
    """A small loot table with uneven weights."""
    return OutcomeTable.build(
        [("common", 12.0), ("uncommon", 5.0), ("rare", 2.5), ("legendary", 0.5)]
    )


# =============================================================================
# RANDOMNESS AND HISTORY FIXTURES
# =============================================================================


@pytest.fixture
def seeded_rng():
    """Seeded random.Random for reproducible statistical tests."""
    return random.Random(20240611)


@pytest.fixture
def tracker():
    return HistoryTracker()


@pytest.fixture
def default_config():
    return FairnessConfig()
