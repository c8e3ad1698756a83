"""
Reusable weighted outcome tables with optional fairness adjustment.

Pure random draws sample each outcome in proportion to its weight. Fair
draws additionally bias toward outcomes that have not come up recently,
while keeping every outcome's long-run share equal to its weight.
"""

from .errors import (
    InvalidTableError,
    NoSelectableOutcomeError,
    UnknownOutcomeError,
    WeightedOutcomesError,
)
from .fairness import (
    DEFAULT_CONFIG,
    FairnessConfig,
    draw_fair,
    effective_weight,
    effective_weights,
    linear_ratio,
    no_recency,
    sqrt_ratio,
)
from .history import HistoryEntry, HistoryTracker
from .outcome_table import OutcomeTable, TableBuilder
from .random_tables import FairRandomTable, RandomTable
from .sampler import RandomSource, draw, draw_random

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "FairRandomTable",
    "FairnessConfig",
    "HistoryEntry",
    "HistoryTracker",
    "InvalidTableError",
    "NoSelectableOutcomeError",
    "OutcomeTable",
    "RandomSource",
    "RandomTable",
    "TableBuilder",
    "UnknownOutcomeError",
    "WeightedOutcomesError",
    "draw",
    "draw_fair",
    "draw_random",
    "effective_weight",
    "effective_weights",
    "linear_ratio",
    "no_recency",
    "sqrt_ratio",
]
