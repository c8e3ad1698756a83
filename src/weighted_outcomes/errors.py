"""
Error types raised by the weighted_outcomes core.

All errors are raised synchronously at the failing call. None of them are
logged or retried internally.
"""


class WeightedOutcomesError(Exception):
    """Base class for every error raised by this package."""


class InvalidTableError(WeightedOutcomesError, ValueError):
    """
    A table definition is malformed: empty, a negative or non-finite
    weight, no positive weight at all, or a repeated outcome.
    """


class UnknownOutcomeError(WeightedOutcomesError, LookupError):
    """
    An outcome was looked up that the table does not contain. Also raised
    when a history tracker references outcomes missing from the table it
    is being used with (for example after the table was rebuilt).
    """

    def __init__(self, outcome: object) -> None:
        super().__init__(f"unknown outcome {outcome!r}")
        self.outcome = outcome


class NoSelectableOutcomeError(WeightedOutcomesError, RuntimeError):
    """The total effective weight at draw time is zero."""
