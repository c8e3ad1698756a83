# simulations/run.py

from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Iterable, Mapping, Optional, Tuple, Union

from .common import ExperimentSpec, ExperimentResult
from .methods import get_method

logger = logging.getLogger(__name__)

Weights = Union[Mapping[Hashable, float], Iterable[Tuple[Hashable, float]]]


def _as_spec(weights: Weights, draws: int) -> ExperimentSpec:
    if isinstance(weights, Mapping):
        pairs = tuple(weights.items())
    else:
        pairs = tuple((o, w) for o, w in weights)
    return ExperimentSpec(weights=pairs, draws=draws)


def run_experiment(
    method: str,
    weights: Weights,
    draws: int,
    seed: int = 42,
    method_kwargs: Optional[Dict[str, Any]] = None,
) -> ExperimentResult:
    """
    Run a single simulation and return an ExperimentResult.

    Parameters
    ----------
    method:
        Name of the method ('random' or 'fair').
    weights:
        Table definition: mapping or sequence of (outcome, weight) pairs.
    draws:
        Number of draws.
    seed:
        RNG seed.
    method_kwargs:
        Optional dict of method-specific kwargs (e.g., {'config': FairnessConfig(beta=2.0)}).

    Returns
    -------
    ExperimentResult
    """
    spec = _as_spec(weights, draws)
    fn = get_method(method)

    kwargs = method_kwargs or {}
    logger.debug("Running %s: %d draws over %d outcomes (seed=%d)", method, draws, len(spec.weights), seed)
    result = fn(spec, seed, **kwargs)  # type: ignore[arg-type]
    if result.runtime_s is not None:
        logger.info("%s finished in %.3fs", result.method, result.runtime_s)
    return result


def run_pair(
    method_a: str,
    method_b: str,
    weights: Weights,
    draws: int,
    seed: int = 42,
    method_kwargs_a: Optional[Dict[str, Any]] = None,
    method_kwargs_b: Optional[Dict[str, Any]] = None,
):
    """
    Convenience helper: run two methods under the same spec and seed.

    Returns (result_a, result_b).
    """
    if not isinstance(weights, Mapping):
        weights = tuple(weights)
    ra = run_experiment(
        method=method_a,
        weights=weights,
        draws=draws,
        seed=seed,
        method_kwargs=method_kwargs_a,
    )
    rb = run_experiment(
        method=method_b,
        weights=weights,
        draws=draws,
        seed=seed,
        method_kwargs=method_kwargs_b,
    )
    return ra, rb
