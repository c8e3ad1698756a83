# simulations/compare.py

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Tuple

import matplotlib.pyplot as plt

from weighted_outcomes import FairnessConfig

from .common import common_x_range, format_stats_line, least_likely
from .run import run_experiment


# Keep the tool intentionally opinionated:
# - fairness tunables are fixed (so the CLI stays minimal)
# - seed defaults to a fixed value
DEFAULT_SEED = 42
DEFAULT_BETA = 1.0
DEFAULT_DRAWS = 100_000


def _method_kwargs(method_name: str):
    """
    Only the 'fair' method needs extra kwargs (config).
    Keep this internal so the CLI stays tiny.
    """
    name = method_name.strip().lower()
    if name == "fair":
        return {"config": FairnessConfig(beta=DEFAULT_BETA)}
    return {}


def parse_weights(items: List[str]) -> Tuple[Tuple[str, float], ...]:
    """
    Parse NAME=WEIGHT tokens, e.g. ["A=1", "B=3"].
    """
    pairs = []
    for item in items:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise ValueError(f"expected NAME=WEIGHT, got '{item}'")
        try:
            weight = float(raw)
        except ValueError:
            raise ValueError(f"weight for '{name}' is not a number: '{raw}'") from None
        pairs.append((name, weight))
    return tuple(pairs)


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Compare two draw methods via Monte Carlo (same x-axis gap histograms)."
    )
    parser.add_argument("--method-a", required=True, help="e.g. random | fair")
    parser.add_argument("--method-b", required=True, help="e.g. random | fair")
    parser.add_argument("--weights", nargs="+", required=True, help="table as NAME=WEIGHT pairs, e.g. A=1 B=3")
    parser.add_argument("--draws", type=int, default=DEFAULT_DRAWS, help="number of draws per method")
    parser.add_argument("--focus", default=None, help="outcome whose gaps are plotted (default: least likely)")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="RNG seed")
    parser.add_argument("--no-plot", action="store_true", help="print stats only")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        weights = parse_weights(args.weights)
        # Run both experiments
        ra = run_experiment(
            method=args.method_a,
            weights=weights,
            draws=args.draws,
            seed=args.seed,
            method_kwargs=_method_kwargs(args.method_a),
        )
        rb = run_experiment(
            method=args.method_b,
            weights=weights,
            draws=args.draws,
            seed=args.seed,
            method_kwargs=_method_kwargs(args.method_b),
        )
    except ValueError as exc:
        parser.error(str(exc))

    focus = args.focus if args.focus is not None else least_likely(ra.spec)
    if focus not in ra.counts:
        parser.error(f"unknown focus outcome '{focus}'")

    # Print stats
    print(format_stats_line(ra, focus))
    print(format_stats_line(rb, focus))

    if args.no_plot:
        return 0

    # Plot with same x-axis
    xmin, xmax = common_x_range([ra, rb], focus)
    bins = max(1, min(60, xmax - xmin + 1))

    plt.figure(figsize=(12, 4))

    plt.subplot(1, 2, 1)
    plt.hist(ra.gaps[focus], bins=bins, range=(xmin, xmax + 1))
    plt.title(ra.method)
    plt.xlabel(f"Draws between occurrences of {focus}")
    plt.ylabel("Number of gaps")
    plt.xlim(xmin, xmax + 1)

    plt.subplot(1, 2, 2)
    plt.hist(rb.gaps[focus], bins=bins, range=(xmin, xmax + 1))
    plt.title(rb.method)
    plt.xlabel(f"Draws between occurrences of {focus}")
    plt.xlim(xmin, xmax + 1)

    plt.suptitle(
        f"Compare: {ra.method} vs {rb.method}  "
        f"(outcomes={len(weights)}, draws={args.draws}, focus={focus})"
    )
    plt.tight_layout(rect=[0, 0.02, 1, 0.92])
    plt.show()

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
