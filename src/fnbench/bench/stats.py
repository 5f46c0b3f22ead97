"""Statistical aggregation of benchmark timings.

Timings are treated as the whole population of interest, so the
variance divides by ``n`` rather than ``n - 1``.  Aggregation happens in
milliseconds; the results are converted to the reporting unit last.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import Sequence

from fnbench.bench.timing import TimeUnit, convert_from_milliseconds


@dataclass(frozen=True)
class TimingSummary:
    """Mean, variance and standard deviation of one timing sequence."""

    n: int
    mean: float
    sigma_squared: float
    sigma: float


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, or NaN for an empty sequence."""
    if not values:
        return float("nan")
    return statistics.fmean(values)


def population_variance(values: Sequence[float], mu: float | None = None) -> float:
    """Mean squared deviation from the mean (divides by ``n``).

    Args:
        values: The timing sequence.
        mu: Precomputed mean of *values*, if already known.

    Returns:
        The population variance, or NaN for an empty sequence.
    """
    if not values:
        return float("nan")
    if mu is None:
        mu = mean(values)
    return statistics.pvariance(values, mu)


def summarize(
    times_ms: Sequence[float],
    units: TimeUnit | str = TimeUnit.MILLISECONDS,
) -> TimingSummary:
    """Aggregate millisecond timings into a :class:`TimingSummary`.

    The mean and the variance are both passed through the same linear
    :func:`convert_from_milliseconds`, so ``sigma_squared`` is scaled by
    the unit factor rather than its square.  ``sigma`` is always the
    square root of the converted ``sigma_squared``.

    An empty sequence produces NaN for every statistic.
    """
    mu = mean(times_ms)
    variance = population_variance(times_ms, mu)

    converted_mean = convert_from_milliseconds(mu, units)
    converted_variance = convert_from_milliseconds(variance, units)

    return TimingSummary(
        n=len(times_ms),
        mean=converted_mean,
        sigma_squared=converted_variance,
        sigma=math.sqrt(converted_variance),
    )
