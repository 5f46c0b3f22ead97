"""Tests for fnbench.bench.stats — aggregation of benchmark timings.

Values are chosen so that means and variances are exact in binary
floating point, letting most checks use exact equality.
"""

from __future__ import annotations

import math
import statistics
import unittest

from fnbench.bench.stats import TimingSummary, mean, population_variance, summarize
from fnbench.bench.timing import TimeUnit


class TestMean(unittest.TestCase):
    """Tests for mean()."""

    def test_basic(self) -> None:
        self.assertEqual(mean([1.0, 2.0, 3.0, 4.0]), 2.5)

    def test_single_value(self) -> None:
        self.assertEqual(mean([42.0]), 42.0)

    def test_empty_is_nan(self) -> None:
        self.assertTrue(math.isnan(mean([])))


class TestPopulationVariance(unittest.TestCase):
    """Tests for population_variance()."""

    def test_divides_by_n(self) -> None:
        """Squared deviations 2.25, 0.25, 0.25, 2.25 over n=4."""
        self.assertEqual(population_variance([1.0, 2.0, 3.0, 4.0]), 1.25)

    def test_differs_from_sample_variance(self) -> None:
        values = [1.0, 2.0, 3.0, 4.0]
        self.assertNotEqual(population_variance(values), statistics.variance(values))
        self.assertAlmostEqual(
            population_variance(values) * len(values) / (len(values) - 1),
            statistics.variance(values),
            places=12,
        )

    def test_precomputed_mean(self) -> None:
        self.assertEqual(population_variance([2.0, 4.0], mu=3.0), 1.0)

    def test_single_value_is_zero(self) -> None:
        self.assertEqual(population_variance([7.0]), 0.0)

    def test_identical_values_zero(self) -> None:
        self.assertEqual(population_variance([5.0, 5.0, 5.0]), 0.0)

    def test_empty_is_nan(self) -> None:
        self.assertTrue(math.isnan(population_variance([])))


class TestSummarize(unittest.TestCase):
    """Tests for summarize()."""

    def test_milliseconds(self) -> None:
        summary = summarize([1.0, 2.0, 3.0, 4.0], TimeUnit.MILLISECONDS)
        self.assertIsInstance(summary, TimingSummary)
        self.assertEqual(summary.n, 4)
        self.assertEqual(summary.mean, 2.5)
        self.assertEqual(summary.sigma_squared, 1.25)
        self.assertEqual(summary.sigma, math.sqrt(1.25))

    def test_default_unit_is_milliseconds(self) -> None:
        self.assertEqual(summarize([2.0, 4.0]).mean, 3.0)

    def test_nanoseconds_linear_variance_conversion(self) -> None:
        """Variance is scaled by the linear factor, like the mean."""
        summary = summarize([1.0, 2.0, 3.0, 4.0], "ns")
        self.assertEqual(summary.mean, 2_500_000.0)
        self.assertEqual(summary.sigma_squared, 1_250_000.0)
        self.assertEqual(summary.sigma, math.sqrt(1_250_000.0))

    def test_seconds(self) -> None:
        summary = summarize([1000.0, 3000.0], "s")
        self.assertEqual(summary.mean, 2.0)
        self.assertEqual(summary.sigma_squared, 1_000_000.0 / 1000)

    def test_sigma_is_exact_sqrt(self) -> None:
        summary = summarize([0.013, 0.021, 0.017, 0.019, 0.011], "ns")
        self.assertEqual(summary.sigma, math.sqrt(summary.sigma_squared))

    def test_single_sample(self) -> None:
        summary = summarize([3.0])
        self.assertEqual(summary.mean, 3.0)
        self.assertEqual(summary.sigma_squared, 0.0)
        self.assertEqual(summary.sigma, 0.0)

    def test_non_negative(self) -> None:
        summary = summarize([0.5, 0.25, 0.75, 0.5])
        self.assertGreaterEqual(summary.mean, 0.0)
        self.assertGreaterEqual(summary.sigma_squared, 0.0)
        self.assertGreaterEqual(summary.sigma, 0.0)

    def test_empty_is_nan(self) -> None:
        summary = summarize([], "ns")
        self.assertEqual(summary.n, 0)
        self.assertTrue(math.isnan(summary.mean))
        self.assertTrue(math.isnan(summary.sigma_squared))
        self.assertTrue(math.isnan(summary.sigma))


if __name__ == "__main__":
    unittest.main()
