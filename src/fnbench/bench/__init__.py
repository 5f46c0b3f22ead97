"""Benchmarking subsystem for fnbench.

Provides the measurement engine that times candidate functions against
named inputs for one or more sample counts, and the helpers that
configure it and render its results.
"""

from __future__ import annotations

from fnbench.bench.results import Input, StatsRecord
from fnbench.bench.runner import Benchmark, Profiler, create_engine
from fnbench.bench.timing import TimeUnit, convert_from_milliseconds

__all__ = [
    "Benchmark",
    "Input",
    "Profiler",
    "StatsRecord",
    "TimeUnit",
    "convert_from_milliseconds",
    "create_engine",
]
