"""Benchmark execution engine.

Orchestrates:
1. Configuration of candidate functions, inputs, sample counts and unit
2. Timed execution of every (sample count, input, function) triple
3. Aggregation of each triple into a :class:`StatsRecord`
4. Optional ranking of the collected records

The execution order is fixed: sample counts outer, inputs in the middle,
functions inner.  Everything runs synchronously in the calling thread;
no two candidate calls ever overlap.
"""

from __future__ import annotations

import copy
import logging
import time
from typing import Any, Callable, Iterable, Mapping

from fnbench.bench.compare import rank_stats
from fnbench.bench.config import BenchConfig
from fnbench.bench.results import Input, StatsRecord, func_name
from fnbench.bench.stats import summarize
from fnbench.bench.timing import Clock, TimeUnit, parse_unit, perf_counter_ms, time_call

log = logging.getLogger("fnbench")

# Called with each record as soon as it is computed.
RecordCallback = Callable[[StatsRecord], None]


# ---------------------------------------------------------------------------
# List helpers
# ---------------------------------------------------------------------------


def _remove_indices(items: list[Any], indices: Iterable[int]) -> None:
    """Remove the elements at *indices*, resolved against the current list.

    All indices refer to positions before any removal.  Negative indices
    count from the end, out-of-range indices are ignored and duplicates
    remove a single element.
    """
    size = len(items)
    resolved: set[int] = set()
    for index in indices:
        if index < 0:
            index += size
        if 0 <= index < size:
            resolved.add(index)
    for index in sorted(resolved, reverse=True):
        del items[index]


def _coerce_input(item: Input | Mapping[str, Any]) -> Input:
    if isinstance(item, Input):
        return item
    return Input.from_dict(dict(item))


# ---------------------------------------------------------------------------
# Benchmark
# ---------------------------------------------------------------------------


class Benchmark:
    """Fluent builder and runner for function micro-benchmarks.

    Usage::

        bench = (
            Benchmark(units="ns")
            .add_funcs(sorted, my_sort)
            .add_inputs(Input("small", ([3, 1, 2],)))
            .add_samples(10, 100)
        )
        records = bench.run(rank=True)

    Every mutator returns the same instance.  The engine is not
    thread-safe.
    """

    def __init__(
        self,
        functions: Iterable[Callable[..., Any]] | None = None,
        inputs: Iterable[Input | Mapping[str, Any]] | None = None,
        samples: Iterable[int] | None = None,
        units: TimeUnit | str = TimeUnit.MILLISECONDS,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._funcs: list[Callable[..., Any]] = list(functions or [])
        self._inputs: list[Input] = [_coerce_input(i) for i in inputs or []]
        self._samples: list[int] = list(samples or [])
        self._units = parse_unit(units)
        self._clock: Clock = clock or perf_counter_ms

    # -- Inspection ---------------------------------------------------------

    @property
    def funcs(self) -> tuple[Callable[..., Any], ...]:
        """Registered candidate functions, in insertion order."""
        return tuple(self._funcs)

    @property
    def inputs(self) -> tuple[Input, ...]:
        """Registered inputs, in insertion order."""
        return tuple(self._inputs)

    @property
    def samples(self) -> tuple[int, ...]:
        """Registered sample counts, in insertion order."""
        return tuple(self._samples)

    @property
    def units(self) -> TimeUnit:
        """Unit used for the statistics of subsequent runs."""
        return self._units

    # -- Mutation -----------------------------------------------------------

    def add_funcs(self, *funcs: Callable[..., Any]) -> Benchmark:
        """Append one or more candidate functions."""
        self._funcs.extend(funcs)
        return self

    def add_inputs(self, *inputs: Input | Mapping[str, Any]) -> Benchmark:
        """Append one or more inputs."""
        self._inputs.extend(_coerce_input(i) for i in inputs)
        return self

    def add_samples(self, *samples: int) -> Benchmark:
        """Append one or more sample counts."""
        self._samples.extend(samples)
        return self

    def remove_funcs(self, *indices: int) -> Benchmark:
        """Remove the functions at *indices*; unknown positions are ignored."""
        _remove_indices(self._funcs, indices)
        return self

    def remove_inputs(self, *indices: int) -> Benchmark:
        """Remove the inputs at *indices*; unknown positions are ignored."""
        _remove_indices(self._inputs, indices)
        return self

    def remove_samples(self, *indices: int) -> Benchmark:
        """Remove the sample counts at *indices*; unknown positions are ignored."""
        _remove_indices(self._samples, indices)
        return self

    def set_funcs(self, funcs: Iterable[Callable[..., Any]]) -> Benchmark:
        """Replace all candidate functions."""
        self._funcs = list(funcs)
        return self

    def set_inputs(self, inputs: Iterable[Input | Mapping[str, Any]]) -> Benchmark:
        """Replace all inputs with deep copies of *inputs*."""
        self._inputs = [_coerce_input(i) for i in copy.deepcopy(list(inputs))]
        return self

    def set_samples(self, samples: Iterable[int]) -> Benchmark:
        """Replace all sample counts."""
        self._samples = list(samples)
        return self

    def set_units(self, units: TimeUnit | str) -> Benchmark:
        """Set the unit for subsequent runs.

        Records returned by earlier runs are not converted.

        Raises:
            ValueError: If *units* is not a known unit.
        """
        self._units = parse_unit(units)
        return self

    # -- Execution ----------------------------------------------------------

    def measure(
        self,
        func: Callable[..., Any],
        bench_input: Input,
        sample_count: int,
    ) -> StatsRecord:
        """Time *sample_count* calls of *func* on *bench_input*.

        Each call receives a fresh deep copy of the input's arguments.
        A sample count of zero or less produces NaN statistics.
        Exceptions raised by *func* propagate.
        """
        times = [
            time_call(func, bench_input.args, clock=self._clock) for _ in range(sample_count)
        ]
        summary = summarize(times, self._units)
        return StatsRecord(
            func_name=func_name(func),
            input_name=bench_input.name,
            samples=sample_count,
            mean=summary.mean,
            sigma_squared=summary.sigma_squared,
            sigma=summary.sigma,
        )

    def run(
        self,
        *,
        rank: bool = False,
        callback: RecordCallback | None = None,
    ) -> list[StatsRecord]:
        """Measure every (sample count, input, function) triple.

        Args:
            rank: Sort the records with
                :func:`~fnbench.bench.compare.rank_stats` before returning.
            callback: Called with each record right after it is computed,
                before any ranking.

        Returns:
            One record per triple, in execution order unless *rank* is set.
            Empty if any of the three lists is empty.
        """
        total = len(self._samples) * len(self._inputs) * len(self._funcs)
        log.info(
            "Benchmarking %d function(s) x %d input(s) x %d sample count(s) [%s]",
            len(self._funcs),
            len(self._inputs),
            len(self._samples),
            self._units.label,
        )

        start = time.monotonic()
        results: list[StatsRecord] = []
        for sample_count in self._samples:
            for bench_input in self._inputs:
                for func in self._funcs:
                    record = self.measure(func, bench_input, sample_count)
                    log.debug(
                        "[%d/%d] %s(%s) x%d: mean=%g sigma=%g %s",
                        len(results) + 1,
                        total,
                        record.func_name,
                        record.input_name,
                        record.samples,
                        record.mean,
                        record.sigma,
                        self._units.label,
                    )
                    results.append(record)
                    if callback is not None:
                        callback(record)

        if rank:
            rank_stats(results)

        log.info("Benchmark complete: %d record(s) in %.2fs", len(results), time.monotonic() - start)
        return results

    def build(self) -> Profiler:
        """Return a runner bound to this engine's live configuration."""
        return Profiler(self)


# ---------------------------------------------------------------------------
# Profiler
# ---------------------------------------------------------------------------


class Profiler:
    """Runner handle returned by :meth:`Benchmark.build`.

    Holds no snapshot: changes made to the engine after building are
    seen by the next :meth:`run`.
    """

    def __init__(self, engine: Benchmark) -> None:
        self.engine = engine

    def run(
        self,
        *,
        rank: bool = False,
        callback: RecordCallback | None = None,
    ) -> list[StatsRecord]:
        """Run the bound engine; see :meth:`Benchmark.run`."""
        return self.engine.run(rank=rank, callback=callback)


# ---------------------------------------------------------------------------
# Construction and progress helpers
# ---------------------------------------------------------------------------


def create_engine(
    config: BenchConfig | Mapping[str, Any] | None = None,
    *,
    clock: Clock | None = None,
) -> Benchmark:
    """Create a :class:`Benchmark` from an optional initial configuration.

    *config* may be a :class:`BenchConfig` or a mapping with any of the
    keys ``functions``, ``inputs``, ``samples`` and ``units``.  Missing
    lists default to empty and the unit defaults to milliseconds.
    """
    if config is None:
        return Benchmark(clock=clock)
    if isinstance(config, BenchConfig):
        return Benchmark(
            functions=config.functions,
            inputs=config.inputs,
            samples=config.samples,
            units=config.units,
            clock=clock,
        )
    return Benchmark(
        functions=config.get("functions"),
        inputs=config.get("inputs"),
        samples=config.get("samples"),
        units=config.get("units") or TimeUnit.MILLISECONDS,
        clock=clock,
    )


def log_progress(record: StatsRecord) -> None:
    """Record callback that logs each result as it is produced."""
    log.info(
        "  %-30s %-20s x%-8d mean=%-14.6g sigma=%.6g",
        record.func_name,
        record.input_name,
        record.samples,
        record.mean,
        record.sigma,
    )
