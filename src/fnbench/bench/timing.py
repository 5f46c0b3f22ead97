"""Timing capture and unit conversion for benchmark samples.

All samples are captured in fractional milliseconds from a monotonic
high-resolution clock (``time.perf_counter_ns``).  Results are converted
to the configured :class:`TimeUnit` only when statistics are reported.
"""

from __future__ import annotations

import copy
import enum
import time
from typing import Any, Callable, Sequence

# A clock returns the current time in fractional milliseconds.
Clock = Callable[[], float]

_NS_PER_MS = 1_000_000


# ---------------------------------------------------------------------------
# Time units
# ---------------------------------------------------------------------------


class TimeUnit(enum.Enum):
    """Unit in which benchmark statistics are reported."""

    NANOSECONDS = "ns"
    MILLISECONDS = "ms"
    SECONDS = "s"

    @property
    def label(self) -> str:
        """Short label used in table headers and exports."""
        return self.value


_UNIT_ALIASES: dict[str, TimeUnit] = {
    "ns": TimeUnit.NANOSECONDS,
    "nanosecond": TimeUnit.NANOSECONDS,
    "nanoseconds": TimeUnit.NANOSECONDS,
    "ms": TimeUnit.MILLISECONDS,
    "millisecond": TimeUnit.MILLISECONDS,
    "milliseconds": TimeUnit.MILLISECONDS,
    "s": TimeUnit.SECONDS,
    "sec": TimeUnit.SECONDS,
    "second": TimeUnit.SECONDS,
    "seconds": TimeUnit.SECONDS,
}


def parse_unit(value: TimeUnit | str) -> TimeUnit:
    """Resolve a unit name or :class:`TimeUnit` to a :class:`TimeUnit`.

    Accepts the short codes (``ns``, ``ms``, ``s``) and the long names
    (``nanoseconds``, ``milliseconds``, ``seconds``), case-insensitively.

    Raises:
        ValueError: If *value* is not a known unit.
    """
    if isinstance(value, TimeUnit):
        return value
    unit = _UNIT_ALIASES.get(str(value).strip().lower())
    if unit is None:
        valid = ", ".join(u.value for u in TimeUnit)
        raise ValueError(f"Unknown time unit '{value}'. Valid units: {valid}")
    return unit


def convert_from_milliseconds(value: float, unit: TimeUnit | str) -> float:
    """Convert a millisecond value to *unit*.

    ``ns`` multiplies by 1,000,000, ``ms`` is the identity and ``s``
    divides by 1000.  No rounding is applied.
    """
    target = parse_unit(unit)
    if target is TimeUnit.NANOSECONDS:
        return value * _NS_PER_MS
    if target is TimeUnit.SECONDS:
        return value / 1000
    return value


# ---------------------------------------------------------------------------
# Clock and timed calls
# ---------------------------------------------------------------------------


def perf_counter_ms() -> float:
    """Current value of the monotonic performance counter in milliseconds."""
    return time.perf_counter_ns() / _NS_PER_MS


def time_call(
    func: Callable[..., Any],
    args: Sequence[Any],
    *,
    clock: Clock = perf_counter_ms,
) -> float:
    """Call ``func`` once with a deep copy of *args* and return the elapsed ms.

    The copy is made inside the timed region so every call sees pristine
    arguments; its cost is part of the measurement.  The return value of
    *func* is discarded and any exception it raises propagates.
    """
    t0 = clock()
    copied = copy.deepcopy(args)
    func(*copied)
    return clock() - t0
