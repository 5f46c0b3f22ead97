"""Benchmark input and result data structures.

An :class:`Input` is a named argument list applied to every candidate
function.  A :class:`StatsRecord` is the aggregated timing of one
(function, input, sample count) triple, with timings in the unit that
was active when the run started.
"""

from __future__ import annotations

import collections.abc
import functools
import json
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass
class Input:
    """A named, fixed set of positional arguments."""

    name: str
    args: Sequence[Any] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if isinstance(self.args, (str, bytes)) or not isinstance(
            self.args, collections.abc.Sequence
        ):
            raise TypeError(
                f"Input '{self.name}' args must be a sequence of positional "
                f"arguments, got {type(self.args).__name__}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {"name": self.name, "args": list(self.args)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Input:
        """Deserialize from a dict with ``name`` and optional ``args``."""
        return cls(name=str(data["name"]), args=tuple(data.get("args", ())))


def func_name(func: Callable[..., Any]) -> str:
    """Return the display name of a candidate function.

    Uses ``__name__``; unwraps :func:`functools.partial` objects and falls
    back to the type name for other callables without one.
    """
    name = getattr(func, "__name__", None)
    if name:
        return str(name)
    if isinstance(func, functools.partial):
        return func_name(func.func)
    return type(func).__name__


# ---------------------------------------------------------------------------
# Statistics record
# ---------------------------------------------------------------------------


_STAT_FIELDS = ("mean", "sigma_squared", "sigma")


@dataclass(frozen=True)
class StatsRecord:
    """Aggregated timing for one (function, input, sample count) triple."""

    func_name: str
    input_name: str
    samples: int
    mean: float
    sigma_squared: float
    sigma: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict (full precision)."""
        return {
            "func_name": self.func_name,
            "input_name": self.input_name,
            "samples": self.samples,
            "mean": self.mean,
            "sigma_squared": self.sigma_squared,
            "sigma": self.sigma,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StatsRecord:
        """Deserialize from a dict, ignoring unknown fields."""
        known = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known}
        for name in _STAT_FIELDS:
            if name in filtered and filtered[name] is None:
                filtered[name] = math.nan
        return cls(**filtered)

    def to_json_dict(self) -> dict[str, Any]:
        """Like :meth:`to_dict`, with NaN and infinities written as ``None``.

        Strict JSON has no NaN token; :meth:`from_dict` reads ``None``
        back as NaN.
        """
        data = self.to_dict()
        for name in _STAT_FIELDS:
            if not math.isfinite(data[name]):
                data[name] = None
        return data

    def to_jsonl_line(self) -> str:
        """Serialize to a single JSONL line."""
        return json.dumps(self.to_json_dict(), separators=(",", ":"), allow_nan=False)

    @classmethod
    def from_jsonl_line(cls, line: str) -> StatsRecord:
        """Deserialize from a single JSONL line."""
        return cls.from_dict(json.loads(line))
