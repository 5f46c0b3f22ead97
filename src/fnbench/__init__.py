"""fnbench — micro-benchmarks for comparing alternative implementations."""

from __future__ import annotations

__version__ = "0.1.0"
