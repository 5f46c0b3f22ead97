"""Terminal display formatting for benchmark results."""

from __future__ import annotations

from fnbench.bench.results import StatsRecord
from fnbench.bench.timing import TimeUnit, parse_unit
from fnbench.formatting import format_number, format_table


def format_stats_table(
    records: list[StatsRecord],
    units: TimeUnit | str = TimeUnit.MILLISECONDS,
    *,
    title: str = "",
) -> str:
    """Format records as an aligned table, one row per record.

    Rows keep the order of *records*.  Headers carry the unit the
    records were measured in.

    Args:
        records: Records returned by a benchmark run.
        units: Unit of the records' timing fields.
        title: Optional heading printed above the table.
    """
    label = parse_unit(units).label
    lines: list[str] = []
    if title:
        lines.append(title)
        lines.append("─" * len(title))

    if not records:
        lines.append("No results.")
        return "\n".join(lines)

    headers = [
        "Samples",
        "Input",
        "Function",
        f"Mean ({label})",
        f"σ² ({label})",
        f"σ ({label})",
    ]
    rows = [
        [
            str(r.samples),
            r.input_name,
            r.func_name,
            format_number(r.mean),
            format_number(r.sigma_squared),
            format_number(r.sigma),
        ]
        for r in records
    ]
    lines.append(
        format_table(
            headers,
            rows,
            alignments=["r", "l", "l", "r", "r", "r"],
            max_col_width={1: 30, 2: 40},
            indent=0,
        )
    )
    return "\n".join(lines)
