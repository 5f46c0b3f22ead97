"""Export benchmark results to CSV, Markdown and JSON.

CSV format: one row per record (long format for pandas/R).

Markdown format: a summary table suitable for reports, README files,
and GitHub issues.

JSON format: a document with the unit and the list of records; JSONL
writes one record per line.
"""

from __future__ import annotations

import csv
import io
import json

from fnbench.bench.results import StatsRecord
from fnbench.bench.timing import TimeUnit, parse_unit

_CSV_COLUMNS = ["func_name", "input_name", "samples", "mean", "sigma_squared", "sigma", "units"]


def export_csv(
    records: list[StatsRecord],
    units: TimeUnit | str = TimeUnit.MILLISECONDS,
) -> str:
    """Export records as CSV, one row per record in the given order.

    Columns:
        func_name, input_name, samples, mean, sigma_squared, sigma, units
    """
    label = parse_unit(units).label
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(_CSV_COLUMNS)
    for r in records:
        writer.writerow(
            [
                r.func_name,
                r.input_name,
                r.samples,
                repr(r.mean),
                repr(r.sigma_squared),
                repr(r.sigma),
                label,
            ]
        )
    return output.getvalue()


def _md_cell(text: str) -> str:
    return text.replace("|", "\\|")


def export_markdown(
    records: list[StatsRecord],
    units: TimeUnit | str = TimeUnit.MILLISECONDS,
    *,
    title: str = "",
    description: str = "",
) -> str:
    """Export records as a Markdown report."""
    label = parse_unit(units).label
    lines: list[str] = []

    lines.append(f"# {title or 'Benchmark results'}")
    lines.append("")
    if description:
        lines.append(description)
        lines.append("")

    lines.append(f"| Samples | Input | Function | Mean ({label}) | σ² | σ |")
    lines.append("|---:|---|---|---:|---:|---:|")
    for r in records:
        lines.append(
            f"| {r.samples} | {_md_cell(r.input_name)} | {_md_cell(r.func_name)} | "
            f"{r.mean:.6g} | {r.sigma_squared:.6g} | {r.sigma:.6g} |"
        )

    lines.append("")
    lines.append(f"*Generated by fnbench ({len(records)} records)*")
    return "\n".join(lines)


def export_json(
    records: list[StatsRecord],
    units: TimeUnit | str = TimeUnit.MILLISECONDS,
) -> str:
    """Export records as an indented JSON document.

    NaN statistics (from a sample count of zero) are written as ``null``.
    """
    document = {
        "units": parse_unit(units).label,
        "results": [r.to_json_dict() for r in records],
    }
    return json.dumps(document, indent=2, allow_nan=False) + "\n"


def export_jsonl(records: list[StatsRecord]) -> str:
    """Export records as JSON Lines, one record per line."""
    return "".join(r.to_jsonl_line() + "\n" for r in records)
