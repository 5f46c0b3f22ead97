"""Command-line interface for fnbench.

Subcommands:
    fnbench run        Time candidate functions and print their statistics
    fnbench validate   Check a YAML benchmark profile without running it
"""

from __future__ import annotations

import locale
import logging
import sys
from pathlib import Path

import click

from fnbench import __version__
from fnbench.bench.results import StatsRecord
from fnbench.bench.timing import TimeUnit
from fnbench.logging import setup_logging

log = logging.getLogger("fnbench")

_UNIT_CHOICES = ["ns", "ms", "s", "nanoseconds", "milliseconds", "seconds"]
_FORMAT_CHOICES = ["table", "json", "jsonl", "csv", "markdown"]


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """fnbench — compare the speed of alternative implementations."""


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML profile defining functions, inputs and sample counts.",
)
@click.option(
    "--function",
    "function_refs",
    type=str,
    multiple=True,
    help="Candidate function as 'module:attr' (repeatable).",
)
@click.option(
    "--input",
    "inline_inputs",
    type=str,
    multiple=True,
    help="Inline input: 'name=[json args]' (repeatable).",
)
@click.option(
    "--samples",
    type=str,
    default=None,
    help="Comma-separated sample counts, e.g. '10,100'.",
)
@click.option(
    "--units",
    type=click.Choice(_UNIT_CHOICES, case_sensitive=False),
    default=None,
    help="Reporting unit (default: ms, or the profile's).",
)
@click.option(
    "--rank/--no-rank",
    default=None,
    help="Sort by sample count, input name, then mean.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(_FORMAT_CHOICES),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option("--progress", is_flag=True, default=False, help="Log each result as it is measured.")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a DEBUG log to this file.",
)
def run(
    profile_path: Path | None,
    function_refs: tuple[str, ...],
    inline_inputs: tuple[str, ...],
    samples: str | None,
    units: str | None,
    rank: bool | None,
    output_format: str,
    progress: bool,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Benchmark candidate functions against named inputs.

    Use --profile for a YAML profile, or --function/--input/--samples
    to describe the benchmark inline.  Inline values are added to the
    profile's.

    \b
    Examples:
        fnbench run --profile bench-sorting.yaml --rank

        fnbench run --function builtins:sorted --function builtins:list \\
            --input 'small=[[3, 1, 2]]' --samples 100,1000 --units ns
    """
    from fnbench.bench.config import (
        ProfileError,
        config_from_profile,
        load_profile,
        parse_inline_input,
        parse_samples,
        validate_config,
    )
    from fnbench.bench.runner import create_engine, log_progress

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        log.debug("Keeping the default collation locale: %s", exc)

    try:
        inputs = [parse_inline_input(spec) for spec in inline_inputs]
    except ProfileError as exc:
        raise click.BadParameter(str(exc), param_hint="--input") from exc
    try:
        sample_counts = parse_samples(samples) if samples else None
    except ProfileError as exc:
        raise click.BadParameter(str(exc), param_hint="--samples") from exc

    cli_overrides: dict[str, object] = {
        "functions": list(function_refs),
        "inputs": inputs,
        "samples": sample_counts,
        "units": units,
        "rank": rank,
    }

    try:
        profile_data = load_profile(profile_path) if profile_path else {}
        config = config_from_profile(profile_data, cli_overrides=cli_overrides)
    except ProfileError as exc:
        raise click.ClickException(str(exc)) from exc

    errors = validate_config(config)
    fatal = [e for e in errors if e.severity == "error"]
    for w in errors:
        if w.severity == "warning":
            log.warning("Config warning: %s: %s", w.field, w.message)
    if fatal:
        messages = [f"  {e.field}: {e.message}" for e in fatal]
        raise click.ClickException("Invalid benchmark configuration:\n" + "\n".join(messages))

    engine = create_engine(config)
    records = engine.run(rank=config.rank, callback=log_progress if progress else None)

    click.echo(_render(records, engine.units, output_format, config.name, config.description))


def _render(
    records: list[StatsRecord],
    units: TimeUnit,
    output_format: str,
    name: str,
    description: str,
) -> str:
    from fnbench.bench.display import format_stats_table
    from fnbench.bench.export import export_csv, export_json, export_jsonl, export_markdown

    if output_format == "json":
        return export_json(records, units).rstrip("\n")
    if output_format == "jsonl":
        return export_jsonl(records).rstrip("\n")
    if output_format == "csv":
        return export_csv(records, units).rstrip("\n")
    if output_format == "markdown":
        return export_markdown(records, units, title=name, description=description)
    return format_stats_table(records, units, title=name)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@main.command()
@click.argument(
    "profile_path",
    metavar="PROFILE",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def validate(profile_path: Path) -> None:
    """Load PROFILE, resolve its functions and report problems."""
    from fnbench.bench.config import (
        ProfileError,
        config_from_profile,
        load_profile,
        validate_config,
    )

    try:
        config = config_from_profile(load_profile(profile_path))
    except ProfileError as exc:
        raise click.ClickException(str(exc)) from exc

    errors = validate_config(config)
    for e in errors:
        click.echo(f"{e.severity}: {e.field}: {e.message}")

    if any(e.severity == "error" for e in errors):
        sys.exit(1)

    click.echo(
        f"Profile OK: {len(config.functions)} function(s), {len(config.inputs)} input(s), "
        f"{len(config.samples)} sample count(s) -> {config.total_measurements} measurement(s)"
    )
