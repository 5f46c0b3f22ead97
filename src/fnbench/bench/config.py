"""Benchmark configuration and profile loading.

Handles:
- Loading benchmark profiles from YAML files.
- Resolving ``module:attr`` references to candidate functions.
- Parsing inline inputs and sample lists from CLI arguments.
- Merging CLI options with profile values.
- Validating the final configuration before execution.
"""

from __future__ import annotations

import collections.abc
import importlib
import json
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml

from fnbench.bench.results import Input
from fnbench.bench.timing import TimeUnit, parse_unit
from fnbench.logging import get_logger

log = get_logger("config")


class ProfileError(ValueError):
    """A profile, function reference or inline input could not be parsed."""


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


@dataclass
class BenchConfig:
    """Resolved configuration for a benchmark run."""

    name: str = ""
    description: str = ""

    functions: list[Callable[..., Any]] = field(default_factory=list)
    inputs: list[Input] = field(default_factory=list)
    samples: list[int] = field(default_factory=list)
    units: TimeUnit | str = TimeUnit.MILLISECONDS

    rank: bool = False

    @property
    def total_measurements(self) -> int:
        """Number of records a run of this configuration produces."""
        return len(self.functions) * len(self.inputs) * len(self.samples)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: BenchConfig) -> list[ValidationError]:
    """Validate a benchmark configuration.

    Empty lists and non-positive sample counts are only warnings: the
    engine accepts them and produces no records or NaN statistics.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    try:
        parse_unit(config.units)
    except ValueError as exc:
        errors.append(ValidationError(field="units", message=str(exc)))

    for label, items in (
        ("functions", config.functions),
        ("inputs", config.inputs),
        ("samples", config.samples),
    ):
        if not items:
            errors.append(
                ValidationError(
                    field=label,
                    message=f"No {label} configured; the run will produce no results.",
                    severity="warning",
                )
            )

    for idx, func in enumerate(config.functions):
        if not callable(func):
            errors.append(
                ValidationError(
                    field=f"functions[{idx}]",
                    message=f"Function entry is not callable: {func!r}",
                )
            )

    seen_inputs: set[str] = set()
    for idx, bench_input in enumerate(config.inputs):
        if not isinstance(bench_input, Input):
            errors.append(
                ValidationError(
                    field=f"inputs[{idx}]",
                    message=f"Input entry is not an Input: {bench_input!r}",
                )
            )
            continue
        if bench_input.name in seen_inputs:
            errors.append(
                ValidationError(
                    field=f"inputs[{idx}].name",
                    message=f"Duplicate input name '{bench_input.name}'.",
                    severity="warning",
                )
            )
        seen_inputs.add(bench_input.name)

    for idx, count in enumerate(config.samples):
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            errors.append(
                ValidationError(
                    field=f"samples[{idx}]",
                    message=f"Sample count must be an integer (got {count!r}).",
                )
            )
        elif count <= 0:
            errors.append(
                ValidationError(
                    field=f"samples[{idx}]",
                    message=(
                        f"Sample count {count} is not positive; its statistics will be NaN."
                    ),
                    severity="warning",
                )
            )

    return errors


# ---------------------------------------------------------------------------
# Reference and inline parsing
# ---------------------------------------------------------------------------


def resolve_callable(ref: str) -> Callable[..., Any]:
    """Import the callable named by *ref*.

    Accepts ``"package.module:attr.path"`` or, when no colon is present,
    ``"package.module.attr"`` (the last dotted component is the attribute).

    Examples::

        "builtins:sorted"
        "mypkg.sorts:Sorter.bubble"
        "heapq.nsmallest"

    Raises:
        ProfileError: If the module cannot be imported, the attribute is
            missing, or the object is not callable.
    """
    ref = ref.strip()
    if ":" in ref:
        module_name, _, attr_path = ref.partition(":")
    else:
        module_name, _, attr_path = ref.rpartition(".")
    if not module_name or not attr_path:
        raise ProfileError(
            f"Invalid function reference '{ref}'. Expected 'module:attr' or 'module.attr'."
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ProfileError(f"Cannot import module '{module_name}' for '{ref}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ProfileError(f"'{ref}' has no attribute '{part}'") from exc

    if not callable(obj):
        raise ProfileError(f"'{ref}' is not callable ({type(obj).__name__})")
    return obj


def parse_inline_input(spec: str) -> Input:
    """Parse an inline input from the CLI.

    Format: ``"name=<JSON array of positional args>"``.  An empty value
    after ``=`` means no arguments.

    Examples::

        "small=[[3, 1, 2]]"
        "pair=[2, 10]"
        "nothing="
    """
    if "=" not in spec:
        raise ProfileError(f"Invalid input spec: '{spec}'. Expected format: 'name=[args...]'")

    name, raw = spec.split("=", 1)
    name = name.strip()
    if not name:
        raise ProfileError("Input name cannot be empty.")

    raw = raw.strip()
    if not raw:
        return Input(name=name)
    try:
        args = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ProfileError(f"Input '{name}' args are not valid JSON: {exc}") from exc
    if not isinstance(args, list):
        raise ProfileError(
            f"Input '{name}' args must be a JSON array, got {type(args).__name__}"
        )
    return Input(name=name, args=tuple(args))


def parse_samples(text: str) -> list[int]:
    """Parse a comma-separated list of sample counts (``"10,100,1000"``)."""
    counts: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            counts.append(int(part))
        except ValueError as exc:
            raise ProfileError(f"Invalid sample count '{part}'") from exc
    return counts


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a benchmark profile from a YAML file.

    Profile format::

        name: "sorting"
        description: "optional description"
        units: ms
        rank: true
        samples: [10, 100]

        functions:
          - builtins:sorted
          - mypkg.sorts:bubble_sort

        inputs:
          - name: small
            args: [[3, 1, 2]]
          - name: reversed
            args: [[9, 8, 7, 6, 5]]

    Returns:
        The parsed YAML as a dict.
    """
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    try:
        data = yaml.safe_load(profile_path.read_text())
    except yaml.YAMLError as exc:
        raise ProfileError(f"Profile {profile_path} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ProfileError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def _profile_inputs(data: Any) -> list[Input]:
    if not isinstance(data, list):
        raise ProfileError("Profile 'inputs' must be a list of {name, args} mappings")

    inputs: list[Input] = []
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict) or "name" not in entry:
            raise ProfileError(f"Profile input #{idx} must be a mapping with a 'name' key")
        args = entry.get("args") or []
        if not isinstance(args, collections.abc.Sequence) or isinstance(args, str):
            raise ProfileError(
                f"Input '{entry['name']}' args must be a list, got {type(args).__name__}"
            )
        inputs.append(Input(name=str(entry["name"]), args=tuple(args)))
    return inputs


def _unit_label(units: TimeUnit | str) -> str:
    try:
        return parse_unit(units).label
    except ValueError:
        return f"{units!r} (invalid)"


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> BenchConfig:
    """Build a BenchConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values for ``units``,
    ``rank``, ``samples`` and ``name``.  CLI ``functions`` (references)
    and ``inputs`` (:class:`Input` objects) are appended after the
    profile's own.

    Args:
        profile_data: Parsed YAML profile dict.
        cli_overrides: Dict of CLI option values; ``None`` values are
            ignored.

    Returns:
        BenchConfig with resolved functions and inputs.
    """
    cli = cli_overrides or {}

    func_refs = profile_data.get("functions") or []
    if not isinstance(func_refs, list):
        raise ProfileError("Profile 'functions' must be a list of 'module:attr' references")

    samples = profile_data.get("samples") or []
    if isinstance(samples, int):
        samples = [samples]
    if not isinstance(samples, list):
        raise ProfileError("Profile 'samples' must be an integer or a list of integers")

    config = BenchConfig(
        name=cli.get("name") or profile_data.get("name", ""),
        description=profile_data.get("description", ""),
        functions=[resolve_callable(str(ref)) for ref in func_refs],
        inputs=_profile_inputs(profile_data.get("inputs") or []),
        samples=cli["samples"] if cli.get("samples") else list(samples),
        units=cli.get("units") or profile_data.get("units", TimeUnit.MILLISECONDS),
        rank=cli["rank"] if cli.get("rank") is not None else bool(profile_data.get("rank")),
    )

    for ref in cli.get("functions") or []:
        config.functions.append(resolve_callable(ref))
    config.inputs.extend(cli.get("inputs") or [])

    log.debug(
        "Loaded config '%s': %d function(s), %d input(s), samples=%s, units=%s",
        config.name,
        len(config.functions),
        len(config.inputs),
        config.samples,
        _unit_label(config.units),
    )
    return config
