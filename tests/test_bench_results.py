"""Tests for fnbench.bench.results — inputs, records and serialization."""

from __future__ import annotations

import dataclasses
import functools
import json
import math
import unittest

from bench_test_helpers import CallRecorder, make_record

from fnbench.bench.results import Input, StatsRecord, func_name


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class TestInput(unittest.TestCase):
    """Tests for the Input dataclass."""

    def test_defaults_to_no_args(self) -> None:
        self.assertEqual(Input(name="empty").args, ())

    def test_list_args_accepted(self) -> None:
        bench_input = Input(name="pair", args=[1, 2])
        self.assertEqual(list(bench_input.args), [1, 2])

    def test_string_args_rejected(self) -> None:
        with self.assertRaises(TypeError):
            Input(name="bad", args="abc")

    def test_non_sequence_args_rejected(self) -> None:
        with self.assertRaises(TypeError) as ctx:
            Input(name="bad", args=42)  # type: ignore[arg-type]
        self.assertIn("bad", str(ctx.exception))

    def test_to_dict(self) -> None:
        d = Input(name="small", args=([3, 1, 2],)).to_dict()
        self.assertEqual(d, {"name": "small", "args": [[3, 1, 2]]})

    def test_from_dict(self) -> None:
        bench_input = Input.from_dict({"name": "small", "args": [[3, 1, 2]]})
        self.assertEqual(bench_input.name, "small")
        self.assertEqual(bench_input.args, ([3, 1, 2],))

    def test_from_dict_missing_args(self) -> None:
        self.assertEqual(Input.from_dict({"name": "none"}).args, ())


# ---------------------------------------------------------------------------
# func_name
# ---------------------------------------------------------------------------


def bubble_sort(values: list[int]) -> list[int]:
    return sorted(values)


class TestFuncName(unittest.TestCase):
    """Tests for func_name()."""

    def test_plain_function(self) -> None:
        self.assertEqual(func_name(bubble_sort), "bubble_sort")

    def test_builtin(self) -> None:
        self.assertEqual(func_name(sorted), "sorted")

    def test_lambda(self) -> None:
        self.assertEqual(func_name(lambda: None), "<lambda>")

    def test_partial_uses_wrapped_name(self) -> None:
        self.assertEqual(func_name(functools.partial(bubble_sort)), "bubble_sort")

    def test_callable_instance_with_name(self) -> None:
        self.assertEqual(func_name(CallRecorder()), "call_recorder")

    def test_callable_instance_without_name(self) -> None:
        class Sorter:
            def __call__(self, values: list[int]) -> None:
                values.sort()

        self.assertEqual(func_name(Sorter()), "Sorter")


# ---------------------------------------------------------------------------
# StatsRecord
# ---------------------------------------------------------------------------


class TestStatsRecord(unittest.TestCase):
    """Tests for the StatsRecord dataclass."""

    def test_immutable(self) -> None:
        record = make_record()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            record.mean = 2.0  # type: ignore[misc]

    def test_to_dict_keys(self) -> None:
        d = make_record(func_name="f", input_name="i", samples=5).to_dict()
        self.assertEqual(
            list(d),
            ["func_name", "input_name", "samples", "mean", "sigma_squared", "sigma"],
        )
        self.assertEqual(d["func_name"], "f")
        self.assertEqual(d["samples"], 5)

    def test_from_dict_ignores_unknown(self) -> None:
        d = make_record().to_dict()
        d["units"] = "ms"
        self.assertEqual(StatsRecord.from_dict(d), make_record())

    def test_jsonl_line_is_compact(self) -> None:
        line = make_record().to_jsonl_line()
        self.assertNotIn("\n", line)
        self.assertNotIn(", ", line)
        self.assertEqual(json.loads(line)["sigma"], 0.5)

    def test_json_dict_writes_nan_as_none(self) -> None:
        d = make_record(mean=math.nan, sigma_squared=math.nan, sigma=math.nan).to_json_dict()
        self.assertIsNone(d["mean"])
        self.assertIsNone(d["sigma_squared"])
        self.assertIsNone(d["sigma"])
        self.assertEqual(d["samples"], 10)

    def test_json_dict_keeps_finite_values(self) -> None:
        self.assertEqual(make_record().to_json_dict(), make_record().to_dict())

    def test_jsonl_line_is_strict_json_for_nan(self) -> None:
        line = make_record(mean=math.nan, sigma=math.inf).to_jsonl_line()
        self.assertNotIn("NaN", line)
        self.assertNotIn("Infinity", line)

        def reject(token: str) -> float:
            raise ValueError(token)

        data = json.loads(line, parse_constant=reject)
        self.assertIsNone(data["mean"])
        self.assertIsNone(data["sigma"])

    def test_jsonl_nan_reads_back_as_nan(self) -> None:
        record = StatsRecord.from_jsonl_line(make_record(mean=math.nan).to_jsonl_line())
        self.assertTrue(math.isnan(record.mean))
        self.assertEqual(record.sigma, 0.5)

    def test_jsonl_roundtrip(self) -> None:
        record = make_record(func_name="sorted", input_name="big", mean=0.125)
        self.assertEqual(StatsRecord.from_jsonl_line(record.to_jsonl_line()), record)


if __name__ == "__main__":
    unittest.main()
