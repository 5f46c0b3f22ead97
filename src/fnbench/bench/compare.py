"""Ranking of benchmark results.

Records are ordered by sample count, then by input name using the
current locale's collation, then by mean time.  The ordering is only
applied when a caller asks for a ranked run; otherwise records stay in
execution order.
"""

from __future__ import annotations

import functools
import locale

from fnbench.bench.results import StatsRecord


def _sign(value: float) -> int:
    if value < 0:
        return -1
    if value > 0:
        return 1
    return 0


def compare_stats(a: StatsRecord, b: StatsRecord) -> int:
    """Three-way comparison of two records for ranking.

    Returns a negative number if *a* ranks first, positive if *b* does,
    and 0 if they tie on all keys.  NaN means compare equal to anything.

    Input names are compared with :func:`locale.strcoll`, which follows
    the process's ``LC_COLLATE`` setting.  Python starts in the "C"
    locale (code point order); the CLI switches to the user's locale,
    library callers must call ``locale.setlocale(locale.LC_COLLATE, "")``
    themselves.
    """
    if a.samples != b.samples:
        return -1 if a.samples < b.samples else 1

    by_input = _sign(locale.strcoll(a.input_name, b.input_name))
    if by_input:
        return by_input

    if a.mean < b.mean:
        return -1
    if a.mean > b.mean:
        return 1
    return 0


ranking_key = functools.cmp_to_key(compare_stats)


def rank_stats(records: list[StatsRecord]) -> list[StatsRecord]:
    """Sort *records* in place by rank and return the same list.

    The sort is stable, so records that tie keep their execution order.
    """
    records.sort(key=ranking_key)
    return records
