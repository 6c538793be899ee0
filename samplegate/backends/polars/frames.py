"""
samplegate.backends.polars.frames
=================================

Feed Polars data into `StreamingSampleStats` and report results as frames.

Nulls in a Series are offered as absent samples; NaN stays NaN.

Examples
--------
>>> import polars as pl
>>> from samplegate.runtime.streaming import StreamingSampleStats
>>> from samplegate.backends.polars.frames import offer_series, summary_frame
>>> stats = StreamingSampleStats()
>>> stats.set_statistics(["sum", "max"])
>>> offer_series(stats, pl.Series("x", [1.0, None, 2.5, float("nan")]))
>>> df = summary_frame(stats)
>>> df.columns
['statistic', 'value', 'num_offered', 'num_accepted', 'num_nan']
>>> df.filter(pl.col("statistic") == "sum")["value"].item()
3.5
"""

from __future__ import annotations
from typing import Any, cast

import polars as pl

from samplegate.runtime.streaming import StreamingSampleStats

_SUMMARY_SCHEMA = {
    "statistic": pl.Utf8,
    "value": pl.Float64,
    "num_offered": pl.Int64,
    "num_accepted": pl.Int64,
    "num_nan": pl.Int64,
}


def offer_series(stats: StreamingSampleStats, series: pl.Series) -> None:
    """Offer every element of ``series`` to ``stats`` in order."""
    if not series.dtype.is_numeric():
        raise ValueError(f"Expected a numeric Series, got dtype {series.dtype}")
    stats.offer_all(series.cast(pl.Float64).to_list())


def offer_column(stats: StreamingSampleStats, df: pl.DataFrame, column: str) -> None:
    """Offer one column of ``df`` to ``stats``."""
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in frame")
    offer_series(stats, df.get_column(column))


def summary_frame(stats: StreamingSampleStats) -> pl.DataFrame:
    """Return one row per requested statistic with its value and counters."""
    rows = [
        {"statistic": name, **values} for name, values in stats.summary().items()
    ]
    if not rows:
        return pl.DataFrame(schema=cast(Any, _SUMMARY_SCHEMA))
    return pl.DataFrame(rows, schema=cast(Any, _SUMMARY_SCHEMA))
