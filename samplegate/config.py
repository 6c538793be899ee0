"""
samplegate.config
=================

Declarative configuration for `StreamingSampleStats`.

Examples
--------
>>> from samplegate.config import StatsConfig
>>> cfg = StatsConfig.from_dict({
...     "statistics": ["mean", "sdev"],
...     "mode": "included",
...     "ranges": [[0, 100]],
... })
>>> stats = cfg.build()
>>> stats.offer_all([10.0, 20.0, 500.0])
>>> stats.get_statistic_value("mean")
15.0
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Mapping

from samplegate.core.interval import Interval
from samplegate.core.names import RangeMode, Statistic
from samplegate.runtime.streaming import StreamingSampleStats
from samplegate.stats.factory import as_statistic


@dataclass
class StatsConfig:
    """
    Configuration of a streaming statistics session.

    Attributes
    ----------
    statistics : list of Statistic
        Statistics to compute
    mode : RangeMode, default=RangeMode.UNDEFINED
        Range mode; UNDEFINED with ranges means EXCLUDED
    ranges : list of Interval
        Ranges to include or exclude, in decision order
    """

    statistics: List[Statistic] = field(default_factory=list)
    mode: RangeMode = RangeMode.UNDEFINED
    ranges: List[Interval] = field(default_factory=list)

    def validate(self) -> None:
        """Validate the configuration."""
        if not self.statistics:
            raise ValueError("At least one statistic must be requested")
        for stat in self.statistics:
            as_statistic(stat)
        try:
            RangeMode(self.mode)
        except ValueError:
            raise ValueError(f"Unknown range mode: {self.mode!r}") from None
        for interval in self.ranges:
            if not isinstance(interval, Interval):
                raise ValueError(f"Expected Interval, got {type(interval).__name__}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StatsConfig":
        """Build a config from plain data, e.g. parsed JSON or YAML."""
        unknown = set(data) - {"statistics", "mode", "ranges"}
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        mode_name = data.get("mode") or RangeMode.UNDEFINED.value
        try:
            mode = RangeMode(str(mode_name).lower())
        except ValueError:
            raise ValueError(f"Unknown range mode: {mode_name!r}") from None

        cfg = cls(
            statistics=[as_statistic(s) for s in data.get("statistics", [])],
            mode=mode,
            ranges=[Interval.parse(r) for r in data.get("ranges", [])],
        )
        cfg.validate()
        return cfg

    def build(self) -> StreamingSampleStats:
        """Validate and return a configured `StreamingSampleStats`."""
        self.validate()
        stats = StreamingSampleStats(RangeMode(self.mode))
        for interval in self.ranges:
            stats.add_range(interval)
        stats.set_statistics(self.statistics)
        return stats
