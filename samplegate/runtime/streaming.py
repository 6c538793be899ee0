"""
samplegate.runtime.streaming
============================

`StreamingSampleStats`: one object that computes several statistics from a
single stream of samples.

Requested statistics are grouped onto the fewest processors (MEAN, VARIANCE
and SDEV share one `VarianceProcessor` when VARIANCE or SDEV was requested
first). Range configuration applies to every processor, including those
created after the ranges were added.

Examples
--------
>>> from samplegate.core.interval import Interval
>>> from samplegate.core.names import Statistic
>>> from samplegate.runtime.streaming import StreamingSampleStats
>>> stats = StreamingSampleStats()
>>> stats.set_statistics([Statistic.MIN, Statistic.MAX, Statistic.MEAN])
>>> stats.add_range(Interval.closed(-1, 1))
>>> stats.offer_all([-5.0, 0.5, 3.0, None, float("nan")])
>>> stats.get_statistic_value(Statistic.MAX), stats.get_statistic_value(Statistic.MEAN)
(3.0, -1.0)
>>> stats.get_num_offered(Statistic.MIN), stats.get_num_accepted(Statistic.MIN)
(5, 2)
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from samplegate.core.components import Processor
from samplegate.core.gate import SampleGate
from samplegate.core.interval import Interval
from samplegate.core.names import RangeMode, Statistic
from samplegate.stats.factory import StatisticLike, as_statistic, create_processor

logger = logging.getLogger(__name__)


class StreamingSampleStats:
    """
    Facade over a set of processors sharing one sample stream.

    Provides:
    - Statistic selection with processor reuse
    - Range configuration fanned out to every processor
    - Per-statistic values and counters
    """

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        # Holds the range configuration so new processors can be seeded
        # and mode conflicts are detected before any processor changes.
        self._settings = SampleGate(mode)
        self._processors: List[Processor] = []
        self._by_statistic: Dict[Statistic, Processor] = {}

    # ---- statistics ----

    def set_statistic(self, statistic: StatisticLike) -> None:
        """Request ``statistic``. Requesting it again has no effect."""
        stat = as_statistic(statistic)
        if stat in self._by_statistic:
            return

        for processor in self._processors:
            if processor.supports(stat):
                self._by_statistic[stat] = processor
                return

        processor = create_processor(stat, self._settings.mode)
        for interval in self._settings.get_ranges():
            processor.add_range(interval, self._settings.mode)
        self._processors.append(processor)
        self._by_statistic[stat] = processor
        logger.debug(
            "Created %s for statistic %s", type(processor).__name__, stat.value
        )

    def set_statistics(self, statistics: Iterable[StatisticLike]) -> None:
        for stat in statistics:
            self.set_statistic(stat)

    def statistics(self) -> Tuple[Statistic, ...]:
        """Requested statistics, in request order."""
        return tuple(self._by_statistic)

    def processors(self) -> Tuple[Processor, ...]:
        """Distinct processors, in creation order."""
        return tuple(self._processors)

    def processor_for(self, statistic: StatisticLike) -> Processor:
        """Processor computing ``statistic``; raises ValueError if not requested."""
        return self._processor(statistic)[1]

    # ---- ranges ----

    def add_range(
        self, interval: Optional[Interval], mode: Optional[RangeMode] = None
    ) -> None:
        """
        Add a range to every processor.

        Raises
        ------
        ConfigurationError
            If ``mode`` conflicts with the fixed range mode
        """
        if interval is None:
            return
        self._settings.add_range(interval, mode)
        for processor in self._processors:
            processor.add_range(interval, self._settings.mode)

    def set_mode(self, mode: RangeMode) -> None:
        """
        Fix the range mode for every processor.

        Raises
        ------
        ConfigurationError
            If the range mode is already fixed
        """
        self._settings.set_mode(mode)
        for processor in self._processors:
            processor.set_mode(self._settings.mode)

    def get_ranges(self) -> Tuple[Interval, ...]:
        return self._settings.get_ranges()

    @property
    def mode(self) -> RangeMode:
        return self._settings.mode

    # ---- samples ----

    def offer(self, sample: Optional[float]) -> None:
        for processor in self._processors:
            processor.offer(sample)

    def offer_all(self, samples: Iterable[Optional[float]]) -> None:
        for sample in samples:
            self.offer(sample)

    # ---- results ----

    def _processor(self, statistic: StatisticLike) -> Tuple[Statistic, Processor]:
        stat = as_statistic(statistic)
        try:
            return stat, self._by_statistic[stat]
        except KeyError:
            raise ValueError(
                f"Statistic '{stat.value}' was not requested; call set_statistic first"
            ) from None

    def get_statistic_value(self, statistic: StatisticLike) -> float:
        stat, processor = self._processor(statistic)
        return processor.get_value(stat)

    def get_num_offered(self, statistic: StatisticLike) -> int:
        return self._processor(statistic)[1].num_offered

    def get_num_accepted(self, statistic: StatisticLike) -> int:
        return self._processor(statistic)[1].num_accepted

    def get_num_nan(self, statistic: StatisticLike) -> int:
        return self._processor(statistic)[1].num_nan

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """
        Values and counters for every requested statistic.

        Returns
        -------
        dict
            Statistic name mapped to ``value``, ``num_offered``,
            ``num_accepted`` and ``num_nan``
        """
        out: Dict[str, Dict[str, Any]] = {}
        for stat, processor in self._by_statistic.items():
            out[stat.value] = {
                "value": processor.get_value(stat),
                "num_offered": processor.num_offered,
                "num_accepted": processor.num_accepted,
                "num_nan": processor.num_nan,
            }
        return out
