"""
samplegate.stats.factory
========================

Lookup from a `Statistic` to the processor class that computes it.

Examples
--------
>>> from samplegate.core.names import Statistic
>>> processor_class_for(Statistic.SDEV).__name__
'VarianceProcessor'
>>> create_processor("range").supports(Statistic.MIN)
True
"""

from __future__ import annotations
from typing import Dict, Type, Union

from samplegate.core.components import Processor
from samplegate.core.names import RangeMode, Statistic
from samplegate.stats.processors import (
    ApproxMedianProcessor,
    ExactMedianProcessor,
    ExtremaProcessor,
    MeanProcessor,
    SumProcessor,
    VarianceProcessor,
)

StatisticLike = Union[Statistic, str]

_PROCESSORS: Dict[Statistic, Type[Processor]] = {
    Statistic.MIN: ExtremaProcessor,
    Statistic.MAX: ExtremaProcessor,
    Statistic.RANGE: ExtremaProcessor,
    Statistic.SUM: SumProcessor,
    Statistic.MEAN: MeanProcessor,
    Statistic.VARIANCE: VarianceProcessor,
    Statistic.SDEV: VarianceProcessor,
    Statistic.MEDIAN: ExactMedianProcessor,
    Statistic.APPROX_MEDIAN: ApproxMedianProcessor,
}


def as_statistic(statistic: StatisticLike) -> Statistic:
    """Coerce a statistic name to `Statistic`, raising ValueError if unknown."""
    if isinstance(statistic, Statistic):
        return statistic
    try:
        return Statistic(str(statistic).lower())
    except ValueError:
        known = ", ".join(s.value for s in Statistic)
        raise ValueError(f"Unknown statistic: {statistic!r} (known: {known})") from None


def processor_class_for(statistic: StatisticLike) -> Type[Processor]:
    """Processor class responsible for ``statistic``."""
    return _PROCESSORS[as_statistic(statistic)]


def create_processor(
    statistic: StatisticLike, mode: RangeMode = RangeMode.UNDEFINED
) -> Processor:
    """Create a fresh processor able to compute ``statistic``."""
    return processor_class_for(statistic)(mode)
