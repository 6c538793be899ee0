"""
samplegate.core.components
==========================

Base class for streaming statistic processors.

A `Processor` does not inherit from the gate. It owns a `SampleGate` and
passes its own `update` method to `SampleGate.offer`, so all counting and
range logic stays in one place while subclasses only decide how an accepted
sample changes their running state.

Subclasses implement:
- `update(sample)`: consume the sample if accepted; return True if used
- `supported_statistics()`: the statistics the processor can report
- `get_value(statistic)`: the current value of one statistic

Examples
--------
>>> from samplegate.core.names import Statistic
>>> class CountProcessor(Processor):
...     def __init__(self, mode=RangeMode.UNDEFINED):
...         super().__init__(mode)
...         self.n = 0
...     def update(self, sample):
...         if not self.gate.is_accepted(sample):
...             return False
...         self.n += 1
...         return True
...     def supported_statistics(self):
...         return frozenset({Statistic.SUM})
...     def get_value(self, statistic):
...         self.check_supported(statistic)
...         return float(self.n)
...
>>> p = CountProcessor()
>>> for x in (1.0, None, float("nan"), 4.0):
...     p.offer(x)
>>> p.num_offered, p.num_accepted, p.num_nan
(4, 2, 1)
>>> p.get()
{<Statistic.SUM: 'sum'>: 2.0}
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Optional, Tuple

from samplegate.core.gate import SampleGate
from samplegate.core.interval import Interval
from samplegate.core.names import RangeMode, Statistic


class Processor(ABC):
    """
    Base class for processors that compute statistics from offered samples.

    Parameters
    ----------
    mode : RangeMode, default=RangeMode.UNDEFINED
        Initial range mode of the embedded gate.
    """

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        self.gate = SampleGate(mode)

    # ---- gate configuration ----

    def add_range(
        self, interval: Optional[Interval], mode: Optional[RangeMode] = None
    ) -> None:
        """See `SampleGate.add_range`."""
        self.gate.add_range(interval, mode)

    def set_mode(self, mode: RangeMode) -> None:
        """See `SampleGate.set_mode`."""
        self.gate.set_mode(mode)

    def get_ranges(self) -> Tuple[Interval, ...]:
        return self.gate.get_ranges()

    @property
    def mode(self) -> RangeMode:
        return self.gate.mode

    # ---- counters ----

    @property
    def num_offered(self) -> int:
        return self.gate.num_offered

    @property
    def num_accepted(self) -> int:
        return self.gate.num_accepted

    @property
    def num_nan(self) -> int:
        return self.gate.num_nan

    # ---- samples and results ----

    def offer(self, sample: Optional[float]) -> None:
        """Offer one sample to this processor."""
        self.gate.offer(sample, self.update)

    @abstractmethod
    def update(self, sample: Optional[float]) -> bool:
        """
        Process an offered sample.

        Returns
        -------
        bool
            True if the sample was accepted and used for calculations
        """

    @abstractmethod
    def supported_statistics(self) -> FrozenSet[Statistic]:
        """Statistics this processor can report."""

    @abstractmethod
    def get_value(self, statistic: Statistic) -> float:
        """
        Current value of ``statistic``.

        Raises
        ------
        ValueError
            If the statistic is not supported by this processor
        """

    def supports(self, statistic: Statistic) -> bool:
        return Statistic(statistic) in self.supported_statistics()

    def check_supported(self, statistic: Statistic) -> Statistic:
        """Return ``statistic`` as a `Statistic`, or raise if unsupported."""
        stat = Statistic(statistic)
        if stat not in self.supported_statistics():
            raise ValueError(
                f"{type(self).__name__} does not support statistic '{stat.value}'"
            )
        return stat

    def get(self) -> Dict[Statistic, float]:
        """Current values of all supported statistics."""
        return {
            stat: self.get_value(stat)
            for stat in sorted(self.supported_statistics(), key=lambda s: s.value)
        }
