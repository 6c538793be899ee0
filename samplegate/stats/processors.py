"""
samplegate.stats.processors
===========================

Concrete streaming processors.

Each processor embeds a `SampleGate`, consumes the samples the gate accepts
and reports one or more statistics:

- `ExtremaProcessor`: MIN, MAX, RANGE
- `SumProcessor`: SUM
- `MeanProcessor`: MEAN
- `VarianceProcessor`: MEAN, VARIANCE, SDEV (Welford's online algorithm)
- `ExactMedianProcessor`: MEDIAN (keeps every accepted value)
- `ApproxMedianProcessor`: APPROX_MEDIAN (remedian, bounded memory)

Statistics of an empty sample are NaN, except SUM which is 0.0. Infinite
samples propagate as in plain floating-point arithmetic: SUM and MEAN of
``[1, inf]`` are ``inf``.

Examples
--------
>>> from samplegate.core.interval import Interval
>>> p = VarianceProcessor()
>>> p.add_range(Interval.closed(100, 200))
>>> for x in (1.0, 2.0, 3.0, 150.0, 4.0):
...     p.offer(x)
>>> p.num_offered, p.num_accepted
(5, 4)
>>> p.get_value(Statistic.MEAN), round(p.get_value(Statistic.VARIANCE), 6)
(2.5, 1.666667)
"""

from __future__ import annotations
import math
from typing import FrozenSet, List, Optional

from samplegate.core.components import Processor
from samplegate.core.names import RangeMode, Statistic


def _next_mean(mean: float, x: float, n: int) -> float:
    """Mean of ``n`` samples given the mean of the first ``n - 1`` and sample ``x``."""
    if math.isfinite(mean) and math.isfinite(x):
        return mean + (x - mean) / n
    # inf - inf in the incremental form would give NaN for e.g. [inf, 1]
    return (mean * (n - 1) + x) / n


class ExtremaProcessor(Processor):
    """Track the minimum and maximum of accepted samples."""

    _SUPPORTED = frozenset({Statistic.MIN, Statistic.MAX, Statistic.RANGE})

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        super().__init__(mode)
        self._min = math.inf
        self._max = -math.inf

    def update(self, sample: Optional[float]) -> bool:
        if not self.gate.is_accepted(sample):
            return False
        x = float(sample)  # type: ignore[arg-type]
        if x < self._min:
            self._min = x
        if x > self._max:
            self._max = x
        return True

    def supported_statistics(self) -> FrozenSet[Statistic]:
        return self._SUPPORTED

    def get_value(self, statistic: Statistic) -> float:
        stat = self.check_supported(statistic)
        if self._min > self._max:
            return math.nan
        if stat is Statistic.MIN:
            return self._min
        if stat is Statistic.MAX:
            return self._max
        return self._max - self._min


class SumProcessor(Processor):
    """Sum of accepted samples, using compensated (Neumaier) summation."""

    _SUPPORTED = frozenset({Statistic.SUM})

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        super().__init__(mode)
        self._sum = 0.0
        self._compensation = 0.0

    def update(self, sample: Optional[float]) -> bool:
        if not self.gate.is_accepted(sample):
            return False
        x = float(sample)  # type: ignore[arg-type]
        t = self._sum + x
        if not (math.isfinite(t) and math.isfinite(x)):
            self._sum = t
            return True
        if abs(self._sum) >= abs(x):
            self._compensation += (self._sum - t) + x
        else:
            self._compensation += (x - t) + self._sum
        self._sum = t
        return True

    def supported_statistics(self) -> FrozenSet[Statistic]:
        return self._SUPPORTED

    def get_value(self, statistic: Statistic) -> float:
        self.check_supported(statistic)
        return self._sum + self._compensation


class MeanProcessor(Processor):
    """Running mean of accepted samples."""

    _SUPPORTED = frozenset({Statistic.MEAN})

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        super().__init__(mode)
        self._count = 0
        self._mean = 0.0

    def update(self, sample: Optional[float]) -> bool:
        if not self.gate.is_accepted(sample):
            return False
        self._count += 1
        self._mean = _next_mean(self._mean, float(sample), self._count)  # type: ignore[arg-type]
        return True

    def supported_statistics(self) -> FrozenSet[Statistic]:
        return self._SUPPORTED

    def get_value(self, statistic: Statistic) -> float:
        self.check_supported(statistic)
        return self._mean if self._count > 0 else math.nan


class VarianceProcessor(Processor):
    """
    Mean, sample variance and standard deviation via Welford's algorithm.

    Variance uses the ``n - 1`` denominator and is NaN below two samples or
    once an infinite sample has been accepted.
    """

    _SUPPORTED = frozenset({Statistic.MEAN, Statistic.VARIANCE, Statistic.SDEV})

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        super().__init__(mode)
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0

    def update(self, sample: Optional[float]) -> bool:
        if not self.gate.is_accepted(sample):
            return False
        x = float(sample)  # type: ignore[arg-type]
        self._count += 1
        previous = self._mean
        self._mean = _next_mean(previous, x, self._count)
        if math.isfinite(self._mean) and math.isfinite(x):
            self._m2 += (x - previous) * (x - self._mean)
        else:
            self._m2 = math.nan
        return True

    def supported_statistics(self) -> FrozenSet[Statistic]:
        return self._SUPPORTED

    def get_value(self, statistic: Statistic) -> float:
        stat = self.check_supported(statistic)
        if stat is Statistic.MEAN:
            return self._mean if self._count > 0 else math.nan
        if self._count < 2:
            return math.nan
        variance = self._m2 / (self._count - 1)
        return variance if stat is Statistic.VARIANCE else math.sqrt(variance)


class ExactMedianProcessor(Processor):
    """
    Exact median of accepted samples.

    All accepted values are kept; the median of an even count is the mean
    of the two central values.
    """

    _SUPPORTED = frozenset({Statistic.MEDIAN})

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        super().__init__(mode)
        self._values: List[float] = []
        self._sorted = True

    def update(self, sample: Optional[float]) -> bool:
        if not self.gate.is_accepted(sample):
            return False
        self._values.append(float(sample))  # type: ignore[arg-type]
        self._sorted = False
        return True

    def supported_statistics(self) -> FrozenSet[Statistic]:
        return self._SUPPORTED

    def get_value(self, statistic: Statistic) -> float:
        self.check_supported(statistic)
        if not self._values:
            return math.nan
        if not self._sorted:
            self._values.sort()
            self._sorted = True
        n = len(self._values)
        mid = n // 2
        if n % 2:
            return self._values[mid]
        return (self._values[mid - 1] + self._values[mid]) / 2.0


class ApproxMedianProcessor(Processor):
    """
    Approximate median using the remedian algorithm.

    Samples fill a buffer of ``base`` values; a full buffer is replaced by its
    median, which moves up into the next buffer. Memory grows with the
    logarithm of the sample count. The estimate is the weighted median of all
    buffered values, where a value at level ``k`` stands for ``base**k``
    samples.

    Reference: Rousseeuw & Bassett (1990), "The remedian: a robust averaging
    method for large data sets", JASA 85(409).

    Examples
    --------
    >>> p = ApproxMedianProcessor(base=3)
    >>> for x in range(1, 10):
    ...     p.offer(float(x))
    >>> p.get_value(Statistic.APPROX_MEDIAN)
    5.0
    """

    _SUPPORTED = frozenset({Statistic.APPROX_MEDIAN})
    DEFAULT_BASE = 31

    def __init__(
        self, mode: RangeMode = RangeMode.UNDEFINED, base: int = DEFAULT_BASE
    ) -> None:
        super().__init__(mode)
        if base < 3 or base % 2 == 0:
            raise ValueError(f"base must be an odd integer >= 3, got {base}")
        self.base = base
        self._buffers: List[List[float]] = [[]]

    def update(self, sample: Optional[float]) -> bool:
        if not self.gate.is_accepted(sample):
            return False
        self._push(0, float(sample))  # type: ignore[arg-type]
        return True

    def _push(self, level: int, value: float) -> None:
        while True:
            if level == len(self._buffers):
                self._buffers.append([])
            buf = self._buffers[level]
            buf.append(value)
            if len(buf) < self.base:
                return
            buf.sort()
            value = buf[self.base // 2]
            buf.clear()
            level += 1

    def supported_statistics(self) -> FrozenSet[Statistic]:
        return self._SUPPORTED

    def get_value(self, statistic: Statistic) -> float:
        self.check_supported(statistic)
        weighted = [
            (value, self.base**level)
            for level, buf in enumerate(self._buffers)
            for value in buf
        ]
        if not weighted:
            return math.nan
        weighted.sort()
        half = sum(w for _, w in weighted) / 2.0
        cumulative = 0
        for value, weight in weighted:
            cumulative += weight
            if cumulative >= half:
                return value
        return weighted[-1][0]
