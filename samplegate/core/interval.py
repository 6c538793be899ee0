"""
samplegate.core.interval
========================

Immutable numeric intervals used to include or exclude samples.

An `Interval` has a lower and an upper bound, each of which may be open or
closed. Unbounded ends are represented by ``-inf`` / ``+inf`` and are always
open. Instances are frozen, so a gate can store them without copying.

Examples
--------
>>> from samplegate.core.interval import Interval
>>> r = Interval.closed(0, 10)
>>> r.contains(10.0), r.contains(10.5)
(True, False)
>>> str(Interval(0, 10, max_included=False))
'[0.0, 10.0)'
>>> Interval.at_least(5).contains(1e300)
True
>>> Interval.point(3).is_point
True
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union


@dataclass(frozen=True)
class Interval:
    """
    A range of float values.

    Attributes
    ----------
    min : float
        Lower bound (``-inf`` when unbounded)
    max : float
        Upper bound (``+inf`` when unbounded)
    min_included : bool
        Whether the lower bound belongs to the interval
    max_included : bool
        Whether the upper bound belongs to the interval
    """

    min: float = -math.inf
    max: float = math.inf
    min_included: bool = True
    max_included: bool = True

    def __post_init__(self) -> None:
        lo, hi = float(self.min), float(self.max)
        if math.isnan(lo) or math.isnan(hi):
            raise ValueError("Interval bounds must not be NaN")
        if lo > hi:
            raise ValueError(f"min ({lo}) must not be greater than max ({hi})")
        if lo == math.inf or hi == -math.inf:
            raise ValueError(f"Interval [{lo}, {hi}] is empty")

        # infinite ends are never part of the interval
        lo_in = bool(self.min_included) and not math.isinf(lo)
        hi_in = bool(self.max_included) and not math.isinf(hi)
        if lo == hi and not (lo_in and hi_in):
            raise ValueError(f"Point interval at {lo} must be closed at both ends")

        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)
        object.__setattr__(self, "min_included", lo_in)
        object.__setattr__(self, "max_included", hi_in)

    # ---- factories ----

    @classmethod
    def closed(cls, lo: float, hi: float) -> "Interval":
        """Interval ``[lo, hi]``."""
        return cls(lo, hi, True, True)

    @classmethod
    def open(cls, lo: float, hi: float) -> "Interval":
        """Interval ``(lo, hi)``."""
        return cls(lo, hi, False, False)

    @classmethod
    def point(cls, value: float) -> "Interval":
        """Degenerate interval holding a single value."""
        return cls(value, value, True, True)

    @classmethod
    def at_least(cls, lo: float) -> "Interval":
        return cls(lo, math.inf, True, False)

    @classmethod
    def greater_than(cls, lo: float) -> "Interval":
        return cls(lo, math.inf, False, False)

    @classmethod
    def at_most(cls, hi: float) -> "Interval":
        return cls(-math.inf, hi, False, True)

    @classmethod
    def less_than(cls, hi: float) -> "Interval":
        return cls(-math.inf, hi, False, False)

    @classmethod
    def everything(cls) -> "Interval":
        """The whole real line."""
        return cls(-math.inf, math.inf, False, False)

    @classmethod
    def parse(cls, data: Union["Interval", Sequence[Any], Mapping[str, Any]]) -> "Interval":
        """
        Build an interval from plain data.

        Accepts an `Interval`, a ``[min, max]`` pair (closed; ``None`` means
        unbounded) or a mapping with the dataclass field names.

        Examples
        --------
        >>> Interval.parse([0, None])
        Interval(min=0.0, max=inf, min_included=True, max_included=False)
        >>> Interval.parse({"min": 1, "max": 2, "max_included": False}).contains(2)
        False
        """
        if isinstance(data, Interval):
            return data
        if isinstance(data, Mapping):
            unknown = set(data) - {"min", "max", "min_included", "max_included"}
            if unknown:
                raise ValueError(f"Unknown interval fields: {sorted(unknown)}")
            fields = dict(data)
            if fields.get("min") is None:
                fields["min"] = -math.inf
            if fields.get("max") is None:
                fields["max"] = math.inf
            return cls(**fields)
        if isinstance(data, (str, bytes)) or len(data) != 2:
            raise ValueError(f"Expected a [min, max] pair, got {data!r}")
        lo, hi = data
        return cls(
            -math.inf if lo is None else lo,
            math.inf if hi is None else hi,
        )

    # ---- queries ----

    @property
    def is_point(self) -> bool:
        return self.min == self.max

    @property
    def is_min_infinite(self) -> bool:
        return math.isinf(self.min)

    @property
    def is_max_infinite(self) -> bool:
        return math.isinf(self.max)

    def contains(self, value: float) -> bool:
        """Return True if ``value`` lies in the interval. NaN is never contained."""
        x = float(value)
        if math.isnan(x):
            return False
        if x < self.min or (x == self.min and not self.min_included):
            return False
        if x > self.max or (x == self.max and not self.max_included):
            return False
        return True

    def __contains__(self, value: float) -> bool:
        return self.contains(value)

    def __str__(self) -> str:
        left = "[" if self.min_included else "("
        right = "]" if self.max_included else ")"
        return f"{left}{self.min}, {self.max}{right}"
