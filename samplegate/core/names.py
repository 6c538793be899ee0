"""
samplegate.core.names
=====================

Typed names shared across the package.

- `RangeMode`: how the stored ranges of a gate are interpreted.
- `Statistic`: the statistics that processors can compute.
- `SampleClass`: the outcome of classifying a single sample.

Examples
--------
>>> from samplegate.core.names import RangeMode, Statistic
>>> RangeMode.EXCLUDED.value
'excluded'
>>> Statistic("mean") is Statistic.MEAN
True
"""

from __future__ import annotations
from enum import Enum


class RangeMode(str, Enum):
    """Interpretation of the ranges held by a gate.

    - UNDEFINED: no range has fixed the interpretation yet
    - INCLUDED: ranges define the accepted values
    - EXCLUDED: ranges define the rejected values
    """

    UNDEFINED = "undefined"
    INCLUDED = "included"
    EXCLUDED = "excluded"


class Statistic(str, Enum):
    """Statistics computed by the processors in `samplegate.stats`."""

    MIN = "min"
    MAX = "max"
    RANGE = "range"
    SUM = "sum"
    MEAN = "mean"
    VARIANCE = "variance"
    SDEV = "sdev"
    MEDIAN = "median"
    APPROX_MEDIAN = "approx_median"


class SampleClass(str, Enum):
    """Classification of one offered sample."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NAN = "nan"
    ABSENT = "absent"
