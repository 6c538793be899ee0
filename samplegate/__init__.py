"""
samplegate: a streaming sample-acceptance gate for online statistics.

Online statistics are usually computed from a stream of samples that is not
clean: values go missing, NaN shows up, and some ranges of values are known
to be invalid (sentinel "no data" codes, saturated sensor readings) or are
the only ones of interest. samplegate puts a small, explicit gate in front of
every statistic. The gate holds numeric ranges read either as an inclusion
list or as an exclusion list, decides per sample whether it is accepted, and
counts what was offered, what was accepted and how many samples were NaN.

Statistic processors embed a gate and only describe how an accepted sample
changes their running state. `StreamingSampleStats` groups processors so
several statistics can be computed from one pass over the data.

Example
-------
>>> import samplegate
>>> stats = samplegate.StreamingSampleStats()
>>> stats.set_statistics([samplegate.Statistic.MEDIAN])
>>> stats.add_range(samplegate.Interval.point(-9999))
>>> stats.offer_all([3.0, -9999.0, 1.0, 2.0])
>>> stats.get_statistic_value("median")
2.0
"""

from samplegate.__version__ import __version__
from samplegate.core.components import Processor
from samplegate.core.gate import ConfigurationError, SampleGate
from samplegate.core.interval import Interval
from samplegate.core.names import RangeMode, SampleClass, Statistic
from samplegate.runtime.streaming import StreamingSampleStats

__all__ = [
    "__version__",
    "ConfigurationError",
    "Interval",
    "Processor",
    "RangeMode",
    "SampleClass",
    "SampleGate",
    "Statistic",
    "StreamingSampleStats",
]
