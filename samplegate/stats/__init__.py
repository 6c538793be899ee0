"""
samplegate.stats
================

Concrete statistic processors and the statistic-to-processor lookup.

>>> from samplegate.stats.factory import create_processor
>>> p = create_processor("sum")
>>> p.offer(2.0); p.offer(3.0)
>>> p.get()
{<Statistic.SUM: 'sum'>: 5.0}
"""
