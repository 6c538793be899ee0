"""
samplegate.core
===============

The gate itself and the types it works with: `SampleGate`, `Interval`,
`RangeMode` and the `Processor` base class.
"""
