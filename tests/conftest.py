"""Shared fixtures for samplegate tests."""
from __future__ import annotations

from typing import Optional

import pytest

from samplegate.core.components import Processor
from samplegate.core.gate import SampleGate
from samplegate.core.interval import Interval
from samplegate.core.names import RangeMode, Statistic


class RecordingProcessor(Processor):
    """Processor that records every sample the gate accepts."""

    def __init__(self, mode: RangeMode = RangeMode.UNDEFINED) -> None:
        super().__init__(mode)
        self.consumed: list[float] = []

    def update(self, sample: Optional[float]) -> bool:
        if not self.gate.is_accepted(sample):
            return False
        self.consumed.append(sample)
        return True

    def supported_statistics(self):
        return frozenset({Statistic.SUM})

    def get_value(self, statistic):
        self.check_supported(statistic)
        return float(sum(self.consumed))


@pytest.fixture()
def gate() -> SampleGate:
    return SampleGate()


@pytest.fixture()
def zero_to_ten() -> Interval:
    return Interval.closed(0, 10)


@pytest.fixture()
def excluded_gate(zero_to_ten) -> SampleGate:
    g = SampleGate()
    g.add_range(zero_to_ten, RangeMode.EXCLUDED)
    return g


@pytest.fixture()
def included_gate(zero_to_ten) -> SampleGate:
    g = SampleGate()
    g.add_range(zero_to_ten, RangeMode.INCLUDED)
    return g


@pytest.fixture()
def recorder() -> RecordingProcessor:
    return RecordingProcessor()
