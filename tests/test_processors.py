"""Tests for the Processor base class and the concrete processors."""
import math
import random
import statistics as pystats

import pytest

from samplegate.core.interval import Interval
from samplegate.core.names import RangeMode, Statistic
from samplegate.stats.factory import as_statistic, create_processor, processor_class_for
from samplegate.stats.processors import (
    ApproxMedianProcessor,
    ExactMedianProcessor,
    ExtremaProcessor,
    MeanProcessor,
    SumProcessor,
    VarianceProcessor,
)


# ── Processor base ──

def test_offer_counts_match_update_results(recorder):
    recorder.add_range(Interval.closed(0, 10))
    samples = [1.0, 11.0, None, math.nan, -3.0, 10.0, 42.0]
    for s in samples:
        recorder.offer(s)
    assert recorder.num_offered == len(samples)
    assert recorder.num_accepted == len(recorder.consumed) == 3
    assert recorder.num_nan == 1
    assert recorder.consumed == [11.0, -3.0, 42.0]


def test_counters_independent_of_get(recorder):
    for s in (1.0, 2.0):
        recorder.offer(s)
    recorder.get()
    recorder.get()
    assert recorder.num_offered == 2
    assert recorder.num_accepted == 2


def test_processor_mode_passthrough():
    p = SumProcessor(RangeMode.INCLUDED)
    assert p.mode is RangeMode.INCLUDED
    p.add_range(Interval.closed(0, 1))
    assert p.get_ranges() == (Interval.closed(0, 1),)


def test_unsupported_statistic_raises():
    p = SumProcessor()
    with pytest.raises(ValueError, match="does not support"):
        p.get_value(Statistic.MEAN)


def test_get_returns_all_supported():
    p = VarianceProcessor()
    for x in (1.0, 2.0, 3.0):
        p.offer(x)
    result = p.get()
    assert set(result) == {Statistic.MEAN, Statistic.VARIANCE, Statistic.SDEV}
    assert result[Statistic.MEAN] == 2.0


# ── empty results ──

@pytest.mark.parametrize(
    "cls, stat",
    [
        (ExtremaProcessor, Statistic.MIN),
        (ExtremaProcessor, Statistic.RANGE),
        (MeanProcessor, Statistic.MEAN),
        (VarianceProcessor, Statistic.VARIANCE),
        (ExactMedianProcessor, Statistic.MEDIAN),
        (ApproxMedianProcessor, Statistic.APPROX_MEDIAN),
    ],
)
def test_empty_is_nan(cls, stat):
    assert math.isnan(cls().get_value(stat))


def test_empty_sum_is_zero():
    assert SumProcessor().get_value(Statistic.SUM) == 0.0


# ── values ──

def test_extrema():
    p = ExtremaProcessor()
    for x in (3.0, -2.0, 7.5, None, math.nan, 0.0):
        p.offer(x)
    assert p.get_value(Statistic.MIN) == -2.0
    assert p.get_value(Statistic.MAX) == 7.5
    assert p.get_value(Statistic.RANGE) == 9.5


def test_sum_is_compensated():
    p = SumProcessor()
    for x in [0.1] * 10:
        p.offer(x)
    assert p.get_value(Statistic.SUM) == pytest.approx(1.0, abs=1e-15)


def test_mean_respects_ranges():
    p = MeanProcessor()
    p.add_range(Interval.at_least(100))
    for x in (1.0, 2.0, 300.0, 3.0):
        p.offer(x)
    assert p.get_value(Statistic.MEAN) == 2.0


def test_variance_matches_reference():
    rng = random.Random(7)
    data = [rng.gauss(10.0, 3.0) for _ in range(500)]
    p = VarianceProcessor()
    for x in data:
        p.offer(x)
    assert p.get_value(Statistic.MEAN) == pytest.approx(pystats.fmean(data))
    assert p.get_value(Statistic.VARIANCE) == pytest.approx(pystats.variance(data))
    assert p.get_value(Statistic.SDEV) == pytest.approx(pystats.stdev(data))


def test_variance_single_sample_is_nan():
    p = VarianceProcessor()
    p.offer(4.0)
    assert p.get_value(Statistic.MEAN) == 4.0
    assert math.isnan(p.get_value(Statistic.VARIANCE))
    assert math.isnan(p.get_value(Statistic.SDEV))


def test_exact_median_odd_and_even():
    p = ExactMedianProcessor()
    for x in (5.0, 1.0, 3.0):
        p.offer(x)
    assert p.get_value(Statistic.MEDIAN) == 3.0
    p.offer(10.0)
    assert p.get_value(Statistic.MEDIAN) == 4.0


def test_exact_median_included_range():
    p = ExactMedianProcessor(RangeMode.INCLUDED)
    p.add_range(Interval.closed(0, 10))
    for x in (-50.0, 2.0, 4.0, 6.0, 99.0):
        p.offer(x)
    assert p.get_value(Statistic.MEDIAN) == 4.0
    assert p.num_accepted == 3


def test_approx_median_close_to_exact():
    rng = random.Random(11)
    data = [rng.uniform(0.0, 1000.0) for _ in range(5000)]
    approx = ApproxMedianProcessor()
    for x in data:
        approx.offer(x)
    assert approx.get_value(Statistic.APPROX_MEDIAN) == pytest.approx(
        pystats.median(data), abs=100.0
    )


def test_approx_median_small_sample_is_exact():
    p = ApproxMedianProcessor()
    for x in (9.0, 1.0, 5.0):
        p.offer(x)
    assert p.get_value(Statistic.APPROX_MEDIAN) == 5.0


@pytest.mark.parametrize("base", [2, 1, 30])
def test_approx_median_rejects_bad_base(base):
    with pytest.raises(ValueError, match="base"):
        ApproxMedianProcessor(base=base)


# ── factory ──

@pytest.mark.parametrize(
    "stat, cls",
    [
        (Statistic.MIN, ExtremaProcessor),
        (Statistic.MAX, ExtremaProcessor),
        (Statistic.RANGE, ExtremaProcessor),
        (Statistic.SUM, SumProcessor),
        (Statistic.MEAN, MeanProcessor),
        (Statistic.VARIANCE, VarianceProcessor),
        (Statistic.SDEV, VarianceProcessor),
        (Statistic.MEDIAN, ExactMedianProcessor),
        (Statistic.APPROX_MEDIAN, ApproxMedianProcessor),
    ],
)
def test_processor_class_for(stat, cls):
    assert processor_class_for(stat) is cls
    assert create_processor(stat).supports(stat)


def test_every_statistic_has_a_processor():
    for stat in Statistic:
        assert processor_class_for(stat) is not None


def test_as_statistic_accepts_names():
    assert as_statistic("MEAN") is Statistic.MEAN
    assert as_statistic(Statistic.SUM) is Statistic.SUM


def test_as_statistic_unknown():
    with pytest.raises(ValueError, match="Unknown statistic"):
        as_statistic("kurtosis")


def test_create_processor_with_mode():
    p = create_processor("median", RangeMode.INCLUDED)
    assert p.mode is RangeMode.INCLUDED


# ── infinite samples ──

@pytest.mark.parametrize(
    "samples", [[math.inf], [1.0, math.inf], [math.inf, 1.0], [2.0, math.inf, -5.0]]
)
def test_sum_of_infinite_samples(samples):
    p = SumProcessor()
    for x in samples:
        p.offer(x)
    assert p.get_value(Statistic.SUM) == math.inf


def test_sum_of_opposite_infinities_is_nan():
    p = SumProcessor()
    for x in (math.inf, 1.0, -math.inf):
        p.offer(x)
    assert math.isnan(p.get_value(Statistic.SUM))


def test_sum_stays_compensated_after_negative_infinity():
    p = SumProcessor()
    for x in (0.1, -math.inf, 0.2):
        p.offer(x)
    assert p.get_value(Statistic.SUM) == -math.inf


@pytest.mark.parametrize("cls", [MeanProcessor, VarianceProcessor])
@pytest.mark.parametrize(
    "samples", [[math.inf], [1.0, math.inf], [math.inf, 1.0], [math.inf, 1.0, 2.0]]
)
def test_mean_of_infinite_samples(cls, samples):
    p = cls()
    for x in samples:
        p.offer(x)
    assert p.get_value(Statistic.MEAN) == math.inf


@pytest.mark.parametrize("cls", [MeanProcessor, VarianceProcessor])
def test_mean_of_negative_infinity(cls):
    p = cls()
    for x in (3.0, -math.inf, 4.0):
        p.offer(x)
    assert p.get_value(Statistic.MEAN) == -math.inf


def test_variance_with_infinite_sample_is_nan():
    p = VarianceProcessor()
    for x in (1.0, math.inf, 2.0):
        p.offer(x)
    assert math.isnan(p.get_value(Statistic.VARIANCE))
    assert math.isnan(p.get_value(Statistic.SDEV))
    assert p.num_accepted == 3


def test_extrema_with_infinite_samples():
    p = ExtremaProcessor()
    for x in (1.0, math.inf, -2.0):
        p.offer(x)
    assert p.get_value(Statistic.MAX) == math.inf
    assert p.get_value(Statistic.MIN) == -2.0
    assert p.get_value(Statistic.RANGE) == math.inf
