
import pytest

from neurocurve.aggregate import aggregate_curves
from neurocurve.curves import generate_curve
from neurocurve.detection import (
    contributing_compounds,
    find_crash_points,
    find_overload_periods,
)
from neurocurve.types import AggregatePoint, OverloadPeriod, PharmacokineticParameters


def _aggregate(loads, step=1.0):
    return tuple(AggregatePoint(time=i * step, total_load=v) for i, v in enumerate(loads))


def test_crash_example():
    """
    [0.2, 2.0, 2.0, 0.3]: one crash at t=3 (drop 1.7 from 2.0), no overload
    because 2.0 stays under the default 2.5 threshold.
    """
    agg = _aggregate([0.2, 2.0, 2.0, 0.3])

    crashes = find_crash_points(agg)
    assert len(crashes) == 1
    assert crashes[0].time == 3.0
    assert crashes[0].severity == pytest.approx(1.7)

    assert find_overload_periods(agg) == []


def test_crash_requires_elevated_baseline():
    # drop of 0.9 but from 1.2, under the 1.5 baseline
    assert find_crash_points(_aggregate([1.2, 0.3])) == []
    # drop of exactly the threshold is not a crash
    assert find_crash_points(_aggregate([2.0, 1.5])) == []


def test_steep_decline_yields_consecutive_crashes():
    crashes = find_crash_points(_aggregate([3.5, 2.8, 2.1, 1.4, 0.7]))
    assert [c.time for c in crashes] == [1.0, 2.0, 3.0]


def test_crash_custom_thresholds():
    agg = _aggregate([1.0, 0.7])
    assert find_crash_points(agg) == []
    crashes = find_crash_points(agg, drop_threshold=0.2, baseline_minimum=0.5)
    assert len(crashes) == 1 and crashes[0].time == 1.0


def test_crash_scan_handles_short_input():
    assert find_crash_points(()) == []
    assert find_crash_points(_aggregate([3.0])) == []


def test_overload_periods_are_maximal_runs():
    loads = [1.0, 2.6, 3.1, 2.7, 2.5, 2.9, 1.0]
    agg = _aggregate(loads)

    periods = find_overload_periods(agg)

    assert periods == [
        OverloadPeriod(start=1.0, end=3.0, peak_load=3.1),
        OverloadPeriod(start=5.0, end=5.0, peak_load=2.9),
    ]
    # containment: inside above threshold, neighbours outside are not
    for p in periods:
        inside = [a for a in agg if p.start <= a.time <= p.end]
        assert all(a.total_load > 2.5 for a in inside)
        before = [a for a in agg if a.time < p.start]
        after = [a for a in agg if a.time > p.end]
        if before:
            assert before[-1].total_load <= 2.5
        if after:
            assert after[0].total_load <= 2.5


def test_overload_open_at_end_of_day_is_emitted():
    periods = find_overload_periods(_aggregate([0.0, 3.0, 4.0]))
    assert periods == [OverloadPeriod(start=1.0, end=2.0, peak_load=4.0)]


def test_overload_custom_threshold():
    agg = _aggregate([0.5, 1.2, 0.5])
    assert find_overload_periods(agg) == []
    assert find_overload_periods(agg, threshold=1.0) == [OverloadPeriod(1.0, 1.0, 1.2)]


def test_overload_from_stacked_doses():
    params = PharmacokineticParameters(onset_minutes=30, peak_minutes=120,
                                       duration_minutes=360, dose_time=8.0)
    curves = [generate_curve(params, compound_id=name) for name in ("caffeine", "theanine", "tyrosine")]
    agg = aggregate_curves(curves)

    periods = find_overload_periods(agg)

    assert len(periods) == 1
    period = periods[0]
    assert period.start == 8.5
    assert period.end == 9.0
    assert 2.5 < period.peak_load <= 3.0
    assert contributing_compounds(period, curves) == ("caffeine", "theanine", "tyrosine")


def test_contributors_exclude_quiet_compounds():
    active = PharmacokineticParameters(onset_minutes=30, peak_minutes=120,
                                       duration_minutes=360, dose_time=8.0)
    evening = PharmacokineticParameters(onset_minutes=30, peak_minutes=60,
                                        duration_minutes=480, dose_time=21.0)
    curves = [
        generate_curve(active, compound_id="caffeine"),
        generate_curve(active, compound_id="caffeine"),
        generate_curve(evening, compound_id="melatonin"),
    ]
    period = OverloadPeriod(start=8.5, end=9.0, peak_load=2.0)
    assert contributing_compounds(period, curves) == ("caffeine",)
    assert contributing_compounds(period, curves, threshold=0.999) == ()
