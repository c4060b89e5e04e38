
from datetime import datetime

import pytest

from neurocurve.dosing import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_ONSET_MINUTES,
    DEFAULT_PEAK_MINUTES,
    dose_hour,
    format_hour,
    parse_timing_string,
    single_dose,
    timing_from_catalog,
)
from neurocurve.helpers import group_doses_by_compound
from neurocurve.types import CompoundTiming, InvalidTimingError


def test_parse_catalog_ranges():
    timing = parse_timing_string("30-60 min / 2-3 hrs / 6-8 hrs")
    assert timing == CompoundTiming(onset_minutes=45, peak_minutes=150, duration_minutes=420)


def test_parse_single_values_and_hours():
    timing = parse_timing_string("15 min / 1 hour / 4 hours")
    assert timing == CompoundTiming(onset_minutes=15, peak_minutes=60, duration_minutes=240)


def test_parse_missing_parts_use_defaults():
    assert parse_timing_string("") == CompoundTiming(
        DEFAULT_ONSET_MINUTES, DEFAULT_PEAK_MINUTES, DEFAULT_DURATION_MINUTES
    )
    assert parse_timing_string("20 min / unknown") == CompoundTiming(20, 120, 360)


def test_timing_from_catalog_defaults():
    assert timing_from_catalog() == CompoundTiming(30, 120, 360)
    assert timing_from_catalog(0, 90, None) == CompoundTiming(0, 90, 360)
    assert timing_from_catalog(-5, 0, 600) == CompoundTiming(30, 120, 600)


def test_dose_hour():
    assert dose_hour(datetime(2026, 3, 1, 8, 30)) == 8.5
    assert dose_hour(datetime(2026, 3, 1, 0, 0, 36)) == pytest.approx(0.01)


def test_single_dose_from_timestamp(default_timing):
    dose = single_dose("caffeine", default_timing, datetime(2026, 3, 1, 7, 45))
    assert dose.dose_time == 7.75
    params = dose.parameters()
    assert params.dose_time == 7.75
    assert params.peak_minutes == 120.0


def test_single_dose_from_hour_validates(default_timing):
    assert single_dose("caffeine", default_timing, 9).dose_time == 9.0
    with pytest.raises(ValueError):
        single_dose("caffeine", default_timing, 24.0)


def test_malformed_timing_surfaces_when_building_parameters():
    dose = single_dose("broken", CompoundTiming(90, 60, 360), 8.0)
    with pytest.raises(InvalidTimingError):
        dose.parameters()


@pytest.mark.parametrize(
    "hour,label",
    [
        (0.0, "12:00 AM"),
        (8.0, "8:00 AM"),
        (12.0, "12:00 PM"),
        (13.5, "1:30 PM"),
        (23.75, "11:45 PM"),
        (24.0, "12:00 AM"),
    ],
)
def test_format_hour(hour, label):
    assert format_hour(hour) == label


def test_group_doses_by_compound(default_timing):
    doses = [
        single_dose("caffeine", default_timing, 14.0),
        single_dose("theanine", default_timing, 8.0),
        single_dose("caffeine", default_timing, 8.0),
    ]
    groups = group_doses_by_compound(doses)
    assert list(groups) == ["caffeine", "theanine"]
    assert [d.dose_time for d in groups["caffeine"]] == [8.0, 14.0]


def test_partial_catalog_entry_derives_missing_fields():
    # a late onset with no peak would clash with the 120 min default
    assert timing_from_catalog(onset=180) == CompoundTiming(180, 360, 1080)
    assert timing_from_catalog(onset=90, peak=400) == CompoundTiming(90, 400, 1200)
    assert timing_from_catalog(peak=20) == CompoundTiming(10, 20, 360)
    assert timing_from_catalog(onset=60) == CompoundTiming(60, 120, 360)


def test_partial_catalog_string_derives_missing_fields():
    timing = parse_timing_string("3-4 hrs")
    assert timing == CompoundTiming(210, 420, 1260)


def test_partial_catalog_entries_still_build_a_day():
    from neurocurve.simulate import run_day

    doses = [
        single_dose("ashwagandha", timing_from_catalog(onset=180), 8.0),
        single_dose("rhodiola", parse_timing_string("3-4 hrs"), 8.0),
        single_dose("caffeine", timing_from_catalog(), 8.0),
    ]
    profile = run_day(doses)
    assert [c.compound_id for c in profile.curves] == ["ashwagandha", "rhodiola", "caffeine"]
    assert all(max(c.concentrations) > 0.9 for c in profile.curves)
