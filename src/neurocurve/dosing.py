# src/neurocurve/dosing.py
from __future__ import annotations

import re
from datetime import datetime
from typing import Optional, Union

from .types import CompoundTiming, Dose

# Used when the catalog has no usable timing for a compound.
DEFAULT_ONSET_MINUTES = 30.0
DEFAULT_PEAK_MINUTES = 120.0
DEFAULT_DURATION_MINUTES = 360.0

_TIME_PART = re.compile(r"(\d+(?:\.\d+)?)(?:\s*-\s*(\d+(?:\.\d+)?))?\s*(min|hr|hour|h)", re.IGNORECASE)


def timing_from_catalog(onset: Optional[float] = None, peak: Optional[float] = None,
                        duration: Optional[float] = None) -> CompoundTiming:
    """
    Build a CompoundTiming from possibly incomplete catalog data (minutes).

    Missing or non-positive values take the defaults 30/120/360, unless the
    default would break onset < peak < duration against the values that are
    present. Then peak is derived as onset * 2 and duration as peak * 3, and
    a missing onset becomes half the peak.
    Example: onset=180 only -> 180 / 360 / 1080
    """
    onset_m = _or_none(onset, allow_zero=True)
    peak_m = _or_none(peak)
    duration_m = _or_none(duration)

    if peak_m is None:
        peak_m = DEFAULT_PEAK_MINUTES
        if onset_m is not None and peak_m <= onset_m:
            peak_m = onset_m * 2
    if onset_m is None:
        onset_m = DEFAULT_ONSET_MINUTES
        if onset_m >= peak_m:
            onset_m = peak_m / 2
    if duration_m is None:
        duration_m = DEFAULT_DURATION_MINUTES
        if duration_m <= peak_m:
            duration_m = peak_m * 3

    return CompoundTiming(onset_minutes=onset_m, peak_minutes=peak_m, duration_minutes=duration_m)


def parse_timing_string(text: str) -> CompoundTiming:
    """
    Parse catalog timing text such as "30-60 min / 2-3 hrs / 6-8 hrs".

    Parts are onset / peak / duration. A range N-M becomes its midpoint;
    hours are converted to minutes. Parts that cannot be read fall back to
    the defaults.
    Example: "30-60 min / 2-3 hrs / 6-8 hrs" -> 45 / 150 / 420 minutes
    """
    parts = [p.strip() for p in (text or "").split("/")]
    values = [_parse_minutes(p) for p in parts[:3]]
    values += [None] * (3 - len(values))
    return timing_from_catalog(*values)


def dose_hour(taken_at: datetime) -> float:
    """Hour of day of a timestamp, with minutes and seconds as the fraction."""
    return taken_at.hour + taken_at.minute / 60.0 + taken_at.second / 3600.0


def single_dose(compound_id: str, timing: CompoundTiming,
                taken_at: Union[datetime, float], *,
                absorption_rate: Optional[float] = None,
                elimination_rate: Optional[float] = None,
                bioavailability: Optional[float] = None) -> Dose:
    """
    Create one Dose record from a logged administration.

    compound_id : identifier/name of the compound
    timing      : catalog onset/peak/duration
    taken_at    : a timestamp, or an hour of day in [0, 24)
    """
    if isinstance(taken_at, datetime):
        hour = dose_hour(taken_at)
    else:
        hour = float(taken_at)
        _validate_hour("taken_at", hour)
    return Dose(compound_id=compound_id, timing=timing, dose_time=hour,
                absorption_rate=absorption_rate, elimination_rate=elimination_rate,
                bioavailability=bioavailability)


def format_hour(hour: float) -> str:
    """12-hour clock label for an hour of day, e.g. 13.5 -> "1:30 PM"."""
    total_minutes = int(round(float(hour) * 60)) % (24 * 60)
    h, m = divmod(total_minutes, 60)
    suffix = "AM" if h < 12 else "PM"
    h12 = h % 12 or 12
    return f"{h12}:{m:02d} {suffix}"


def _parse_minutes(part: str) -> Optional[float]:
    match = _TIME_PART.search(part)
    if not match:
        return None
    low = float(match.group(1))
    value = (low + float(match.group(2))) / 2 if match.group(2) else low
    unit = match.group(3).lower()
    return value * 60 if unit.startswith("h") else value


def _or_none(x: Optional[float], allow_zero: bool = False) -> Optional[float]:
    if x is None:
        return None
    x = float(x)
    if x > 0 or (allow_zero and x == 0):
        return x
    return None


# --------------------------
# Small input validators
# --------------------------
def _validate_hour(name: str, x: float) -> None:
    if not (0.0 <= x < 24.0):
        raise ValueError(f"{name} must be an hour of day in [0, 24) (got {x}).")
