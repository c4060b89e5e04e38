# src/neurocurve/curves.py
"""
Curve generation for a single dose.

A dose's effect is modeled with the one-compartment Bateman curve and
rescaled so that 1.0 is the compound's own analytic peak. Rate constants
missing from the catalog are estimated from the onset/peak/duration timings.
"""
from __future__ import annotations

import math

import numpy as np

from .models.one_compartment import bateman, bateman_peak_time
from .types import Curve, CurvePoint, PharmacokineticParameters, Phase

HOURS_PER_DAY = 24
DEFAULT_POINTS_PER_HOUR = 4

FALLBACK_ABSORPTION_RATE = 2.0   # 1/h, used when onset is immediate
FALLBACK_ELIMINATION_RATE = 0.5  # 1/h, used when duration <= peak

# Normalized values under this are reported as exactly 0.
ACTIVITY_CUTOFF = 0.05
MIN_PEAK_RAW = 1e-10


def estimate_absorption_rate(onset_minutes: float) -> float:
    """
    ka (1/h) such that about 50% is absorbed by the stated onset.

    "Onset" means first noticeable effect, so 3 half-lives are packed into
    the onset window rather than the ~90% absorption the textbook uses.
    """
    if onset_minutes > 0:
        return (3.0 * math.log(2)) / (onset_minutes / 60.0)
    return FALLBACK_ABSORPTION_RATE


def estimate_elimination_rate(peak_minutes: float, duration_minutes: float) -> float:
    """ke (1/h) assuming three half-lives between peak and end of duration."""
    if duration_minutes <= peak_minutes:
        return FALLBACK_ELIMINATION_RATE
    half_life_h = ((duration_minutes - peak_minutes) / 60.0) / 3.0
    return math.log(2) / half_life_h


def rate_constants(params: PharmacokineticParameters) -> tuple[float, float]:
    """Return (ka, ke), preferring explicit rates over estimates."""
    ka = params.absorption_rate
    if ka is None:
        ka = estimate_absorption_rate(params.onset_minutes)
    ke = params.elimination_rate
    if ke is None:
        ke = estimate_elimination_rate(params.peak_minutes, params.duration_minutes)
    return float(ka), float(ke)


def concentration(params: PharmacokineticParameters, hours_since_dose) -> np.ndarray:
    """
    Normalized effect intensity at the given time(s) after the dose.

    Returns an array of the same shape as `hours_since_dose` with values in
    [0, 1]. Values below ACTIVITY_CUTOFF are snapped to 0, and degenerate
    parameter sets (no measurable peak) give an all-zero result.
    """
    t = np.asarray(hours_since_dose, dtype=float)
    ka, ke = rate_constants(params)
    F = 1.0 if params.bioavailability is None else float(params.bioavailability)

    if ka <= 0 or ke <= 0:
        return np.zeros_like(t)

    max_raw = float(bateman(bateman_peak_time(ka, ke), ka, ke, F))
    if not math.isfinite(max_raw) or max_raw < MIN_PEAK_RAW:
        return np.zeros_like(t)

    C = bateman(t, ka, ke, F) / max_raw
    C = np.nan_to_num(C, nan=0.0, posinf=0.0, neginf=0.0)
    C = np.clip(C, 0.0, 1.0)
    return np.where(C < ACTIVITY_CUTOFF, 0.0, C)


def concentration_at(params: PharmacokineticParameters, hours_since_dose: float) -> float:
    return float(concentration(params, hours_since_dose))


def classify_phase(params: PharmacokineticParameters, hours_since_dose: float,
                   level: float) -> Phase:
    """Phase of the dose at `hours_since_dose`, given the concentration there."""
    if level == 0:
        return Phase.INACTIVE
    peak_h = params.peak_hours
    if hours_since_dose < 0.9 * peak_h:
        return Phase.ABSORPTION
    if hours_since_dose < 1.1 * peak_h:
        return Phase.PEAK
    if hours_since_dose < params.duration_hours:
        return Phase.ELIMINATION
    return Phase.INACTIVE


def hours_since_dose(hour_of_day, dose_time: float):
    """
    Offset between wall-clock hour(s) and the dose time.

    Hours earlier in the day than the dose wrap to the previous day's dose,
    so a dose taken at 22:00 still shows up at 01:00.
    """
    delta = np.asarray(hour_of_day, dtype=float) - float(dose_time)
    delta = np.where(delta < 0, delta + HOURS_PER_DAY, delta)
    if delta.ndim == 0:
        return float(delta)
    return delta


def sample_times(points_per_hour: int = DEFAULT_POINTS_PER_HOUR) -> np.ndarray:
    """The shared hour-of-day grid: 24 * points_per_hour samples starting at 0."""
    _validate_points_per_hour(points_per_hour)
    n = HOURS_PER_DAY * points_per_hour
    return np.arange(n, dtype=float) / points_per_hour


def generate_curve(params: PharmacokineticParameters,
                   points_per_hour: int = DEFAULT_POINTS_PER_HOUR,
                   compound_id: str = "default") -> Curve:
    """
    Sample one dose over a full day.

    params          : validated parameters of the dose
    points_per_hour : sampling density (4 = every 15 minutes)
    compound_id     : label carried into the aggregate's per-compound map
    """
    times = sample_times(points_per_hour)
    offsets = hours_since_dose(times, params.dose_time)
    levels = concentration(params, offsets)

    points = tuple(
        CurvePoint(
            time=float(h),
            concentration=float(c),
            phase=classify_phase(params, float(dt), float(c)),
        )
        for h, dt, c in zip(times, offsets, levels)
    )
    return Curve(compound_id=compound_id, points=points)


def concentration_now(params: PharmacokineticParameters, hour_of_day: float) -> float:
    """Current level of a dose at a wall-clock hour of day."""
    return concentration_at(params, hours_since_dose(hour_of_day % HOURS_PER_DAY, params.dose_time))


def _validate_points_per_hour(x: int) -> None:
    if not (isinstance(x, int) and not isinstance(x, bool) and x > 0):
        raise ValueError(f"points_per_hour must be a positive integer (got {x}).")
