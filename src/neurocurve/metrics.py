# src/neurocurve/metrics.py
from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np

from .curves import (
    DEFAULT_POINTS_PER_HOUR,
    HOURS_PER_DAY,
    concentration,
    rate_constants,
    sample_times,
)
from .models.one_compartment import bateman_peak_time
from .types import AggregatePoint, Curve, PharmacokineticParameters

DEFAULT_CLEARANCE_THRESHOLD = 0.1
DEFAULT_OVERLAP_THRESHOLD = 0.2


def _series(data: Union[Curve, Sequence[AggregatePoint]]) -> Tuple[np.ndarray, np.ndarray]:
    if isinstance(data, Curve):
        return np.asarray(data.times, dtype=float), np.asarray(data.concentrations, dtype=float)
    t = np.asarray([p.time for p in data], dtype=float)
    y = np.asarray([p.total_load for p in data], dtype=float)
    return t, y


def peak_load(aggregate: Sequence[AggregatePoint]) -> float:
    """Highest total load of the day (0.0 for an empty aggregate)."""
    if not aggregate:
        return 0.0
    _, y = _series(aggregate)
    return float(np.max(y))


def time_of_peak(aggregate: Sequence[AggregatePoint]) -> float:
    """Hour of day of the first sample at the highest load."""
    if not aggregate:
        return 0.0
    t, y = _series(aggregate)
    return float(t[int(np.argmax(y))])


def area_under_curve(data: Union[Curve, Sequence[AggregatePoint]]) -> float:
    """Area under a curve or aggregate via trapezoidal rule (load * h)."""
    t, y = _series(data)
    if t.size < 2:
        return 0.0
    return float(np.trapezoid(y, t))


def clearance_time(params: PharmacokineticParameters,
                   threshold: float = DEFAULT_CLEARANCE_THRESHOLD,
                   points_per_hour: int = DEFAULT_POINTS_PER_HOUR) -> float:
    """
    Hours after the dose at which the effect has faded below `threshold`.

    Only samples past the analytic peak count, so the silent first minutes
    after the dose are not mistaken for clearance. Falls back to the catalog
    duration when the level stays above threshold for the whole day.
    """
    ka, ke = rate_constants(params)
    t_peak = bateman_peak_time(ka, ke)
    t = np.append(sample_times(points_per_hour), float(HOURS_PER_DAY))
    C = concentration(params, t)
    below = np.nonzero((t >= t_peak) & (C < threshold))[0]
    if below.size == 0:
        return params.duration_hours
    return float(t[below[0]])


def active_window(params: PharmacokineticParameters,
                  threshold: float = DEFAULT_OVERLAP_THRESHOLD) -> Tuple[float, float]:
    """(start, end) in absolute hours; end may run past midnight (> 24)."""
    return params.dose_time, params.dose_time + clearance_time(params, threshold=threshold)


def check_overlap(a: PharmacokineticParameters, b: PharmacokineticParameters,
                  threshold: float = DEFAULT_OVERLAP_THRESHOLD) -> bool:
    """
    True when the active windows of two doses intersect.

    Windows that run past midnight are compared against the other dose on
    the previous and next day as well.
    """
    start_a, end_a = active_window(a, threshold)
    start_b, end_b = active_window(b, threshold)
    for shift in (-HOURS_PER_DAY, 0.0, HOURS_PER_DAY):
        if start_a <= end_b + shift and end_a >= start_b + shift:
            return True
    return False
