# src/neurocurve/detection.py
"""
Scans over an aggregate load curve.

Overload periods are maximal runs of samples above a threshold; crash points
are single samples where the load fell sharply from an elevated level. Both
are plain functions over the aggregate so they can be used independently.
"""
from __future__ import annotations

from typing import Sequence

from .types import AggregatePoint, CrashPoint, Curve, OverloadPeriod

DEFAULT_OVERLOAD_THRESHOLD = 2.5
DEFAULT_DROP_THRESHOLD = 0.5
DEFAULT_BASELINE_MINIMUM = 1.5
DEFAULT_CONTRIBUTOR_THRESHOLD = 0.6


def find_overload_periods(aggregate: Sequence[AggregatePoint],
                          threshold: float = DEFAULT_OVERLOAD_THRESHOLD) -> list[OverloadPeriod]:
    """
    Maximal contiguous runs where total_load > threshold.

    start/end are the times of the first and last samples inside the run and
    peak_load is the highest load seen in it. A run still open at the last
    sample is closed there.
    """
    periods: list[OverloadPeriod] = []
    start = end = None
    peak = 0.0

    for point in aggregate:
        if point.total_load > threshold:
            if start is None:
                start, peak = point.time, point.total_load
            peak = max(peak, point.total_load)
            end = point.time
        elif start is not None:
            periods.append(OverloadPeriod(start=start, end=end, peak_load=peak))
            start = end = None

    if start is not None:
        periods.append(OverloadPeriod(start=start, end=end, peak_load=peak))
    return periods


def find_crash_points(aggregate: Sequence[AggregatePoint],
                      drop_threshold: float = DEFAULT_DROP_THRESHOLD,
                      baseline_minimum: float = DEFAULT_BASELINE_MINIMUM) -> list[CrashPoint]:
    """
    Samples where the load dropped by more than drop_threshold from the
    previous sample, and the previous sample was above baseline_minimum.
    Steep declines can yield several consecutive crash points.
    """
    crashes: list[CrashPoint] = []
    for prev, curr in zip(aggregate, aggregate[1:]):
        drop = prev.total_load - curr.total_load
        if drop > drop_threshold and prev.total_load > baseline_minimum:
            crashes.append(CrashPoint(time=curr.time, severity=drop))
    return crashes


def contributing_compounds(period: OverloadPeriod, curves: Sequence[Curve],
                           threshold: float = DEFAULT_CONTRIBUTOR_THRESHOLD) -> tuple[str, ...]:
    """Compounds whose own level exceeds `threshold` somewhere in [start, end]."""
    found: list[str] = []
    for curve in curves:
        if curve.compound_id in found:
            continue
        if any(period.start <= p.time <= period.end and p.concentration > threshold
               for p in curve.points):
            found.append(curve.compound_id)
    return tuple(found)
