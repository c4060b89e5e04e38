# src/neurocurve/simulate.py
from __future__ import annotations

from typing import Optional, Sequence

import structlog

from .aggregate import aggregate_curves
from .config import EngineSettings
from .curves import generate_curve
from .detection import contributing_compounds, find_crash_points, find_overload_periods
from .helpers import group_doses_by_compound
from .types import Curve, DayProfile, Dose

logger = structlog.get_logger(__name__)


def run_single(dose: Dose, settings: Optional[EngineSettings] = None) -> Curve:
    """
    High-level wrapper for sampling one logged dose over the day.
    """
    settings = settings or EngineSettings()
    return generate_curve(dose.parameters(), points_per_hour=settings.points_per_hour,
                          compound_id=dose.compound_id)


def run_day(doses: Sequence[Dose], settings: Optional[EngineSettings] = None) -> DayProfile:
    """
    Build the full day profile for a set of logged doses.

    Curves are produced per dose (grouped by compound, in order of first
    appearance), summed into the aggregate, scanned for overloads and
    crashes, and each overload is attributed to the compounds peaking in it.
    Raises InvalidTimingError if any dose carries malformed timings.
    """
    settings = settings or EngineSettings()
    log = logger.bind(n_doses=len(doses), points_per_hour=settings.points_per_hour)

    curves: list[Curve] = []
    for compound_id, group in group_doses_by_compound(doses).items():
        for dose in group:
            curves.append(run_single(dose, settings))
        log.debug("Curves generated", compound_id=compound_id, n_curves=len(group))

    aggregate = aggregate_curves(curves)
    overloads = find_overload_periods(aggregate, threshold=settings.overload_threshold)
    crashes = find_crash_points(aggregate, drop_threshold=settings.crash_drop_threshold,
                                baseline_minimum=settings.crash_baseline_minimum)
    contributors = tuple(
        contributing_compounds(p, curves, threshold=settings.contributor_threshold)
        for p in overloads
    )

    log.info("Day profile computed", n_curves=len(curves), n_overloads=len(overloads),
             n_crashes=len(crashes))
    return DayProfile(
        curves=tuple(curves),
        aggregate=aggregate,
        overloads=tuple(overloads),
        crashes=tuple(crashes),
        contributors=contributors,
    )
