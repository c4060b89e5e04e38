# src/neurocurve/types.py
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Mapping

# Compound timings come in MINUTES (catalog units); everything else is in
# HOURS, with curve/aggregate times expressed as hour-of-day in [0, 24).


class InvalidTimingError(ValueError):
    """Raised when pharmacokinetic parameters violate 0 <= onset < peak < duration."""

    def __init__(self, field_name: str, message: str):
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name


class Phase(enum.Enum):
    ABSORPTION = "absorption"
    PEAK = "peak"
    ELIMINATION = "elimination"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class CompoundTiming:
    """
    Catalog timing of a compound, all in minutes after administration.

    onset_minutes    : when the effect first becomes noticeable
    peak_minutes     : when the effect is strongest
    duration_minutes : when the effect is considered over
    """
    onset_minutes: float
    peak_minutes: float
    duration_minutes: float


@dataclass(frozen=True)
class PharmacokineticParameters:
    """
    Everything needed to draw one dose's curve.

    onset_minutes     : time until the effect is perceptible (>= 0)
    peak_minutes      : time of maximum effect (> onset_minutes)
    duration_minutes  : time at which the effect has ended (> peak_minutes)
    dose_time         : hour of day the dose was taken, in [0, 24)
    absorption_rate   : ka in 1/h; estimated from onset when None
    elimination_rate  : ke in 1/h; estimated from peak/duration when None
    bioavailability   : F in (0, 1]; None means 1.0
    """
    onset_minutes: float
    peak_minutes: float
    duration_minutes: float
    dose_time: float
    absorption_rate: float | None = None
    elimination_rate: float | None = None
    bioavailability: float | None = None

    def __post_init__(self):
        for name in ("onset_minutes", "peak_minutes", "duration_minutes", "dose_time"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidTimingError(name, f"must be finite (got {getattr(self, name)})")
        if self.onset_minutes < 0:
            raise InvalidTimingError("onset_minutes", f"must be >= 0 (got {self.onset_minutes})")
        if not (self.peak_minutes > self.onset_minutes):
            raise InvalidTimingError(
                "peak_minutes",
                f"must be > onset_minutes ({self.peak_minutes} <= {self.onset_minutes})",
            )
        if not (self.duration_minutes > self.peak_minutes):
            raise InvalidTimingError(
                "duration_minutes",
                f"must be > peak_minutes ({self.duration_minutes} <= {self.peak_minutes})",
            )
        if not (0.0 <= self.dose_time < 24.0):
            raise InvalidTimingError("dose_time", f"must be in [0, 24) (got {self.dose_time})")
        for name in ("absorption_rate", "elimination_rate"):
            rate = getattr(self, name)
            if rate is not None and not (math.isfinite(rate) and rate > 0):
                raise InvalidTimingError(name, f"must be > 0 (got {rate})")
        F = self.bioavailability
        if F is not None and not (0.0 < F <= 1.0):
            raise InvalidTimingError("bioavailability", f"must be in (0, 1] (got {F})")

    @property
    def peak_hours(self) -> float:
        return self.peak_minutes / 60.0

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60.0


@dataclass(frozen=True)
class CurvePoint:
    time: float           # hour of day
    concentration: float  # 1.0 = this compound's own peak
    phase: Phase


@dataclass(frozen=True)
class Curve:
    """
    A sampled 24-hour curve for one dose of one compound.

    compound_id : identifier used to attribute load back to the compound
    points      : samples in time order, one per grid instant
    """
    compound_id: str
    points: tuple[CurvePoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def times(self) -> tuple[float, ...]:
        return tuple(p.time for p in self.points)

    @property
    def concentrations(self) -> tuple[float, ...]:
        return tuple(p.concentration for p in self.points)


@dataclass(frozen=True)
class AggregatePoint:
    """
    Composite load at one instant.

    total_load is the plain sum of normalized concentrations and is NOT
    renormalized; values above 1 mean several compounds are active at once.
    """
    time: float
    total_load: float
    per_compound: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class OverloadPeriod:
    start: float
    end: float
    peak_load: float


@dataclass(frozen=True)
class CrashPoint:
    time: float
    severity: float


@dataclass(frozen=True)
class Dose:
    """
    A single logged administration, as handed over by the dose store.

    compound_id      : identifier/name of the compound (e.g., "caffeine")
    timing           : catalog onset/peak/duration of the compound
    dose_time        : hour of day the dose was taken
    absorption_rate, elimination_rate, bioavailability : optional overrides
    """
    compound_id: str
    timing: CompoundTiming
    dose_time: float
    absorption_rate: float | None = None
    elimination_rate: float | None = None
    bioavailability: float | None = None

    def parameters(self) -> PharmacokineticParameters:
        return PharmacokineticParameters(
            onset_minutes=float(self.timing.onset_minutes),
            peak_minutes=float(self.timing.peak_minutes),
            duration_minutes=float(self.timing.duration_minutes),
            dose_time=float(self.dose_time),
            absorption_rate=self.absorption_rate,
            elimination_rate=self.elimination_rate,
            bioavailability=self.bioavailability,
        )


@dataclass(frozen=True)
class DayProfile:
    """
    Everything the chart layer needs for one day.

    contributors[i] lists the compounds peaking during overloads[i].
    """
    curves: tuple[Curve, ...]
    aggregate: tuple[AggregatePoint, ...]
    overloads: tuple[OverloadPeriod, ...]
    crashes: tuple[CrashPoint, ...]
    contributors: tuple[tuple[str, ...], ...]
