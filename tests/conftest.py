"""Pytest fixtures."""

import pytest

from neurocurve.types import CompoundTiming, PharmacokineticParameters


@pytest.fixture
def worked_params() -> PharmacokineticParameters:
    """Catalog defaults 30/120/360 min, dose taken at 08:00."""
    return PharmacokineticParameters(
        onset_minutes=30, peak_minutes=120, duration_minutes=360, dose_time=8.0
    )


@pytest.fixture
def default_timing() -> CompoundTiming:
    return CompoundTiming(onset_minutes=30, peak_minutes=120, duration_minutes=360)
