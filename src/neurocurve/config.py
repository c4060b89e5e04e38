# src/neurocurve/config.py
"""Engine settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EngineSettings(BaseModel):
    """Tunables for one day's simulation. The engine reads nothing else."""

    model_config = ConfigDict(frozen=True)

    points_per_hour: int = Field(4, gt=0, description="Samples per hour (4 = every 15 minutes)")
    overload_threshold: float = Field(2.5, description="Total load above which a sample is overloaded")
    crash_drop_threshold: float = Field(0.5, ge=0, description="Minimum sample-to-sample drop for a crash")
    crash_baseline_minimum: float = Field(1.5, ge=0, description="Previous load must exceed this for a crash")
    contributor_threshold: float = Field(0.6, gt=0, le=1, description="Own level marking a compound as contributing")

    @field_validator("overload_threshold")
    @classmethod
    def validate_overload_threshold(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("overload_threshold must be > 0")
        return v
