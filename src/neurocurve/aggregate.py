# src/neurocurve/aggregate.py
from __future__ import annotations

from typing import Sequence

import numpy as np

from .types import AggregatePoint, Curve


def aggregate_curves(curves: Sequence[Curve]) -> tuple[AggregatePoint, ...]:
    """
    Sum aligned per-dose curves into one composite load curve.

    All curves must have the same length and share sample times; nothing is
    resampled or interpolated. Doses of the same compound are summed under
    one per-compound entry. An empty input gives an empty result.
    """
    if not curves:
        return ()

    n = len(curves[0])
    for c in curves:
        if len(c) != n:
            raise ValueError(
                f"curves must be aligned: '{c.compound_id}' has {len(c)} points, expected {n}."
            )
        if c.times != curves[0].times:
            raise ValueError(
                f"curves must be aligned: '{c.compound_id}' is sampled at different times."
            )

    # rows: curves, columns: sample index
    levels = np.array([c.concentrations for c in curves], dtype=float).reshape(len(curves), n)
    totals = levels.sum(axis=0)
    times = curves[0].times

    out: list[AggregatePoint] = []
    for i in range(n):
        per_compound: dict[str, float] = {}
        for row, c in enumerate(curves):
            per_compound[c.compound_id] = per_compound.get(c.compound_id, 0.0) + float(levels[row, i])
        out.append(AggregatePoint(time=float(times[i]), total_load=float(totals[i]),
                                  per_compound=per_compound))
    return tuple(out)
