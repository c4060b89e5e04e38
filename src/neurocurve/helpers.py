from collections import defaultdict
from typing import Iterable

from .types import Dose


def group_doses_by_compound(doses: Iterable[Dose]) -> dict[str, tuple[Dose, ...]]:
    """
    Group doses by compound_id, each group ordered by time of day.
    """
    buckets: dict[str, list[Dose]] = defaultdict(list)
    for d in doses:
        buckets[d.compound_id].append(d)
    return {
        compound_id: tuple(sorted(ds, key=lambda x: x.dose_time))
        for compound_id, ds in buckets.items()
    }
