"""Distance distribution over fixed bands."""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models.analysis import DistributionBucket
from ..models.runs import RunEntry


@dataclass(frozen=True)
class DistanceBand:
    """Half-open distance interval [min_km, max_km)."""
    label: str
    min_km: float
    max_km: float

    def contains(self, distance_km: float) -> bool:
        return self.min_km <= distance_km < self.max_km


DISTANCE_BANDS: List[DistanceBand] = [
    DistanceBand("< 5 km", 0.0, 5.0),
    DistanceBand("5-10 km", 5.0, 10.0),
    DistanceBand("10-15 km", 10.0, 15.0),
    DistanceBand("Half", 15.0, 25.0),
    DistanceBand("Full", 25.0, 43.0),
    DistanceBand("Ultra", 43.0, math.inf),
]


def band_for(distance_km: float) -> Optional[DistanceBand]:
    for band in DISTANCE_BANDS:
        if band.contains(distance_km):
            return band
    return None


def _largest_remainder(counts: List[int], total: int) -> List[int]:
    """Integer percentages of ``counts`` that sum to exactly 100."""
    if total <= 0:
        return [0] * len(counts)
    exact = [count * 100 / total for count in counts]
    floors = [int(math.floor(value)) for value in exact]
    shortfall = 100 - sum(floors)
    # Hand the leftover points to the largest fractional parts, earliest band first on ties
    order = sorted(range(len(counts)), key=lambda i: (-(exact[i] - floors[i]), i))
    for i in order[:shortfall]:
        floors[i] += 1
    return floors


def compute_distribution(runs: Sequence[RunEntry]) -> List[DistributionBucket]:
    """
    Histogram of runs over the fixed distance bands.

    Every band is reported, empty ones included. Percentages are integers
    that sum to exactly 100 for a non-empty run list (0 each when empty).
    """
    counts = [0] * len(DISTANCE_BANDS)
    distances = [0.0] * len(DISTANCE_BANDS)
    for run in runs:
        for i, band in enumerate(DISTANCE_BANDS):
            if band.contains(run.distance_km):
                counts[i] += 1
                distances[i] += run.distance_km
                break

    percentages = _largest_remainder(counts, len(runs))
    return [
        DistributionBucket(
            label=band.label,
            count=counts[i],
            percentage=percentages[i],
            total_km=round(distances[i], 1),
        )
        for i, band in enumerate(DISTANCE_BANDS)
    ]
