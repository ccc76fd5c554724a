"""Acute:Chronic Workload Ratio (ACWR) from run distance."""

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Union

from ..models.load import LoadZone, TrainingLoad
from ..models.runs import RunEntry, as_date

ACUTE_DAYS = 7
CHRONIC_DAYS = 42
CHRONIC_WEEKS = CHRONIC_DAYS / ACUTE_DAYS  # 6

OPTIMAL_CEILING = 1.3
DANGER_THRESHOLD = 1.5


@dataclass(frozen=True)
class ZoneBand:
    """Ratios below ``upper`` (and at or above the previous band) fall in ``zone``."""
    upper: float
    zone: LoadZone
    label: str
    color: str


# Lower bound inclusive, upper bound exclusive; the last band is open-ended.
ZONE_BANDS: List[ZoneBand] = [
    ZoneBand(0.8, LoadZone.DETRAINING, "Detraining", "#9ca3af"),
    ZoneBand(1.0, LoadZone.RECOVERY, "Recovery", "#3b82f6"),
    ZoneBand(OPTIMAL_CEILING, LoadZone.OPTIMAL, "Optimal", "#22c55e"),
    ZoneBand(DANGER_THRESHOLD, LoadZone.OVERREACHING, "Overreaching", "#f59e0b"),
    ZoneBand(math.inf, LoadZone.DANGER, "Injury Risk", "#ef4444"),
]

INSUFFICIENT_BAND = ZoneBand(0.0, LoadZone.INSUFFICIENT_DATA, "Not Enough Data", "#6b7280")


def classify_load_ratio(ratio: float) -> ZoneBand:
    """
    Map an ACWR value to its zone.

    Based on Gabbett (2016):
    - < 0.8: Detraining (not enough stimulus)
    - 0.8 - 1.0: Recovery
    - 1.0 - 1.3: Optimal (sweet spot for adaptation)
    - 1.3 - 1.5: Overreaching (elevated injury risk)
    - >= 1.5: Danger (high injury risk)
    """
    for band in ZONE_BANDS:
        if ratio < band.upper:
            return band
    return ZONE_BANDS[-1]


def daily_distance(runs: Iterable[RunEntry]) -> Dict[date, float]:
    """Total distance per calendar day."""
    loads: Dict[date, float] = defaultdict(float)
    for run in runs:
        loads[run.day] += run.distance_km
    return dict(loads)


def window_sum(loads: Dict[date, float], today: date, days: int) -> float:
    """Sum of daily loads over ``days`` days ending on ``today`` inclusive."""
    start = today - timedelta(days=days - 1)
    return sum(km for day, km in loads.items() if start <= day <= today)


def compute_training_load(
    runs: Iterable[RunEntry],
    today: Union[date, datetime],
    extra_km: float = 0.0,
) -> TrainingLoad:
    """
    Calculate acute and chronic load and their ratio.

    Acute load is the distance run over the 7 days ending ``today``. Chronic
    load is the distance over the 42 days ending ``today`` divided by 6, i.e. a
    weekly-equivalent rate directly comparable with the acute figure.

    Args:
        runs: Run history in any order
        today: Anchor date of both windows
        extra_km: Hypothetical additional distance run on ``today``; used by
            the what-if projections so they share this exact formula

    Returns:
        TrainingLoad; when chronic load is zero the ratio is 0 and the zone
        is ``insufficient_data``
    """
    anchor = as_date(today)
    loads = daily_distance(runs)
    if extra_km > 0:
        loads[anchor] = loads.get(anchor, 0.0) + extra_km

    acute = window_sum(loads, anchor, ACUTE_DAYS)
    chronic = window_sum(loads, anchor, CHRONIC_DAYS) / CHRONIC_WEEKS

    if chronic <= 0:
        band = INSUFFICIENT_BAND
        ratio = 0.0
    else:
        # Zone follows the displayed (rounded) ratio so both always agree.
        ratio = round(acute / chronic, 2)
        band = classify_load_ratio(ratio)

    return TrainingLoad(
        acute=round(acute, 1),
        chronic=round(chronic, 1),
        ratio=ratio,
        zone=band.zone,
        zone_label=band.label,
        zone_color=band.color,
        insufficient_data=band.zone == LoadZone.INSUFFICIENT_DATA,
    )


def project_training_load(
    runs: Iterable[RunEntry],
    today: Union[date, datetime],
    distance_km: float,
) -> TrainingLoad:
    """Training load as it would stand after running ``distance_km`` today."""
    return compute_training_load(runs, today, extra_km=distance_km)


def max_distance_for_ratio(
    runs: Iterable[RunEntry],
    today: Union[date, datetime],
    target_ratio: float,
) -> float:
    """
    Largest distance that can be added today while keeping the ratio at
    ``target_ratio``.

    Adding x km today raises both sums: (A + x) / ((C + x) / 6) = r, so
    x = (r * C - 6 * A) / (6 - r), with A and C the raw 7 and 42 day sums.

    Returns:
        Distance in km (never negative), 0 when there is no chronic base
    """
    anchor = as_date(today)
    loads = daily_distance(runs)
    acute = window_sum(loads, anchor, ACUTE_DAYS)
    chronic_total = window_sum(loads, anchor, CHRONIC_DAYS)
    if chronic_total <= 0 or target_ratio >= CHRONIC_WEEKS:
        return 0.0
    distance = (target_ratio * chronic_total - CHRONIC_WEEKS * acute) / (CHRONIC_WEEKS - target_ratio)
    return max(0.0, distance)
