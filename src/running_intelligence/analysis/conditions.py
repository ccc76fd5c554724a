"""
Best Conditions

Average pace by day of week, hour of day and distance band, taken from each
run's local start time.
"""

from collections import defaultdict
from typing import Dict, List, Sequence, Tuple, TypeVar

from ..formatting import DAY_ABBR, format_pace
from ..models.analysis import (
    BestDay,
    BestDistance,
    BestHour,
    ConditionAnalysis,
    DayPace,
    HourPace,
)
from ..models.runs import RunEntry
from .distribution import DISTANCE_BANDS, band_for

MIN_CONDITION_DISTANCE_KM = 1.0
MIN_RUNS_PER_HOUR = 2
MIN_RUNS_PER_BAND = 2

K = TypeVar("K")


def _best(stats: Dict[K, Tuple[float, int]]) -> Tuple[K, float, int]:
    """Key with the lowest average pace; ties go to the higher run count."""
    key = min(stats, key=lambda k: (stats[k][0], -stats[k][1], k))
    return key, stats[key][0], stats[key][1]


def _averages(totals: Dict[K, List[float]], min_count: int) -> Dict[K, Tuple[float, int]]:
    return {
        key: (total / count, int(count))
        for key, (total, count) in totals.items()
        if count >= min_count
    }


def compute_conditions(runs: Sequence[RunEntry]) -> ConditionAnalysis:
    """
    Find the day, hour and distance band where the runner is fastest.

    Runs shorter than 1 km are ignored. Hours and distance bands need at
    least two runs to qualify. Without qualifying data the best entries are
    placeholders ('-' and a count of 0).
    """
    day_totals: Dict[int, List[float]] = defaultdict(lambda: [0.0, 0])
    hour_totals: Dict[int, List[float]] = defaultdict(lambda: [0.0, 0])
    band_totals: Dict[int, List[float]] = defaultdict(lambda: [0.0, 0])

    for run in runs:
        if run.distance_km < MIN_CONDITION_DISTANCE_KM or run.pace <= 0:
            continue
        pace = run.pace
        for totals, key in (
            (day_totals, run.start.weekday()),
            (hour_totals, run.start.hour),
            (band_totals, DISTANCE_BANDS.index(band_for(run.distance_km))),
        ):
            totals[key][0] += pace
            totals[key][1] += 1

    days = _averages(day_totals, 1)
    hours = _averages(hour_totals, MIN_RUNS_PER_HOUR)
    bands = _averages(band_totals, MIN_RUNS_PER_BAND)

    if days:
        day, day_pace, day_count = _best(days)
        best_day = BestDay(day=DAY_ABBR[day], pace=format_pace(day_pace), count=day_count)
    else:
        best_day = BestDay(day="-", pace="-", count=0)

    if hours:
        hour, hour_pace, hour_count = _best(hours)
        best_hour = BestHour(hour=f"{hour}:00", pace=format_pace(hour_pace), count=hour_count)
    else:
        best_hour = BestHour(hour="-", pace="-", count=0)

    if bands:
        band, band_pace, band_count = _best(bands)
        sweet_spot = BestDistance(
            range=DISTANCE_BANDS[band].label, pace=format_pace(band_pace), count=band_count
        )
    else:
        sweet_spot = BestDistance(range="-", pace="-", count=0)

    return ConditionAnalysis(
        best_day=best_day,
        best_hour=best_hour,
        sweet_spot_distance=sweet_spot,
        day_of_week_data=[
            DayPace(day=DAY_ABBR[d], avg_pace=round(days[d][0], 1), count=days[d][1])
            for d in sorted(days)
        ],
        hour_data=[
            HourPace(hour=h, avg_pace=round(hours[h][0], 1), count=hours[h][1])
            for h in sorted(hours)
        ],
    )
