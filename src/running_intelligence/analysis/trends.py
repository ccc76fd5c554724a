"""
Pace Trend Analysis

Weekly average pace with a distance-weighted 4-week rolling average.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence, Tuple

from ..formatting import format_day, safe_div
from ..models.analysis import PaceTrendPoint
from ..models.runs import RunEntry
from .volume import week_start

MIN_TREND_DISTANCE_KM = 2.0
MIN_TREND_RUNS = 4
MAX_TREND_WEEKS = 52
ROLLING_WEEKS = 4


def _describe_improvement(diff_secs: int) -> str:
    if diff_secs > 0:
        return f"{diff_secs}s/km faster over the period"
    elif diff_secs < 0:
        return f"{abs(diff_secs)}s/km slower over the period"
    else:
        return "Pace unchanged"


def compute_pace_trend(runs: Sequence[RunEntry]) -> Tuple[List[PaceTrendPoint], str]:
    """
    Calculate the weekly pace trend.

    Args:
        runs: Run history in any order

    Returns:
        (points oldest first, improvement summary). Fewer than 4 runs of at
        least 2 km yields ([], "-").
    """
    eligible = [r for r in runs if r.distance_km >= MIN_TREND_DISTANCE_KM and r.time_seconds > 0]
    if len(eligible) < MIN_TREND_RUNS:
        return [], "-"

    weeks: Dict[date, List[float]] = defaultdict(lambda: [0.0, 0.0])
    for run in eligible:
        totals = weeks[week_start(run.day)]
        totals[0] += run.time_seconds
        totals[1] += run.distance_km

    recent = sorted(weeks.items())[-MAX_TREND_WEEKS:]

    points: List[PaceTrendPoint] = []
    for i, (monday, (seconds, km)) in enumerate(recent):
        window = recent[max(0, i - (ROLLING_WEEKS - 1)): i + 1]
        window_secs = sum(w[1][0] for w in window)
        window_km = sum(w[1][1] for w in window)
        raw_pace = safe_div(seconds, km)
        points.append(
            PaceTrendPoint(
                week=format_day(monday),
                week_key=monday.isoformat(),
                avg_pace=round(safe_div(window_secs, window_km, raw_pace), 1),
                raw_pace=round(raw_pace, 1),
                distance=round(km, 1),
            )
        )

    # Compare first quarter with last quarter of the period
    quarter = max(1, len(points) // 4)
    first_avg = sum(p.avg_pace for p in points[:quarter]) / quarter
    last_avg = sum(p.avg_pace for p in points[-quarter:]) / quarter
    return points, _describe_improvement(int(round(first_avg - last_avg)))
