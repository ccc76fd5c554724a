"""
Volume Aggregation

Weekly and monthly distance bins plus year-over-year cumulative curves.
Weeks start on Monday (ISO weeks) regardless of locale.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Sequence

from ..formatting import format_day, format_month
from ..models.analysis import MonthPoint, VolumeBin, YearComparison
from ..models.runs import RunEntry


def week_start(value: date) -> date:
    """Monday of the ISO week containing ``value``."""
    return value - timedelta(days=value.weekday())


def weekly_distance(runs: Sequence[RunEntry]) -> Dict[date, float]:
    """Total distance keyed by week start (Monday)."""
    weeks: Dict[date, float] = defaultdict(float)
    for run in runs:
        weeks[week_start(run.day)] += run.distance_km
    return dict(weeks)


def weekly_volume(runs: Sequence[RunEntry]) -> List[VolumeBin]:
    """Distance and run count per ISO week, oldest first."""
    totals: Dict[date, List[float]] = defaultdict(lambda: [0.0, 0])
    for run in runs:
        bucket = totals[week_start(run.day)]
        bucket[0] += run.distance_km
        bucket[1] += 1

    return [
        VolumeBin(
            key=monday.isoformat(),
            label=format_day(monday),
            total_km=round(km, 1),
            run_count=int(count),
        )
        for monday, (km, count) in sorted(totals.items())
    ]


def monthly_volume(runs: Sequence[RunEntry]) -> List[VolumeBin]:
    """Distance and run count per calendar month, oldest first."""
    totals: Dict[date, List[float]] = defaultdict(lambda: [0.0, 0])
    for run in runs:
        bucket = totals[run.day.replace(day=1)]
        bucket[0] += run.distance_km
        bucket[1] += 1

    return [
        VolumeBin(
            key=f"{first.year:04d}-{first.month:02d}",
            label=format_month(first),
            total_km=round(km, 1),
            run_count=int(count),
        )
        for first, (km, count) in sorted(totals.items())
    ]


def compute_year_comparison(runs: Sequence[RunEntry]) -> List[YearComparison]:
    """Cumulative distance by month for each calendar year, years ascending."""
    by_month: Dict[int, Dict[int, float]] = defaultdict(lambda: defaultdict(float))
    run_counts: Dict[int, int] = defaultdict(int)

    for run in runs:
        by_month[run.day.year][run.day.month] += run.distance_km
        run_counts[run.day.year] += 1

    comparisons = []
    for year in sorted(by_month):
        cumulative = 0.0
        months = []
        for month in range(1, 13):
            cumulative += by_month[year].get(month, 0.0)
            months.append(MonthPoint(month=month, cumulative_km=round(cumulative, 1)))
        comparisons.append(
            YearComparison(
                year=year,
                months=months,
                total_km=round(cumulative, 1),
                total_runs=run_counts[year],
            )
        )
    return comparisons
