"""Lifetime distance and run-count milestones with projected completion dates."""

from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple, Union

from ..formatting import format_month, round1
from ..models.analysis import MilestoneCountdown
from ..models.runs import RunEntry, as_date

DISTANCE_GOALS_KM = (250, 500, 1000, 1500, 2000, 2500, 5000, 10000)
RUN_COUNT_GOALS = (50, 100, 200, 250, 300, 500, 1000)
MAX_UPCOMING = 3
RATE_WINDOW_DAYS = 84
MAX_PROJECTION_WEEKS = 520


def _rate_window(runs: Sequence[RunEntry], anchor: date) -> Tuple[List[RunEntry], float]:
    """
    Runs inside the trailing rate window and its length in weeks.

    The window is 12 weeks ending ``anchor``; a shorter history is averaged
    over its own span (at least one week) so new runners are not
    under-projected.
    """
    past = [r for r in runs if r.day <= anchor]
    if not past:
        return [], 0.0

    first_day = min(r.day for r in past)
    window_days = min(RATE_WINDOW_DAYS, max(7, (anchor - first_day).days + 1))
    start = anchor - timedelta(days=window_days - 1)
    return [r for r in past if r.day >= start], window_days / 7


def weekly_accumulation_rate(runs: Sequence[RunEntry], today: Union[date, datetime]) -> float:
    """Average km per week over the trailing 12 weeks ending ``today``."""
    window, weeks = _rate_window(runs, as_date(today))
    if not weeks:
        return 0.0
    return sum(r.distance_km for r in window) / weeks


def weekly_run_rate(runs: Sequence[RunEntry], today: Union[date, datetime]) -> float:
    """Average number of runs per week over the same trailing window."""
    window, weeks = _rate_window(runs, as_date(today))
    if not weeks:
        return 0.0
    return len(window) / weeks


def _projected_date(remaining: float, weekly_rate: float, today: date) -> Optional[date]:
    if weekly_rate <= 0:
        return None
    weeks_needed = remaining / weekly_rate
    if weeks_needed > MAX_PROJECTION_WEEKS:
        return None
    return today + timedelta(days=int(round(weeks_needed * 7)))


def _countdowns(
    goals: Sequence[int],
    current: float,
    rate: float,
    anchor: date,
    unit: str,
) -> List[MilestoneCountdown]:
    """Up to three goals above ``current``; goals already reached are omitted."""
    milestones: List[MilestoneCountdown] = []
    for goal in goals:
        if current >= goal:
            continue
        remaining = goal - current
        eta = _projected_date(remaining, rate, anchor)
        milestones.append(
            MilestoneCountdown(
                label=f"{goal:,} {unit}",
                target=float(goal),
                current=round1(current),
                remaining=round1(remaining),
                progress=min(99, max(0, int(current * 100 // goal))),
                estimated_date=eta.isoformat() if eta else None,
                estimated_label=format_month(eta) if eta else "-",
            )
        )
        if len(milestones) == MAX_UPCOMING:
            break
    return milestones


def compute_milestones(
    runs: Sequence[RunEntry],
    total_km: float,
    today: Union[date, datetime],
) -> List[MilestoneCountdown]:
    """
    Progress toward the next lifetime-distance goals.

    Goals already reached are omitted and at most three upcoming goals are
    listed; a lifetime distance beyond every goal yields an empty list.

    Args:
        runs: Run history used for the accumulation rate
        total_km: Lifetime distance, which may exceed the sum of ``runs``
        today: Anchor for the rate window and the projected dates
    """
    anchor = as_date(today)
    return _countdowns(DISTANCE_GOALS_KM, total_km, weekly_accumulation_rate(runs, anchor), anchor, "km")


def compute_run_milestones(
    runs: Sequence[RunEntry],
    today: Union[date, datetime],
) -> List[MilestoneCountdown]:
    """
    Progress toward the next run-count goals ('100 runs', '200 runs', ...).

    The count is the number of runs on or before ``today``; the ETA uses the
    runs-per-week rate of the same trailing window as the distance goals.
    """
    anchor = as_date(today)
    total_runs = sum(1 for r in runs if r.day <= anchor)
    return _countdowns(RUN_COUNT_GOALS, total_runs, weekly_run_rate(runs, anchor), anchor, "runs")
