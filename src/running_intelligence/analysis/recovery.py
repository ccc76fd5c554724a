"""
Recovery Analysis

Rest gaps between consecutive runs, with special attention to the rest taken
after hard efforts. A run is hard when it is faster than the runner's median
pace or longer than their 80th-percentile distance.
"""

from dataclasses import dataclass
from datetime import timedelta
from statistics import median
from typing import List, Optional, Sequence

from ..models.analysis import RecoveryAnalysis
from ..models.runs import RunEntry, oldest_first

HARD_DISTANCE_PERCENTILE = 80


def percentile(values: Sequence[float], pct: float) -> float:
    """Linear-interpolated percentile of ``values`` (0 for an empty input)."""
    if not values:
        return 0.0
    ordered = sorted(values)
    position = (len(ordered) - 1) * pct / 100
    lower = int(position)
    upper = min(lower + 1, len(ordered) - 1)
    return ordered[lower] + (ordered[upper] - ordered[lower]) * (position - lower)


@dataclass(frozen=True)
class RunBaseline:
    """The runner's own reference values for judging a single run."""
    median_pace: float
    hard_distance_km: float

    @classmethod
    def from_runs(cls, runs: Sequence[RunEntry]) -> Optional["RunBaseline"]:
        measured = [r for r in runs if r.distance_km > 0 and r.pace > 0]
        if not measured:
            return None
        return cls(
            median_pace=median(r.pace for r in measured),
            hard_distance_km=percentile([r.distance_km for r in measured], HARD_DISTANCE_PERCENTILE),
        )

    def is_hard(self, run: RunEntry) -> bool:
        if run.distance_km <= 0 or run.pace <= 0:
            return False
        return run.pace < self.median_pace or run.distance_km > self.hard_distance_km


def longest_streak(runs: Sequence[RunEntry]) -> int:
    """Most consecutive calendar days with at least one run."""
    days = sorted({r.day for r in runs})
    best = current = 0
    previous = None
    for day in days:
        current = current + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, current)
        previous = day
    return best


def compute_recovery(runs: Sequence[RunEntry]) -> RecoveryAnalysis:
    """
    Calculate rest-gap statistics.

    Gaps are whole calendar days between consecutive runs (two runs on one
    day give a gap of 0). Fewer than two runs returns all-zero statistics
    flagged ``insufficient_data``.
    """
    if len(runs) < 2:
        return RecoveryAnalysis()

    ordered = oldest_first(runs)
    baseline = RunBaseline.from_runs(ordered)

    gaps: List[int] = []
    hard_gaps: List[int] = []
    for previous, current in zip(ordered, ordered[1:]):
        gap = (current.day - previous.day).days
        gaps.append(gap)
        if baseline is not None and baseline.is_hard(previous):
            hard_gaps.append(gap)

    hard_runs = sum(1 for r in ordered if baseline is not None and baseline.is_hard(r))

    return RecoveryAnalysis(
        avg_rest_days=round(sum(gaps) / len(gaps), 1),
        avg_rest_after_hard=round(sum(hard_gaps) / len(hard_gaps), 1) if hard_gaps else 0.0,
        longest_streak=longest_streak(ordered),
        longest_rest=max(gaps),
        hard_runs=hard_runs,
        insufficient_data=False,
    )
