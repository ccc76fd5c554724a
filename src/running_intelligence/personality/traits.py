"""
Personality trait scoring.

Each trait reduces one continuous metric of the run history to an integer
score from 1 to 5 through a monotonic threshold table. The tables are read
from the top: the first threshold the metric reaches gives the score.
"""

import logging
from datetime import date, datetime, timedelta
from statistics import mean, median, pstdev
from typing import List, Sequence, Tuple, Union

from ..analysis.distribution import band_for
from ..analysis.volume import week_start
from ..models.personality import TraitScores
from ..models.runs import RunEntry, as_date

logger = logging.getLogger(__name__)

Thresholds = Sequence[Tuple[float, int]]

CONSISTENCY_WEEKS = 12
SPEED_WINDOW_DAYS = 90
FAST_PACE_FACTOR = 0.95
LONG_RUN_FACTOR = 1.5
LONG_RUN_SECONDS = 5400

# metric >= threshold -> score
CONSISTENCY_THRESHOLDS: Thresholds = [(0.85, 5), (0.65, 4), (0.45, 3), (0.25, 2)]
VOLUME_THRESHOLDS: Thresholds = [(50, 5), (35, 4), (20, 3), (10, 2)]
SPEED_THRESHOLDS: Thresholds = [(0.30, 5), (0.20, 4), (0.12, 3), (0.05, 2)]
ENDURANCE_THRESHOLDS: Thresholds = [(0.25, 5), (0.18, 4), (0.12, 3), (0.06, 2)]
VARIETY_THRESHOLDS: Thresholds = [(7, 5), (5, 4), (3, 3), (1, 2)]


def bucket_score(value: float, thresholds: Thresholds) -> int:
    """Map ``value`` onto 1..5 using a descending threshold table."""
    for threshold, score in thresholds:
        if value >= threshold:
            return score
    return 1


def time_of_day_slot(hour: int) -> str:
    if 5 <= hour < 11:
        return "morning"
    if 11 <= hour < 16:
        return "midday"
    if 16 <= hour < 21:
        return "evening"
    return "night"


def scoring_weeks(runs: Sequence[RunEntry], today: date) -> List[date]:
    """
    Mondays of the completed weeks that consistency and volume look at.

    Up to twelve weeks before the current one, never reaching back past the
    week of the first run. A history that started this week scores on the
    current week alone.
    """
    current = week_start(today)
    if not runs:
        return [current]
    first = week_start(min(r.day for r in runs))
    start = max(current - timedelta(weeks=CONSISTENCY_WEEKS), first)
    weeks = []
    monday = start
    while monday < current:
        weeks.append(monday)
        monday += timedelta(weeks=1)
    return weeks or [current]


def _weekly_totals(runs: Sequence[RunEntry], weeks: List[date]) -> Tuple[List[int], List[float]]:
    counts = {w: 0 for w in weeks}
    distances = {w: 0.0 for w in weeks}
    for run in runs:
        monday = week_start(run.day)
        if monday in counts:
            counts[monday] += 1
            distances[monday] += run.distance_km
    return [counts[w] for w in weeks], [distances[w] for w in weeks]


def consistency_metric(weekly_counts: Sequence[int]) -> float:
    """Share of active weeks scaled down by the variation in runs per week."""
    if not weekly_counts:
        return 0.0
    average = mean(weekly_counts)
    if average == 0:
        return 0.0
    active_ratio = sum(1 for c in weekly_counts if c > 0) / len(weekly_counts)
    cv = pstdev(weekly_counts) / average
    return active_ratio * max(0.0, 1 - cv)


def speed_metric(runs: Sequence[RunEntry], today: date) -> float:
    """Share of recent runs noticeably faster than the runner's median pace."""
    measured = [r for r in runs if r.distance_km >= 1 and r.pace > 0]
    recent = [r for r in measured if (today - r.day).days <= SPEED_WINDOW_DAYS]
    sample = recent or measured
    if not sample:
        return 0.0
    cutoff = median(r.pace for r in sample) * FAST_PACE_FACTOR
    return sum(1 for r in sample if r.pace < cutoff) / len(sample)


def endurance_metric(runs: Sequence[RunEntry]) -> float:
    """Share of runs that are long relative to the runner's median distance."""
    measured = [r for r in runs if r.distance_km > 0]
    if not measured:
        return 0.0
    long_cutoff = median(r.distance_km for r in measured) * LONG_RUN_FACTOR
    long_runs = [
        r for r in measured
        if r.distance_km >= long_cutoff or r.time_seconds >= LONG_RUN_SECONDS
    ]
    return len(long_runs) / len(measured)


def variety_points(runs: Sequence[RunEntry]) -> int:
    """Points for spread across distance bands, locations and time of day."""
    if not runs:
        return 0
    bands = {band_for(r.distance_km) for r in runs} - {None}
    locations = {r.location for r in runs if r.has_known_location}
    slots = {time_of_day_slot(r.start.hour) for r in runs}

    points = min(max(len(bands) - 1, 0), 3)
    if locations:
        points += min(len(locations) - 1, 3)
    points += min(len(slots) - 1, 3)
    return points


def compute_trait_scores(runs: Sequence[RunEntry], today: Union[date, datetime]) -> TraitScores:
    """
    Score the five personality traits for a run history.

    Args:
        runs: Run history in any order
        today: Anchor for the consistency weeks and the speed window

    Returns:
        TraitScores, all 1 for an empty history
    """
    anchor = as_date(today)
    past = [r for r in runs if r.day <= anchor]

    weeks = scoring_weeks(past, anchor)
    counts, distances = _weekly_totals(past, weeks)

    scores = TraitScores(
        consistency=bucket_score(consistency_metric(counts), CONSISTENCY_THRESHOLDS),
        speed=bucket_score(speed_metric(past, anchor), SPEED_THRESHOLDS),
        endurance=bucket_score(endurance_metric(past), ENDURANCE_THRESHOLDS),
        variety=bucket_score(variety_points(past), VARIETY_THRESHOLDS),
        volume=bucket_score(mean(distances) if distances else 0.0, VOLUME_THRESHOLDS),
    )
    logger.debug(f"Trait scores over {len(weeks)} weeks: {scores.as_tuple()}")
    return scores
