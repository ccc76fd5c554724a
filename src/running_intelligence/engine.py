"""
Intelligence engine.

Runs every analysis over one run history and assembles IntelligenceData.
The result is a pure function of the runs, the lifetime distance and the
explicit ``today`` anchor.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

from .analysis import (
    compute_conditions,
    compute_distribution,
    compute_milestones,
    compute_pace_trend,
    compute_personal_records,
    compute_race_predictions,
    compute_recovery,
    compute_routes,
    compute_run_milestones,
    compute_year_comparison,
    monthly_volume,
    weekly_volume,
)
from .formatting import PLACEHOLDER, format_month, round1
from .metrics import compute_training_load
from .models.intelligence import IntelligenceData
from .models.runs import RunEntry, as_date, newest_first
from .personality import compute_personality
from .recommendations import compute_todays_plan, generate_coach_advice

logger = logging.getLogger(__name__)


def date_range_label(runs) -> str:
    """'Jan 2026 - Mar 2026' for a newest-first run list, '-' when empty."""
    if not runs:
        return PLACEHOLDER
    return f"{format_month(runs[-1].day)} - {format_month(runs[0].day)}"


def compute_intelligence(
    runs: Iterable[RunEntry],
    total_km: Optional[float],
    today: Union[date, datetime],
) -> IntelligenceData:
    """
    Compute the full intelligence record for a run history.

    Args:
        runs: Normalized run records in any order
        total_km: Lifetime distance from the provider; None uses the sum of
            ``runs``
        today: Anchor for every time window. Runs after it are ignored.

    Returns:
        IntelligenceData
    """
    anchor = as_date(today)
    all_runs = list(runs)
    ordered = newest_first(r for r in all_runs if r.day <= anchor)
    if len(ordered) < len(all_runs):
        logger.debug(f"Ignoring {len(all_runs) - len(ordered)} runs after {anchor.isoformat()}")

    if total_km is None:
        total_km = sum(r.distance_km for r in ordered)
    logger.debug(f"Computing intelligence for {len(ordered)} runs ({total_km:.1f} km) as of {anchor}")

    training_load = compute_training_load(ordered, anchor)
    recovery = compute_recovery(ordered)
    personality = compute_personality(ordered, anchor)
    race_predictions = compute_race_predictions(ordered, anchor)
    milestones = compute_milestones(ordered, total_km, anchor)
    pace_trend, pace_improvement = compute_pace_trend(ordered)

    coach_advice = generate_coach_advice(
        ordered,
        anchor,
        load=training_load,
        scores=personality.scores,
        race_predictions=race_predictions,
        milestones=milestones,
    )

    intelligence = IntelligenceData(
        total_runs=len(ordered),
        total_km=round1(total_km),
        date_range=date_range_label(ordered),
        training_load=training_load,
        todays_plan=compute_todays_plan(ordered, anchor, recovery=recovery),
        race_predictions=race_predictions,
        pace_trend=pace_trend,
        pace_improvement=pace_improvement,
        conditions=compute_conditions(ordered),
        personality=personality,
        year_comparison=compute_year_comparison(ordered),
        distribution=compute_distribution(ordered),
        recovery=recovery,
        routes=compute_routes(ordered),
        milestones=milestones,
        run_milestones=compute_run_milestones(ordered, anchor),
        coach_advice=coach_advice,
        weekly_volume=weekly_volume(ordered),
        monthly_volume=monthly_volume(ordered),
        personal_records=compute_personal_records(ordered),
    )
    logger.debug(
        f"Load {training_load.zone.value} (ratio {training_load.ratio}), "
        f"personality {personality.code}, {len(coach_advice)} advice lines"
    )
    return intelligence
