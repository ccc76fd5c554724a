"""
Today's Plan

A single decision for today driven by the training-load zone, the days since
the last run and the runner's own recovery pattern, plus a handful of
candidate sessions. Every candidate is projected through the same training
load model by adding its distance to today's load.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from statistics import median
from typing import Callable, List, Optional, Sequence, Tuple, Union

from ..analysis.recovery import RunBaseline, compute_recovery
from ..formatting import format_pace, format_time, round1
from ..metrics.load import (
    DANGER_THRESHOLD,
    OPTIMAL_CEILING,
    compute_training_load,
    max_distance_for_ratio,
    project_training_load,
)
from ..models.analysis import RecoveryAnalysis
from ..models.load import LoadZone, TrainingLoad
from ..models.plan import PlanDecision, ScenarioType, TodayScenario, TodaysPlan
from ..models.runs import RunEntry, as_date, newest_first

RECENT_DAYS = 90
MIN_PACE_RUN_KM = 2.0
EASY_PACE_INDEX = 0.6
TEMPO_PACE_INDEX = 0.2
DEFAULT_EASY_PACE = 420.0
DEFAULT_TEMPO_PACE = 330.0
DEFAULT_TYPICAL_KM = 5.0
MIN_SCENARIO_KM = 2.0
LONG_RUN_PACE_OFFSET = 30.0
DEFAULT_RECOVERY_DAYS = 2
PUSH_AFTER_DAYS = 2

# Fixed boundaries while there is no chronic base to project against
NO_BASE_SAFE_KM = 5.0
NO_BASE_DANGER_KM = 8.0

HEADLINES = {
    PlanDecision.PUSH: "Best day to push",
    PlanDecision.MODERATE: "Good day for a moderate run",
    PlanDecision.EASE_OFF: "Caution - ease off",
    PlanDecision.REST: "Rest day - avoid running",
}

SCENARIO_REASONS = {
    ScenarioType.BEST: "Keeps you in the optimal training zone",
    ScenarioType.GOOD: "Safe option that supports recovery",
    ScenarioType.CAUTION: "Pushes into overreaching territory",
    ScenarioType.AVOID: "High injury risk, not recommended",
}


@dataclass(frozen=True)
class PlanContext:
    """Everything the decision rules look at."""
    load: TrainingLoad
    days_since_last_run: Optional[int]
    last_run_hard: bool
    recovery_days_needed: int

    @property
    def ran_today(self) -> bool:
        return self.days_since_last_run == 0

    @property
    def still_recovering(self) -> bool:
        return (
            self.last_run_hard
            and self.days_since_last_run is not None
            and self.days_since_last_run < self.recovery_days_needed
        )


@dataclass(frozen=True)
class PlanRule:
    name: str
    applies: Callable[[PlanContext], bool]
    decision: PlanDecision


# Evaluated in order; the first rule that applies decides.
PLAN_RULES: List[PlanRule] = [
    PlanRule("injury_risk", lambda c: c.load.zone == LoadZone.DANGER, PlanDecision.REST),
    PlanRule("overreaching", lambda c: c.load.zone == LoadZone.OVERREACHING, PlanDecision.EASE_OFF),
    PlanRule("ran_today", lambda c: c.ran_today, PlanDecision.EASE_OFF),
    PlanRule("recovering_from_hard_run", lambda c: c.still_recovering, PlanDecision.EASE_OFF),
    PlanRule(
        "rebuilding",
        lambda c: c.load.zone in (LoadZone.INSUFFICIENT_DATA, LoadZone.DETRAINING),
        PlanDecision.MODERATE,
    ),
    PlanRule(
        "fresh_and_balanced",
        lambda c: c.load.zone in (LoadZone.RECOVERY, LoadZone.OPTIMAL)
        and c.days_since_last_run is not None
        and c.days_since_last_run >= PUSH_AFTER_DAYS,
        PlanDecision.PUSH,
    ),
    PlanRule("default", lambda c: True, PlanDecision.MODERATE),
]


def decide(context: PlanContext) -> PlanDecision:
    for rule in PLAN_RULES:
        if rule.applies(context):
            return rule.decision
    return PlanDecision.MODERATE


def recovery_days_needed(recovery: RecoveryAnalysis) -> int:
    """Days the runner usually rests after a hard run (2 when unknown)."""
    if recovery.avg_rest_after_hard <= 0:
        return DEFAULT_RECOVERY_DAYS
    return max(1, int(round(recovery.avg_rest_after_hard)))


def _recent(runs: Sequence[RunEntry], today: date) -> List[RunEntry]:
    start = today - timedelta(days=RECENT_DAYS)
    return [r for r in runs if start <= r.day <= today]


def training_paces(runs: Sequence[RunEntry], today: date) -> Tuple[float, float]:
    """
    Easy and tempo pace (seconds per km) from the runner's recent runs.

    Paces of runs of at least 2 km from the last 90 days are sorted fastest
    first; easy pace sits 60% of the way into that list and tempo pace 20%.
    """
    paces = sorted(
        r.pace for r in _recent(runs, today)
        if r.distance_km >= MIN_PACE_RUN_KM and r.pace > 0
    )
    if not paces:
        return DEFAULT_EASY_PACE, DEFAULT_TEMPO_PACE
    easy = paces[int(len(paces) * EASY_PACE_INDEX)]
    tempo = paces[int(len(paces) * TEMPO_PACE_INDEX)]
    return easy, tempo


def typical_distance(runs: Sequence[RunEntry], today: date) -> float:
    distances = [r.distance_km for r in _recent(runs, today) if r.distance_km > 0]
    return median(distances) if distances else DEFAULT_TYPICAL_KM


def classify_scenario(distance_km: float, projected: TrainingLoad, current: TrainingLoad) -> ScenarioType:
    """How well a session of ``distance_km`` fits today's load."""
    if current.insufficient_data:
        if distance_km <= 0:
            return ScenarioType.GOOD
        if distance_km <= NO_BASE_SAFE_KM:
            return ScenarioType.BEST
        if distance_km <= NO_BASE_DANGER_KM:
            return ScenarioType.CAUTION
        return ScenarioType.AVOID

    if distance_km <= 0:
        if current.zone in (LoadZone.DANGER, LoadZone.OVERREACHING):
            return ScenarioType.BEST
        if current.zone == LoadZone.DETRAINING:
            return ScenarioType.CAUTION
        return ScenarioType.GOOD

    if projected.ratio >= DANGER_THRESHOLD:
        return ScenarioType.AVOID
    if projected.ratio >= OPTIMAL_CEILING:
        return ScenarioType.CAUTION
    if projected.ratio >= 0.8:
        return ScenarioType.BEST
    return ScenarioType.GOOD


def build_scenario(
    runs: Sequence[RunEntry],
    today: date,
    current: TrainingLoad,
    label: str,
    activity: str,
    distance_km: float,
    pace: float,
) -> TodayScenario:
    if distance_km > 0 and not current.insufficient_data:
        projected = project_training_load(runs, today, distance_km)
    else:
        # No chronic base to project against; the projection stays insufficient
        projected = current
    scenario_type = classify_scenario(distance_km, projected, current)
    return TodayScenario(
        label=label,
        type=scenario_type,
        activity=activity,
        distance_km=distance_km,
        distance=f"{distance_km:.1f} km" if distance_km > 0 else "-",
        pace=format_pace(pace) if distance_km > 0 else "-",
        duration=format_time(distance_km * pace) if distance_km > 0 else "-",
        projected_ratio=projected.ratio,
        projected_zone=projected.zone_label,
        projected_color=projected.zone_color,
        reason=SCENARIO_REASONS[scenario_type],
        load_delta=distance_km,
    )


def _scenario_distance(typical_km: float, factor: float) -> float:
    return round1(max(MIN_SCENARIO_KM, typical_km * factor))


def _last_run_summary(run: Optional[RunEntry]) -> str:
    if run is None:
        return "No recent runs"
    return f"{run.distance_km:.1f}km in {format_time(run.time_seconds)} ({format_pace(run.pace)})"


def _advice(
    context: PlanContext,
    safe_max_km: float,
) -> List[str]:
    advice: List[str] = []
    days = context.days_since_last_run
    if days == 0:
        advice.append("You already ran today. Focus on recovery with hydration, stretching and quality sleep.")
    elif days is not None and days >= 3:
        advice.append(f"{days} days since your last run. Ease back in with a comfortable effort.")

    if context.still_recovering:
        advice.append(
            f"Your last run was a hard effort and you usually rest {context.recovery_days_needed} "
            f"days after one. Keep today easy."
        )

    zone = context.load.zone
    if zone == LoadZone.OPTIMAL:
        advice.append(f"Training load is in the sweet spot (ACWR {context.load.ratio:.2f}). Maintain this rhythm.")
    elif zone == LoadZone.OVERREACHING:
        advice.append("Load is elevated. Prioritize easy effort or complete rest.")
    elif zone == LoadZone.DANGER:
        advice.append("High injury risk. Rest and active recovery are your best options today.")
    elif zone == LoadZone.DETRAINING:
        advice.append("Fitness may be declining. A short easy run will help rebuild momentum.")
    elif zone == LoadZone.INSUFFICIENT_DATA:
        advice.append("Not enough recent history to judge your load. Keep runs short and easy while you build a base.")

    if 0 < safe_max_km < 30:
        advice.append(f"Safe max: {safe_max_km:.1f} km at easy pace.")
    return advice


def compute_todays_plan(
    runs: Sequence[RunEntry],
    today: Union[date, datetime],
    recovery: Optional[RecoveryAnalysis] = None,
) -> TodaysPlan:
    """
    Build today's recommendation.

    Args:
        runs: Run history in any order; runs after ``today`` are ignored
        today: The day being planned
        recovery: Precomputed recovery analysis of the same runs

    Returns:
        TodaysPlan with the decision, load boundaries, paces and four
        scenarios (rest, easy, steady, long)
    """
    anchor = as_date(today)
    past = newest_first(r for r in runs if r.day <= anchor)
    if recovery is None:
        recovery = compute_recovery(past)

    load = compute_training_load(past, anchor)
    last_run = past[0] if past else None
    baseline = RunBaseline.from_runs(past)

    context = PlanContext(
        load=load,
        days_since_last_run=(anchor - last_run.day).days if last_run else None,
        last_run_hard=bool(last_run and baseline and baseline.is_hard(last_run)),
        recovery_days_needed=recovery_days_needed(recovery),
    )
    decision = decide(context)

    if load.insufficient_data:
        safe_max_km, danger_km = NO_BASE_SAFE_KM, NO_BASE_DANGER_KM
    else:
        safe_max_km = round1(max_distance_for_ratio(past, anchor, OPTIMAL_CEILING))
        danger_km = round1(max_distance_for_ratio(past, anchor, DANGER_THRESHOLD))

    easy_pace, tempo_pace = training_paces(past, anchor)
    typical_km = typical_distance(past, anchor)
    steady_pace = (easy_pace + tempo_pace) / 2

    scenarios = [
        build_scenario(past, anchor, load, "Full Rest", "Rest Day", 0.0, 0.0),
        build_scenario(past, anchor, load, "Easy Run", "Easy Run",
                       _scenario_distance(typical_km, 0.6), easy_pace),
        build_scenario(past, anchor, load, "Steady Run", "Steady Run",
                       _scenario_distance(typical_km, 1.0), steady_pace),
        build_scenario(past, anchor, load, "Long Run", "Long Run",
                       _scenario_distance(typical_km, 1.5), easy_pace + LONG_RUN_PACE_OFFSET),
    ]

    best = [s for s in scenarios if s.type == ScenarioType.BEST]
    recommended = max(best, key=lambda s: s.load_delta) if best else scenarios[0]

    return TodaysPlan(
        decision=decision,
        headline=HEADLINES[decision],
        current_ratio=load.ratio,
        current_zone=load.zone_label,
        current_color=load.zone_color,
        days_since_last_run=context.days_since_last_run,
        last_run_summary=_last_run_summary(last_run),
        safe_max_km=safe_max_km,
        danger_km=danger_km,
        easy_pace=format_pace(easy_pace),
        tempo_pace=format_pace(tempo_pace),
        easy_pace_secs=round(easy_pace),
        tempo_pace_secs=round(tempo_pace),
        scenarios=scenarios,
        recommended=recommended,
        advice=_advice(context, safe_max_km),
    )
