"""
Coach advice.

An ordered table of independent rules. Each rule looks at the shared
CoachContext and either returns one plain sentence or None; the advice list
is every sentence produced, in table order. The text is also interpolated
into language-model prompts, so it must stay plain: no markdown, no emoji.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Sequence, Union

from ..analysis.milestones import compute_milestones
from ..analysis.races import compute_race_predictions
from ..analysis.recovery import RunBaseline
from ..metrics.load import compute_training_load
from ..models.analysis import MilestoneCountdown, RacePrediction
from ..models.load import LoadZone, TrainingLoad
from ..models.personality import TraitScores
from ..models.runs import RunEntry, as_date, newest_first
from ..personality.traits import compute_trait_scores

HIGH_FREQUENCY_RUNS = 5
LONG_RUN_KM = 10.0
VOLUME_JUMP_FACTOR = 1.2
CONSISTENCY_PRAISE_SCORE = 4
MILESTONE_NEAR_KM = 50.0
PREFERRED_PREDICTIONS = ("10K", "5K", "Half", "Full")


@dataclass(frozen=True)
class CoachContext:
    runs: List[RunEntry]  # newest first, none after today
    today: date
    load: TrainingLoad
    scores: TraitScores
    race_predictions: List[RacePrediction]
    milestones: List[MilestoneCountdown]
    baseline: Optional[RunBaseline]

    @property
    def last_run(self) -> Optional[RunEntry]:
        return self.runs[0] if self.runs else None

    @property
    def days_since_last_run(self) -> Optional[int]:
        if self.last_run is None:
            return None
        return (self.today - self.last_run.day).days

    def runs_between(self, days_ago_from: int, days_ago_to: int) -> List[RunEntry]:
        """Runs from ``days_ago_from`` up to ``days_ago_to`` days before today, inclusive."""
        start = self.today - timedelta(days=days_ago_to)
        end = self.today - timedelta(days=days_ago_from)
        return [r for r in self.runs if start <= r.day <= end]

    @property
    def this_week(self) -> List[RunEntry]:
        return self.runs_between(0, 6)

    @property
    def previous_week(self) -> List[RunEntry]:
        return self.runs_between(7, 13)

    def is_hard(self, run: RunEntry) -> bool:
        return self.baseline is not None and self.baseline.is_hard(run)


CoachRule = Callable[[CoachContext], Optional[str]]


def no_runs(ctx: CoachContext) -> Optional[str]:
    if ctx.runs:
        return None
    return "Start your running journey. Even a short 2-3km jog is a great beginning."


def load_zone(ctx: CoachContext) -> Optional[str]:
    zone = ctx.load.zone
    if zone == LoadZone.DANGER:
        return "Your training load is very high. Prioritize rest or a very easy 3km jog to prevent injury."
    if zone == LoadZone.OVERREACHING:
        return (
            f"Your ACWR is {ctx.load.ratio:.2f}, at or above 1.3. Consider an easy week "
            f"with recovery runs or cross-training."
        )
    if zone == LoadZone.DETRAINING:
        return "You have been resting a while. Ramp up gradually, starting with a comfortable 5km."
    if zone == LoadZone.OPTIMAL:
        return "Training load is in the sweet spot. Keep this rhythm going."
    return None


def days_since_last_run(ctx: CoachContext) -> Optional[str]:
    days = ctx.days_since_last_run
    if days is None:
        return None
    if days == 0:
        return "You already ran today. Rest well tonight, recovery is where gains happen."
    if days == 1 and ctx.is_hard(ctx.last_run):
        return (
            f"Yesterday's {ctx.last_run.distance_km:.1f}km was solid work. "
            f"Easy recovery run (3-5km) or rest today."
        )
    if days >= 4:
        return f"It has been {days} days since your last run. An easy 4-5km would be a great restart."
    return None


def high_frequency(ctx: CoachContext) -> Optional[str]:
    week = ctx.this_week
    if len(week) < HIGH_FREQUENCY_RUNS:
        return None
    week_km = sum(r.distance_km for r in week)
    return f"{len(week)} runs in the last 7 days ({week_km:.0f}km). High frequency, make sure to include easy days."


def missing_long_run(ctx: CoachContext) -> Optional[str]:
    week = ctx.this_week
    if len(week) < 2 or ctx.load.zone == LoadZone.DANGER:
        return None
    if any(r.distance_km >= LONG_RUN_KM for r in week):
        return None
    return "No long run in the last 7 days. Consider a 10-15km long run at easy pace."


def volume_jump(ctx: CoachContext) -> Optional[str]:
    week_km = sum(r.distance_km for r in ctx.this_week)
    previous_km = sum(r.distance_km for r in ctx.previous_week)
    if previous_km <= 0 or week_km <= previous_km * VOLUME_JUMP_FACTOR:
        return None
    jump = round((week_km / previous_km - 1) * 100)
    return f"Weekly volume jumped {jump}% vs last week. The 10% rule suggests capping increases at 10%."


def consistency_praise(ctx: CoachContext) -> Optional[str]:
    if not ctx.runs or ctx.scores.consistency < CONSISTENCY_PRAISE_SCORE:
        return None
    return "Your consistency is excellent. Regular weeks like these are the foundation of every improvement."


def back_to_back_hard(ctx: CoachContext) -> Optional[str]:
    if len(ctx.runs) < 2:
        return None
    latest, previous = ctx.runs[0], ctx.runs[1]
    if (latest.day - previous.day).days > 1:
        return None
    if not (ctx.is_hard(latest) and ctx.is_hard(previous)):
        return None
    return "Your last two runs were both hard efforts on consecutive days. Schedule an easy day before the next session."


def race_prediction(ctx: CoachContext) -> Optional[str]:
    by_label = {p.label: p for p in ctx.race_predictions}
    for label in PREFERRED_PREDICTIONS:
        if label in by_label:
            return f"Your current fitness points to a {label} time of about {by_label[label].time}."
    return None


def milestone_near(ctx: CoachContext) -> Optional[str]:
    if not ctx.milestones:
        return None
    upcoming = ctx.milestones[0]
    if upcoming.remaining > MILESTONE_NEAR_KM:
        return None
    return f"Only {upcoming.remaining:.1f} km to go until your {upcoming.label} milestone."


COACH_RULES: List[CoachRule] = [
    no_runs,
    load_zone,
    days_since_last_run,
    high_frequency,
    missing_long_run,
    volume_jump,
    consistency_praise,
    back_to_back_hard,
    race_prediction,
    milestone_near,
]


def generate_coach_advice(
    runs: Sequence[RunEntry],
    today: Union[date, datetime],
    load: Optional[TrainingLoad] = None,
    scores: Optional[TraitScores] = None,
    race_predictions: Optional[List[RacePrediction]] = None,
    milestones: Optional[List[MilestoneCountdown]] = None,
    total_km: Optional[float] = None,
) -> List[str]:
    """
    Produce the coach advice lines for a run history.

    Precomputed analyses of the same runs can be passed in; anything missing
    is computed here. The list may be empty when no rule applies.
    """
    anchor = as_date(today)
    past = newest_first(r for r in runs if r.day <= anchor)

    if load is None:
        load = compute_training_load(past, anchor)
    if scores is None:
        scores = compute_trait_scores(past, anchor)
    if race_predictions is None:
        race_predictions = compute_race_predictions(past, anchor)
    if milestones is None:
        lifetime = total_km if total_km is not None else sum(r.distance_km for r in past)
        milestones = compute_milestones(past, lifetime, anchor)

    ctx = CoachContext(
        runs=past,
        today=anchor,
        load=load,
        scores=scores,
        race_predictions=race_predictions,
        milestones=milestones,
        baseline=RunBaseline.from_runs(past),
    )
    return [line for line in (rule(ctx) for rule in COACH_RULES) if line]
