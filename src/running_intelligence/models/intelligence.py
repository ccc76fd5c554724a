"""The aggregate intelligence record."""

from typing import List

from pydantic import Field

from .analysis import (
    ConditionAnalysis,
    DistributionBucket,
    MilestoneCountdown,
    PaceTrendPoint,
    PersonalRecord,
    RacePrediction,
    RecoveryAnalysis,
    RouteFamiliarity,
    VolumeBin,
    YearComparison,
)
from .base import CamelModel
from .load import TrainingLoad
from .personality import RunningPersonality
from .plan import TodaysPlan


class IntelligenceData(CamelModel):
    """
    Every analysis of one run history.

    Recomputed from scratch for each request and never stored. Field names
    and units (km, seconds per km, formatted strings) are read by name by
    dashboards and prompt templates.
    """

    total_runs: int
    total_km: float = Field(..., description="Lifetime distance, may exceed the runs listed")
    date_range: str
    training_load: TrainingLoad
    todays_plan: TodaysPlan
    race_predictions: List[RacePrediction]
    pace_trend: List[PaceTrendPoint]
    pace_improvement: str
    conditions: ConditionAnalysis
    personality: RunningPersonality
    year_comparison: List[YearComparison]
    distribution: List[DistributionBucket]
    recovery: RecoveryAnalysis
    routes: List[RouteFamiliarity]
    milestones: List[MilestoneCountdown]
    run_milestones: List[MilestoneCountdown]
    coach_advice: List[str]
    weekly_volume: List[VolumeBin]
    monthly_volume: List[VolumeBin]
    personal_records: List[PersonalRecord]
