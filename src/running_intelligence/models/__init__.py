"""Pydantic records for runs and every analysis output."""

from .analysis import (
    BestDay,
    BestDistance,
    BestHour,
    ConditionAnalysis,
    DayPace,
    DistributionBucket,
    HourPace,
    MilestoneCountdown,
    MonthPoint,
    PaceTrendPoint,
    PersonalRecord,
    RacePrediction,
    RecoveryAnalysis,
    RouteFamiliarity,
    VolumeBin,
    YearComparison,
)
from .base import CamelModel, FrozenCamelModel, to_camel
from .intelligence import IntelligenceData
from .load import LoadZone, TrainingLoad
from .personality import (
    TRAIT_ORDER,
    BattleAthlete,
    BattleResult,
    CodexGroup,
    InnerBattle,
    RunningPersonality,
    TraitAdvantage,
    TraitScores,
)
from .plan import PlanDecision, ScenarioType, TodayScenario, TodaysPlan
from .runs import RunEntry, newest_first, oldest_first

__all__ = [
    "BattleAthlete",
    "BattleResult",
    "BestDay",
    "BestDistance",
    "BestHour",
    "CamelModel",
    "CodexGroup",
    "ConditionAnalysis",
    "DayPace",
    "DistributionBucket",
    "FrozenCamelModel",
    "HourPace",
    "InnerBattle",
    "IntelligenceData",
    "LoadZone",
    "MilestoneCountdown",
    "MonthPoint",
    "PaceTrendPoint",
    "PersonalRecord",
    "PlanDecision",
    "RacePrediction",
    "RecoveryAnalysis",
    "RouteFamiliarity",
    "RunEntry",
    "RunningPersonality",
    "ScenarioType",
    "TRAIT_ORDER",
    "TodayScenario",
    "TodaysPlan",
    "TrainingLoad",
    "TraitAdvantage",
    "TraitScores",
    "VolumeBin",
    "YearComparison",
    "newest_first",
    "oldest_first",
    "to_camel",
]
