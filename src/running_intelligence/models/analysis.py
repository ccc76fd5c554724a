"""Records produced by the statistical aggregators and predictors."""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class VolumeBin(CamelModel):
    """Distance and run count for one week or month."""

    key: str = Field(..., description="ISO date of the week's Monday, or YYYY-MM")
    label: str
    total_km: float
    run_count: int


class PaceTrendPoint(CamelModel):
    week: str
    week_key: str
    avg_pace: float = Field(..., description="sec/km, distance-weighted 4-week rolling average")
    raw_pace: float = Field(..., description="sec/km for that week only")
    distance: float


class MonthPoint(CamelModel):
    month: int = Field(..., ge=1, le=12)
    cumulative_km: float


class YearComparison(CamelModel):
    year: int
    months: List[MonthPoint]
    total_km: float
    total_runs: int


class DistributionBucket(CamelModel):
    label: str
    count: int
    percentage: int
    total_km: float


class RouteFamiliarity(CamelModel):
    location: str
    flag: str
    count: int
    first_run: str
    last_run: str
    best_pace: str
    latest_pace: str
    improvement: str
    improved_secs: int = Field(..., description="Earliest pace minus best recent pace, positive = faster")


class BestDay(CamelModel):
    day: str
    pace: str
    count: int


class BestHour(CamelModel):
    hour: str
    pace: str
    count: int


class BestDistance(CamelModel):
    range: str
    pace: str
    count: int


class DayPace(CamelModel):
    day: str
    avg_pace: float
    count: int


class HourPace(CamelModel):
    hour: int
    avg_pace: float
    count: int


class ConditionAnalysis(CamelModel):
    best_day: BestDay
    best_hour: BestHour
    sweet_spot_distance: BestDistance
    day_of_week_data: List[DayPace]
    hour_data: List[HourPace]


class RacePrediction(CamelModel):
    """Riegel extrapolation to a standard race distance."""

    label: str
    distance_km: float
    time: str
    time_seconds: int
    pace: str
    base_distance_km: float
    base_date: str
    extrapolation_ratio: float = Field(..., description="target / base distance")


class PersonalRecord(CamelModel):
    label: str
    time: str
    pace: str
    date: str
    distance_km: float


class RecoveryAnalysis(CamelModel):
    """Rest-gap statistics; all zero when fewer than two runs exist."""

    avg_rest_days: float = 0.0
    avg_rest_after_hard: float = 0.0
    longest_streak: int = 0
    longest_rest: int = 0
    hard_runs: int = 0
    insufficient_data: bool = True


class MilestoneCountdown(CamelModel):
    label: str
    target: float
    current: float
    remaining: float
    progress: int = Field(..., ge=0, le=100)
    estimated_date: Optional[str] = Field(default=None, description="ISO date, null when unreachable")
    estimated_label: str = "-"
