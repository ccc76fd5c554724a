"""Statistical aggregators, race prediction, recovery and milestones."""

from .conditions import compute_conditions
from .distribution import DISTANCE_BANDS, compute_distribution
from .milestones import DISTANCE_GOALS_KM, RUN_COUNT_GOALS, compute_milestones, compute_run_milestones
from .races import RaceDistance, compute_personal_records, compute_race_predictions, predict_race_time
from .recovery import RunBaseline, compute_recovery
from .routes import compute_routes
from .trends import compute_pace_trend
from .volume import compute_year_comparison, monthly_volume, weekly_volume

__all__ = [
    "DISTANCE_BANDS",
    "DISTANCE_GOALS_KM",
    "RUN_COUNT_GOALS",
    "RaceDistance",
    "RunBaseline",
    "compute_conditions",
    "compute_distribution",
    "compute_milestones",
    "compute_pace_trend",
    "compute_personal_records",
    "compute_race_predictions",
    "compute_recovery",
    "compute_routes",
    "compute_run_milestones",
    "compute_year_comparison",
    "monthly_volume",
    "predict_race_time",
    "weekly_volume",
]
