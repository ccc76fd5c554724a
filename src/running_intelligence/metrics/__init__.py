"""Training load metrics."""

from .load import (
    ACUTE_DAYS,
    CHRONIC_DAYS,
    DANGER_THRESHOLD,
    OPTIMAL_CEILING,
    ZONE_BANDS,
    ZoneBand,
    classify_load_ratio,
    compute_training_load,
    max_distance_for_ratio,
    project_training_load,
)

__all__ = [
    "ACUTE_DAYS",
    "CHRONIC_DAYS",
    "DANGER_THRESHOLD",
    "OPTIMAL_CEILING",
    "ZONE_BANDS",
    "ZoneBand",
    "classify_load_ratio",
    "compute_training_load",
    "max_distance_for_ratio",
    "project_training_load",
]
