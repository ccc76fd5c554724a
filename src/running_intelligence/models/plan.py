"""Today's plan records."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class ScenarioType(str, Enum):
    """How a candidate run fits today's load."""
    BEST = "best"
    GOOD = "good"
    CAUTION = "caution"
    AVOID = "avoid"


class PlanDecision(str, Enum):
    """Headline decision for today."""
    PUSH = "push"
    MODERATE = "moderate"
    EASE_OFF = "ease_off"
    REST = "rest"


class TodayScenario(CamelModel):
    """A candidate session with its projected training load."""

    label: str
    type: ScenarioType
    activity: str
    distance_km: float
    distance: str
    pace: str
    duration: str
    projected_ratio: float
    projected_zone: str
    projected_color: str
    reason: str
    load_delta: float = Field(..., description="Distance added to today's load (km)")


class TodaysPlan(CamelModel):
    decision: PlanDecision
    headline: str
    current_ratio: float
    current_zone: str
    current_color: str
    days_since_last_run: Optional[int] = None
    last_run_summary: str
    safe_max_km: float
    danger_km: float
    easy_pace: str
    tempo_pace: str
    easy_pace_secs: float
    tempo_pace_secs: float
    scenarios: List[TodayScenario]
    recommended: TodayScenario
    advice: List[str] = Field(default_factory=list)
