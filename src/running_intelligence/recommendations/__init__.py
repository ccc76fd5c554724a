"""Recommendations: today's plan and coach advice."""

from .coach import COACH_RULES, generate_coach_advice
from .today import PLAN_RULES, compute_todays_plan

__all__ = [
    "COACH_RULES",
    "PLAN_RULES",
    "compute_todays_plan",
    "generate_coach_advice",
]
