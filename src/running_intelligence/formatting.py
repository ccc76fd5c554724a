"""Display formatting for paces, durations and dates."""

import math
from datetime import date
from typing import Optional

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

PLACEHOLDER = "-"


def is_positive(value: Optional[float]) -> bool:
    """True for a finite number greater than zero."""
    return value is not None and math.isfinite(value) and value > 0


def format_pace(secs_per_km: Optional[float]) -> str:
    """Format seconds per km as 5'30"/km, or '-' when undefined."""
    if not is_positive(secs_per_km):
        return PLACEHOLDER
    minutes, seconds = divmod(int(round(secs_per_km)), 60)
    return f"{minutes}'{seconds:02d}\"/km"


def format_time(seconds: Optional[float]) -> str:
    """Format seconds as H:MM:SS or MM:SS string."""
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return PLACEHOLDER
    hours, remainder = divmod(int(round(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    else:
        return f"{minutes}:{secs:02d}"


def format_month(value: date) -> str:
    """Locale-independent month label, e.g. 'Mar 2026'."""
    return f"{MONTH_ABBR[value.month - 1]} {value.year}"


def format_day(value: date) -> str:
    """Locale-independent short day label, e.g. 'Mar 2'."""
    return f"{MONTH_ABBR[value.month - 1]} {value.day}"


def round1(value: float) -> float:
    return round(value, 1) if math.isfinite(value) else 0.0


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` instead of a non-finite result."""
    if not denominator:
        return default
    result = numerator / denominator
    return result if math.isfinite(result) else default
