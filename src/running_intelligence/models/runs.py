"""Run records consumed by every analysis."""

from datetime import date as date_type, datetime
from typing import Optional, Union

from pydantic import ConfigDict, Field, field_validator

from .base import FrozenCamelModel, to_camel
from ..formatting import format_day

UNKNOWN_LOCATIONS = frozenset({"", "Unknown", "Other"})


class RunEntry(FrozenCamelModel):
    """One completed run, already normalized from the provider activity."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        allow_inf_nan=False,
    )

    id: Union[int, str] = Field(default=0, description="Provider activity ID")
    date: str = Field(default="", description="Short display date, e.g. 'Mar 2'")
    date_full: datetime = Field(..., description="Local start time")
    distance_km: float = Field(..., ge=0)
    time_seconds: float = Field(..., ge=0, description="Moving time in seconds")
    pace_secs_per_km: Optional[float] = Field(default=None, ge=0)
    location: str = Field(default="Unknown", description="Matched location name")
    location_flag: str = Field(default="")
    name: str = Field(default="")
    heartrate: Optional[float] = Field(default=None, description="Average heart rate")
    elevation: Optional[float] = Field(default=None, description="Elevation gain in meters")

    @field_validator("date_full")
    @classmethod
    def _wall_clock(cls, value: datetime) -> datetime:
        # The provider reports local wall-clock time; any offset is cosmetic.
        return value.replace(tzinfo=None)

    @property
    def start(self) -> datetime:
        return self.date_full

    @property
    def day(self) -> date_type:
        return self.date_full.date()

    @property
    def pace(self) -> float:
        """Seconds per km from moving time and distance, 0 when undefined."""
        if self.distance_km > 0 and self.time_seconds > 0:
            return self.time_seconds / self.distance_km
        return self.pace_secs_per_km or 0.0

    @property
    def display_date(self) -> str:
        return self.date or format_day(self.day)

    @property
    def has_known_location(self) -> bool:
        return self.location not in UNKNOWN_LOCATIONS


def newest_first(runs) -> list:
    """Sort runs by start time, newest first."""
    return sorted(runs, key=lambda r: r.date_full, reverse=True)


def oldest_first(runs) -> list:
    """Sort runs by start time, oldest first."""
    return sorted(runs, key=lambda r: r.date_full)


def as_date(value: Union[date_type, datetime]) -> date_type:
    """Reduce a 'today' anchor to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value
