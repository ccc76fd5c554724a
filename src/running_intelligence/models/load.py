"""Training load records."""

from enum import Enum

from pydantic import Field

from .base import CamelModel


class LoadZone(str, Enum):
    """ACWR zone, ordered from lowest to highest ratio."""
    INSUFFICIENT_DATA = "insufficient_data"
    DETRAINING = "detraining"
    RECOVERY = "recovery"
    OPTIMAL = "optimal"
    OVERREACHING = "overreaching"
    DANGER = "danger"


class TrainingLoad(CamelModel):
    """Acute:chronic workload ratio with its zone."""

    acute: float = Field(..., description="Distance over the last 7 days (km)")
    chronic: float = Field(..., description="Weekly-equivalent distance over the last 42 days (km)")
    ratio: float = Field(..., description="acute / chronic, 0 when chronic is 0")
    zone: LoadZone
    zone_label: str
    zone_color: str
    insufficient_data: bool = False

    @property
    def is_elevated(self) -> bool:
        return self.zone in (LoadZone.OVERREACHING, LoadZone.DANGER)
