"""
Race Prediction

Riegel extrapolation from the runner's best recent effort to standard race
distances, and personal records at those distances.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional, Sequence, Union

from ..formatting import format_pace, format_time
from ..models.analysis import PersonalRecord, RacePrediction
from ..models.runs import RunEntry, as_date

RIEGEL_EXPONENT = 1.06
MIN_BASE_DISTANCE_KM = 3.0
# Largest allowed target/base (or base/target) distance ratio
MAX_EXTRAPOLATION_RATIO = 4.0
RECENT_DAYS = 90


class RaceDistance(Enum):
    """Common race distances with values in kilometers."""

    FIVE_K = 5.0
    TEN_K = 10.0
    HALF_MARATHON = 21.0975
    MARATHON = 42.195

    @classmethod
    def from_string(cls, s: str) -> Optional["RaceDistance"]:
        """Parse race distance from string."""
        mapping = {
            "5k": cls.FIVE_K,
            "10k": cls.TEN_K,
            "half": cls.HALF_MARATHON,
            "half_marathon": cls.HALF_MARATHON,
            "21k": cls.HALF_MARATHON,
            "full": cls.MARATHON,
            "marathon": cls.MARATHON,
            "42k": cls.MARATHON,
        }
        return mapping.get(s.lower().replace("-", "_").replace(" ", "_"))

    @property
    def label(self) -> str:
        """Short label used in every output."""
        labels = {
            RaceDistance.FIVE_K: "5K",
            RaceDistance.TEN_K: "10K",
            RaceDistance.HALF_MARATHON: "Half",
            RaceDistance.MARATHON: "Full",
        }
        return labels[self]


# Accepted distance window (km) for a run to count as a record at each distance
RECORD_WINDOWS = {
    RaceDistance.FIVE_K: (4.8, 5.5),
    RaceDistance.TEN_K: (9.5, 11.0),
    RaceDistance.HALF_MARATHON: (20.0, 22.0),
    RaceDistance.MARATHON: (40.0, 44.0),
}


def predict_race_time(
    base_time_sec: float,
    base_distance_km: float,
    target_distance_km: float,
    riegel_exponent: float = RIEGEL_EXPONENT,
) -> float:
    """
    Predict race time using Riegel formula.

    The Riegel formula: T2 = T1 * (D2/D1)^exponent

    Where:
    - T1 = base effort time
    - D1 = base effort distance
    - T2 = predicted time
    - D2 = target distance
    - exponent = fatigue factor (typically 1.06)

    Returns:
        Predicted time in seconds, 0 for a non-positive base distance
    """
    if base_distance_km <= 0 or base_time_sec <= 0:
        return 0.0
    return base_time_sec * (target_distance_km / base_distance_km) ** riegel_exponent


def extrapolation_ratio(base_distance_km: float, target_distance_km: float) -> float:
    """Distance ratio in whichever direction is larger (always >= 1)."""
    ratio = target_distance_km / base_distance_km
    return ratio if ratio >= 1 else 1 / ratio


def _age_key(run: RunEntry) -> float:
    return (run.date_full - datetime.min).total_seconds()


def _select_base(candidates: Sequence[RunEntry], target_km: float) -> Optional[RunEntry]:
    qualifying = [
        r for r in candidates
        if extrapolation_ratio(r.distance_km, target_km) <= MAX_EXTRAPOLATION_RATIO
    ]
    if not qualifying:
        return None
    # Fastest pace; longer then newer efforts win ties
    return min(qualifying, key=lambda r: (r.pace, -r.distance_km, -_age_key(r)))


def compute_race_predictions(
    runs: Sequence[RunEntry],
    today: Union[date, datetime],
) -> List[RacePrediction]:
    """
    Predict 5K, 10K, Half and Full times.

    Base efforts are runs from the last 90 days (ending ``today``) of at
    least 3 km. For each target the fastest-paced base within a 4x distance
    ratio of the target is extrapolated; targets without such a base are
    omitted, so a lone 3 km run predicts 5K and 10K only.
    """
    anchor = as_date(today)
    cutoff = anchor - timedelta(days=RECENT_DAYS)
    candidates = [
        r for r in runs
        if cutoff <= r.day <= anchor and r.distance_km >= MIN_BASE_DISTANCE_KM and r.time_seconds > 0
    ]
    if not candidates:
        return []

    predictions = []
    for race in RaceDistance:
        base = _select_base(candidates, race.value)
        if base is None:
            continue
        predicted = predict_race_time(base.time_seconds, base.distance_km, race.value)
        predictions.append(
            RacePrediction(
                label=race.label,
                distance_km=race.value,
                time=format_time(predicted),
                time_seconds=int(round(predicted)),
                pace=format_pace(predicted / race.value),
                base_distance_km=round(base.distance_km, 2),
                base_date=base.day.isoformat(),
                extrapolation_ratio=round(race.value / base.distance_km, 2),
            )
        )
    return predictions


def compute_personal_records(runs: Sequence[RunEntry]) -> List[PersonalRecord]:
    """Fastest run inside each race distance window; empty windows omitted."""
    records = []
    for race, (low, high) in RECORD_WINDOWS.items():
        matching = [r for r in runs if low <= r.distance_km <= high and r.time_seconds > 0]
        if not matching:
            continue
        run = min(matching, key=lambda r: (r.time_seconds, r.date_full))
        records.append(
            PersonalRecord(
                label=race.label,
                time=format_time(run.time_seconds),
                pace=format_pace(run.pace),
                date=run.display_date,
                distance_km=round(run.distance_km, 2),
            )
        )
    return records
