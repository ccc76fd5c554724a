"""Shared run factories. Every test anchors to an explicit date."""

from datetime import date, datetime, timedelta
from itertools import count

import pytest

from running_intelligence.models.runs import RunEntry

# A Friday; the steady history below ends the day before.
TODAY = date(2026, 3, 13)

_ids = count(1)


def build_run(day, distance_km=5.0, pace=330.0, hour=7, location="Unknown", **extra) -> RunEntry:
    """One run starting at ``hour`` on ``day`` at a constant ``pace`` (sec/km)."""
    if isinstance(day, str):
        day = date.fromisoformat(day)
    return RunEntry(
        id=next(_ids),
        date_full=datetime(day.year, day.month, day.day, hour),
        distance_km=distance_km,
        time_seconds=distance_km * pace,
        location=location,
        **extra,
    )


def build_steady_runs(weeks=8, last_thursday=date(2026, 3, 12), distance_km=5.0, pace=330.0):
    """Monday and Thursday runs for ``weeks`` weeks ending ``last_thursday``."""
    runs = []
    for week in range(weeks):
        thursday = last_thursday - timedelta(weeks=week)
        monday = thursday - timedelta(days=3)
        runs.append(build_run(monday, distance_km, pace))
        runs.append(build_run(thursday, distance_km, pace))
    return runs


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_run():
    """Factory fixture building RunEntry records."""
    return build_run


@pytest.fixture
def steady_runs():
    """16 runs of 5 km at 5'30"/km on Mondays and Thursdays for 8 weeks."""
    return build_steady_runs()
