"""Route familiarity: how a runner performs at the places they return to."""

from collections import defaultdict
from typing import Dict, List, Sequence

from ..formatting import format_pace
from ..models.analysis import RouteFamiliarity
from ..models.runs import RunEntry, oldest_first

MIN_RUNS_PER_LOCATION = 2
RECENT_RUNS_PER_LOCATION = 3


def _describe(diff_secs: int) -> str:
    if diff_secs > 0:
        return f"{diff_secs}s faster"
    elif diff_secs < 0:
        return f"{abs(diff_secs)}s slower"
    return "Same"


def compute_routes(runs: Sequence[RunEntry]) -> List[RouteFamiliarity]:
    """
    Rank known locations visited at least twice.

    Improvement compares the earliest run at a location with the best pace
    among the (up to three) most recent later runs there. Runs without a
    matched location ('Unknown', 'Other') are excluded, as are runs without
    a usable pace.
    """
    by_location: Dict[str, List[RunEntry]] = defaultdict(list)
    for run in runs:
        if run.has_known_location and run.pace > 0:
            by_location[run.location].append(run)

    routes = []
    for location, location_runs in by_location.items():
        if len(location_runs) < MIN_RUNS_PER_LOCATION:
            continue

        ordered = oldest_first(location_runs)
        first, last = ordered[0], ordered[-1]
        best_pace = min(r.pace for r in ordered)
        best_recent = min(r.pace for r in ordered[1:][-RECENT_RUNS_PER_LOCATION:])
        diff = int(round(first.pace - best_recent))

        routes.append(
            RouteFamiliarity(
                location=location,
                flag=first.location_flag,
                count=len(ordered),
                first_run=first.display_date,
                last_run=last.display_date,
                best_pace=format_pace(best_pace),
                latest_pace=format_pace(last.pace),
                improvement=_describe(diff),
                improved_secs=diff,
            )
        )

    return sorted(routes, key=lambda r: (-r.count, r.location))
