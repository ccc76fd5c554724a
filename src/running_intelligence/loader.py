"""Read normalized run histories from JSON files."""

import json
import logging
import math
from pathlib import Path
from typing import Any, List, Tuple, Union

from pydantic import ValidationError

from .exceptions import ErrorCode, RunDataError
from .models.runs import RunEntry, newest_first

logger = logging.getLogger(__name__)


def parse_runs(payload: Any) -> Tuple[List[RunEntry], float]:
    """
    Validate a decoded JSON payload.

    The payload is either a list of run records or an object with a ``runs``
    list and an optional ``totalKm`` lifetime distance.

    Returns:
        Runs sorted newest first and the lifetime distance (the sum of the
        runs when ``totalKm`` is absent)
    """
    total_km = None
    if isinstance(payload, dict):
        records = payload.get("runs")
        total_km = payload.get("totalKm", payload.get("total_km"))
    else:
        records = payload

    if not isinstance(records, list):
        raise RunDataError("Expected a list of runs or an object with a 'runs' list")

    runs = []
    for index, record in enumerate(records):
        try:
            runs.append(RunEntry.model_validate(record))
        except ValidationError as e:
            raise RunDataError(
                f"Run #{index} is invalid",
                code=ErrorCode.RUN_RECORD_INVALID,
                details={"index": index, "errors": e.errors(include_url=False, include_context=False)},
            ) from e

    runs = newest_first(runs)
    if total_km is None:
        total_km = sum(r.distance_km for r in runs)
    elif (
        not isinstance(total_km, (int, float))
        or isinstance(total_km, bool)
        or not math.isfinite(total_km)
        or total_km < 0
    ):
        raise RunDataError(f"totalKm must be a finite non-negative number, got {total_km!r}")
    return runs, float(total_km)


def load_runs(path: Union[str, Path]) -> Tuple[List[RunEntry], float]:
    """
    Load runs from a JSON file.

    Raises:
        RunDataError: If the file is missing, is not JSON, or holds invalid
            run records
    """
    path = Path(path)
    if not path.is_file():
        raise RunDataError(
            f"Run file not found: {path}",
            code=ErrorCode.RUN_FILE_NOT_FOUND,
            path=str(path),
        )

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RunDataError(f"Run file is not valid JSON: {e}", path=str(path)) from e
    except OSError as e:
        raise RunDataError(f"Run file cannot be read: {e}", path=str(path)) from e

    runs, total_km = parse_runs(payload)
    logger.info(f"Loaded {len(runs)} runs ({total_km:.1f} km lifetime) from {path}")
    return runs, total_km
