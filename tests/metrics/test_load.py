"""Tests for the acute:chronic workload ratio."""

import math
from datetime import date, timedelta

import pytest

from running_intelligence.metrics.load import (
    ZONE_BANDS,
    classify_load_ratio,
    compute_training_load,
    max_distance_for_ratio,
    project_training_load,
)
from running_intelligence.models.load import LoadZone

from conftest import TODAY, build_run


def load_history(acute_km, older_km, today=TODAY):
    """One run inside the 7-day window and one only inside the 42-day window."""
    return [
        build_run(today - timedelta(days=1), acute_km),
        build_run(today - timedelta(days=26), older_km),
    ]


class TestZoneClassification:
    """Tests for mapping a ratio onto its zone."""

    @pytest.mark.parametrize(
        "ratio,zone",
        [
            (0.0, LoadZone.DETRAINING),
            (0.79, LoadZone.DETRAINING),
            (0.8, LoadZone.RECOVERY),
            (0.99, LoadZone.RECOVERY),
            (1.0, LoadZone.OPTIMAL),
            (1.29, LoadZone.OPTIMAL),
            (1.3, LoadZone.OVERREACHING),
            (1.49, LoadZone.OVERREACHING),
            (1.5, LoadZone.DANGER),
            (3.0, LoadZone.DANGER),
        ],
    )
    def test_boundaries(self, ratio, zone):
        """Each breakpoint belongs to the zone above it."""
        assert classify_load_ratio(ratio).zone == zone

    def test_bands_are_ordered(self):
        """Band upper bounds must increase so the first match is correct."""
        uppers = [band.upper for band in ZONE_BANDS]
        assert uppers == sorted(uppers)
        assert math.isinf(uppers[-1])

    def test_danger_label_and_color(self):
        band = classify_load_ratio(1.8)
        assert band.label == "Injury Risk"
        assert band.color == "#ef4444"


class TestTrainingLoad:
    """Tests for computing acute and chronic load from runs."""

    @pytest.mark.parametrize(
        "acute_km,older_km,ratio,zone",
        [
            (7.9, 52.1, 0.79, LoadZone.DETRAINING),
            (8.0, 52.0, 0.8, LoadZone.RECOVERY),
            (9.9, 50.1, 0.99, LoadZone.RECOVERY),
            (10.0, 50.0, 1.0, LoadZone.OPTIMAL),
            (12.9, 47.1, 1.29, LoadZone.OPTIMAL),
            (13.0, 47.0, 1.3, LoadZone.OVERREACHING),
            (14.9, 45.1, 1.49, LoadZone.OVERREACHING),
            (15.0, 45.0, 1.5, LoadZone.DANGER),
        ],
    )
    def test_ratio_at_breakpoints(self, acute_km, older_km, ratio, zone):
        """Histories built to land exactly on and just below each breakpoint."""
        load = compute_training_load(load_history(acute_km, older_km), TODAY)
        assert load.ratio == ratio
        assert load.zone == zone
        assert not load.insufficient_data

    def test_steady_state(self, steady_runs, today):
        """Two 5 km runs a week for 8 weeks is a steady ratio of 1.0."""
        load = compute_training_load(steady_runs, today)
        assert load.acute == 10.0
        assert load.chronic == 10.0
        assert load.ratio == 1.0
        assert load.zone == LoadZone.OPTIMAL
        assert load.zone_label == "Optimal"

    def test_no_runs(self, today):
        """Zero chronic load gives a defined ratio of 0, never NaN."""
        load = compute_training_load([], today)
        assert load.ratio == 0.0
        assert load.zone == LoadZone.INSUFFICIENT_DATA
        assert load.insufficient_data
        assert load.zone_label == "Not Enough Data"

    def test_only_old_runs(self, today):
        """Runs older than the 42-day window do not count."""
        runs = [build_run(today - timedelta(days=60), 10.0)]
        load = compute_training_load(runs, today)
        assert load.chronic == 0.0
        assert load.zone == LoadZone.INSUFFICIENT_DATA

    def test_future_runs_ignored(self, steady_runs, today):
        """Runs after the anchor date are not part of either window."""
        future = steady_runs + [build_run(today + timedelta(days=1), 30.0)]
        assert compute_training_load(future, today) == compute_training_load(steady_runs, today)

    def test_datetime_anchor(self, steady_runs):
        """A datetime anchor is reduced to its calendar date."""
        from datetime import datetime

        at_noon = compute_training_load(steady_runs, datetime(2026, 3, 13, 12, 0))
        assert at_noon == compute_training_load(steady_runs, date(2026, 3, 13))

    def test_is_elevated(self):
        load = compute_training_load(load_history(15.0, 45.0), TODAY)
        assert load.is_elevated


class TestProjection:
    """Tests for what-if projections of a run added today."""

    def test_projection_matches_inserted_run(self, steady_runs, today):
        """Projecting a distance equals computing with a real run on today."""
        projected = project_training_load(steady_runs, today, 6.0)
        actual = compute_training_load(steady_runs + [build_run(today, 6.0)], today)
        assert projected == actual

    def test_zero_distance_is_current_load(self, steady_runs, today):
        assert project_training_load(steady_runs, today, 0.0) == compute_training_load(steady_runs, today)

    def test_projection_raises_ratio(self, steady_runs, today):
        """3 km today: acute 13 over chronic 63/6 rounds to 1.24."""
        projected = project_training_load(steady_runs, today, 3.0)
        assert projected.ratio == 1.24
        assert projected.zone == LoadZone.OPTIMAL

    def test_max_distance_lands_on_target(self, steady_runs, today):
        """The computed distance brings the ratio exactly to the target."""
        distance = max_distance_for_ratio(steady_runs, today, 1.3)
        assert distance == pytest.approx(18 / 4.7)
        assert project_training_load(steady_runs, today, distance).ratio == 1.3

    def test_max_distance_without_base(self, today):
        assert max_distance_for_ratio([], today, 1.3) == 0.0

    def test_max_distance_never_negative(self, today):
        """Already above the target leaves no room today."""
        runs = load_history(20.0, 40.0)
        assert max_distance_for_ratio(runs, today, 1.3) == 0.0
