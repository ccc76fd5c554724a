"""Tests for best training conditions."""

from running_intelligence.analysis.conditions import compute_conditions

from conftest import build_run


class TestConditions:
    """Tests for compute_conditions."""

    def test_best_day(self):
        runs = [
            build_run("2026-03-02", pace=340),  # Monday
            build_run("2026-03-09", pace=330),  # Monday
            build_run("2026-03-04", pace=320),  # Wednesday
        ]
        conditions = compute_conditions(runs)
        assert conditions.best_day.day == "Wed"
        assert conditions.best_day.count == 1
        assert [d.day for d in conditions.day_of_week_data] == ["Mon", "Wed"]
        assert conditions.day_of_week_data[0].avg_pace == 335.0

    def test_day_tie_prefers_more_runs(self):
        runs = [
            build_run("2026-03-02", pace=330),  # Monday
            build_run("2026-03-09", pace=330),  # Monday
            build_run("2026-03-01", pace=330),  # Sunday
        ]
        assert compute_conditions(runs).best_day.day == "Mon"

    def test_hour_needs_two_runs(self):
        runs = [
            build_run("2026-03-02", pace=300, hour=6),
            build_run("2026-03-03", pace=330, hour=18),
            build_run("2026-03-04", pace=340, hour=18),
        ]
        conditions = compute_conditions(runs)
        assert conditions.best_hour.hour == "18:00"
        assert conditions.best_hour.pace == "5'35\"/km"
        assert [h.hour for h in conditions.hour_data] == [18]

    def test_sweet_spot_distance(self):
        runs = [
            build_run("2026-03-01", 3.0, pace=320),
            build_run("2026-03-02", 4.0, pace=320),
            build_run("2026-03-03", 12.0, pace=310),
            build_run("2026-03-04", 11.0, pace=300),
            build_run("2026-03-05", 21.0, pace=280),  # alone in its band
        ]
        spot = compute_conditions(runs).sweet_spot_distance
        assert spot.range == "10-15 km"
        assert spot.count == 2

    def test_short_runs_ignored(self):
        runs = [build_run("2026-03-02", 0.5, pace=200), build_run("2026-03-03", 0.8, pace=200)]
        conditions = compute_conditions(runs)
        assert conditions.best_day.day == "-"
        assert conditions.best_day.count == 0
        assert conditions.best_hour.hour == "-"
        assert conditions.sweet_spot_distance.range == "-"

    def test_empty(self):
        conditions = compute_conditions([])
        assert conditions.day_of_week_data == []
        assert conditions.hour_data == []
