"""Tests for lifetime distance and run-count milestones."""

from datetime import date, timedelta

import pytest

from running_intelligence.analysis.milestones import (
    compute_milestones,
    compute_run_milestones,
    weekly_accumulation_rate,
    weekly_run_rate,
)

from conftest import TODAY, build_run


class TestAccumulationRate:
    """Tests for weekly_accumulation_rate."""

    def test_short_history_uses_at_least_a_week(self):
        runs = [build_run(TODAY, 10.0)]
        assert weekly_accumulation_rate(runs, TODAY) == pytest.approx(10.0)

    def test_steady_history_uses_own_span(self, steady_runs, today):
        """History from Jan 19 to Mar 13 spans 54 days."""
        assert weekly_accumulation_rate(steady_runs, today) == pytest.approx(80 / (54 / 7))

    def test_window_caps_at_twelve_weeks(self, today):
        runs = [build_run(today - timedelta(days=200), 50.0), build_run(today, 12.0)]
        assert weekly_accumulation_rate(runs, today) == pytest.approx(1.0)

    def test_no_runs(self, today):
        assert weekly_accumulation_rate([], today) == 0.0


class TestMilestones:
    """Tests for compute_milestones."""

    def test_next_three_goals(self, steady_runs, today):
        milestones = compute_milestones(steady_runs, 80.0, today)
        assert [m.label for m in milestones] == ["250 km", "500 km", "1,000 km"]
        first = milestones[0]
        assert first.progress == 32
        assert first.remaining == 170.0
        assert first.current == 80.0
        assert date.fromisoformat(first.estimated_date) > today

    def test_reached_goals_omitted(self, steady_runs, today):
        milestones = compute_milestones(steady_runs, 990.0, today)
        assert [m.target for m in milestones] == [1000.0, 1500.0, 2000.0]
        assert milestones[0].progress == 99

    def test_all_goals_reached(self, steady_runs, today):
        """Beyond the last goal there is nothing to show."""
        assert compute_milestones(steady_runs, 12000.0, today) == []

    def test_exactly_on_goal(self, steady_runs, today):
        milestones = compute_milestones(steady_runs, 500.0, today)
        assert milestones[0].target == 1000.0

    def test_no_rate_means_no_date(self, today):
        milestones = compute_milestones([], 100.0, today)
        assert milestones[0].estimated_date is None
        assert milestones[0].estimated_label == "-"

    def test_projection_too_far(self, today):
        """A goal more than ten years away gets no date."""
        runs = [build_run(today - timedelta(days=80), 1.0)]
        milestones = compute_milestones(runs, 1.0, today)
        assert milestones[0].estimated_date is None


def daily_runs(count):
    """One run per day for ``count`` days ending TODAY."""
    return [build_run(TODAY - timedelta(days=i)) for i in range(count)]


class TestRunMilestones:
    """Tests for compute_run_milestones."""

    def test_run_rate(self, steady_runs, today):
        assert weekly_run_rate(steady_runs, today) == pytest.approx(16 / (54 / 7))

    def test_next_three_goals(self, steady_runs, today):
        milestones = compute_run_milestones(steady_runs, today)
        assert [m.label for m in milestones] == ["50 runs", "100 runs", "200 runs"]
        first = milestones[0]
        assert first.current == 16.0
        assert first.remaining == 34.0
        assert first.progress == 32
        assert first.estimated_date == "2026-07-06"
        assert first.estimated_label == "Jul 2026"

    def test_reached_goals_omitted(self):
        milestones = compute_run_milestones(daily_runs(120), TODAY)
        assert [m.target for m in milestones] == [200.0, 250.0, 300.0]

    def test_all_goals_reached(self):
        assert compute_run_milestones(daily_runs(1000), TODAY) == []

    def test_future_runs_not_counted(self, steady_runs, today):
        future = steady_runs + [build_run(today + timedelta(days=2))]
        assert compute_run_milestones(future, today) == compute_run_milestones(steady_runs, today)

    def test_no_runs(self, today):
        milestones = compute_run_milestones([], today)
        assert milestones[0].current == 0.0
        assert milestones[0].estimated_date is None
