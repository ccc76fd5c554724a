"""Tests for today's plan."""

from datetime import date, timedelta

import pytest

from running_intelligence.models.analysis import RecoveryAnalysis
from running_intelligence.models.load import LoadZone, TrainingLoad
from running_intelligence.models.plan import PlanDecision, ScenarioType
from running_intelligence.recommendations.today import (
    PlanContext,
    compute_todays_plan,
    decide,
    recovery_days_needed,
    training_paces,
)

from conftest import TODAY, build_run, build_steady_runs


def make_load(zone: LoadZone, ratio: float = 1.0) -> TrainingLoad:
    return TrainingLoad(
        acute=10.0,
        chronic=10.0,
        ratio=ratio,
        zone=zone,
        zone_label=zone.value,
        zone_color="#000000",
        insufficient_data=zone == LoadZone.INSUFFICIENT_DATA,
    )


def context(zone, days=2, hard=False, needed=2) -> PlanContext:
    return PlanContext(
        load=make_load(zone),
        days_since_last_run=days,
        last_run_hard=hard,
        recovery_days_needed=needed,
    )


class TestDecisionRules:
    """The first matching rule decides."""

    def test_danger_means_rest(self):
        assert decide(context(LoadZone.DANGER, days=5)) == PlanDecision.REST

    def test_overreaching_eases_off(self):
        assert decide(context(LoadZone.OVERREACHING, days=5)) == PlanDecision.EASE_OFF

    def test_already_ran_today(self):
        assert decide(context(LoadZone.OPTIMAL, days=0)) == PlanDecision.EASE_OFF

    def test_recovering_from_hard_run(self):
        assert decide(context(LoadZone.OPTIMAL, days=2, hard=True, needed=3)) == PlanDecision.EASE_OFF

    def test_recovered_from_hard_run(self):
        assert decide(context(LoadZone.OPTIMAL, days=3, hard=True, needed=3)) == PlanDecision.PUSH

    @pytest.mark.parametrize("zone", [LoadZone.INSUFFICIENT_DATA, LoadZone.DETRAINING])
    def test_rebuilding(self, zone):
        assert decide(context(zone, days=10)) == PlanDecision.MODERATE

    @pytest.mark.parametrize("zone", [LoadZone.RECOVERY, LoadZone.OPTIMAL])
    def test_push_when_fresh(self, zone):
        assert decide(context(zone, days=2)) == PlanDecision.PUSH

    def test_moderate_the_day_after(self):
        assert decide(context(LoadZone.OPTIMAL, days=1)) == PlanDecision.MODERATE

    def test_no_runs(self):
        assert decide(context(LoadZone.INSUFFICIENT_DATA, days=None)) == PlanDecision.MODERATE


class TestRecoveryDaysNeeded:
    @pytest.mark.parametrize("avg,needed", [(0.0, 2), (0.4, 1), (2.6, 3), (4.0, 4)])
    def test_from_average(self, avg, needed):
        assert recovery_days_needed(RecoveryAnalysis(avg_rest_after_hard=avg, insufficient_data=False)) == needed


class TestTrainingPaces:
    def test_from_recent_runs(self):
        paces = [300, 310, 320, 330, 340, 350, 360, 370, 380, 390]
        runs = [build_run(TODAY - timedelta(days=i + 1), 5.0, p) for i, p in enumerate(paces)]
        easy, tempo = training_paces(runs, TODAY)
        assert easy == pytest.approx(360)
        assert tempo == pytest.approx(320)

    def test_defaults_without_runs(self):
        assert training_paces([], TODAY) == (420.0, 330.0)

    def test_short_and_old_runs_ignored(self):
        runs = [build_run(TODAY - timedelta(days=1), 1.5, 250), build_run(TODAY - timedelta(days=120), 5.0, 250)]
        assert training_paces(runs, TODAY) == (420.0, 330.0)


class TestTodaysPlan:
    """Tests for compute_todays_plan."""

    def test_steady_runner_day_after_a_run(self, steady_runs, today):
        plan = compute_todays_plan(steady_runs, today)
        assert plan.decision == PlanDecision.MODERATE
        assert plan.headline == "Good day for a moderate run"
        assert plan.days_since_last_run == 1
        assert plan.current_ratio == 1.0
        assert plan.current_zone == "Optimal"
        assert plan.last_run_summary == "5.0km in 27:30 (5'30\"/km)"
        assert plan.easy_pace == "5'30\"/km"
        assert plan.easy_pace_secs == 330

    def test_boundaries(self, steady_runs, today):
        """Largest distances keeping the ratio at 1.3 and 1.5."""
        plan = compute_todays_plan(steady_runs, today)
        assert plan.safe_max_km == 3.8
        assert plan.danger_km == 6.7

    def test_scenarios_are_projected(self, steady_runs, today):
        plan = compute_todays_plan(steady_runs, today)
        summary = [(s.label, s.distance_km, s.projected_ratio, s.type) for s in plan.scenarios]
        assert summary == [
            ("Full Rest", 0.0, 1.0, ScenarioType.GOOD),
            ("Easy Run", 3.0, 1.24, ScenarioType.BEST),
            ("Steady Run", 5.0, 1.38, ScenarioType.CAUTION),
            ("Long Run", 7.5, 1.56, ScenarioType.AVOID),
        ]
        assert plan.recommended.label == "Easy Run"
        assert plan.scenarios[0].distance == "-"
        assert plan.scenarios[1].duration == "16:30"

    def test_push_after_two_rest_days(self, steady_runs):
        plan = compute_todays_plan(steady_runs, date(2026, 3, 14))
        assert plan.decision == PlanDecision.PUSH
        assert plan.headline == "Best day to push"

    def test_rest_in_danger_zone(self):
        runs = [build_run(TODAY - timedelta(days=1), 15.0), build_run(TODAY - timedelta(days=26), 45.0)]
        plan = compute_todays_plan(runs, TODAY)
        assert plan.decision == PlanDecision.REST
        assert plan.headline == "Rest day - avoid running"
        assert plan.scenarios[0].type == ScenarioType.BEST
        assert plan.safe_max_km == 0.0

    def test_ease_off_when_overreaching(self):
        runs = [build_run(TODAY - timedelta(days=1), 13.0), build_run(TODAY - timedelta(days=26), 47.0)]
        plan = compute_todays_plan(runs, TODAY)
        assert plan.decision == PlanDecision.EASE_OFF
        assert plan.headline == "Caution - ease off"

    def test_ease_off_after_running_today(self, steady_runs, today):
        plan = compute_todays_plan(steady_runs + [build_run(today, 2.0)], today)
        assert plan.decision == PlanDecision.EASE_OFF
        assert plan.days_since_last_run == 0
        assert plan.advice[0].startswith("You already ran today.")

    def test_ease_off_after_hard_run(self, today):
        runs = [r for r in build_steady_runs() if r.day != date(2026, 3, 12)]
        runs.append(build_run("2026-03-12", 5.0, 300))
        plan = compute_todays_plan(runs, today)
        assert plan.decision == PlanDecision.EASE_OFF

    def test_detraining_after_a_break(self, steady_runs):
        plan = compute_todays_plan(steady_runs, date(2026, 3, 22))
        assert plan.current_zone == "Detraining"
        assert plan.decision == PlanDecision.MODERATE
        assert plan.days_since_last_run == 10
        assert plan.advice[0] == "10 days since your last run. Ease back in with a comfortable effort."

    def test_no_history(self, today):
        """Without runs the plan falls back to fixed distance limits."""
        plan = compute_todays_plan([], today)
        assert plan.decision == PlanDecision.MODERATE
        assert plan.days_since_last_run is None
        assert plan.last_run_summary == "No recent runs"
        assert (plan.safe_max_km, plan.danger_km) == (5.0, 8.0)
        assert plan.easy_pace == "7'00\"/km"
        assert [s.type for s in plan.scenarios] == [
            ScenarioType.GOOD,
            ScenarioType.BEST,
            ScenarioType.BEST,
            ScenarioType.CAUTION,
        ]
        assert all(s.projected_zone == "Not Enough Data" for s in plan.scenarios)
        assert plan.recommended.label == "Steady Run"

    def test_advice_is_plain_text(self, steady_runs, today):
        plan = compute_todays_plan(steady_runs, today)
        assert plan.advice == [
            "Training load is in the sweet spot (ACWR 1.00). Maintain this rhythm.",
            "Safe max: 3.8 km at easy pace.",
        ]

    def test_to_dict_keys(self, steady_runs, today):
        data = compute_todays_plan(steady_runs, today).to_dict()
        assert data["decision"] == "moderate"
        assert data["safeMaxKm"] == 3.8
        assert data["recommended"]["projectedRatio"] == 1.24
        assert data["scenarios"][0]["loadDelta"] == 0.0
