"""Tests for reading run files."""

import json

import pytest

from running_intelligence import loader
from running_intelligence.exceptions import ErrorCode, RunDataError
from running_intelligence.loader import load_runs, parse_runs


def run_record(day, distance_km=5.0, time_seconds=1650, **extra):
    record = {
        "id": day,
        "dateFull": f"{day}T07:00:00",
        "distanceKm": distance_km,
        "timeSeconds": time_seconds,
    }
    record.update(extra)
    return record


class TestParseRuns:
    """Tests for payload validation."""

    def test_plain_list(self):
        runs, total_km = parse_runs([run_record("2026-03-02"), run_record("2026-03-09", 8.0, 2640)])
        assert [r.distance_km for r in runs] == [8.0, 5.0]
        assert total_km == 13.0

    def test_object_with_lifetime_distance(self):
        payload = {"runs": [run_record("2026-03-02", location="Barcelona")], "totalKm": 1234.5}
        runs, total_km = parse_runs(payload)
        assert total_km == 1234.5
        assert runs[0].location == "Barcelona"

    def test_snake_case_fields_accepted(self):
        record = {"date_full": "2026-03-02T18:30:00", "distance_km": 10, "time_seconds": 3000}
        runs, _ = parse_runs({"runs": [record], "total_km": 10})
        assert runs[0].start.hour == 18
        assert runs[0].pace == 300

    def test_timezone_offset_dropped(self):
        runs, _ = parse_runs([{"dateFull": "2026-03-02T07:00:00+02:00", "distanceKm": 5, "timeSeconds": 1500}])
        assert runs[0].start.tzinfo is None
        assert runs[0].start.hour == 7

    def test_empty_list(self):
        assert parse_runs([]) == ([], 0.0)

    def test_not_a_list(self):
        with pytest.raises(RunDataError) as exc_info:
            parse_runs({"activities": []})
        assert exc_info.value.code == ErrorCode.RUN_FILE_INVALID

    def test_invalid_record(self):
        with pytest.raises(RunDataError) as exc_info:
            parse_runs([run_record("2026-03-02"), {"dateFull": "2026-03-03", "distanceKm": -1, "timeSeconds": 10}])
        error = exc_info.value
        assert error.code == ErrorCode.RUN_RECORD_INVALID
        assert error.details["index"] == 1
        assert error.to_dict()["error"]["code"] == "RUN_RECORD_INVALID"

    @pytest.mark.parametrize("total_km", [-1, "lots", True])
    def test_invalid_lifetime_distance(self, total_km):
        with pytest.raises(RunDataError):
            parse_runs({"runs": [], "totalKm": total_km})


class TestLoadRuns:
    """Tests for file handling."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "runs.json"
        path.write_text(json.dumps({"runs": [run_record("2026-03-02")], "totalKm": 400}), encoding="utf-8")
        runs, total_km = load_runs(path)
        assert len(runs) == 1
        assert total_km == 400.0

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / "runs.json"
        path.write_text("[]", encoding="utf-8")
        assert load_runs(str(path)) == ([], 0.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RunDataError) as exc_info:
            load_runs(tmp_path / "missing.json")
        assert exc_info.value.code == ErrorCode.RUN_FILE_NOT_FOUND
        assert exc_info.value.details["path"].endswith("missing.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "runs.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RunDataError) as exc_info:
            load_runs(path)
        assert exc_info.value.code == ErrorCode.RUN_FILE_INVALID


class TestNonFiniteValues:
    """Infinity and NaN are valid JSON for Python but never valid run data."""

    @pytest.mark.parametrize("field", ["distanceKm", "timeSeconds", "paceSecsPerKm", "heartrate", "elevation"])
    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_rejected_in_records(self, field, value):
        record = run_record("2026-03-02")
        record[field] = value
        with pytest.raises(RunDataError) as exc_info:
            parse_runs([record])
        assert exc_info.value.code == ErrorCode.RUN_RECORD_INVALID

    def test_infinity_literal_in_file(self, tmp_path):
        path = tmp_path / "runs.json"
        path.write_text(
            '[{"dateFull": "2026-03-02T07:00:00", "distanceKm": Infinity, "timeSeconds": 1650}]',
            encoding="utf-8",
        )
        with pytest.raises(RunDataError) as exc_info:
            load_runs(path)
        assert exc_info.value.code == ErrorCode.RUN_RECORD_INVALID

    @pytest.mark.parametrize("total_km", [float("inf"), float("nan")])
    def test_rejected_lifetime_distance(self, total_km):
        with pytest.raises(RunDataError):
            parse_runs({"runs": [], "totalKm": total_km})


class TestUnreadableFiles:
    def test_not_utf8(self, tmp_path):
        path = tmp_path / "runs.json"
        path.write_bytes(b"\xff\xfe[]")
        with pytest.raises(RunDataError) as exc_info:
            load_runs(path)
        assert exc_info.value.code == ErrorCode.RUN_FILE_INVALID

    def test_permission_denied(self, tmp_path, monkeypatch):
        path = tmp_path / "runs.json"
        path.write_text("[]", encoding="utf-8")

        def denied(*args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr(loader, "open", denied, raising=False)
        with pytest.raises(RunDataError) as exc_info:
            load_runs(path)
        assert "cannot be read" in exc_info.value.message
