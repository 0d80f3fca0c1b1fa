"""
Tests for the command-line entry points.

Both scripts print JSON to stdout; failures print {"error": ...} and exit 1.
"""

import json
import sys

import pytest

import export_calendar
import generate_plan
from jetlag.calendar_export import events_from_calendar
from jetlag.serialization import plan_from_json


def run(module, monkeypatch, capsys, *args):
    monkeypatch.setattr(sys, "argv", [module.__name__ + ".py", *args])
    module.main()
    return json.loads(capsys.readouterr().out)


@pytest.fixture
def flight_file(tmp_path, lax_nrt_record):
    path = tmp_path / "flight.json"
    path.write_text(json.dumps(lax_nrt_record))
    return path


class TestGeneratePlan:
    def test_prints_plan(self, flight_file, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["generate_plan.py", str(flight_file)])
        generate_plan.main()

        plan = plan_from_json(capsys.readouterr().out)
        assert plan is not None
        assert plan.flight_id == "flight-lax-nrt"
        assert plan.recovery.recovery_days == 6

    def test_options_from_record(self, tmp_path, lax_nrt_record, monkeypatch, capsys):
        path = tmp_path / "flight.json"
        path.write_text(json.dumps(dict(lax_nrt_record, options={"include_meals": False})))
        monkeypatch.setattr(sys, "argv", ["generate_plan.py", str(path)])
        generate_plan.main()

        plan = plan_from_json(capsys.readouterr().out)
        assert plan.events_of_kind("meal") == []

    def test_usage_error(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            run(generate_plan, monkeypatch, capsys)
        assert exc.value.code == 1
        assert "Usage" in json.loads(capsys.readouterr().out)["error"]

    def test_missing_file(self, tmp_path, monkeypatch, capsys):
        with pytest.raises(SystemExit):
            run(generate_plan, monkeypatch, capsys, str(tmp_path / "missing.json"))
        assert "not found" in json.loads(capsys.readouterr().out)["error"]

    def test_invalid_trip(self, tmp_path, lax_nrt_record, monkeypatch, capsys):
        path = tmp_path / "flight.json"
        path.write_text(json.dumps(dict(lax_nrt_record, destinationTimezone="Mars/Base")))
        with pytest.raises(SystemExit):
            run(generate_plan, monkeypatch, capsys, str(path))
        assert "Invalid trip" in json.loads(capsys.readouterr().out)["error"]

    def test_unknown_option(self, tmp_path, lax_nrt_record, monkeypatch, capsys):
        path = tmp_path / "flight.json"
        path.write_text(json.dumps(dict(lax_nrt_record, options={"nap_preference": "all"})))
        with pytest.raises(SystemExit):
            run(generate_plan, monkeypatch, capsys, str(path))
        assert "Invalid options" in json.loads(capsys.readouterr().out)["error"]


class TestExportCalendar:
    def test_writes_ics(self, flight_file, tmp_path, monkeypatch, capsys):
        out_dir = tmp_path / "out"
        output = run(export_calendar, monkeypatch, capsys, str(flight_file), str(out_dir))

        assert output["filename"] == "jetlag-plan-LAX-NRT-2025-10-15.ics"
        document = (out_dir / output["filename"]).read_bytes()
        assert len(events_from_calendar(document)) == output["events"]

    def test_invalid_json(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "flight.json"
        path.write_text("{not json")
        with pytest.raises(SystemExit) as exc:
            run(export_calendar, monkeypatch, capsys, str(path))
        assert exc.value.code == 1
        assert "Invalid JSON" in json.loads(capsys.readouterr().out)["error"]
