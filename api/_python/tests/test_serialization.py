"""
Tests for the stored-plan codec.

A stored plan that cannot be decoded degrades to None ("no plan available")
rather than raising.
"""

import json
import logging

import pytest

from helpers import build_plan
from jetlag.errors import PlanDecodeError
from jetlag.serialization import SCHEMA_VERSION, plan_from_dict, plan_from_json, plan_to_json
from jetlag.types import PlanOptions


class TestRoundTrip:
    def test_westward_plan(self, westward_plan):
        revived = plan_from_json(plan_to_json(westward_plan))
        assert revived == westward_plan

    def test_eastward_plan_keeps_metadata(self, eastward_plan):
        revived = plan_from_json(plan_to_json(eastward_plan))
        doses = revived.events_of_kind("melatonin")
        assert doses
        assert all(dose.metadata == {"dose_mg": "0.5"} for dose in doses)

    def test_empty_plan(self):
        plan = build_plan("America/New_York", "America/Toronto", "2025-06-10T08:00", "2025-06-10T10:00")
        revived = plan_from_json(plan_to_json(plan))
        assert revived == plan
        assert revived.events == ()

    def test_timestamps_are_aware(self, westward_plan):
        revived = plan_from_json(plan_to_json(westward_plan))
        assert revived.generated_at.tzinfo is not None
        assert all(e.start.tzinfo is not None for e in revived.events)

    def test_json_is_stable(self, westward_plan):
        assert plan_to_json(westward_plan) == plan_to_json(westward_plan)

    def test_schema_version_written(self, westward_plan):
        assert json.loads(plan_to_json(westward_plan))["schema_version"] == SCHEMA_VERSION

    def test_guidance_revived_as_tuples(self, eastward_plan):
        revived = plan_from_json(plan_to_json(eastward_plan))
        assert revived.safety == eastward_plan.safety
        assert isinstance(revived.in_flight.sleep, tuple)

    def test_plan_stored_without_options_or_guidance(self, westward_plan):
        data = json.loads(plan_to_json(westward_plan))
        for key in ("options", "safety", "flight_recommendation", "in_flight"):
            del data[key]

        revived = plan_from_json(json.dumps(data))

        assert revived.options == PlanOptions()
        assert revived.safety is None
        assert revived.events == westward_plan.events


class TestCorruptStoredPlans:
    @pytest.mark.parametrize(
        "text",
        [
            "not json at all",
            "[]",
            "{}",
            '{"trip": {}}',
            "null",
        ],
    )
    def test_malformed_text_is_no_plan(self, text):
        assert plan_from_json(text) is None

    def test_missing_text_is_no_plan(self):
        assert plan_from_json(None) is None
        assert plan_from_json("") is None

    def test_truncated_text(self, westward_plan):
        text = plan_to_json(westward_plan)
        assert plan_from_json(text[: len(text) // 2]) is None

    def test_bad_timestamp(self, westward_plan):
        data = json.loads(plan_to_json(westward_plan))
        data["events"][0]["start"] = "yesterday"
        assert plan_from_json(json.dumps(data)) is None

    def test_naive_timestamp(self, westward_plan):
        data = json.loads(plan_to_json(westward_plan))
        data["generated_at"] = "2025-10-01T12:00:00"
        assert plan_from_json(json.dumps(data)) is None

    def test_invalid_stored_options(self, westward_plan):
        data = json.loads(plan_to_json(westward_plan))
        data["options"]["light_exposure_minutes"] = 5
        assert plan_from_json(json.dumps(data)) is None

    def test_unknown_schema_version(self, westward_plan):
        data = json.loads(plan_to_json(westward_plan))
        data["schema_version"] = 99
        assert plan_from_json(json.dumps(data)) is None

    def test_object_instead_of_text(self, westward_plan, caplog):
        """A plan stored as a JSON object rather than its serialized text."""
        data = json.loads(plan_to_json(westward_plan))
        with caplog.at_level(logging.WARNING, logger="jetlag.serialization"):
            assert plan_from_json(data) is None
        assert "not text" in caplog.text

    def test_invalid_utf8_bytes(self):
        assert plan_from_json(b"\xff\xfe{") is None

    def test_deeply_nested_json(self):
        assert plan_from_json("[" * 100_000 + "]" * 100_000) is None

    def test_events_of_wrong_shape(self, westward_plan):
        data = json.loads(plan_to_json(westward_plan))
        data["events"] = [["light_seek", 1]]
        assert plan_from_json(json.dumps(data)) is None

    def test_corrupt_plan_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="jetlag.serialization"):
            plan_from_json("{broken")
        assert "not valid JSON" in caplog.text

    def test_decode_error_raised_internally(self):
        with pytest.raises(PlanDecodeError):
            plan_from_dict({"trip": {}})
