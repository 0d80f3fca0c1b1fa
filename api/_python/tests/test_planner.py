"""
Tests for the flight-record facade: generation, read-through and legs.
"""

from datetime import datetime, timezone

import pytest

from jetlag.errors import InvalidTripError
from jetlag.planner import load_or_generate, plan_for_flight, plan_for_legs
from jetlag.serialization import plan_from_json, plan_to_json
from jetlag.types import PlanOptions

GENERATED_AT = datetime(2025, 10, 1, 12, 0, tzinfo=timezone.utc)


class TestPlanForFlight:
    def test_camel_case_record(self, lax_nrt_record):
        plan = plan_for_flight(lax_nrt_record, generated_at=GENERATED_AT)
        assert plan.flight_id == "flight-lax-nrt"
        assert plan.shift.direction == "west"
        assert plan.recovery.recovery_days == 6
        assert plan.trip.flight_duration_hours == 11

    def test_snake_case_record(self):
        record = {
            "origin_tz": "America/Los_Angeles",
            "dest_tz": "Asia/Tokyo",
            "departure_datetime": "2025-10-15T18:00",
            "arrival_datetime": "2025-10-16T21:00",
        }
        plan = plan_for_flight(record, generated_at=GENERATED_AT)
        assert plan.shift.magnitude_hours == 8
        assert plan.flight_id == ""

    def test_naive_and_aware_records_agree(self, lax_nrt_record):
        naive = dict(
            lax_nrt_record,
            departureTime="2025-10-15T18:00",
            arrivalTime="2025-10-16T21:00",
        )
        assert plan_for_flight(naive, generated_at=GENERATED_AT) == plan_for_flight(
            lax_nrt_record, generated_at=GENERATED_AT
        )

    def test_duration_derived_when_missing(self, lax_nrt_record):
        record = dict(lax_nrt_record)
        del record["flightDurationHours"]
        plan = plan_for_flight(record, generated_at=GENERATED_AT)
        assert plan.trip.flight_duration_hours == 11.0

    def test_options_applied(self, lax_nrt_record):
        plan = plan_for_flight(
            lax_nrt_record, PlanOptions(include_meals=False), generated_at=GENERATED_AT
        )
        assert plan.events_of_kind("meal") == []

    def test_invalid_record(self, lax_nrt_record):
        record = dict(lax_nrt_record, arrivalTime="2025-10-14T21:00:00+09:00")
        with pytest.raises(InvalidTripError):
            plan_for_flight(record)


class TestLoadOrGenerate:
    def test_generates_when_nothing_stored(self, lax_nrt_record):
        plan, serialized = load_or_generate(lax_nrt_record, generated_at=GENERATED_AT)
        assert plan_from_json(serialized) == plan

    def test_reuses_stored_plan(self, lax_nrt_record):
        stored_plan = plan_for_flight(lax_nrt_record, generated_at=GENERATED_AT)
        stored = plan_to_json(stored_plan)
        record = dict(lax_nrt_record, jetlagPlan=stored)

        later = datetime(2025, 10, 5, 9, 0, tzinfo=timezone.utc)
        plan, serialized = load_or_generate(record, generated_at=later)

        assert serialized == stored
        assert plan == stored_plan
        assert plan.generated_at == GENERATED_AT

    def test_regenerates_when_destination_changes(self, lax_nrt_record):
        stored = plan_to_json(plan_for_flight(lax_nrt_record, generated_at=GENERATED_AT))
        edited = dict(
            lax_nrt_record, destinationTimezone="Europe/London", jetlagPlan=stored
        )

        plan, serialized = load_or_generate(edited, generated_at=GENERATED_AT)

        assert plan.trip.dest_tz == "Europe/London"
        assert plan.shift.direction == "east"
        assert serialized != stored
        assert plan_from_json(serialized) == plan

    def test_regenerates_when_departure_moves(self, lax_nrt_record):
        stored = plan_to_json(plan_for_flight(lax_nrt_record, generated_at=GENERATED_AT))
        edited = dict(
            lax_nrt_record,
            departureTime="2025-10-15T20:00:00-07:00",
            arrivalTime="2025-10-16T23:00:00+09:00",
            jetlagPlan=stored,
        )

        plan, serialized = load_or_generate(edited, generated_at=GENERATED_AT)

        assert serialized != stored
        assert plan.trip.arrival == datetime(2025, 10, 16, 14, 0, tzinfo=timezone.utc)

    def test_same_instants_in_other_offsets_reuse_plan(self, lax_nrt_record):
        stored = plan_to_json(plan_for_flight(lax_nrt_record, generated_at=GENERATED_AT))
        record = dict(
            lax_nrt_record,
            departureTime="2025-10-16T01:00:00Z",
            arrivalTime="2025-10-16T12:00:00Z",
            jetlagPlan=stored,
        )

        _, serialized = load_or_generate(record)

        assert serialized == stored

    def test_regenerates_when_options_change(self, lax_nrt_record):
        stored = plan_to_json(plan_for_flight(lax_nrt_record, generated_at=GENERATED_AT))
        record = dict(lax_nrt_record, jetlagPlan=stored)
        options = PlanOptions(include_meals=False)

        plan, serialized = load_or_generate(record, options, generated_at=GENERATED_AT)

        assert serialized != stored
        assert plan.options == options
        assert plan.events_of_kind("meal") == []

    def test_stored_options_are_kept(self, lax_nrt_record):
        options = PlanOptions(baseline_bedtime="23:00", light_exposure_minutes=45)
        stored = plan_to_json(
            plan_for_flight(lax_nrt_record, options, generated_at=GENERATED_AT)
        )
        record = dict(lax_nrt_record, jetlagPlan=stored)

        _, serialized = load_or_generate(
            record, PlanOptions(baseline_bedtime="23:00", light_exposure_minutes=45)
        )

        assert serialized == stored

    def test_regenerates_corrupt_stored_plan(self, lax_nrt_record):
        record = dict(lax_nrt_record, jetlagPlan='{"trip": "truncat')
        plan, serialized = load_or_generate(record, generated_at=GENERATED_AT)

        assert plan.recovery.recovery_days == 6
        assert serialized != record["jetlagPlan"]
        assert plan_from_json(serialized) == plan


class TestPlanForLegs:
    def test_each_leg_planned_independently(self, lax_nrt_record):
        onward = {
            "id": "flight-nrt-sin",
            "originTimezone": "Asia/Tokyo",
            "destinationTimezone": "Asia/Singapore",
            "departureTime": "2025-10-22T11:00",
            "arrivalTime": "2025-10-22T17:30",
        }
        plans = plan_for_legs([lax_nrt_record, onward])

        assert [p.flight_id for p in plans] == ["flight-lax-nrt", "flight-nrt-sin"]
        assert plans[0].shift.magnitude_hours == 8
        assert plans[1].shift.direction == "west"
        assert plans[1].shift.magnitude_hours == 1

    def test_empty_legs(self):
        assert plan_for_legs([]) == []
