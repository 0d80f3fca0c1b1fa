"""
Tests for travel-day guidance: safety caveats, flight timing, in-flight advice.
"""

import pytest

from helpers import make_trip, resolve
from jetlag.guidance import (
    flight_recommendation,
    in_flight_guidance,
    is_overnight_flight,
    safety_information,
)
from jetlag.types import PlanOptions

JFK_LHR = ("America/New_York", "Europe/London", "2025-06-10T19:00", "2025-06-11T07:00")
NRT_DXB = ("Asia/Tokyo", "Asia/Dubai", "2025-10-15T22:00", "2025-10-16T04:00")
LAX_NRT = ("America/Los_Angeles", "Asia/Tokyo", "2025-10-15T18:00", "2025-10-16T21:00")
NYC_YYZ = ("America/New_York", "America/Toronto", "2025-06-10T08:00", "2025-06-10T10:00")


class TestOvernightFlight:
    def test_evening_departure_morning_arrival(self):
        assert is_overnight_flight(make_trip(*JFK_LHR))
        assert is_overnight_flight(make_trip(*NRT_DXB))

    def test_evening_arrival_is_not_overnight(self):
        assert not is_overnight_flight(make_trip(*LAX_NRT))

    def test_short_hop_is_not_overnight(self):
        """Leaves at 23:00 and lands at 04:00 local, but only 2h in the air."""
        trip = make_trip("Europe/London", "Asia/Dubai", "2025-06-10T23:00", "2025-06-11T04:00")
        assert not is_overnight_flight(trip)


class TestFlightRecommendation:
    @pytest.mark.parametrize(
        "route, window",
        [(JFK_LHR, (18, 22)), (LAX_NRT, (8, 14)), (NYC_YYZ, (8, 18))],
        ids=["east", "west", "none"],
    )
    def test_departure_window_by_direction(self, route, window):
        shift, _ = resolve(*route)
        recommendation = flight_recommendation(make_trip(*route), shift)
        assert (
            recommendation.optimal_departure_start,
            recommendation.optimal_departure_end,
        ) == window

    def test_carries_overnight_flag(self):
        shift, _ = resolve(*JFK_LHR)
        assert flight_recommendation(make_trip(*JFK_LHR), shift).is_overnight_flight

    def test_no_shift(self):
        shift, _ = resolve(*NYC_YYZ)
        recommendation = flight_recommendation(make_trip(*NYC_YYZ), shift)
        assert recommendation.alternative_if_unavailable == "Any flight time works."
        assert not recommendation.is_overnight_flight


class TestInFlightGuidance:
    def test_eastward_overnight_sleeps_with_melatonin(self):
        shift, _ = resolve(*JFK_LHR)
        guidance = in_flight_guidance(make_trip(*JFK_LHR), shift, PlanOptions())
        assert guidance.sleep[0] == "Sleep as much as possible on this overnight flight"
        assert any("melatonin" in line for line in guidance.sleep)

    def test_melatonin_flag_off_drops_in_flight_dose(self):
        shift, _ = resolve(*JFK_LHR)
        guidance = in_flight_guidance(
            make_trip(*JFK_LHR), shift, PlanOptions(include_melatonin=False)
        )
        assert not any("melatonin" in line.lower() for line in guidance.sleep)

    def test_westward_overnight_stays_awake(self):
        shift, _ = resolve(*NRT_DXB)
        assert shift.direction == "west"
        guidance = in_flight_guidance(make_trip(*NRT_DXB), shift, PlanOptions())
        assert guidance.sleep[0].startswith("Stay awake")
        assert "Avoid melatonin; it makes staying awake harder" in guidance.sleep

    def test_westward_day_flight(self):
        shift, _ = resolve(*LAX_NRT)
        guidance = in_flight_guidance(make_trip(*LAX_NRT), shift, PlanOptions())
        assert guidance.sleep[0] == "Stay awake during the flight if you can"

    def test_hydration_and_movement_always_present(self):
        shift, _ = resolve(*NYC_YYZ)
        guidance = in_flight_guidance(make_trip(*NYC_YYZ), shift, PlanOptions())
        assert guidance.hydration
        assert guidance.movement
        assert guidance.meals


class TestSafetyInformation:
    def test_advance_plan_names_scheduled_dose(self):
        shift, _ = resolve(*JFK_LHR)
        safety = safety_information(shift, PlanOptions(melatonin_dose_mg=3))
        assert "3 mg" in safety.melatonin_dosage
        assert safety.important_notes[0].startswith("Melatonin is scheduled")

    def test_delay_plan_has_no_melatonin_dose(self):
        shift, _ = resolve(*LAX_NRT)
        safety = safety_information(shift, PlanOptions())
        assert safety.melatonin_dosage == "This plan does not schedule melatonin."
        assert not any("Melatonin is scheduled" in note for note in safety.important_notes)

    def test_warnings_always_listed(self):
        shift, _ = resolve(*LAX_NRT)
        safety = safety_information(shift, PlanOptions())
        assert "not medical advice" in safety.disclaimer
        assert "Pregnancy or breastfeeding" in safety.melatonin_contraindications
        assert safety.melatonin_interactions
        assert safety.light_therapy_contraindications
        assert safety.light_therapy_warnings
        assert safety.seek_medical_advice


class TestPlanGuidance:
    def test_attached_to_generated_plan(self, eastward_plan):
        assert eastward_plan.safety is not None
        assert eastward_plan.flight_recommendation.is_overnight_flight
        assert eastward_plan.in_flight.sleep[0].startswith("Sleep")

    def test_plan_records_options(self, westward_plan):
        assert westward_plan.options == PlanOptions()
