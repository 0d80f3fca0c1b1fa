"""
Test helper functions for jetlag plan validation.

These functions can be imported by test modules for plan analysis.
"""

import sys
from datetime import datetime, time, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jetlag.planner import plan_for_trip
from jetlag.science import plan_recovery, resolve_shift
from jetlag.types import InterventionEvent, JetlagPlan, PlanOptions, TripContext

GENERATED_AT = datetime(2025, 10, 1, 12, 0, tzinfo=timezone.utc)

EXCLUSIVE_KINDS = {"sleep", "light_seek", "light_avoid"}


def make_trip(origin_tz: str, dest_tz: str, departure: str, arrival: str) -> TripContext:
    """
    Build a trip from local wall-clock ISO strings.

    Naive strings are interpreted in their own zone (departure at origin,
    arrival at destination), the same way stored flight records are.
    """
    return TripContext.from_flight(
        {
            "originTimezone": origin_tz,
            "destinationTimezone": dest_tz,
            "departureTime": departure,
            "arrivalTime": arrival,
        }
    )


def build_plan(
    origin_tz: str,
    dest_tz: str,
    departure: str,
    arrival: str,
    options: PlanOptions | None = None,
    flight_id: str = "flight-1",
) -> JetlagPlan:
    trip = make_trip(origin_tz, dest_tz, departure, arrival)
    return plan_for_trip(trip, options, flight_id=flight_id, generated_at=GENERATED_AT)


def lax_nrt_plan(options: PlanOptions | None = None) -> JetlagPlan:
    """LAX -> NRT: +16h on paper, 8h westward (delay) for the body clock."""
    return build_plan(
        "America/Los_Angeles",
        "Asia/Tokyo",
        "2025-10-15T18:00",
        "2025-10-16T21:00",
        options,
    )


def jfk_lhr_plan(options: PlanOptions | None = None) -> JetlagPlan:
    """JFK -> LHR overnight: 5h eastward (advance)."""
    return build_plan(
        "America/New_York",
        "Europe/London",
        "2025-06-10T19:00",
        "2025-06-11T07:00",
        options,
    )


def make_event(kind: str, day: int, start: datetime, end: datetime) -> InterventionEvent:
    return InterventionEvent(kind=kind, day=day, start=start, end=end, description=f"{kind} test")


def local(instant: datetime, tz_name: str) -> datetime:
    return instant.astimezone(ZoneInfo(tz_name))


def find_exclusive_overlaps(plan: JetlagPlan) -> list[tuple[InterventionEvent, InterventionEvent]]:
    """Same-day sleep/light pairs whose intervals intersect."""
    overlaps = []
    for day in plan.days():
        exclusive = [e for e in plan.events_for_day(day) if e.kind in EXCLUSIVE_KINDS]
        for i, first in enumerate(exclusive):
            for second in exclusive[i + 1 :]:
                if first.overlaps(second):
                    overlaps.append((first, second))
    return overlaps


def light_seek_outside_daylight(plan: JetlagPlan) -> list[InterventionEvent]:
    """light_seek windows not contained in 06:00-18:00 destination time."""
    outside = []
    for event in plan.events_of_kind("light_seek"):
        start = local(event.start, plan.trip.dest_tz)
        end = local(event.end, plan.trip.dest_tz)
        if start.date() != end.date() or start.time() < time(6, 0) or end.time() > time(18, 0):
            outside.append(event)
    return outside


def resolve(origin_tz: str, dest_tz: str, departure: str, arrival: str):
    """(shift, recovery) for a trip built from local wall-clock strings."""
    shift = resolve_shift(make_trip(origin_tz, dest_tz, departure, arrival))
    return shift, plan_recovery(shift)
