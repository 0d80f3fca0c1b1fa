"""
Flight-record facade.

Flight records carry their plan as serialized text under "jetlagPlan". A plan
is generated when a flight is created and regenerated whenever its times,
timezones or plan options change. Reads reuse the stored text only when it
decodes cleanly and was generated for the record's current trip and options.
"""

import logging
from datetime import datetime
from typing import Any

from .scheduling import ScheduleSynthesizer
from .science import plan_recovery, resolve_shift
from .serialization import plan_from_json, plan_to_json
from .types import JetlagPlan, PlanOptions, TripContext

logger = logging.getLogger(__name__)

STORED_PLAN_KEY = "jetlagPlan"


def plan_for_trip(
    trip: TripContext,
    options: PlanOptions | None = None,
    flight_id: str = "",
    generated_at: datetime | None = None,
) -> JetlagPlan:
    """
    Resolve, rate and synthesize a plan for a trip.

    Raises:
        InvalidTripError: unknown timezone, naive or inverted timestamps
    """
    shift = resolve_shift(trip)
    recovery = plan_recovery(shift)
    return ScheduleSynthesizer(options).synthesize(
        trip, shift, recovery, flight_id=flight_id, generated_at=generated_at
    )


def plan_for_flight(
    record: dict[str, Any],
    options: PlanOptions | None = None,
    generated_at: datetime | None = None,
) -> JetlagPlan:
    """Generate a fresh plan for one flight record."""
    trip = TripContext.from_flight(record)
    return plan_for_trip(
        trip, options, flight_id=str(record.get("id", "")), generated_at=generated_at
    )


def is_current(plan: JetlagPlan, trip: TripContext, options: PlanOptions) -> bool:
    """True when plan was generated for this trip (zones and instants) and options."""
    return (
        plan.trip.origin_tz == trip.origin_tz
        and plan.trip.dest_tz == trip.dest_tz
        and plan.trip.departure == trip.departure
        and plan.trip.arrival == trip.arrival
        and plan.options == options
    )


def load_or_generate(
    record: dict[str, Any],
    options: PlanOptions | None = None,
    generated_at: datetime | None = None,
) -> tuple[JetlagPlan, str]:
    """
    Return the flight's plan and its serialized form.

    The stored plan is reused when it decodes and still matches the record's
    trip and the requested options; otherwise a new plan is generated and
    serialized for the caller to persist.

    Raises:
        InvalidTripError: the record's trip cannot be planned
    """
    options = options or PlanOptions()
    trip = TripContext.from_flight(record)
    flight_id = str(record.get("id", ""))

    stored = record.get(STORED_PLAN_KEY)
    if stored:
        plan = plan_from_json(stored)
        if plan is None:
            logger.info("Regenerating undecodable plan for flight %r", flight_id)
        elif not is_current(plan, trip, options):
            logger.info("Regenerating stale plan for flight %r", flight_id)
        else:
            return plan, stored

    plan = plan_for_trip(trip, options, flight_id=flight_id, generated_at=generated_at)
    return plan, plan_to_json(plan)


def plan_for_legs(
    records: list[dict[str, Any]], options: PlanOptions | None = None
) -> list[JetlagPlan]:
    """One independent plan per leg; legs do not influence each other."""
    return [plan_for_flight(record, options) for record in records]
