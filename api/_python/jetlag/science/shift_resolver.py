"""
Timezone shift resolution.

Key principles:
- Each zone's UTC offset is evaluated at its own instant (origin at departure,
  destination at arrival), so DST transitions on either side are independent
- The body clock takes the shorter path around the 24h clock: LAX -> NRT is
  +16h on paper but only 8h of circadian delay
- Half-hour and 45-minute zones round to the nearest hour band for display,
  while the exact fractional shift is carried forward for scheduling

Examples:
- JFK (UTC-4) -> LHR (UTC+1): +5h, east (advance)
- LAX (UTC-7) -> NRT (UTC+9): +16h raw, reduced to 8h west (delay)
- TPE (UTC+8) -> YVR (UTC-7): -15h raw, reduced to 9h east (advance)
"""

import logging
from datetime import datetime

import pytz

from ..circadian_math import get_timezone_offset_hours, round_half_up, shorter_arc
from ..errors import InvalidTripError
from ..types import Direction, ShiftDescriptor, TripContext

logger = logging.getLogger(__name__)


def _require_aware(value: datetime, label: str) -> None:
    if not isinstance(value, datetime):
        raise InvalidTripError(f"{label} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidTripError(f"{label} must be timezone-aware")


def _offset_hours(tz_name: str, instant: datetime, label: str) -> float:
    if not tz_name or not isinstance(tz_name, str):
        raise InvalidTripError(f"Missing {label} timezone")
    try:
        return get_timezone_offset_hours(tz_name, instant)
    except pytz.UnknownTimeZoneError as e:
        raise InvalidTripError(f"Invalid {label} timezone: {tz_name!r}") from e


def validate_trip(trip: TripContext) -> None:
    """
    Check that a trip can be scheduled.

    Raises:
        InvalidTripError: unknown zone, naive timestamps, or arrival not after
            departure
    """
    _require_aware(trip.departure, "departure")
    _require_aware(trip.arrival, "arrival")
    if trip.departure >= trip.arrival:
        raise InvalidTripError(
            f"Departure ({trip.departure.isoformat()}) must be before "
            f"arrival ({trip.arrival.isoformat()})"
        )
    if trip.flight_duration_hours < 0:
        raise InvalidTripError(f"Flight duration must not be negative: {trip.flight_duration_hours}")


def _direction_for_sign(sign: int) -> Direction:
    if sign > 0:
        return "east"
    if sign < 0:
        return "west"
    return "none"


def resolve_shift(trip: TripContext) -> ShiftDescriptor:
    """
    Derive the circadian shift a trip requires.

    Args:
        trip: Flight leg with IANA zones and aware departure/arrival instants

    Returns:
        ShiftDescriptor with recovery_days = 0 (filled in by the rate model)

    Raises:
        InvalidTripError: see validate_trip()
    """
    validate_trip(trip)

    origin_offset = _offset_hours(trip.origin_tz, trip.departure, "origin")
    dest_offset = _offset_hours(trip.dest_tz, trip.arrival, "destination")

    # Positive = destination clock is ahead (eastward on paper)
    raw_shift = dest_offset - origin_offset
    arc_hours, sign = shorter_arc(raw_shift)

    magnitude = round_half_up(arc_hours)
    if magnitude == 0:
        # Sub-half-hour shifts fall in the zero band; nothing to adapt
        direction: Direction = "none"
        arc_hours = 0.0
    else:
        direction = _direction_for_sign(sign)

    flight_direction: Direction = "east" if raw_shift > 0 else "west" if raw_shift < 0 else "none"

    if direction != "none" and flight_direction != direction:
        logger.debug(
            "%s -> %s: raw offset %+.2fh reduces to %.2fh %s",
            trip.origin_tz,
            trip.dest_tz,
            raw_shift,
            arc_hours,
            direction,
        )

    return ShiftDescriptor(
        direction=direction,
        magnitude_hours=magnitude,
        recovery_days=0,
        exact_hours=arc_hours,
        raw_offset_hours=raw_shift,
        flight_direction=flight_direction,
    )
