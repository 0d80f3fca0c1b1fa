"""
Plan storage codec.

Plans are embedded in flight records as opaque JSON text. Timestamps are
written as ISO 8601 strings and revived on load. A stored plan that cannot be
decoded degrades to "no plan available" (None) instead of failing the caller;
the flight can always be re-planned from its trip data.
"""

import json
import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import Any

from .circadian_math import parse_iso_datetime
from .errors import PlanDecodeError
from .types import (
    FlightRecommendation,
    InFlightGuidance,
    InterventionEvent,
    JetlagPlan,
    PlanOptions,
    RecoveryDay,
    RecoveryPlan,
    SafetyInformation,
    ShiftDescriptor,
    TripContext,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _json_default(value: object) -> object:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def plan_to_dict(plan: JetlagPlan) -> dict[str, Any]:
    """Convert a plan to plain dicts/lists (datetimes left as objects)."""
    data = asdict(plan)
    data["schema_version"] = SCHEMA_VERSION
    return data


def plan_to_json(plan: JetlagPlan) -> str:
    """Serialize a plan for storage in the flight record."""
    return json.dumps(plan_to_dict(plan), default=_json_default, sort_keys=True)


def _instant(value: Any, field_name: str) -> datetime:
    if not isinstance(value, str):
        raise PlanDecodeError(f"{field_name} must be an ISO timestamp string")
    try:
        parsed = parse_iso_datetime(value)
    except ValueError as e:
        raise PlanDecodeError(f"{field_name} is not a valid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        raise PlanDecodeError(f"{field_name} is missing its UTC offset")
    return parsed


def _calendar_date(value: Any, field_name: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise PlanDecodeError(f"{field_name} is not a valid date: {value!r}") from e


def _guidance(cls: type, value: Any) -> Any:
    """Rebuild an optional guidance record; JSON lists become tuples."""
    if value is None:
        return None
    fields = {key: tuple(item) if isinstance(item, list) else item for key, item in value.items()}
    return cls(**fields)


def plan_from_dict(data: dict[str, Any]) -> JetlagPlan:
    """
    Rebuild a plan from its dict form.

    Raises:
        PlanDecodeError: missing fields, wrong types, or bad timestamps
    """
    if not isinstance(data, dict):
        raise PlanDecodeError("Stored plan is not a JSON object")

    version = data.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise PlanDecodeError(f"Unsupported plan schema version: {version!r}")

    try:
        trip_data = data["trip"]
        trip = TripContext(
            origin_tz=trip_data["origin_tz"],
            dest_tz=trip_data["dest_tz"],
            departure=_instant(trip_data["departure"], "trip.departure"),
            arrival=_instant(trip_data["arrival"], "trip.arrival"),
            flight_duration_hours=float(trip_data["flight_duration_hours"]),
        )
        shift = ShiftDescriptor(**data["shift"])
        recovery = RecoveryPlan(**data["recovery"])
        events = tuple(
            InterventionEvent(
                kind=item["kind"],
                day=int(item["day"]),
                start=_instant(item["start"], "event.start"),
                end=_instant(item["end"], "event.end"),
                description=item["description"],
                title=item.get("title", ""),
                metadata=dict(item.get("metadata") or {}),
            )
            for item in data["events"]
        )
        timeline = tuple(
            RecoveryDay(
                day=int(item["day"]),
                date=_calendar_date(item["date"], "recovery_timeline.date"),
                recovery_percentage=int(item["recovery_percentage"]),
                phase=item["phase"],
                expected_feeling=item["expected_feeling"],
            )
            for item in data.get("recovery_timeline", [])
        )
        return JetlagPlan(
            trip=trip,
            shift=shift,
            recovery=recovery,
            events=events,
            generated_at=_instant(data["generated_at"], "generated_at"),
            flight_id=str(data.get("flight_id", "")),
            recovery_timeline=timeline,
            options=PlanOptions(**data.get("options", {})),
            safety=_guidance(SafetyInformation, data.get("safety")),
            flight_recommendation=_guidance(
                FlightRecommendation, data.get("flight_recommendation")
            ),
            in_flight=_guidance(InFlightGuidance, data.get("in_flight")),
        )
    except PlanDecodeError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise PlanDecodeError(f"Stored plan does not match schema: {e}") from e


def plan_from_json(text: Any) -> JetlagPlan | None:
    """
    Revive a stored plan.

    Returns:
        The plan, or None if there is no stored text or it cannot be decoded
    """
    if not text:
        return None
    if not isinstance(text, str):
        logger.warning("Stored jetlag plan is %s, not text", type(text).__name__)
        return None

    try:
        return plan_from_dict(json.loads(text))
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Stored jetlag plan is not valid JSON: %s", e)
    except PlanDecodeError as e:
        logger.warning("Stored jetlag plan could not be decoded: %s", e)
    return None
