"""
Jetlag Adaptation Plans

Resolves the circadian shift a flight imposes, estimates recovery time, and
schedules day-by-day interventions (light, sleep, melatonin, meals, exercise,
caffeine) exportable as an iCalendar document.

Entry point: plan_for_flight() / load_or_generate()
"""

from .adaptation_language import describe, simple_summary
from .calendar_export import (
    CalendarExportOptions,
    ExportResult,
    calendar_filename,
    export_to_calendar,
)
from .errors import ExportError, InvalidTripError, JetlagError, PlanDecodeError
from .guidance import flight_recommendation, in_flight_guidance, safety_information
from .planner import load_or_generate, plan_for_flight, plan_for_legs, plan_for_trip
from .serialization import plan_from_json, plan_to_json
from .types import (
    AdaptationMessage,
    FlightRecommendation,
    InFlightGuidance,
    InterventionEvent,
    JetlagPlan,
    PlanOptions,
    RecoveryPlan,
    SafetyInformation,
    ShiftDescriptor,
    TripContext,
)

__all__ = [
    # Types
    "TripContext",
    "ShiftDescriptor",
    "RecoveryPlan",
    "PlanOptions",
    "InterventionEvent",
    "JetlagPlan",
    "AdaptationMessage",
    "SafetyInformation",
    "FlightRecommendation",
    "InFlightGuidance",
    # Errors
    "JetlagError",
    "InvalidTripError",
    "ExportError",
    "PlanDecodeError",
    # Planning
    "plan_for_trip",
    "plan_for_flight",
    "plan_for_legs",
    "load_or_generate",
    # Storage
    "plan_to_json",
    "plan_from_json",
    # Presentation and export
    "describe",
    "simple_summary",
    "safety_information",
    "flight_recommendation",
    "in_flight_guidance",
    "CalendarExportOptions",
    "ExportResult",
    "export_to_calendar",
    "calendar_filename",
]
