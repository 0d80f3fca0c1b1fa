"""
Calendar export for jetlag plans.

Serializes a plan to an iCalendar document, one VEVENT per intervention.

- All times are written as UTC ("...Z"); floating local times would drift when
  the recipient's calendar is in neither trip timezone
- UIDs are derived from (flight_id, kind, day, start), and DTSTAMP from the
  plan's generation time, so re-exporting an unchanged plan is byte-stable
- Export never raises: a malformed plan yields an ExportResult carrying an
  ExportError that callers can surface as an HTTP error
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from icalendar import Alarm, Calendar, Event

from .circadian_math import parse_iso_datetime, to_utc
from .errors import ExportError
from .types import INTERVENTION_KINDS, InterventionEvent, JetlagPlan

logger = logging.getLogger(__name__)

PRODID = "-//Jetlag Plan//Calendar Export//EN"
UID_DOMAIN = "jetlag-plan"
UID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_DNS, UID_DOMAIN)
CALENDAR_CONTENT_TYPE = "text/calendar; charset=utf-8"

KIND_LABELS = {
    "light_seek": "Light Therapy",
    "light_avoid": "Light Therapy",
    "sleep": "Sleep",
    "melatonin": "Melatonin",
    "meal": "Meals",
    "exercise": "Exercise",
    "caffeine": "Caffeine",
}

REMINDER_TEXT = {
    "light_seek": "Light therapy session in {minutes} minutes",
    "light_avoid": "Start dimming the lights in {minutes} minutes",
    "sleep": "Bedtime in {minutes} minutes - start winding down",
    "melatonin": "Melatonin in {minutes} minutes",
    "meal": "Meal time in {minutes} minutes",
    "exercise": "Exercise session in {minutes} minutes",
    "caffeine": "Caffeine window opens in {minutes} minutes",
}


@dataclass(frozen=True)
class CalendarExportOptions:
    """Which intervention kinds to export, and how."""

    include_reminders: bool = True
    reminder_minutes: int = 15
    include_light: bool = True  # light_seek and light_avoid
    include_sleep: bool = True
    include_melatonin: bool = True
    include_meals: bool = True
    include_exercise: bool = True
    include_caffeine: bool = True
    calendar_name: str = "Jetlag Recovery Plan"

    def includes(self, kind: str) -> bool:
        flags = {
            "light_seek": self.include_light,
            "light_avoid": self.include_light,
            "sleep": self.include_sleep,
            "melatonin": self.include_melatonin,
            "meal": self.include_meals,
            "exercise": self.include_exercise,
            "caffeine": self.include_caffeine,
        }
        return flags[kind]


@dataclass(frozen=True)
class ExportResult:
    """Either a calendar document or the reason there isn't one."""

    document: bytes | None = None
    error: ExportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ExportedEvent:
    """An intervention as read back from a calendar document."""

    uid: str
    kind: str
    day: int
    start: datetime
    end: datetime
    summary: str


def event_uid(flight_id: str, event: InterventionEvent) -> str:
    """Deterministic, globally unique UID for an intervention."""
    key = f"{flight_id}|{event.kind}|{event.day}|{to_utc(event.start).isoformat()}"
    return f"{uuid.uuid5(UID_NAMESPACE, key)}@{UID_DOMAIN}"


def _is_aware(value: object) -> bool:
    return isinstance(value, datetime) and value.tzinfo is not None and value.utcoffset() is not None


def validate_plan_events(plan: JetlagPlan) -> None:
    """
    Check a plan is safe to serialize.

    Raises:
        ExportError: naive timestamps, unknown kinds, bad day numbers, or an
            event whose end is not after its start
    """
    if not _is_aware(plan.generated_at):
        raise ExportError("Plan generated_at must be a timezone-aware datetime")

    for index, event in enumerate(plan.events):
        if event.kind not in INTERVENTION_KINDS:
            raise ExportError(f"Event {index} has unknown kind {event.kind!r}")
        if not isinstance(event.day, int) or event.day < 1:
            raise ExportError(f"Event {index} ({event.kind}) has invalid day {event.day!r}")
        if not _is_aware(event.start) or not _is_aware(event.end):
            raise ExportError(f"Event {index} ({event.kind}) must have timezone-aware times")
        if event.end <= event.start:
            raise ExportError(
                f"Event {index} ({event.kind}, day {event.day}) ends at or before it starts"
            )


def _build_event(plan: JetlagPlan, event: InterventionEvent, options: CalendarExportOptions) -> Event:
    title = event.title or KIND_LABELS[event.kind]

    vevent = Event()
    vevent.add("uid", event_uid(plan.flight_id, event))
    vevent.add("dtstamp", to_utc(plan.generated_at))
    vevent.add("dtstart", to_utc(event.start))
    vevent.add("dtend", to_utc(event.end))
    vevent.add("summary", f"Day {event.day}: {title}")
    vevent.add("description", f"{event.description}\n\nPart of your jetlag recovery plan.")
    vevent.add("categories", ["Jetlag Recovery", KIND_LABELS[event.kind], f"Day {event.day}"])
    vevent.add("status", "CONFIRMED")
    vevent.add("transp", "TRANSPARENT")  # Show as free
    vevent.add("x-jetlag-kind", event.kind)
    vevent.add("x-jetlag-day", str(event.day))

    if options.include_reminders:
        alarm = Alarm()
        alarm.add("action", "DISPLAY")
        alarm.add(
            "description", REMINDER_TEXT[event.kind].format(minutes=options.reminder_minutes)
        )
        alarm.add("trigger", timedelta(minutes=-options.reminder_minutes))
        vevent.add_component(alarm)

    return vevent


def build_calendar(plan: JetlagPlan, options: CalendarExportOptions | None = None) -> Calendar:
    """
    Build the calendar object for a plan.

    Raises:
        ExportError: the plan fails validate_plan_events()
    """
    options = options or CalendarExportOptions()
    validate_plan_events(plan)

    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", options.calendar_name)

    for event in plan.events:
        if options.includes(event.kind):
            cal.add_component(_build_event(plan, event, options))

    return cal


def export_to_calendar(
    plan: JetlagPlan, options: CalendarExportOptions | None = None
) -> ExportResult:
    """
    Export a plan to an .ics document.

    Returns:
        ExportResult with document bytes, or with an ExportError; never raises
    """
    try:
        document = build_calendar(plan, options).to_ical()
    except ExportError as e:
        logger.warning("Calendar export rejected plan for flight %r: %s", plan.flight_id, e)
        return ExportResult(error=e)
    except Exception as e:  # icalendar or malformed plan objects
        logger.exception("Calendar export failed for flight %r", getattr(plan, "flight_id", ""))
        return ExportResult(error=ExportError(f"Failed to generate calendar file: {e}"))

    return ExportResult(document=document)


def events_from_calendar(document: bytes | str) -> list[ExportedEvent]:
    """
    Read interventions back out of an exported document.

    Raises:
        ValueError: the document is not valid iCalendar
    """
    cal = Calendar.from_ical(document)
    events = []
    for component in cal.walk("VEVENT"):
        events.append(
            ExportedEvent(
                uid=str(component.get("uid")),
                kind=str(component.get("x-jetlag-kind")),
                day=int(str(component.get("x-jetlag-day"))),
                start=component.decoded("dtstart"),
                end=component.decoded("dtend"),
                summary=str(component.get("summary")),
            )
        )
    return events


def calendar_filename(
    origin_code: str | None, dest_code: str | None, departure: datetime | date | str
) -> str:
    """
    Download filename: jetlag-plan-{ORIGIN}-{DEST}-{YYYY-MM-DD}.ics

    The date is the departure's own calendar date (not converted to UTC or
    the server's zone).
    """
    if isinstance(departure, str):
        departure = parse_iso_datetime(departure)
    if isinstance(departure, datetime):
        departure = departure.date()

    origin = (origin_code or "ORIGIN").strip().upper()
    dest = (dest_code or "DEST").strip().upper()
    return f"jetlag-plan-{origin}-{dest}-{departure.isoformat()}.ics"
