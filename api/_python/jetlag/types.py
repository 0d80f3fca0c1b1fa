"""
Data structures for jetlag plan generation.

Everything the scheduler produces is immutable: a plan is generated once per
flight and fully regenerated when the flight changes.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .circadian_math import parse_iso_datetime, parse_time
from .errors import InvalidTripError

Direction = Literal["east", "west", "none"]

AdaptationType = Literal["advance", "delay", "none"]

DifficultyLevel = Literal["easy", "moderate", "hard", "very_hard"]

InterventionKind = Literal[
    "light_seek",
    "light_avoid",
    "sleep",
    "melatonin",
    "meal",
    "exercise",
    "caffeine",
]

INTERVENTION_KINDS: tuple[str, ...] = (
    "light_seek",
    "light_avoid",
    "sleep",
    "melatonin",
    "meal",
    "exercise",
    "caffeine",
)

RecoveryPhase = Literal["acute", "adaptation", "maintenance"]


# =============================================================================
# Trip input
# =============================================================================

# Accepted spellings for each field of a stored flight record
_FLIGHT_KEYS = {
    "origin_tz": ("originTimezone", "origin_tz"),
    "dest_tz": ("destinationTimezone", "dest_tz"),
    "departure": ("departureTime", "departure_datetime", "departure"),
    "arrival": ("arrivalTime", "arrival_datetime", "arrival"),
    "flight_duration_hours": ("flightDurationHours", "flight_duration_hours"),
}


def _first_present(record: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _as_instant(value: Any, tz_name: str, label: str) -> datetime:
    """Read a datetime or ISO string; naive values are wall-clock in tz_name."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = parse_iso_datetime(value)
        except ValueError as e:
            raise InvalidTripError(f"Invalid {label} time: {value!r}") from e
    else:
        raise InvalidTripError(f"Missing {label} time")

    if parsed.tzinfo is None:
        try:
            parsed = parsed.replace(tzinfo=ZoneInfo(tz_name))
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidTripError(f"Invalid timezone: {tz_name!r}") from e
    return parsed


@dataclass(frozen=True)
class TripContext:
    """
    A single flight leg as seen by the scheduler.

    Both instants are timezone-aware. Validation (known zones, ordering) is
    performed by resolve_shift(), not at construction.
    """

    origin_tz: str  # IANA timezone (e.g., "America/Los_Angeles")
    dest_tz: str  # IANA timezone (e.g., "Asia/Tokyo")
    departure: datetime
    arrival: datetime
    flight_duration_hours: float

    @classmethod
    def from_flight(cls, record: dict[str, Any]) -> "TripContext":
        """
        Build a trip from a flight-like record.

        Accepts camelCase keys from the flight store or the snake_case keys
        used by the CLI request files. Naive timestamps are local wall-clock
        time: departure at the origin, arrival at the destination.
        """
        origin_tz = _first_present(record, _FLIGHT_KEYS["origin_tz"])
        dest_tz = _first_present(record, _FLIGHT_KEYS["dest_tz"])
        if not origin_tz or not dest_tz:
            raise InvalidTripError("Flight record is missing a timezone")

        departure = _as_instant(
            _first_present(record, _FLIGHT_KEYS["departure"]), origin_tz, "departure"
        )
        arrival = _as_instant(_first_present(record, _FLIGHT_KEYS["arrival"]), dest_tz, "arrival")

        duration = _first_present(record, _FLIGHT_KEYS["flight_duration_hours"])
        if duration is None:
            duration = (arrival - departure).total_seconds() / 3600

        return cls(
            origin_tz=origin_tz,
            dest_tz=dest_tz,
            departure=departure,
            arrival=arrival,
            flight_duration_hours=float(duration),
        )


# =============================================================================
# Shift and recovery
# =============================================================================


@dataclass(frozen=True)
class ShiftDescriptor:
    """
    Direction and size of the circadian shift a trip requires.

    magnitude_hours is always the shorter arc of the 24h clock, rounded to
    the nearest hour band; exact_hours keeps the fractional remainder (e.g.
    5.5 for India) so that recovery and scheduling are not truncated.
    """

    direction: Direction
    magnitude_hours: int  # 0-12, shorter arc
    recovery_days: int = 0
    exact_hours: float = 0.0
    raw_offset_hours: float = 0.0  # dest UTC offset minus origin UTC offset
    flight_direction: Direction = "none"  # Geographic direction implied by raw offset

    @property
    def adaptation(self) -> AdaptationType:
        """Circadian vocabulary for the direction (east = advance)."""
        if self.direction == "east":
            return "advance"
        if self.direction == "west":
            return "delay"
        return "none"

    @property
    def signed_hours(self) -> float:
        """Shorter arc with sign: positive = destination clock is ahead."""
        if self.direction == "east":
            return self.exact_hours
        if self.direction == "west":
            return -self.exact_hours
        return 0.0

    def with_recovery(self, recovery_days: int) -> "ShiftDescriptor":
        return replace(self, recovery_days=recovery_days)


@dataclass(frozen=True)
class RecoveryPlan:
    """Output of the adaptation-rate model."""

    recovery_days: int
    daily_budget_hours: float  # Hours/day the body clock can move


# =============================================================================
# Options
# =============================================================================

MIN_LIGHT_EXPOSURE_MINUTES = 30
MAX_LIGHT_EXPOSURE_MINUTES = 60


@dataclass(frozen=True)
class PlanOptions:
    """
    Every supported plan option with its default.

    Turning an include_* flag off removes that intervention kind from the
    generated plan entirely, not just from display.
    """

    include_meals: bool = True
    include_exercise: bool = True
    include_caffeine: bool = True
    include_melatonin: bool = True  # Only ever applied to advance (eastward) plans
    baseline_bedtime: str = "22:00"  # Habitual bedtime at origin, "HH:MM"
    light_exposure_minutes: int = 60  # Duration per light window (30-60)
    caffeine_cutoff_hours: int = 8  # Hours before bedtime to stop caffeine
    melatonin_dose_mg: float = 0.5

    def __post_init__(self) -> None:
        if not MIN_LIGHT_EXPOSURE_MINUTES <= self.light_exposure_minutes <= MAX_LIGHT_EXPOSURE_MINUTES:
            raise ValueError(
                f"light_exposure_minutes must be between {MIN_LIGHT_EXPOSURE_MINUTES} "
                f"and {MAX_LIGHT_EXPOSURE_MINUTES}, got {self.light_exposure_minutes}"
            )
        if not 0 <= self.caffeine_cutoff_hours <= 16:
            raise ValueError(f"caffeine_cutoff_hours out of range: {self.caffeine_cutoff_hours}")
        if self.melatonin_dose_mg <= 0:
            raise ValueError("melatonin_dose_mg must be positive")
        parse_time(self.baseline_bedtime)

    @property
    def baseline_bedtime_hours(self) -> float:
        """Baseline bedtime as fractional hours since midnight."""
        t = parse_time(self.baseline_bedtime)
        return t.hour + t.minute / 60


# =============================================================================
# Plan
# =============================================================================


@dataclass(frozen=True)
class InterventionEvent:
    """
    Single scheduled intervention.

    start/end are absolute (UTC) instants; day is 1-indexed from the arrival
    date in destination-local time.
    """

    kind: InterventionKind
    day: int
    start: datetime
    end: datetime
    description: str
    title: str = ""
    metadata: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: "InterventionEvent") -> bool:
        """Half-open interval overlap: touching endpoints do not overlap."""
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class RecoveryDay:
    """Expected progress on one recovery day."""

    day: int
    date: date  # Destination-local calendar date
    recovery_percentage: int
    phase: RecoveryPhase
    expected_feeling: str


@dataclass(frozen=True)
class SafetyInformation:
    """Medical caveats shown with every plan, ahead of the schedule itself."""

    disclaimer: str
    melatonin_contraindications: tuple[str, ...]
    melatonin_interactions: tuple[str, ...]
    melatonin_dosage: str
    light_therapy_contraindications: tuple[str, ...]
    light_therapy_warnings: tuple[str, ...]
    seek_medical_advice: tuple[str, ...]
    important_notes: tuple[str, ...]


@dataclass(frozen=True)
class FlightRecommendation:
    """Best departure time for the direction of travel."""

    optimal_departure_start: int  # Origin-local hour
    optimal_departure_end: int
    reasoning: str
    alternative_if_unavailable: str
    is_overnight_flight: bool


@dataclass(frozen=True)
class InFlightGuidance:
    sleep: tuple[str, ...]
    meals: tuple[str, ...]
    hydration: tuple[str, ...]
    movement: tuple[str, ...]


@dataclass(frozen=True)
class JetlagPlan:
    """
    Complete adaptation plan for one flight.

    Events are ordered by (day, start, kind). The plan is embedded in the
    flight record as serialized text; see serialization.py. options records
    what the plan was generated with, so a stored plan can be checked
    against a later request.
    """

    trip: TripContext
    shift: ShiftDescriptor
    recovery: RecoveryPlan
    events: tuple[InterventionEvent, ...]
    generated_at: datetime
    flight_id: str = ""
    recovery_timeline: tuple[RecoveryDay, ...] = ()
    options: PlanOptions = field(default_factory=PlanOptions)
    safety: SafetyInformation | None = None
    flight_recommendation: FlightRecommendation | None = None
    in_flight: InFlightGuidance | None = None

    def days(self) -> list[int]:
        """Distinct day numbers that have at least one event."""
        return sorted({event.day for event in self.events})

    def events_for_day(self, day: int) -> list[InterventionEvent]:
        return [event for event in self.events if event.day == day]

    def events_of_kind(self, kind: str) -> list[InterventionEvent]:
        return [event for event in self.events if event.kind == kind]


@dataclass(frozen=True)
class AdaptationMessage:
    """User-facing description of the adaptation a trip needs."""

    type: AdaptationType
    short_description: str
    detailed_description: str
    strategy: str
    difficulty_level: DifficultyLevel
    user_friendly_direction: str
    geographic_note: str | None = None
