"""
Travel-day guidance that sits alongside the recovery schedule.

Three pieces, all derived from the trip and its resolved shift:
- Safety information (medical caveats for melatonin and bright light)
- Flight recommendation (overnight-flight detection, best departure window)
- In-flight guidance (sleep, meals, hydration, movement on board)

Like adaptation_language, this is presentation only and never feeds back
into the scheduled interventions.
"""

from .circadian_math import local_hours
from .types import (
    FlightRecommendation,
    InFlightGuidance,
    PlanOptions,
    SafetyInformation,
    ShiftDescriptor,
    TripContext,
)

# Overnight flight: leaves in the evening, lands in the morning, and is long
# enough to sleep on
OVERNIGHT_DEPARTURE_FROM_HOUR = 18
OVERNIGHT_ARRIVAL_UNTIL_HOUR = 10
OVERNIGHT_MIN_FLIGHT_HOURS = 5

MAX_UNSUPERVISED_MELATONIN_MG = 5

DISCLAIMER = (
    "This jetlag plan is general information, not medical advice, diagnosis "
    "or treatment. Recovery varies a lot between people (20-40%) with "
    "genetics, health and other factors. Talk to a healthcare provider before "
    "starting any supplement, including melatonin, especially if you have a "
    "health condition, take medication, are pregnant or nursing, or are over 65."
)

MELATONIN_CONTRAINDICATIONS = (
    "Pregnancy or breastfeeding",
    "Autoimmune disorders (lupus, rheumatoid arthritis, etc.)",
    "Seizure disorders or history of seizures",
    "Depression or other mood disorders",
    "Bleeding disorders or taking blood thinners",
    "Diabetes or blood sugar regulation issues",
    "High or low blood pressure",
)

MELATONIN_INTERACTIONS = (
    "Blood pressure medications (may enhance effects)",
    "Diabetes medications (may affect blood sugar)",
    "Immunosuppressants (may interfere with effectiveness)",
    "Sedatives or sleep medications (increased drowsiness)",
    "Blood thinners (may slow blood clotting)",
    "Contraceptive drugs (may reduce effectiveness)",
)

LIGHT_THERAPY_CONTRAINDICATIONS = (
    "Retinal disorders or macular degeneration",
    "Photosensitivity or light-sensitive skin conditions",
    "Taking photosensitizing medications (certain antibiotics, antifungals, NSAIDs)",
    "History of skin cancer or suspicious moles",
    "Bipolar disorder or history of mania (can trigger manic episodes)",
    "Recent eye surgery or eye injury",
)

LIGHT_THERAPY_WARNINGS = (
    "Stop immediately if you get eye pain, visual disturbances or headaches",
    "Do not look directly at light therapy devices",
    "Position a light box 16-24 inches from your face at a 45-degree angle",
    "Start with 10-15 minutes and build up to the scheduled duration",
)

SEEK_MEDICAL_ADVICE = (
    "Severe insomnia lasting more than 3 consecutive days",
    "Extreme fatigue that affects your ability to function safely",
    "Significant mood changes, depression or anxiety",
    "Confusion, disorientation or memory problems beyond typical jetlag",
    "Any other concerning physical or mental health symptoms",
)

GENERAL_NOTES = (
    "Alcohol significantly worsens jetlag; avoid it for the first 48 hours",
    "If you feel unsafe driving or operating machinery, do not do so",
    "Recovery estimates are population averages, not individual predictions",
)

HYDRATION = (
    "Drink a glass of water every hour",
    "Avoid alcohol; it worsens jetlag",
    "Limit caffeine to the destination's morning hours",
)

MOVEMENT = (
    "Walk the aisles every 2 hours",
    "Stretch in your seat every 30 minutes",
    "Do ankle circles and leg raises",
)


def is_overnight_flight(trip: TripContext) -> bool:
    """Evening departure (origin time), morning arrival (destination time)."""
    departure_hour = int(local_hours(trip.departure, trip.origin_tz))
    arrival_hour = int(local_hours(trip.arrival, trip.dest_tz))
    flight_hours = (trip.arrival - trip.departure).total_seconds() / 3600
    return (
        departure_hour >= OVERNIGHT_DEPARTURE_FROM_HOUR
        and arrival_hour <= OVERNIGHT_ARRIVAL_UNTIL_HOUR
        and flight_hours > OVERNIGHT_MIN_FLIGHT_HOURS
    )


def melatonin_scheduled(shift: ShiftDescriptor, options: PlanOptions) -> bool:
    return options.include_melatonin and shift.direction == "east"


def safety_information(shift: ShiftDescriptor, options: PlanOptions) -> SafetyInformation:
    dose = f"{options.melatonin_dose_mg:g} mg"
    if melatonin_scheduled(shift, options):
        dosage = (
            f"This plan uses {dose} at the scheduled time. Start low to see how you "
            f"respond, and do not exceed {MAX_UNSUPERVISED_MELATONIN_MG} mg without "
            "medical supervision."
        )
        notes = (
            "Melatonin is scheduled on advance days; check the contraindications "
            "before your first dose",
        ) + GENERAL_NOTES
    else:
        dosage = "This plan does not schedule melatonin."
        notes = GENERAL_NOTES

    return SafetyInformation(
        disclaimer=DISCLAIMER,
        melatonin_contraindications=MELATONIN_CONTRAINDICATIONS,
        melatonin_interactions=MELATONIN_INTERACTIONS,
        melatonin_dosage=dosage,
        light_therapy_contraindications=LIGHT_THERAPY_CONTRAINDICATIONS,
        light_therapy_warnings=LIGHT_THERAPY_WARNINGS,
        seek_medical_advice=SEEK_MEDICAL_ADVICE,
        important_notes=notes,
    )


def flight_recommendation(trip: TripContext, shift: ShiftDescriptor) -> FlightRecommendation:
    """
    Which departure times suit the shift.

    Eastward (advance) trips do best on overnight flights that land in the
    morning; westward (delay) trips on day flights that keep the traveler
    awake until a late local bedtime.
    """
    overnight = is_overnight_flight(trip)

    if shift.direction == "east":
        return FlightRecommendation(
            optimal_departure_start=18,
            optimal_departure_end=22,
            reasoning=(
                "Overnight flights let you sleep on board and land in the morning, "
                "so your first day starts aligned with the earlier local time."
            ),
            alternative_if_unavailable=(
                "On a day flight, stay awake on board and go to bed at your "
                "scheduled bedtime after landing."
            ),
            is_overnight_flight=overnight,
        )
    if shift.direction == "west":
        return FlightRecommendation(
            optimal_departure_start=8,
            optimal_departure_end=14,
            reasoning=(
                "Day flights keep you awake through the journey, which helps delay "
                "your body clock. Land in the afternoon or evening and stay up "
                "until your scheduled bedtime."
            ),
            alternative_if_unavailable=(
                "On an overnight flight, stay awake as much as you can and get "
                "bright light after landing."
            ),
            is_overnight_flight=overnight,
        )
    return FlightRecommendation(
        optimal_departure_start=8,
        optimal_departure_end=18,
        reasoning="No significant timezone change, so flight timing matters little.",
        alternative_if_unavailable="Any flight time works.",
        is_overnight_flight=overnight,
    )


def _sleep_on_board(
    shift: ShiftDescriptor, options: PlanOptions, overnight: bool
) -> tuple[str, ...]:
    if overnight and shift.direction == "east":
        lines = ["Sleep as much as possible on this overnight flight"]
        if melatonin_scheduled(shift, options):
            lines.append("Take melatonin 30-60 minutes after takeoff to help you sleep")
        lines += [
            "Use an eye mask, earplugs and a neck pillow",
            "Skip meal service if it cuts into your sleep",
        ]
        return tuple(lines)
    if overnight and shift.direction == "west":
        return (
            "Stay awake as long as you can, even on this overnight flight",
            "If you must sleep, keep it to 2-3 hours at most",
            "Use the reading light or a screen to stay alert",
            "Avoid melatonin; it makes staying awake harder",
        )
    if shift.direction == "east":
        return (
            "Try to sleep during the flight so you arrive rested",
            "Avoid alcohol and caffeine in the 4 hours before you sleep",
        )
    if shift.direction == "west":
        return (
            "Stay awake during the flight if you can",
            "Short 20-minute naps are fine if you need them",
        )
    return ("Sleep or stay awake as you normally would at this time of day",)


def in_flight_guidance(
    trip: TripContext, shift: ShiftDescriptor, options: PlanOptions
) -> InFlightGuidance:
    overnight = is_overnight_flight(trip)
    return InFlightGuidance(
        sleep=_sleep_on_board(shift, options, overnight),
        meals=(
            "Set your watch to destination time when you board",
            "Eat light meals at destination meal times",
        ),
        hydration=HYDRATION,
        movement=MOVEMENT,
    )
