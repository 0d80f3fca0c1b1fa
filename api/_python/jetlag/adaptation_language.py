"""
User-facing adaptation language.

Converts internal east/west direction into what the traveler actually has to
do (advance or delay sleep) and how hard that will be. Presentation only:
nothing here feeds back into scheduling.
"""

from .types import AdaptationMessage, DifficultyLevel, Direction

# Upper bound (inclusive, hours) for each tier; advancing is harder than
# delaying, so the same shift lands in a harder tier going east.
ADVANCE_TIERS: tuple[tuple[float, DifficultyLevel], ...] = (
    (3, "moderate"),
    (6, "hard"),
)
DELAY_TIERS: tuple[tuple[float, DifficultyLevel], ...] = (
    (4, "easy"),
    (8, "moderate"),
)

DIFFICULTY_LABELS: dict[DifficultyLevel, str] = {
    "easy": "Easy",
    "moderate": "Moderate",
    "hard": "Hard",
    "very_hard": "Very hard",
}


def _tier(hours: float, tiers: tuple[tuple[float, DifficultyLevel], ...], top: DifficultyLevel):
    for limit, level in tiers:
        if hours <= limit:
            return level
    return top


def _format_hours(hours: float) -> str:
    return f"{hours:g}"


def explain_geographic_vs_circadian(
    flight_direction: Direction, adaptation_direction: Direction, hours: float
) -> str | None:
    """
    Explain why the body adapts the "wrong" way.

    Returns None when flight and adaptation directions agree (or either is
    "none"); otherwise a short note for the traveler.
    """
    if "none" in (flight_direction, adaptation_direction):
        return None
    if flight_direction == adaptation_direction:
        return None

    other_way = 24 - hours
    return (
        f"Note: although you're flying {flight_direction}ward, your body will adapt "
        f"{adaptation_direction}ward. Adjusting {_format_hours(hours)} hours "
        f"{adaptation_direction}ward is faster than going {_format_hours(other_way)} hours "
        f"{flight_direction}ward. Your body clock takes the shortest path around the "
        "24-hour clock."
    )


def describe(
    direction: Direction,
    magnitude_hours: float,
    flight_direction: Direction | None = None,
    origin: str = "your origin",
    destination: str = "your destination",
) -> AdaptationMessage:
    """
    Describe the adaptation a trip needs.

    Args:
        direction: Circadian direction from the resolver (east/west/none)
        magnitude_hours: Shorter-arc shift in hours
        flight_direction: Geographic direction, if known; enables the note
            explaining a mismatch with the circadian direction
        origin: Display name for the origin (used for same-zone trips)
        destination: Display name for the destination

    Returns:
        AdaptationMessage
    """
    if direction == "none" or magnitude_hours == 0:
        return AdaptationMessage(
            type="none",
            short_description="No timezone adjustment needed",
            detailed_description=(
                f"{origin} and {destination} are in the same timezone. "
                "You won't experience jetlag from this flight."
            ),
            strategy="Keep your normal sleep schedule.",
            difficulty_level="easy",
            user_friendly_direction="Same timezone",
        )

    hours = _format_hours(magnitude_hours)
    note = None
    if flight_direction is not None:
        note = explain_geographic_vs_circadian(flight_direction, direction, magnitude_hours)

    if direction == "east":
        return AdaptationMessage(
            type="advance",
            short_description=f"Advance your sleep schedule by {hours} hours",
            detailed_description=(
                "Your body needs to shift to an earlier sleep schedule. You'll need to go "
                f"to bed {hours} hours earlier than your body expects."
            ),
            strategy=(
                "Shift your bedtime earlier by about an hour per day. Seek morning light "
                "and avoid evening light to help your body adjust."
            ),
            difficulty_level=_tier(magnitude_hours, ADVANCE_TIERS, "very_hard"),
            user_friendly_direction=f"{hours}h earlier" + (" (challenging)" if magnitude_hours > 6 else ""),
            geographic_note=note,
        )

    return AdaptationMessage(
        type="delay",
        short_description=f"Delay your sleep schedule by {hours} hours",
        detailed_description=(
            "Your body needs to shift to a later sleep schedule. You'll need to stay up "
            f"{hours} hours later than your body expects."
        ),
        strategy=(
            "Shift your bedtime later by up to an hour and a half per day. Seek late-day "
            "light and avoid morning light to help your body adjust."
        ),
        difficulty_level=_tier(magnitude_hours, DELAY_TIERS, "hard"),
        user_friendly_direction=f"{hours}h later" + (" (moderate effort)" if magnitude_hours > 8 else ""),
        geographic_note=note,
    )


def simple_summary(direction: Direction, hours: float, recovery_days: int) -> str:
    """One-line summary for list views, e.g. "8h later - 6 days recovery"."""
    if direction == "none":
        return "No jetlag - same timezone"

    action = "earlier" if direction == "east" else "later"
    plural = "" if recovery_days == 1 else "s"
    return f"{_format_hours(hours)}h {action} - {recovery_days} day{plural} recovery"


def difficulty_label(level: DifficultyLevel) -> str:
    return DIFFICULTY_LABELS[level]
