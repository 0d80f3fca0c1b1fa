"""
Meal, exercise and caffeine nudges.

These are secondary zeitgebers: smaller effects than light, but they anchor
the day to the same target phase. Every nudge must fit inside the day's
waking window; anything that would not fit is skipped.

Exercise (Youngstedt et al. 2019): morning exercise advances, evening
exercise delays. Caffeine (Burke et al. 2015): fine after waking, cut off
well before bed (3-5h half-life).
"""

from datetime import timedelta

from ..circadian_math import format_local_12h
from ..types import InterventionEvent, PlanOptions, ShiftDescriptor
from .day_frames import DayFrame

MEAL_OFFSETS_HOURS = (
    ("Breakfast", 0.5, "Protein-rich breakfast within an hour of waking."),
    ("Lunch", 5.0, "Balanced lunch with complex carbs."),
    ("Dinner", 11.0, "Light dinner; avoid heavy food close to bedtime."),
)
MEAL_DURATION_MINUTES = 30
EXERCISE_DURATION_MINUTES = 30
EXERCISE_AFTER_WAKE_HOURS = 1.5  # Advance
EXERCISE_BEFORE_BED_HOURS = 3.5  # Delay
CAFFEINE_START_AFTER_WAKE_HOURS = 0.5
MIN_CAFFEINE_WINDOW_MINUTES = 30


def generate_meals(frame: DayFrame, tz_name: str) -> list[InterventionEvent]:
    events = []
    for label, offset_hours, text in MEAL_OFFSETS_HOURS:
        start = frame.wake + timedelta(hours=offset_hours)
        end = start + timedelta(minutes=MEAL_DURATION_MINUTES)
        if not frame.within_waking(start, end):
            continue
        events.append(
            InterventionEvent(
                kind="meal",
                day=frame.day,
                start=start,
                end=end,
                title=label,
                description=f"{text} Eat on destination time ({format_local_12h(start, tz_name)}).",
            )
        )
    return events


def generate_exercise(
    frame: DayFrame, shift: ShiftDescriptor, tz_name: str
) -> InterventionEvent | None:
    if shift.direction == "east":
        start = frame.wake + timedelta(hours=EXERCISE_AFTER_WAKE_HOURS)
        title = "Morning exercise"
        description = (
            "Moderate aerobic exercise (brisk walk, jog, cycling) helps advance "
            "your body clock. Outdoor exercise adds the benefit of light."
        )
    else:
        start = frame.sleep_start - timedelta(hours=EXERCISE_BEFORE_BED_HOURS)
        title = "Evening exercise"
        description = (
            "Moderate aerobic exercise helps delay your body clock. "
            "Avoid intense exercise close to bedtime."
        )

    end = start + timedelta(minutes=EXERCISE_DURATION_MINUTES)
    if not frame.within_waking(start, end):
        return None

    return InterventionEvent(
        kind="exercise",
        day=frame.day,
        start=start,
        end=end,
        title=title,
        description=f"{description} Starts {format_local_12h(start, tz_name)}.",
    )


def generate_caffeine(
    frame: DayFrame, tz_name: str, cutoff_hours: int = 8
) -> InterventionEvent | None:
    """
    One window in which caffeine is fine, ending cutoff_hours before bed.

    Returns None when the waking day is too short to leave a useful window.
    """
    start = frame.wake + timedelta(hours=CAFFEINE_START_AFTER_WAKE_HOURS)
    end = frame.sleep_start - timedelta(hours=cutoff_hours)
    if end - start < timedelta(minutes=MIN_CAFFEINE_WINDOW_MINUTES):
        return None

    return InterventionEvent(
        kind="caffeine",
        day=frame.day,
        start=start,
        end=end,
        title="Caffeine OK",
        description=(
            f"Coffee and caffeinated drinks are fine until {format_local_12h(end, tz_name)}. "
            "Stop after that to protect your sleep."
        ),
        metadata={"cutoff_hours": str(cutoff_hours)},
    )


def generate_nudges(
    frame: DayFrame, shift: ShiftDescriptor, tz_name: str, options: PlanOptions
) -> list[InterventionEvent]:
    """
    All optional nudges for a day, honoring the inclusion flags.

    A disabled flag means the kind is never generated.
    """
    events: list[InterventionEvent] = []

    if options.include_meals:
        events.extend(generate_meals(frame, tz_name))

    if options.include_exercise:
        exercise = generate_exercise(frame, shift, tz_name)
        if exercise is not None:
            events.append(exercise)

    if options.include_caffeine:
        caffeine = generate_caffeine(frame, tz_name, options.caffeine_cutoff_hours)
        if caffeine is not None:
            events.append(caffeine)

    return events
