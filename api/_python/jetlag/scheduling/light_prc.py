"""
Light window generation based on the light Phase Response Curve.

Scientific basis: Khalsa SBS et al. (2003). A phase response curve to single
bright light pulses in human subjects. J Physiol, 549(3), 945-952.

Practical rules applied per recovery day:
- ADVANCE: seek light right after waking, avoid light in the last window
  before bed
- DELAY: seek light in the evening (ending 1h before bed), avoid light in the
  first window after waking
- light_seek must fall in daylight. Without sunrise/sunset data, daylight is
  a fixed 06:00-18:00 local window
- Every window is trimmed to the waking window; anything under 30 minutes
  after trimming is dropped rather than emitted as a token gesture
"""

from datetime import datetime, time, timedelta

from ..circadian_math import format_local_12h, local_date, local_hours, local_wall_clock
from ..types import InterventionEvent, ShiftDescriptor
from .day_frames import DayFrame

DAYLIGHT_START = time(6, 0)
DAYLIGHT_END = time(18, 0)
MIN_LIGHT_WINDOW_MINUTES = 30
DELAY_SEEK_END_BEFORE_BED_HOURS = 1.0

_DAYLIGHT_START_HOURS = DAYLIGHT_START.hour + DAYLIGHT_START.minute / 60
_DAYLIGHT_END_HOURS = DAYLIGHT_END.hour + DAYLIGHT_END.minute / 60


def _daylight_bounds(instant: datetime, tz_name: str) -> tuple[datetime, datetime]:
    """Daylight window on the local date of an instant."""
    day = local_date(instant, tz_name)
    return (
        local_wall_clock(day, _DAYLIGHT_START_HOURS, tz_name),
        local_wall_clock(day, _DAYLIGHT_END_HOURS, tz_name),
    )


def earliest_daylight_start(instant: datetime, tz_name: str) -> datetime:
    """First daylight moment at or after an instant."""
    hours = local_hours(instant, tz_name)
    if hours < _DAYLIGHT_START_HOURS:
        return _daylight_bounds(instant, tz_name)[0]
    if hours >= _DAYLIGHT_END_HOURS:
        return _daylight_bounds(instant + timedelta(days=1), tz_name)[0]
    return instant


def latest_daylight_end(instant: datetime, tz_name: str) -> datetime:
    """Last daylight moment at or before an instant."""
    hours = local_hours(instant, tz_name)
    if hours > _DAYLIGHT_END_HOURS:
        return _daylight_bounds(instant, tz_name)[1]
    if hours < _DAYLIGHT_START_HOURS:
        return _daylight_bounds(instant - timedelta(days=1), tz_name)[1]
    return instant


def clip_window(
    start: datetime,
    end: datetime,
    lower: datetime,
    upper: datetime,
    min_minutes: int = MIN_LIGHT_WINDOW_MINUTES,
) -> tuple[datetime, datetime] | None:
    """
    Intersect [start, end) with [lower, upper).

    Returns:
        The trimmed window, or None if less than min_minutes remain
    """
    start = max(start, lower)
    end = min(end, upper)
    if (end - start) < timedelta(minutes=min_minutes):
        return None
    return start, end


def _within_daylight(window: tuple[datetime, datetime], tz_name: str) -> tuple[datetime, datetime] | None:
    dawn, dusk = _daylight_bounds(window[0], tz_name)
    return clip_window(window[0], window[1], dawn, dusk)


def _seek_window(
    frame: DayFrame, shift: ShiftDescriptor, duration: timedelta, tz_name: str
) -> tuple[datetime, datetime] | None:
    if shift.direction == "east":
        start = earliest_daylight_start(frame.wake, tz_name)
        window = (start, start + duration)
    else:
        end = latest_daylight_end(
            frame.sleep_start - timedelta(hours=DELAY_SEEK_END_BEFORE_BED_HOURS), tz_name
        )
        window = (end - duration, end)

    window = _within_daylight(window, tz_name)
    if window is None:
        return None
    return clip_window(window[0], window[1], frame.wake, frame.sleep_start)


def _avoid_window(
    frame: DayFrame, shift: ShiftDescriptor, duration: timedelta
) -> tuple[datetime, datetime] | None:
    if shift.direction == "east":
        window = (frame.sleep_start - duration, frame.sleep_start)
    else:
        window = (frame.wake, frame.wake + duration)
    return clip_window(window[0], window[1], frame.wake, frame.sleep_start)


def generate_light_windows(
    frame: DayFrame,
    shift: ShiftDescriptor,
    tz_name: str,
    duration_min: int = 60,
) -> list[InterventionEvent]:
    """
    Generate light seek and avoid windows for one day.

    Args:
        frame: Day skeleton (wake, sleep window)
        shift: Resolved shift; direction decides morning vs evening light
        tz_name: Destination IANA timezone (for daylight bounds and text)
        duration_min: Window length in minutes (30-60)

    Returns:
        Zero to two events (light_seek, light_avoid), in that order
    """
    if shift.direction == "none":
        return []

    duration = timedelta(minutes=duration_min)
    events = []

    seek = _seek_window(frame, shift, duration, tz_name)
    if seek is not None:
        if shift.direction == "east":
            description = (
                f"Get bright light from {format_local_12h(seek[0], tz_name)}. "
                "Morning light shifts your body clock earlier. "
                "Outdoors is best; a 10,000 lux light box works too."
            )
            title = "Seek morning light"
        else:
            description = (
                f"Get bright light until {format_local_12h(seek[1], tz_name)}. "
                "Late-day light shifts your body clock later. "
                "Spend this time outdoors if you can."
            )
            title = "Seek afternoon light"
        events.append(
            InterventionEvent(
                kind="light_seek",
                day=frame.day,
                start=seek[0],
                end=seek[1],
                title=title,
                description=description,
            )
        )

    avoid = _avoid_window(frame, shift, duration)
    if avoid is not None:
        if shift.direction == "east":
            description = (
                "Dim the lights and avoid screens before bed. "
                "Evening light would push your body clock later."
            )
            title = "Avoid evening light"
        else:
            description = (
                "Keep light low after waking: stay indoors or wear sunglasses. "
                "Morning light would pull your body clock earlier."
            )
            title = "Avoid morning light"
        events.append(
            InterventionEvent(
                kind="light_avoid",
                day=frame.day,
                start=avoid[0],
                end=avoid[1],
                title=title,
                description=description,
            )
        )

    return events
