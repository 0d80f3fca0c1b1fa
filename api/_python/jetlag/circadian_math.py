"""
Clock arithmetic on the 24-hour circle and timezone offset lookups.

Offsets always come from the tz database (pytz) evaluated at a concrete
instant, never from manual offset subtraction, so DST is handled per zone.
"""

import math
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytz

HOURS_PER_DAY = 24


def parse_time(time_str: str) -> time:
    """Parse "HH:MM" string to time object."""
    parts = time_str.split(":")
    if len(parts) != 2:
        raise ValueError(f"Expected HH:MM, got {time_str!r}")
    return time(int(parts[0]), int(parts[1]))


def format_time_12h(t: time) -> str:
    """Format time as "H:MM AM/PM" (12-hour format for user-facing text)."""
    hour = t.hour
    period = "AM" if hour < 12 else "PM"
    if hour == 0:
        hour = 12
    elif hour > 12:
        hour -= 12
    return f"{hour}:{t.minute:02d} {period}"


def format_local_12h(instant: datetime, tz_name: str) -> str:
    """Format an absolute instant as 12-hour wall-clock time in tz_name."""
    return format_time_12h(instant.astimezone(ZoneInfo(tz_name)).time())


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 string, accepting a trailing "Z" for UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def get_timezone_offset_hours(tz_name: str, instant: datetime) -> float:
    """
    Get the UTC offset in hours for a timezone at a specific instant.

    Args:
        tz_name: IANA timezone name (e.g., "America/Los_Angeles")
        instant: Timezone-aware datetime at which to evaluate the offset

    Returns:
        Offset in hours (e.g., -8.0 for PST, -7.0 for PDT, 5.5 for IST)

    Raises:
        pytz.UnknownTimeZoneError: tz_name is not in the tz database
    """
    tz = pytz.timezone(tz_name)
    offset = instant.astimezone(tz).utcoffset()
    return offset.total_seconds() / 3600


def round_half_up(hours: float) -> int:
    """Round to the nearest whole hour, with .5 going up (5.5 -> 6, not 6 -> banker's)."""
    return int(math.floor(hours + 0.5))


def shorter_arc(raw_hours: float) -> tuple[float, int]:
    """
    Reduce a signed offset to the shorter arc of the 24h clock.

    Returns:
        (arc_hours, sign) where arc_hours is in [0, 12] and sign is +1 when
        the shorter way round is forward (clock ahead), -1 when backward,
        and 0 when the offset is a whole number of days.
    """
    reduced = raw_hours % HOURS_PER_DAY
    if reduced == 0:
        return 0.0, 0
    if reduced < 12:
        return reduced, 1
    if reduced > 12:
        return HOURS_PER_DAY - reduced, -1
    # Exactly opposite sides of the clock: keep the raw direction
    return 12.0, 1 if raw_hours > 0 else -1


def local_wall_clock(day: date, hours: float, tz_name: str) -> datetime:
    """
    Absolute (UTC) instant for a wall-clock time in tz_name.

    hours is measured from local midnight of `day` and may exceed 24 or be
    negative (e.g., 26.0 is 02:00 the following day).
    """
    naive = datetime.combine(day, time(0, 0)) + timedelta(seconds=round(hours * 3600))
    local = naive.replace(tzinfo=ZoneInfo(tz_name))
    return to_utc(local)


def local_date(instant: datetime, tz_name: str) -> date:
    """Calendar date of an instant in tz_name."""
    return instant.astimezone(ZoneInfo(tz_name)).date()


def local_hours(instant: datetime, tz_name: str) -> float:
    """Fractional hours since local midnight for an instant in tz_name."""
    local = instant.astimezone(ZoneInfo(tz_name))
    return local.hour + local.minute / 60 + local.second / 3600


def to_utc(instant: datetime) -> datetime:
    """Convert to UTC with whole-second precision (what calendars preserve)."""
    return instant.astimezone(timezone.utc).replace(microsecond=0)