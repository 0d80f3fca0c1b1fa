"""
Day frame generation for recovery days.

A day frame is the skeleton every intervention hangs off: the day's target
bedtime, the canonical 8h sleep window, and the waking window that precedes it.

Bedtime model (destination wall-clock hours, counted from the night's date):

    bedtime = baseline + s * (1 - offset_d / exact)

where s is the signed shorter arc (positive = destination ahead) and offset_d
is the cumulative phase offset for day d. Day 1 starts from the origin phase
shifted one daily step; the final day lands exactly on the baseline bedtime in
destination time. Advance plans move bedtime earlier each day, delay plans
later.

A baseline before noon (e.g. "01:00") is the small hours of the previous
evening's night and is counted as 25:00. Day d's bedtime is day 1's night
plus (d - 1) days, so consecutive bedtimes are always 24h +/- one daily step
apart and every day keeps a real waking window.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..circadian_math import local_date, local_wall_clock, to_utc
from ..science.rate_model import daily_targets
from ..types import PlanOptions, RecoveryPlan, ShiftDescriptor, TripContext

SLEEP_DURATION_HOURS = 8.0
WAKING_DAY_HOURS = 24.0 - SLEEP_DURATION_HOURS

# Bedtimes earlier than this belong to the night that started the day before
EVENING_CUTOFF_HOURS = 12.0

# A body-clock bedtime this long before landing is last night's; day 1 takes
# the following night instead
MISSED_BEDTIME_HOURS = 10.0


@dataclass(frozen=True)
class DayFrame:
    """Timing skeleton for one recovery day (all instants UTC)."""

    day: int
    date: date  # Destination-local date
    target_offset: float  # Cumulative hours shifted by this day
    bedtime: datetime  # Target bedtime before any clipping
    sleep_start: datetime  # Bedtime clipped so it never precedes arrival
    sleep_end: datetime
    wake: datetime  # Start of this day's waking window

    @property
    def waking_hours(self) -> float:
        return (self.sleep_start - self.wake).total_seconds() / 3600

    def within_waking(self, start: datetime, end: datetime) -> bool:
        return self.wake <= start and end <= self.sleep_start


def evening_hours(hours: float) -> float:
    """Express a clock bedtime as hours from the start of its night's date."""
    if hours < EVENING_CUTOFF_HOURS:
        return hours + 24
    return hours


def bedtime_hours(baseline: float, shift: ShiftDescriptor, target_offset: float) -> float:
    """
    Target bedtime for a day, in destination wall-clock hours (may exceed 24).

    Args:
        baseline: Habitual bedtime at origin in hours (e.g., 22.0)
        shift: Resolved shift
        target_offset: Cumulative hours shifted by this day
    """
    if shift.exact_hours == 0:
        return baseline
    progress = target_offset / shift.exact_hours
    return baseline + shift.signed_hours * (1 - progress)


def _first_night(arrival: datetime, arrival_date: date, hours: float, tz_name: str) -> date:
    """Date whose night holds day 1's bedtime."""
    earliest = arrival - timedelta(hours=MISSED_BEDTIME_HOURS)
    night = arrival_date
    while local_wall_clock(night, hours, tz_name) < earliest:
        night += timedelta(days=1)
    return night


def build_day_frames(
    trip: TripContext,
    shift: ShiftDescriptor,
    recovery: RecoveryPlan,
    options: PlanOptions,
) -> list[DayFrame]:
    """
    Lay out one frame per recovery day.

    Day 1 is the arrival date in the destination zone. Its sleep window is
    clipped to start no earlier than the arrival instant (keeping the 8h
    length), and its waking window starts at arrival.
    """
    if shift.direction == "none" or recovery.recovery_days == 0:
        return []

    arrival = to_utc(trip.arrival)
    arrival_date = local_date(trip.arrival, trip.dest_tz)
    baseline = evening_hours(options.baseline_bedtime_hours)
    sleep_length = timedelta(hours=SLEEP_DURATION_HOURS)
    waking_length = timedelta(hours=WAKING_DAY_HOURS)

    targets = daily_targets(shift, recovery)
    first_night = _first_night(
        arrival,
        arrival_date,
        bedtime_hours(baseline, shift, targets[0].cumulative_shift),
        trip.dest_tz,
    )

    frames = []
    previous_end = arrival

    for target in targets:
        night = first_night + timedelta(days=target.day - 1)
        bedtime = local_wall_clock(
            night, bedtime_hours(baseline, shift, target.cumulative_shift), trip.dest_tz
        )

        sleep_start = max(bedtime, previous_end)
        sleep_end = sleep_start + sleep_length
        wake = min(max(previous_end, bedtime - waking_length), sleep_start)

        frames.append(
            DayFrame(
                day=target.day,
                date=arrival_date + timedelta(days=target.day - 1),
                target_offset=target.cumulative_shift,
                bedtime=bedtime,
                sleep_start=sleep_start,
                sleep_end=sleep_end,
                wake=wake,
            )
        )
        previous_end = sleep_end

    return frames
