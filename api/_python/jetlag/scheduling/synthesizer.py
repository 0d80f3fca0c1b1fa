"""
Schedule synthesis.

Turns a resolved shift and recovery plan into a day-by-day list of
interventions.

Architecture:
1. Day frames lay out bedtime, sleep and waking windows per recovery day
2. Light, melatonin and nudge generators fill each frame
3. Constraint filter enforces the plan-wide invariants
4. A recovery timeline summarizes expected progress per day
5. Safety, flight and in-flight guidance are attached from guidance.py
"""

import logging
from datetime import datetime, timezone

from ..types import (
    InterventionEvent,
    JetlagPlan,
    PlanOptions,
    RecoveryDay,
    RecoveryPlan,
    ShiftDescriptor,
    TripContext,
)
from ..circadian_math import to_utc
from ..guidance import flight_recommendation, in_flight_guidance, safety_information
from .constraint_filter import ConstraintFilter
from .day_frames import DayFrame, build_day_frames
from .light_prc import generate_light_windows
from .melatonin_prc import generate_melatonin_timing
from .nudges import generate_nudges

logger = logging.getLogger(__name__)

# Long recoveries are scheduled in full; the ceiling only triggers a log line
RECOVERY_DAYS_WARNING_CEILING = 10


def _recovery_phase(day: int) -> str:
    if day <= 3:
        return "acute"
    if day <= 7:
        return "adaptation"
    return "maintenance"


def _expected_feeling(day: int, recovery_days: int) -> str:
    if day == recovery_days:
        return "Fully adjusted"
    if day == 1:
        return "Tired, disoriented, foggy"
    if day <= 3:
        return "Improving but still adjusting"
    return "Mostly adjusted, occasional tiredness"


def build_recovery_timeline(frames: list[DayFrame], recovery_days: int) -> tuple[RecoveryDay, ...]:
    return tuple(
        RecoveryDay(
            day=frame.day,
            date=frame.date,
            recovery_percentage=min(round(frame.day / recovery_days * 100), 100),
            phase=_recovery_phase(frame.day),
            expected_feeling=_expected_feeling(frame.day, recovery_days),
        )
        for frame in frames
    )


class ScheduleSynthesizer:
    """
    Build a JetlagPlan for one trip.

    Stateless apart from the constraint filter's violation log for the last
    run; safe to create one per request.
    """

    def __init__(self, options: PlanOptions | None = None) -> None:
        self.options = options or PlanOptions()
        self.constraint_filter: ConstraintFilter | None = None

    def synthesize(
        self,
        trip: TripContext,
        shift: ShiftDescriptor,
        rate: RecoveryPlan,
        flight_id: str = "",
        generated_at: datetime | None = None,
    ) -> JetlagPlan:
        """
        Generate the complete schedule.

        Args:
            trip: Validated trip
            shift: Output of resolve_shift()
            rate: Output of plan_recovery()
            flight_id: Owning flight record, used for stable calendar UIDs
            generated_at: Generation timestamp (defaults to now, UTC)

        Returns:
            JetlagPlan; an empty one when no shift is needed
        """
        if generated_at is None:
            generated_at = datetime.now(timezone.utc)
        generated_at = to_utc(generated_at)

        if rate.recovery_days > RECOVERY_DAYS_WARNING_CEILING:
            logger.warning(
                "%s -> %s needs %d recovery days; scheduling all of them",
                trip.origin_tz,
                trip.dest_tz,
                rate.recovery_days,
            )

        frames = build_day_frames(trip, shift, rate, self.options)

        events: list[InterventionEvent] = []
        for frame in frames:
            events.extend(self._plan_day(frame, trip, shift))

        self.constraint_filter = ConstraintFilter(arrival=to_utc(trip.arrival))
        events = self.constraint_filter.apply(events)

        logger.debug(
            "Synthesized %d events over %d days (%s %.2fh)",
            len(events),
            len(frames),
            shift.direction,
            shift.exact_hours,
        )

        return JetlagPlan(
            trip=trip,
            shift=shift.with_recovery(rate.recovery_days),
            recovery=rate,
            events=tuple(events),
            generated_at=generated_at,
            flight_id=flight_id,
            recovery_timeline=build_recovery_timeline(frames, rate.recovery_days),
            options=self.options,
            safety=safety_information(shift, self.options),
            flight_recommendation=flight_recommendation(trip, shift),
            in_flight=in_flight_guidance(trip, shift, self.options),
        )

    def _plan_day(
        self, frame: DayFrame, trip: TripContext, shift: ShiftDescriptor
    ) -> list[InterventionEvent]:
        tz_name = trip.dest_tz
        events = [self._sleep_event(frame)]

        events.extend(
            generate_light_windows(frame, shift, tz_name, self.options.light_exposure_minutes)
        )

        if self.options.include_melatonin:
            melatonin = generate_melatonin_timing(
                frame, shift, tz_name, self.options.melatonin_dose_mg
            )
            if melatonin is not None:
                events.append(melatonin)

        events.extend(generate_nudges(frame, shift, tz_name, self.options))
        return events

    @staticmethod
    def _sleep_event(frame: DayFrame) -> InterventionEvent:
        if frame.day == 1 and frame.sleep_start > frame.bedtime:
            notes = (
                "You land after your body-clock bedtime; go to bed as soon as you can. "
                "Stay in bed even if you wake early."
            )
        elif frame.day <= 3:
            notes = "Acute adjustment phase: keep strictly to this schedule."
        else:
            notes = "Your rhythm is adapting. Keep the schedule consistent."

        return InterventionEvent(
            kind="sleep",
            day=frame.day,
            start=frame.sleep_start,
            end=frame.sleep_end,
            title="Sleep",
            description=notes,
        )


def synthesize(
    trip: TripContext,
    shift: ShiftDescriptor,
    rate: RecoveryPlan,
    options: PlanOptions | None = None,
    flight_id: str = "",
    generated_at: datetime | None = None,
) -> JetlagPlan:
    """Convenience wrapper around ScheduleSynthesizer."""
    return ScheduleSynthesizer(options).synthesize(
        trip, shift, rate, flight_id=flight_id, generated_at=generated_at
    )
