"""
Melatonin timing using the Burgess et al. 2010 Phase Response Curve.

Scientific basis: Burgess HJ et al. (2010). Human phase response curves to
three days of daily melatonin: 0.5 mg versus 3.0 mg. J Clin Endocrinol Metab,
95(7), 3325-3331.

Key findings:
- Afternoon/early-evening melatonin -> phase ADVANCE
- 0.5mg is as effective as higher doses (physiological dose)

Only advance (eastward) plans receive melatonin. Using it to delay the clock
would mean a morning dose, which the heuristic treats as contraindicated, so
delay plans get no melatonin event at all.
"""

from datetime import timedelta

from ..circadian_math import format_local_12h
from ..types import InterventionEvent, ShiftDescriptor
from .day_frames import DayFrame

MELATONIN_LEAD_HOURS = 5.0  # Hours before target bedtime
MELATONIN_EVENT_MINUTES = 5


def generate_melatonin_timing(
    frame: DayFrame,
    shift: ShiftDescriptor,
    tz_name: str,
    dose_mg: float = 0.5,
) -> InterventionEvent | None:
    """
    Generate the melatonin dose for one day.

    Returns:
        A melatonin event 5h before the day's target bedtime, or None for
        delay/none plans and when that time falls outside the waking window
        (e.g., before arrival on day 1)
    """
    if shift.direction != "east":
        return None

    start = frame.bedtime - timedelta(hours=MELATONIN_LEAD_HOURS)
    end = start + timedelta(minutes=MELATONIN_EVENT_MINUTES)
    if not frame.within_waking(start, end):
        return None

    return InterventionEvent(
        kind="melatonin",
        day=frame.day,
        start=start,
        end=end,
        title="Take melatonin",
        description=(
            f"Take {dose_mg:g}mg fast-release melatonin at {format_local_12h(start, tz_name)}, "
            f"{MELATONIN_LEAD_HOURS:g} hours before your target bedtime. "
            "This helps advance your body clock for eastward travel."
        ),
        metadata={"dose_mg": f"{dose_mg:g}"},
    )
