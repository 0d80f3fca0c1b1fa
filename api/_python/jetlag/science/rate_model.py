"""
Adaptation rate model.

Scientific basis:
- Phase advance limit: ~1.0h/day realistic with ~70% compliance
- Phase delay limit: ~1.5h/day realistic with ~70% compliance
- Natural circadian period: ~24.2h (favors delays)

Key principles:
- Advances are harder than delays, so east and west use different rates and
  an eastward shift never recovers faster than a westward one of equal size
- Total adaptation time = ceil(exact shift / daily rate); the fractional part
  of half-hour zones is kept, not truncated
"""

import math
from dataclasses import dataclass

from ..types import Direction, RecoveryPlan, ShiftDescriptor


@dataclass(frozen=True)
class RateConfig:
    """Hours per day the body clock can move in each direction."""

    advance_rate: float  # Eastward
    delay_rate: float  # Westward


RATE_CONFIG = RateConfig(
    advance_rate=1.0,  # 1.0h/day for eastward
    delay_rate=1.5,  # 1.5h/day for westward
)


@dataclass(frozen=True)
class DailyShiftTarget:
    """Target phase shift for a single recovery day."""

    day: int  # 1 = arrival day
    daily_shift: float  # Hours shifted on this day
    cumulative_shift: float  # Total hours shifted by end of this day


def daily_rate(direction: Direction, config: RateConfig = RATE_CONFIG) -> float:
    """Daily budget for a direction (0.0 when there is nothing to shift)."""
    if direction == "east":
        return config.advance_rate
    if direction == "west":
        return config.delay_rate
    return 0.0


def plan_recovery(shift: ShiftDescriptor, config: RateConfig = RATE_CONFIG) -> RecoveryPlan:
    """
    Convert a shift into recovery days and a per-day budget.

    Args:
        shift: Resolved shift (direction and exact shorter-arc hours)
        config: Direction-specific rates

    Returns:
        RecoveryPlan; direction "none" always yields 0 days
    """
    if shift.direction == "none":
        return RecoveryPlan(recovery_days=0, daily_budget_hours=0.0)

    rate = daily_rate(shift.direction, config)
    hours = shift.exact_hours or float(shift.magnitude_hours)
    recovery_days = math.ceil(round(hours / rate, 6))

    return RecoveryPlan(recovery_days=recovery_days, daily_budget_hours=rate)


def daily_targets(shift: ShiftDescriptor, recovery: RecoveryPlan) -> list[DailyShiftTarget]:
    """
    Cumulative phase offset for each recovery day.

    Day d targets min(d * budget, exact_hours), so the final day lands exactly
    on the destination phase even for fractional shifts.
    """
    targets = []
    previous = 0.0
    total = shift.exact_hours or float(shift.magnitude_hours)

    for day in range(1, recovery.recovery_days + 1):
        cumulative = min(day * recovery.daily_budget_hours, total)
        targets.append(
            DailyShiftTarget(
                day=day,
                daily_shift=round(cumulative - previous, 2),
                cumulative_shift=round(cumulative, 4),
            )
        )
        previous = cumulative

    return targets
