"""
Circadian Science Layer.

Pure shift and rate calculations without calendar or presentation awareness.

Modules:
- shift_resolver: Timezone offsets and shorter-arc shift direction
- rate_model: Direction-specific daily shift budgets and recovery days
"""

from .rate_model import RATE_CONFIG, DailyShiftTarget, RateConfig, daily_targets, plan_recovery
from .shift_resolver import resolve_shift, validate_trip

__all__ = [
    "RATE_CONFIG",
    "RateConfig",
    "DailyShiftTarget",
    "daily_targets",
    "plan_recovery",
    "resolve_shift",
    "validate_trip",
]
