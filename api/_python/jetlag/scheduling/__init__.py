"""
Practical Scheduling Layer.

Lays out recovery days and fills them with interventions, then applies the
plan-wide constraints.

Modules:
- day_frames: Bedtime, sleep and waking windows per recovery day
- light_prc / melatonin_prc / nudges: Intervention generators
- constraint_filter: Overlap and arrival constraints
- synthesizer: Orchestrates the above into a JetlagPlan
"""

from .constraint_filter import ConstraintFilter
from .day_frames import DayFrame, build_day_frames
from .synthesizer import ScheduleSynthesizer, synthesize

__all__ = [
    "ConstraintFilter",
    "DayFrame",
    "build_day_frames",
    "ScheduleSynthesizer",
    "synthesize",
]
