"""
Constraint filter for generated interventions.

Applies the plan-wide invariants after all days are generated:
1. Within a day, sleep / light_seek / light_avoid never overlap. Sleep always
   wins; a conflicting light window is removed
2. Nothing is scheduled before the traveler lands
3. Events are sorted by (day, start, kind)

Records every removal for transparency/debugging.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime

from ..types import InterventionEvent

logger = logging.getLogger(__name__)

EXCLUSIVE_KINDS = frozenset({"sleep", "light_seek", "light_avoid"})

# Tie-break order for events starting at the same instant
KIND_ORDER = {
    "sleep": 0,
    "light_avoid": 1,
    "light_seek": 2,
    "melatonin": 3,
    "meal": 4,
    "exercise": 5,
    "caffeine": 6,
}


@dataclass
class ConstraintViolation:
    """Record of an intervention removed by the filter."""

    kind: str
    day: int
    start: datetime
    reason: str


def sort_key(event: InterventionEvent) -> tuple:
    return (event.day, event.start, KIND_ORDER.get(event.kind, len(KIND_ORDER)))


class ConstraintFilter:
    """
    Enforce plan invariants on a flat list of events.
    """

    def __init__(self, arrival: datetime) -> None:
        self.arrival = arrival
        self.violations: list[ConstraintViolation] = []

    def apply(self, events: list[InterventionEvent]) -> list[InterventionEvent]:
        filtered = self._filter_before_arrival(events)
        filtered = self._filter_exclusive_overlaps(filtered)
        return sorted(filtered, key=sort_key)

    def _remove(self, event: InterventionEvent, reason: str) -> None:
        self.violations.append(
            ConstraintViolation(kind=event.kind, day=event.day, start=event.start, reason=reason)
        )
        logger.warning(
            "Dropped %s on day %d at %s: %s", event.kind, event.day, event.start.isoformat(), reason
        )

    def _filter_before_arrival(self, events: list[InterventionEvent]) -> list[InterventionEvent]:
        result = []
        for event in events:
            if event.start < self.arrival:
                self._remove(event, "starts before arrival")
                continue
            result.append(event)
        return result

    def _filter_exclusive_overlaps(
        self, events: list[InterventionEvent]
    ) -> list[InterventionEvent]:
        """
        Keep same-day sleep and light windows pairwise disjoint.

        Sleep events are placed first; light windows are then admitted in
        start order only if they do not overlap anything already admitted.
        """
        by_day: dict[int, list[InterventionEvent]] = defaultdict(list)
        for event in events:
            if event.kind in EXCLUSIVE_KINDS:
                by_day[event.day].append(event)

        dropped: set[int] = set()
        for day_events in by_day.values():
            admitted = [e for e in day_events if e.kind == "sleep"]
            for event in sorted(day_events, key=sort_key):
                if event.kind == "sleep":
                    continue
                conflict = next((a for a in admitted if a.overlaps(event)), None)
                if conflict is not None:
                    self._remove(event, f"overlaps {conflict.kind}")
                    dropped.add(id(event))
                    continue
                admitted.append(event)

        return [event for event in events if id(event) not in dropped]
