"""Capacity filter: only events with an open slot are matched."""

import logging
from typing import Iterable, List

from volunteer_match.records.models import Event

logger = logging.getLogger(__name__)


class CapacityFilter:
    """Drops events that have no remaining slots before they are scored."""

    MIN_REMAINING = 1

    def remaining(self, event: Event) -> int:
        """Remaining slots, with malformed negative counts clamped to zero."""
        return max(0, event.remaining_slots)

    def is_eligible(self, event: Event) -> bool:
        return self.remaining(event) >= self.MIN_REMAINING

    def filter(self, events: Iterable[Event]) -> List[Event]:
        """Keep eligible events, preserving input order.

        Args:
            events: Open events from the store

        Returns:
            Events with at least one remaining slot
        """
        eligible = []
        for event in events:
            if self.is_eligible(event):
                eligible.append(event)
            else:
                logger.debug(f"Event {event.id} is full, skipping")
        return eligible
