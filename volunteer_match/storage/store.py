"""Read-only store contract and the in-memory snapshot store."""

import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

import yaml
from pydantic import ValidationError

from volunteer_match.errors import StoreUnavailable
from volunteer_match.records.models import Event, Volunteer

logger = logging.getLogger(__name__)


class EventStore(Protocol):
    """What the match service needs from the external store."""

    def get_volunteer(self, volunteer_id: str) -> Optional[Volunteer]:
        """Return the volunteer, or None if the id does not resolve."""
        ...

    def list_open_events(self) -> List[Event]:
        """Return events that have not yet elapsed, with remaining slots resolved."""
        ...


class InMemoryStore:
    """Store over an immutable snapshot of volunteers and events.

    An event is open while its date is not before the reference time. The
    reference time is fixed at construction when given, otherwise it is the
    current time at each call.
    """

    def __init__(
        self,
        volunteers: Iterable[Volunteer] = (),
        events: Iterable[Event] = (),
        now: Optional[datetime] = None,
    ):
        self._volunteers = {v.id: v for v in volunteers}
        self._events = tuple(events)
        if now is not None and now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        self._now = now

    def get_volunteer(self, volunteer_id: str) -> Optional[Volunteer]:
        return self._volunteers.get(volunteer_id)

    def list_open_events(self) -> List[Event]:
        now = self._now or datetime.now(timezone.utc)
        return [e for e in self._events if e.date >= now]

    @classmethod
    def from_snapshot(cls, path: Path, now: Optional[datetime] = None) -> "InMemoryStore":
        """Load a store from a YAML snapshot file.

        The file holds ``volunteers``, ``events`` and optional ``rsvps`` lists.
        Events without an explicit ``remainingSlots`` get their slot count
        minus the number of RSVPs naming them.

        Args:
            path: Snapshot file
            now: Optional fixed reference time for "open"

        Returns:
            InMemoryStore over the snapshot

        Raises:
            StoreUnavailable: If the file cannot be read or parsed
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("snapshot root must be a mapping")

            rsvp_counts = Counter(
                r.get("eventId") or r.get("event_id")
                for r in data.get("rsvps") or []
                if isinstance(r, dict)
            )

            volunteers = [Volunteer.model_validate(v) for v in data.get("volunteers") or []]
            events = []
            for raw in data.get("events") or []:
                event = Event.model_validate(raw)
                if raw.get("remainingSlots") is None and raw.get("remaining_slots") is None:
                    # Slot count is only trusted once validated
                    event = event.model_copy(
                        update={"remaining_slots": event.slots - rsvp_counts[event.id]}
                    )
                events.append(event)
        except (OSError, yaml.YAMLError, ValidationError, ValueError, TypeError) as e:
            logger.error(f"Failed to load snapshot {path}: {e}")
            raise StoreUnavailable("load_snapshot", e) from e

        logger.info(f"Loaded snapshot {path}: {len(volunteers)} volunteers, {len(events)} events")
        return cls(volunteers=volunteers, events=events, now=now)
