"""SQLAlchemy read adapter implementing the EventStore contract."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from volunteer_match.errors import StoreUnavailable
from volunteer_match.records.models import Event, Volunteer
from volunteer_match.storage.database import session_scope
from volunteer_match.storage.models import EventRecord, RsvpRecord, VolunteerRecord

logger = logging.getLogger(__name__)


class SqlStore:
    """Reads volunteers and open events from the volunteer database.

    Remaining slots are the event's slot count minus its RSVP rows. An event is
    open while its date is not in the past.
    """

    def __init__(self, engine: Engine, now: Optional[datetime] = None):
        """Initialize the store.

        Args:
            engine: Engine for the volunteer database
            now: Optional fixed reference time for "open" (UTC)
        """
        self.engine = engine
        self._now = now

    def _reference_time(self) -> datetime:
        now = self._now or datetime.now(timezone.utc)
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc).replace(tzinfo=None)
        return now

    def get_volunteer(self, volunteer_id: str) -> Optional[Volunteer]:
        try:
            with session_scope(self.engine) as session:
                record = session.get(VolunteerRecord, volunteer_id)
                return record.to_volunteer() if record else None
        except SQLAlchemyError as e:
            logger.error(f"Volunteer lookup failed for {volunteer_id}: {e}")
            raise StoreUnavailable("get_volunteer", e) from e

    def list_open_events(self) -> List[Event]:
        stmt = (
            select(EventRecord, func.count(RsvpRecord.id))
            .outerjoin(RsvpRecord, RsvpRecord.event_id == EventRecord.id)
            .where(EventRecord.date >= self._reference_time())
            .group_by(EventRecord.id)
            .order_by(EventRecord.date, EventRecord.id)
        )
        try:
            with session_scope(self.engine) as session:
                rows = session.execute(stmt).all()
                events = [record.to_event(rsvp_count=count) for record, count in rows]
        except SQLAlchemyError as e:
            logger.error(f"Listing open events failed: {e}")
            raise StoreUnavailable("list_open_events", e) from e

        logger.debug(f"Loaded {len(events)} open events")
        return events
