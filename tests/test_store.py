"""
Tests for the snapshot store and the SQLite store.
"""

from datetime import datetime, timedelta, timezone

import pytest

from volunteer_match.errors import StoreUnavailable
from volunteer_match.storage.database import create_db_engine, init_db, session_scope
from volunteer_match.storage.models import EventRecord, RsvpRecord, VolunteerRecord
from volunteer_match.storage.sql_store import SqlStore
from volunteer_match.storage.store import InMemoryStore


class TestInMemoryStore:
    """Test the in-memory snapshot store."""

    def test_past_events_not_open(self, volunteer, make_event, now):
        events = [
            make_event("e-past", date=now - timedelta(days=1)),
            make_event("e-future", date=now + timedelta(days=1)),
        ]
        store = InMemoryStore([volunteer], events, now=now)
        assert [e.id for e in store.list_open_events()] == ["e-future"]

    def test_naive_reference_time(self, make_event, now):
        store = InMemoryStore([], [make_event("e-1")], now=now.replace(tzinfo=None))
        assert len(store.list_open_events()) == 1

    def test_get_volunteer(self, volunteer):
        store = InMemoryStore([volunteer])
        assert store.get_volunteer("v-ana") == volunteer
        assert store.get_volunteer("v-missing") is None

    def test_from_snapshot(self, snapshot_file, now):
        store = InMemoryStore.from_snapshot(snapshot_file, now=now)
        events = {e.id: e for e in store.list_open_events()}

        assert store.get_volunteer("v-ana").skills == ("gardening", "spanish")
        assert events["e-shelter"].remaining_slots == 0
        assert events["e-garden"].remaining_slots == 5
        assert events["e-garden"].created_at == datetime(2030, 1, 2, 10, 0, tzinfo=timezone.utc)

    def test_missing_snapshot(self, tmp_path):
        with pytest.raises(StoreUnavailable) as exc_info:
            InMemoryStore.from_snapshot(tmp_path / "nope.yaml")
        assert exc_info.value.operation == "load_snapshot"

    def test_invalid_snapshot(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("events:\n  - title: no id or date\n", encoding="utf-8")
        with pytest.raises(StoreUnavailable):
            InMemoryStore.from_snapshot(path)

    def test_bare_dates_in_snapshot(self, tmp_path, now):
        path = tmp_path / "dates.yaml"
        path.write_text(
            """
events:
  - id: e-drive
    title: Food Drive
    date: 2099-04-12
    location: Austin
    createdAt: 2030-01-02
  - id: e-fair
    title: Job Fair
    date: 2099-04-13T09:00:00Z
    location: Austin
    createdAt: 2030-01-02T10:00:00Z
""",
            encoding="utf-8",
        )
        events = {e.id: e for e in InMemoryStore.from_snapshot(path, now=now).list_open_events()}

        assert events["e-drive"].date == datetime(2099, 4, 12, tzinfo=timezone.utc)
        assert events["e-drive"].created_at < events["e-fair"].created_at

    def test_loose_value_types(self, tmp_path, now):
        path = tmp_path / "loose.yaml"
        path.write_text(
            """
events:
  - id: e-drive
    title: Food Drive
    date: 2099-04-12T09:00:00Z
    skills: [2024, driving]
    slots: "3"
rsvps:
  - eventId: e-drive
    volunteerId: v-bo
""",
            encoding="utf-8",
        )
        [event] = InMemoryStore.from_snapshot(path, now=now).list_open_events()

        assert event.skills == ("2024", "driving")
        assert event.slots == 3
        assert event.remaining_slots == 2

    def test_malformed_entries(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "events:\n  - just a string\nrsvps: 7\n",
            encoding="utf-8",
        )
        with pytest.raises(StoreUnavailable) as exc_info:
            InMemoryStore.from_snapshot(path)
        assert exc_info.value.operation == "load_snapshot"


@pytest.fixture
def engine(tmp_path):
    """Initialized SQLite database with two volunteers, three events and RSVPs."""
    engine = init_db(create_db_engine(tmp_path / "volunteers.db"))
    with session_scope(engine) as session:
        session.add_all([
            VolunteerRecord(id="v-ana", name="Ana", location="Austin", skills=["gardening", "spanish"]),
            VolunteerRecord(id="v-bo", name="Bo", location="Dallas", skills=[]),
            EventRecord(
                id="e-garden", title="Garden Build", date=datetime(2030, 3, 1, 9, 0),
                location="Austin", skills=["gardening"], slots=3,
                created_at=datetime(2029, 12, 1),
            ),
            EventRecord(
                id="e-shelter", title="Shelter Repairs", date=datetime(2030, 2, 1, 9, 0),
                location="Dallas", skills=["carpentry"], slots=1,
            ),
            EventRecord(
                id="e-old", title="Last Year", date=datetime(2029, 6, 1, 9, 0),
                location="Austin", skills=[], slots=10,
            ),
        ])
        session.flush()
        session.add_all([
            RsvpRecord(event_id="e-garden", volunteer_id="v-bo"),
            RsvpRecord(event_id="e-shelter", volunteer_id="v-bo"),
        ])
    return engine


class TestSqlStore:
    """Test the SQLite read adapter."""

    def test_get_volunteer(self, engine, now):
        volunteer = SqlStore(engine, now=now).get_volunteer("v-ana")
        assert volunteer.name == "Ana"
        assert volunteer.skills == ("gardening", "spanish")
        assert volunteer.created_at.tzinfo == timezone.utc

    def test_unknown_volunteer(self, engine, now):
        assert SqlStore(engine, now=now).get_volunteer("v-missing") is None

    def test_open_events_with_remaining_slots(self, engine, now):
        events = SqlStore(engine, now=now).list_open_events()
        assert [e.id for e in events] == ["e-shelter", "e-garden"]
        remaining = {e.id: e.remaining_slots for e in events}
        assert remaining == {"e-shelter": 0, "e-garden": 2}

    def test_missing_tables(self, tmp_path, now):
        store = SqlStore(create_db_engine(tmp_path / "empty.db"), now=now)
        with pytest.raises(StoreUnavailable) as exc_info:
            store.list_open_events()
        assert exc_info.value.operation == "list_open_events"
        with pytest.raises(StoreUnavailable) as exc_info:
            store.get_volunteer("v-ana")
        assert exc_info.value.operation == "get_volunteer"
