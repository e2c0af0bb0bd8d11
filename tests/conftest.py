"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest

from volunteer_match.records.models import Event, Volunteer

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time; every default event is in the future."""
    return NOW


@pytest.fixture
def volunteer() -> Volunteer:
    """Volunteer in Austin offering gardening and Spanish."""
    return Volunteer(
        id="v-ana",
        name="Ana Torres",
        email="ana@example.org",
        location="Austin",
        skills=["gardening", "spanish"],
    )


@pytest.fixture
def make_event():
    """Factory for events scheduled a month after NOW."""

    def _make(
        event_id: str = "e-1",
        skills=(),
        location: str = "Austin",
        slots: int = 5,
        remaining=None,
        created_at=None,
        date=None,
    ) -> Event:
        data = {
            "id": event_id,
            "title": f"Event {event_id}",
            "date": date or NOW + timedelta(days=30),
            "location": location,
            "skills": list(skills),
            "slots": slots,
            "created_at": created_at,
        }
        if remaining is not None:
            data["remaining_slots"] = remaining
        return Event(**data)

    return _make


@pytest.fixture
def snapshot_file(tmp_path):
    """YAML snapshot with one volunteer and three future events."""
    path = tmp_path / "snapshot.yaml"
    path.write_text(
        """
volunteers:
  - id: v-ana
    name: Ana Torres
    location: Austin
    skills: [gardening, spanish]
events:
  - id: e-garden
    title: Community Garden Build
    date: 2099-04-12T09:00:00Z
    location: Austin
    skills: [gardening]
    slots: 5
    createdAt: 2030-01-02T10:00:00Z
  - id: e-shelter
    title: Shelter Repairs
    date: 2099-04-20T09:00:00Z
    location: Dallas
    skills: [carpentry]
    slots: 2
  - id: e-cleanup
    title: Park Cleanup
    date: 2099-05-01T08:00:00Z
    location: Austin
    skills: []
    slots: 1
    createdAt: 2030-01-04T10:00:00Z
rsvps:
  - eventId: e-shelter
    volunteerId: v-bo
  - eventId: e-shelter
    volunteerId: v-cy
""",
        encoding="utf-8",
    )
    return path
