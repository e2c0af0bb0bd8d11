"""SQLAlchemy models for the volunteer database.

The matching engine only reads these tables. Rows are written by the
registration and RSVP flows of the surrounding application.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from volunteer_match.records.models import Event, Volunteer


def _utcnow() -> datetime:
    # SQLite stores naive datetimes; all stored times are UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class VolunteerRecord(Base):
    """Registered volunteers."""

    __tablename__ = "volunteers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320))
    location: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    availability: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    def to_volunteer(self) -> Volunteer:
        return Volunteer(
            id=self.id,
            name=self.name,
            email=self.email,
            location=self.location,
            skills=self.skills or [],
            availability=self.availability,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<VolunteerRecord(id={self.id!r}, name={self.name!r})>"


class EventRecord(Base):
    """Posted volunteer events."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    slots: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    def to_event(self, rsvp_count: int = 0) -> Event:
        return Event(
            id=self.id,
            title=self.title,
            description=self.description,
            date=self.date,
            location=self.location,
            skills=self.skills or [],
            slots=self.slots,
            remaining_slots=self.slots - rsvp_count,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<EventRecord(id={self.id!r}, title={self.title!r}, date={self.date})>"


class RsvpRecord(Base):
    """Confirmed RSVPs; each one takes a slot."""

    __tablename__ = "rsvps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id"), nullable=False, index=True)
    volunteer_id: Mapped[str] = mapped_column(ForeignKey("volunteers.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("event_id", "volunteer_id", name="uq_rsvp_event_volunteer"),
    )

    def __repr__(self) -> str:
        return f"<RsvpRecord(event_id={self.event_id!r}, volunteer_id={self.volunteer_id!r})>"
