"""Pydantic models for volunteer and event snapshots.

These are read-only views of what the external store holds. The matching
engine never mutates them, so they are frozen.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from volunteer_match.processing.normalizer import Normalizer, clean_text

_normalizer = Normalizer()


def _coerce_datetime(value: Any) -> Any:
    """Parse loose date strings and bare dates into datetimes."""
    if isinstance(value, str):
        value = _normalizer.parse_datetime(value) or value
    elif isinstance(value, date) and not isinstance(value, datetime):
        # YAML loads bare dates as date objects; they start at midnight UTC
        value = datetime.combine(value, time.min)
    return value


def _pin_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _coerce_tags(value: Any) -> Any:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(_normalizer.normalize_tags(value))


class Volunteer(BaseModel):
    """A registered person offering time and skills."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable unique identifier")
    name: str = Field(..., description="Display name")
    email: Optional[str] = Field(None, description="Contact address")
    location: str = Field("", description="Free-text city name")
    skills: tuple[str, ...] = Field(default_factory=tuple, description="Skill tags")
    availability: Optional[str] = Field(None, description="Free-text availability")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @field_validator("location", mode="before")
    @classmethod
    def _clean_location(cls, value: Any) -> str:
        return clean_text(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _clean_skills(cls, value: Any) -> Any:
        return _coerce_tags(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: Any) -> Any:
        return _coerce_datetime(value)

    @field_validator("created_at")
    @classmethod
    def _pin_created_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _pin_utc(value)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Event(BaseModel):
    """A posted volunteer opportunity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable unique identifier")
    title: str = Field(..., description="Event title")
    description: Optional[str] = Field(None, description="Longer description")
    date: datetime = Field(..., description="Scheduled start")
    location: str = Field("", description="Free-text city name")
    skills: tuple[str, ...] = Field(
        default_factory=tuple, description="Required skill tags, in declared order"
    )
    slots: int = Field(1, description="Total slot count")
    remaining_slots: int = Field(
        ...,
        alias="remainingSlots",
        description="Slots minus confirmed RSVPs, resolved by the store",
    )
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def _default_remaining_slots(cls, data: Any) -> Any:
        # Stores that do not track RSVPs report every slot as open
        if isinstance(data, dict):
            if data.get("remainingSlots") is None and data.get("remaining_slots") is None:
                data = {**data, "remaining_slots": data.get("slots", 1)}
        return data

    @field_validator("location", mode="before")
    @classmethod
    def _clean_location(cls, value: Any) -> str:
        return clean_text(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _clean_skills(cls, value: Any) -> Any:
        return _coerce_tags(value)

    @field_validator("date", "created_at", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _coerce_datetime(value)

    @field_validator("date", "created_at")
    @classmethod
    def _pin_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _pin_utc(value)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
