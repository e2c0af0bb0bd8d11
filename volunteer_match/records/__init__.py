"""Volunteer and event snapshot models."""

from volunteer_match.records.models import Event, Volunteer

__all__ = ["Event", "Volunteer"]
