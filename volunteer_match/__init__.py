"""Volunteer Match: ranks open volunteer events for a volunteer."""

__version__ = "0.1.0"
