"""Error kinds raised by the matching engine and its store adapters."""

from typing import Optional


class MatchError(Exception):
    """Base class for all volunteer matching errors."""


class NotFound(MatchError):
    """The volunteer identifier does not resolve in the store."""

    def __init__(self, volunteer_id: str):
        self.volunteer_id = volunteer_id
        super().__init__(f"Volunteer not found: {volunteer_id!r}")


class StoreUnavailable(MatchError):
    """A read against the external store failed.

    Attributes:
        operation: Which store read failed ("get_volunteer" or "list_open_events")
        cause: The underlying exception, if any
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"Store unavailable during {operation}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ConfigError(MatchError):
    """Matching configuration file could not be loaded."""
