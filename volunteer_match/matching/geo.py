"""Geographic compatibility between a volunteer and an event.

The scorer only needs a signal in [0, 1] plus an optional reason, so the
exact-city comparison here can be replaced by a distance-based matcher
without touching the scorer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from volunteer_match.processing.normalizer import comparison_key


@dataclass(frozen=True)
class GeoMatch:
    """Geographic signal for one volunteer/event pair."""
    signal: float                # 0.0 (no match) to 1.0 (same place)
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.signal > 0.0


NO_MATCH = GeoMatch(signal=0.0)


class GeoMatcher(ABC):
    """Abstract base class for location comparison strategies."""

    @abstractmethod
    def compare(
        self,
        volunteer_location: Optional[str],
        event_location: Optional[str],
    ) -> GeoMatch:
        """Return the geographic signal for a volunteer and an event location."""
        pass

    def matches(
        self,
        volunteer_location: Optional[str],
        event_location: Optional[str],
    ) -> bool:
        return self.compare(volunteer_location, event_location).matched


class ExactCityMatcher(GeoMatcher):
    """Case-insensitive exact city name match."""

    REASON = "Located in your city"

    def compare(
        self,
        volunteer_location: Optional[str],
        event_location: Optional[str],
    ) -> GeoMatch:
        volunteer_key = comparison_key(volunteer_location)
        if not volunteer_key:
            return NO_MATCH

        if volunteer_key == comparison_key(event_location):
            return GeoMatch(signal=1.0, reason=self.REASON)
        return NO_MATCH
